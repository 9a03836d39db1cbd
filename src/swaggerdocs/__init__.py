"""swaggerdocs -- Fetch, merge, and query OpenAPI/Swagger documentation.

This package retrieves API description documents from a direct URL or from a
Swagger UI hub (a ``swagger-config.json`` registry that lists several
sub-documents), merges them into one composite document, caches the result
in memory, and answers structured queries against it.

Typical usage::

    from swaggerdocs.config import load_settings
    from swaggerdocs.service import SwaggerDocsService

    service = SwaggerDocsService.from_settings(load_settings())
    service.fetch_document("https://petstore.swagger.io/v2/swagger.json")
    service.search_endpoints("pet")

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Settings resolution from environment and project config.
    exceptions: Exception hierarchy with exit-code mapping.
    pipeline: Cached fetch-resolve-merge pipeline.
    service: Tool-style operation surface with structured error responses.
"""

__version__ = "0.1.0"
