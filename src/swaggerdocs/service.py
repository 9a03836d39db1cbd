"""Tool-style operation surface over the document pipeline.

:class:`SwaggerDocsService` exposes the operations an external tool
dispatcher (an MCP server, a chat agent, the CLI) calls. It tracks the
document loaded by the last successful :meth:`~SwaggerDocsService.fetch_document`;
every query except ``fetch_document`` and ``validate_document`` raises
:class:`~swaggerdocs.exceptions.NoDocumentLoaded` until then.

:meth:`SwaggerDocsService.dispatch` is the boundary: it looks a tool up by
name, validates its arguments, runs it, and turns any failure into
``{"error": True, "message": ...}`` instead of raising.
:data:`TOOL_DEFINITIONS` describes the tools for dispatchers that need an
input schema per tool.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional
from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from swaggerdocs.exceptions import (
    InvalidUsageError,
    NoDocumentLoaded,
    SchemaNotFound,
    SourceNotFound,
    SwaggerDocsError,
)
from swaggerdocs.fetch import DocumentFetcher, SourceResolver
from swaggerdocs.models import CompositeDocument, ParsedDocument, Settings
from swaggerdocs.output import debug
from swaggerdocs.parser.query import (
    filter_by_tag,
    get_schemas,
    list_endpoints,
    search_endpoints,
)
from swaggerdocs.pipeline import DocumentPipeline
from swaggerdocs.validator import DocumentValidator, StructuralValidator

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": "fetch_swagger",
        "description": "Fetch and parse Swagger/OpenAPI documentation from a URL with authentication",
        "inputSchema": {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "The URL of the Swagger/OpenAPI documentation",
                },
            },
            "required": ["url"],
        },
    },
    {
        "name": "get_endpoints",
        "description": "Get all API endpoints from the fetched Swagger documentation",
        "inputSchema": {
            "type": "object",
            "properties": {
                "tag": {"type": "string", "description": "Optional tag to filter endpoints"},
            },
            "required": [],
        },
    },
    {
        "name": "search_endpoints",
        "description": "Search for API endpoints by query string",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query to find endpoints"},
            },
            "required": ["query"],
        },
    },
    {
        "name": "get_schema",
        "description": "Get a specific schema/model definition from the Swagger documentation",
        "inputSchema": {
            "type": "object",
            "properties": {
                "schemaName": {"type": "string", "description": "Name of the schema to retrieve"},
            },
            "required": ["schemaName"],
        },
    },
    {
        "name": "get_api_info",
        "description": "Get general information about the API",
        "inputSchema": {"type": "object", "properties": {}, "required": []},
    },
    {
        "name": "validate_swagger",
        "description": "Validate a Swagger/OpenAPI document",
        "inputSchema": {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "The URL of the Swagger/OpenAPI documentation to validate",
                },
            },
            "required": ["url"],
        },
    },
    {
        "name": "get_api_sources",
        "description": "Get list of available API documentation sources",
        "inputSchema": {"type": "object", "properties": {}, "required": []},
    },
    {
        "name": "get_doc_by_source",
        "description": "Get documentation for a specific API source",
        "inputSchema": {
            "type": "object",
            "properties": {
                "sourceName": {"type": "string", "description": "Name of the API source"},
            },
            "required": ["sourceName"],
        },
    },
]


# --- Tool argument models ---


class _UrlArgs(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def _absolute_url(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"'{value}' is not an http(s) URL")
        return value


class _EndpointArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tag: Optional[str] = None


class _SearchArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    query: str


class _SchemaArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schemaName: str


class _SourceArgs(BaseModel):
    sourceName: str


class SwaggerDocsService:
    """Operations over fetched API documentation.

    Args:
        pipeline: The fetch-merge-cache pipeline.
        validator: Structural validator used by :meth:`validate_document`.
            Defaults to :class:`~swaggerdocs.validator.StructuralValidator`.

    Example::

        with SwaggerDocsService.from_settings(load_settings()) as service:
            service.fetch_document("https://docs.example.com/")
            service.list_endpoints(tag="users")
    """

    def __init__(
        self,
        pipeline: DocumentPipeline,
        validator: Optional[DocumentValidator] = None,
    ) -> None:
        self._pipeline = pipeline
        self._validator = validator or StructuralValidator()
        self._document: Optional[CompositeDocument] = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: Optional[httpx.Client] = None,
        validator: Optional[DocumentValidator] = None,
    ) -> SwaggerDocsService:
        """Wire a fetcher, resolver and pipeline from *settings*."""
        fetcher = DocumentFetcher(settings.auth, client=client, timeout=settings.timeout)
        pipeline = DocumentPipeline(SourceResolver(fetcher), settings.cache_ttl_ms)
        return cls(pipeline, validator=validator)

    def __enter__(self) -> SwaggerDocsService:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if :meth:`from_settings` created it."""
        self._pipeline.close()

    @property
    def document(self) -> Optional[CompositeDocument]:
        """The document loaded by the last successful fetch."""
        return self._document

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    def fetch_document(self, url: str) -> dict[str, Any]:
        """Fetch (or reuse from cache) the documentation at *url* and load it.

        Returns:
            A summary with ``info``, ``pathCount`` and ``tags``.
        """
        self._document = self._pipeline.fetch(url)
        document = self._document
        return {
            "success": True,
            "info": {
                "title": document.info.title,
                "version": document.info.version,
                "description": document.info.description,
            },
            "pathCount": len(document.paths),
            "tags": [tag.model_dump(exclude_none=True) for tag in document.tags],
        }

    def list_endpoints(self, tag: Optional[str] = None) -> list[dict[str, Any]]:
        """List the loaded endpoints, optionally only those tagged *tag*."""
        document = self._require_document()
        endpoints = filter_by_tag(document, tag) if tag else list_endpoints(document)
        return [endpoint.model_dump(by_alias=True, exclude_none=True) for endpoint in endpoints]

    def search_endpoints(self, query: str) -> list[dict[str, Any]]:
        """Case-insensitive keyword search over the loaded endpoints."""
        document = self._require_document()
        return [
            endpoint.model_dump(by_alias=True, exclude_none=True)
            for endpoint in search_endpoints(document, query)
        ]

    def get_schema(self, name: str) -> Any:
        """Return the body of schema *name*.

        Raises:
            SchemaNotFound: If the loaded document has no such schema.
        """
        schemas = get_schemas(self._require_document())
        schema = schemas.get(name)
        if schema is None:
            raise SchemaNotFound(name)
        return schema

    def get_api_info(self) -> dict[str, Any]:
        """Summarize the loaded document's metadata, tags, and schema names."""
        document = self._require_document()
        schemas = get_schemas(document)
        return {
            "info": document.info.model_dump(exclude_none=True),
            "version": document.openapi or document.swagger,
            "tags": [tag.model_dump(exclude_none=True) for tag in document.tags],
            "pathCount": len(document.paths),
            "schemaCount": len(schemas),
            "schemaNames": list(schemas),
        }

    def validate_document(self, url: str) -> bool:
        """Fetch *url* and check it with the structural validator.

        Never raises: any fetch, decode or validation failure yields
        ``False``. The loaded document is left unchanged.
        """
        try:
            document = self._pipeline.fetch(url)
            self._validator.validate(document.as_dict())
        except Exception as exc:
            debug(f"Validation of {url} failed: {exc}")
            return False
        return True

    def list_sources(self) -> list[dict[str, str]]:
        """Return the source names of the last hub fetch."""
        self._require_document()
        return self._pipeline.get_sources()

    def get_source_document(self, name: str) -> dict[str, Any]:
        """Summarize the retained document of source *name*.

        Raises:
            SourceNotFound: If no source of that name was fetched.
        """
        self._require_document()
        document = self._pipeline.get_doc_by_source(name)
        if document is None:
            raise SourceNotFound(name)
        return {
            "source": name,
            "info": document.info.model_dump(exclude_none=True),
            "pathCount": len(document.paths),
            "schemas": get_schemas(document),
        }

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def dispatch(self, tool: str, arguments: Optional[dict[str, Any]] = None) -> Any:
        """Run *tool* with *arguments* and return a JSON-serialisable result.

        Never raises. Unknown tools, invalid arguments and every operation
        failure come back as ``{"error": True, "message": ...}``.
        """
        try:
            handler = self._handlers().get(tool)
            if handler is None:
                raise InvalidUsageError(f"Unknown tool: {tool}")
            return handler(arguments or {})
        except ValidationError as exc:
            return _error_response(f"Invalid arguments for {tool}: {exc}")
        except SwaggerDocsError as exc:
            return _error_response(str(exc))
        except Exception as exc:
            return _error_response(str(exc) or "An unknown error occurred")

    def _handlers(self) -> dict[str, Callable[[dict[str, Any]], Any]]:
        return {
            "fetch_swagger": self._tool_fetch,
            "get_endpoints": self._tool_endpoints,
            "search_endpoints": self._tool_search,
            "get_schema": self._tool_schema,
            "get_api_info": lambda args: self.get_api_info(),
            "validate_swagger": self._tool_validate,
            "get_api_sources": self._tool_sources,
            "get_doc_by_source": self._tool_source_document,
        }

    def _tool_fetch(self, args: dict[str, Any]) -> Any:
        return self.fetch_document(_UrlArgs.model_validate(args).url)

    def _tool_endpoints(self, args: dict[str, Any]) -> Any:
        self._require_document()
        return self.list_endpoints(_EndpointArgs.model_validate(args).tag)

    def _tool_search(self, args: dict[str, Any]) -> Any:
        self._require_document()
        return self.search_endpoints(_SearchArgs.model_validate(args).query)

    def _tool_schema(self, args: dict[str, Any]) -> Any:
        self._require_document()
        return self.get_schema(_SchemaArgs.model_validate(args).schemaName)

    def _tool_validate(self, args: dict[str, Any]) -> Any:
        url = _UrlArgs.model_validate(args).url
        valid = self.validate_document(url)
        return {
            "valid": valid,
            "message": "Swagger document is valid" if valid else "Swagger document is invalid",
        }

    def _tool_sources(self, args: dict[str, Any]) -> Any:
        sources = self.list_sources()
        return {"sources": sources, "count": len(sources)}

    def _tool_source_document(self, args: dict[str, Any]) -> Any:
        self._require_document()
        return self.get_source_document(_SourceArgs.model_validate(args).sourceName)

    def _require_document(self) -> ParsedDocument:
        if self._document is None:
            raise NoDocumentLoaded()
        return self._document


def _error_response(message: str) -> dict[str, Any]:
    return {"error": True, "message": message}
