"""Read-only views over a parsed or merged document.

Every function here is pure and total: malformed sections yield empty
results instead of errors, and "no match" is an empty list. Endpoint order
follows ``paths`` insertion order, then the order methods appear within
each path item.

* :func:`list_endpoints` -- one :class:`~swaggerdocs.models.EndpointInfo`
  per path + HTTP method.
* :func:`filter_by_tag` -- exact, case-sensitive tag match.
* :func:`search_endpoints` -- case-insensitive substring search.
* :func:`get_schemas` -- the schema map for the document's generation.
"""

from __future__ import annotations

from typing import Any, Optional

from swaggerdocs.models import EndpointInfo, ParsedDocument, SchemaKind

# Keys of a path item that are operations. Anything else (path-level
# ``parameters``, ``servers``, ``x-`` extensions) is skipped.
HTTP_METHODS = frozenset(
    ["get", "post", "put", "delete", "patch", "options", "head"]
)


def list_endpoints(document: ParsedDocument) -> list[EndpointInfo]:
    """Extract every operation of *document*.

    Method keys are matched case-insensitively and reported upper-cased.

    Args:
        document: A parsed or composite document.

    Returns:
        The endpoints in path order, then method encounter order.
    """
    endpoints: list[EndpointInfo] = []
    for path, path_item in document.paths.items():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if not isinstance(method, str) or method.lower() not in HTTP_METHODS:
                continue
            endpoints.append(_endpoint(path, method, operation))
    return endpoints


def filter_by_tag(document: ParsedDocument, tag: str) -> list[EndpointInfo]:
    """Return the endpoints whose ``tags`` contain *tag* exactly."""
    return [
        endpoint for endpoint in list_endpoints(document)
        if endpoint.tags and tag in endpoint.tags
    ]


def search_endpoints(document: ParsedDocument, query: str) -> list[EndpointInfo]:
    """Case-insensitive substring search over an endpoint's descriptive fields.

    The searched text is ``path``, ``method``, ``summary``, ``description``,
    ``operationId`` and every tag, joined by single spaces, so a query may
    span adjacent fields.
    """
    needle = query.lower()
    return [
        endpoint for endpoint in list_endpoints(document)
        if needle in _searchable_text(endpoint)
    ]


def get_schemas(document: ParsedDocument) -> dict[str, Any]:
    """Return the schema definitions of *document*.

    The location is decided by the schema version alone:
    ``components.schemas`` for OpenAPI 3, ``definitions`` for Swagger 2,
    even when the other map is populated too. A missing map yields ``{}``.
    """
    if document.schema_version.kind == SchemaKind.MODERN:
        schemas = (document.components or {}).get("schemas")
    else:
        schemas = document.definitions
    return schemas if isinstance(schemas, dict) else {}


def _endpoint(path: str, method: str, operation: Any) -> EndpointInfo:
    op = operation if isinstance(operation, dict) else {}
    parameters = op.get("parameters")
    responses = op.get("responses")
    tags = op.get("tags")
    return EndpointInfo(
        path=path,
        method=method.upper(),
        summary=_text(op.get("summary")),
        description=_text(op.get("description")),
        operation_id=_text(op.get("operationId")),
        parameters=parameters if isinstance(parameters, list) else None,
        request_body=op.get("requestBody"),
        # YAML reads unquoted status codes as integers.
        responses=(
            {str(code): body for code, body in responses.items()}
            if isinstance(responses, dict) else None
        ),
        tags=[str(t) for t in tags] if isinstance(tags, list) else None,
    )


def _searchable_text(endpoint: EndpointInfo) -> str:
    parts = [
        endpoint.path,
        endpoint.method,
        endpoint.summary or "",
        endpoint.description or "",
        endpoint.operation_id or "",
        *(endpoint.tags or []),
    ]
    return " ".join(parts).lower()


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)
