"""Merge source-tagged documents into one composite document.

:func:`merge_documents` is a pure, order-dependent fold over its input,
which the resolver supplies in fetch-success order:

* **paths** -- union; on a key collision the later document replaces the
  whole path item (methods are not merged individually).
* **schemas** -- read from each document's own location
  (``components.schemas`` or ``definitions``); later documents win on a
  name collision.
* **tags** -- appended in encounter order and de-duplicated by name; the
  first declaration of a name keeps its description.
* **openapi / swagger / security schemes** -- copied from the first
  document, i.e. the first source that was fetched successfully.
* **info** -- synthesized rather than copied from any one source.

A single document still goes through the full merge so that single-source
and hub fetches produce composites of the same shape.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Optional

from swaggerdocs.models import (
    CompositeDocument,
    SchemaKind,
    SourceTaggedDocument,
    TagInfo,
)
from swaggerdocs.parser.query import get_schemas

COMBINED_TITLE = "Combined API Documentation"
COMBINED_VERSION = "1.0.0"


def merge_documents(
    documents: Sequence[SourceTaggedDocument],
    declared_count: Optional[int] = None,
) -> CompositeDocument:
    """Merge *documents* in order into a :class:`~swaggerdocs.models.CompositeDocument`.

    Args:
        documents: Source documents in fetch-success order. May be empty,
            in which case the composite has no paths, schemas or tags.
        declared_count: Number of sources the registry listed, used in the
            synthesized description. Defaults to ``len(documents)``.

    Returns:
        The composite document. Merged schemas are stored where the
        composite's own schema version reads them.
    """
    paths: dict[str, Any] = {}
    schemas: dict[str, Any] = {}
    tags: list[TagInfo] = []
    seen_tags: set[str] = set()

    for document in documents:
        paths.update(document.paths)
        schemas.update(get_schemas(document))
        for tag in document.tags:
            if tag.name not in seen_tags:
                seen_tags.add(tag.name)
                tags.append(tag)

    first = documents[0] if documents else None
    count = len(documents) if declared_count is None else declared_count

    data: dict[str, Any] = {
        "openapi": first.openapi if first else None,
        "swagger": first.swagger if first else None,
        "info": {
            "title": COMBINED_TITLE,
            "version": COMBINED_VERSION,
            "description": f"Combined documentation from {count} API sources",
        },
        "paths": paths,
        "tags": [tag.model_dump(exclude_none=True) for tag in tags],
        "sources": [document.source for document in documents],
    }

    security_schemes = first.security_schemes if first else None
    if first is not None and first.schema_version.kind == SchemaKind.MODERN:
        components: dict[str, Any] = {"schemas": schemas}
        if security_schemes is not None:
            components["securitySchemes"] = security_schemes
        data["components"] = components
    else:
        data["definitions"] = schemas
        if security_schemes is not None:
            data["components"] = {"securitySchemes": security_schemes}
        # Swagger 2 declares security at the top level.
        legacy_security = (first.model_extra or {}).get("securityDefinitions") if first else None
        if legacy_security is not None:
            data["securityDefinitions"] = legacy_security

    return CompositeDocument.model_validate(data)
