"""Decode raw document text into Python values.

Fetched bodies are always handled as text and decoded here, never by the
HTTP client: documentation servers routinely label YAML as JSON and the
other way round, so the ``Content-Type`` header is ignored.

Decoding is a two-stage attempt. YAML goes first because valid JSON is
also valid YAML, and JSON is tried only if the YAML parser rejects the
input. When both fail, the :class:`~swaggerdocs.exceptions.DecodeError`
message carries both parser errors.

PyYAML implements YAML 1.1, where that "JSON is YAML" premise does not
quite hold: exponent numbers without a dot (``1e5``) resolve to strings,
and ``\\uD83D\\uDE00`` escapes come out as two lone surrogates.
:class:`DocumentLoader` patches both so JSON input decodes to the same
values :func:`json.loads` would give.

The public functions are:

* :func:`decode_text` -- raw text to any YAML/JSON value.
* :func:`decode_document` -- raw text to a
  :class:`~swaggerdocs.models.ParsedDocument`.
* :func:`decode_registry` -- raw text to a
  :class:`~swaggerdocs.models.SourceRegistry`.
"""

from __future__ import annotations

import json
import re
from typing import Any

import yaml
from pydantic import ValidationError

from swaggerdocs.exceptions import DecodeError, EmptyDocumentError
from swaggerdocs.models import ParsedDocument, SourceRegistry

# YAML 1.2 core schema floats: the exponent no longer needs a dot.
_FLOAT_1_2 = re.compile(
    r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+]?[0-9]+)?
    |[-+]?(?:[0-9][0-9_]*)(?:[eE][-+]?[0-9]+)
    |\.[0-9_]+(?:[eE][-+]?[0-9]+)?
    |[-+]?[0-9][0-9_]*(?::[0-5]?[0-9])+\.[0-9_]*
    |[-+]?\.(?:inf|Inf|INF)
    |\.(?:nan|NaN|NAN))$""",
    re.X,
)

_SURROGATE = re.compile("[\ud800-\udfff]")


class DocumentLoader(yaml.SafeLoader):
    """``yaml.SafeLoader`` that reads JSON the way a JSON parser does."""

    def construct_yaml_str(self, node: yaml.Node) -> str:
        value = super().construct_yaml_str(node)
        if _SURROGATE.search(value):
            # Pair up escaped surrogates; unpaired ones are kept as-is.
            value = value.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")
        return value


DocumentLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float", _FLOAT_1_2, list("-+0123456789.")
)
DocumentLoader.add_constructor("tag:yaml.org,2002:str", DocumentLoader.construct_yaml_str)


def decode_text(content: str) -> Any:
    """Parse *content* as YAML, falling back to JSON.

    Args:
        content: The raw response body.

    Returns:
        The decoded value (usually a ``dict``).

    Raises:
        EmptyDocumentError: If *content* is empty or whitespace only.
        DecodeError: If the content is neither valid YAML nor valid JSON.
    """
    if not content.strip():
        raise EmptyDocumentError("Empty response")

    try:
        return yaml.load(content, Loader=DocumentLoader)
    except yaml.YAMLError as exc:
        yaml_error = exc

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise DecodeError(
            "Unable to parse response as YAML or JSON. "
            f"YAML error: {yaml_error}, JSON error: {exc}"
        ) from exc


def decode_document(content: str) -> ParsedDocument:
    """Decode an OpenAPI/Swagger document.

    No structural validation is performed: any mapping is accepted and
    missing sections simply come out empty.

    Raises:
        EmptyDocumentError: If *content* is empty or whitespace only.
        DecodeError: If the content cannot be parsed or is not a mapping.
    """
    data = _decode_mapping(content)
    try:
        return ParsedDocument.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"Malformed API document: {exc}") from exc


def decode_registry(content: str) -> SourceRegistry:
    """Decode a Swagger UI ``swagger-config.json`` registry.

    Raises:
        EmptyDocumentError: If *content* is empty or whitespace only.
        DecodeError: If the content cannot be parsed, is not a mapping, or
            has malformed or duplicate ``urls`` entries.
    """
    data = _decode_mapping(content)
    try:
        return SourceRegistry.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"Malformed swagger-config.json: {exc}") from exc


def _decode_mapping(content: str) -> dict[str, Any]:
    value = decode_text(content)
    if not isinstance(value, dict):
        kind = type(value).__name__ if value is not None else "empty document"
        raise DecodeError(f"Document must be a YAML/JSON object (got {kind})")
    return {str(key): item for key, item in value.items()}
