"""Document decoding, merging, and querying.

This sub-package holds the pure half of the swaggerdocs pipeline; nothing
here performs I/O.

Typical usage::

    from swaggerdocs.parser import decode_document, list_endpoints

    document = decode_document(raw_text)
    for endpoint in list_endpoints(document):
        print(endpoint.method, endpoint.path)

Sub-modules:

* :mod:`~swaggerdocs.parser.decoder` -- YAML-then-JSON decoding of raw text.
* :mod:`~swaggerdocs.parser.merger` -- Order-dependent merge of
  source-tagged documents into a composite.
* :mod:`~swaggerdocs.parser.query` -- Endpoint extraction, tag filter,
  keyword search, and schema lookup.
"""

from swaggerdocs.parser.decoder import decode_document, decode_registry, decode_text
from swaggerdocs.parser.merger import merge_documents
from swaggerdocs.parser.query import (
    filter_by_tag,
    get_schemas,
    list_endpoints,
    search_endpoints,
)

__all__ = [
    "decode_document",
    "decode_registry",
    "decode_text",
    "merge_documents",
    "filter_by_tag",
    "get_schemas",
    "list_endpoints",
    "search_endpoints",
]
