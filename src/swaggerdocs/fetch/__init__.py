"""Network side of the pipeline: authenticated GETs and hub resolution.

* :class:`DocumentFetcher` -- one authenticated GET, body returned as text.
* :class:`SourceResolver` -- direct-document vs. hub mode, registry
  fan-out with per-source failure tolerance.
"""

from swaggerdocs.fetch.fetcher import DocumentFetcher
from swaggerdocs.fetch.resolver import SourceResolver

__all__ = ["DocumentFetcher", "SourceResolver"]
