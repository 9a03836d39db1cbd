"""Cached fetch-resolve-merge pipeline.

:class:`DocumentPipeline` is the only stateful component. It owns

* a :class:`~swaggerdocs.cache.DocumentCache` of composite documents keyed by
  top-level URL,
* the source registry of the last hub resolution,
* the per-source documents retained from that resolution, in fetch order,
* the failure records of that resolution.

A fetch for ``url`` returns the cached composite while it is fresh, with no
network traffic. Otherwise the retained state is cleared, the URL is
resolved and merged, and the result replaces the cache entry.

Calls are strictly sequential. Two fetches of the same stale URL run two
independent pipelines; there is no in-flight de-duplication.
"""

from __future__ import annotations

from typing import Optional

from swaggerdocs.cache import DocumentCache
from swaggerdocs.fetch.resolver import SourceResolver
from swaggerdocs.models import (
    CompositeDocument,
    SourceFailure,
    SourceRegistry,
    SourceTaggedDocument,
)
from swaggerdocs.output import debug, info
from swaggerdocs.parser.merger import merge_documents


class DocumentPipeline:
    """Fetch, merge and cache API documentation.

    Args:
        resolver: Fetches and decodes the documents behind a URL.
        cache_ttl_ms: Time-to-live of cache entries in milliseconds.
        cache: Optional pre-built cache (tests inject one with a fake clock).
    """

    def __init__(
        self,
        resolver: SourceResolver,
        cache_ttl_ms: int,
        cache: Optional[DocumentCache] = None,
    ) -> None:
        self._resolver = resolver
        self._ttl_ms = cache_ttl_ms
        self._cache = cache if cache is not None else DocumentCache()
        self._registry: Optional[SourceRegistry] = None
        self._retained: dict[str, SourceTaggedDocument] = {}
        self._failures: list[SourceFailure] = []

    def close(self) -> None:
        """Release the HTTP client behind the resolver."""
        self._resolver.close()

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    @property
    def failures(self) -> list[SourceFailure]:
        """Sources skipped during the last resolution."""
        return list(self._failures)

    def fetch(self, url: str) -> CompositeDocument:
        """Return the composite document for *url*, fetching it if needed.

        Raises:
            FetchFailed: If the URL cannot be resolved (see
                :mod:`swaggerdocs.fetch.resolver`).
        """
        entry = self._cache.get(url)
        if entry is not None and self._cache.is_fresh(entry, self._ttl_ms):
            debug(f"Returning cached documentation for {url}")
            return entry.document  # type: ignore[return-value]

        self._registry = None
        self._retained = {}
        self._failures = []

        resolution = self._resolver.resolve(url)
        declared = len(resolution.registry.urls) if resolution.registry else None
        composite = merge_documents(resolution.documents, declared_count=declared)

        self._registry = resolution.registry
        self._failures = list(resolution.failures)
        for document in resolution.documents:
            if document.source is not None:
                self._retained[document.source] = document

        self._cache.put(url, composite)
        debug(
            f"Cached composite for {url}: {len(composite.paths)} paths, "
            f"{len(composite.tags)} tags"
        )
        if resolution.failures:
            info(
                f"Loaded {len(resolution.documents)} of {declared} API sources; "
                f"skipped: {', '.join(f.name for f in resolution.failures)}"
            )
        return composite

    def get_sources(self) -> list[dict[str, str]]:
        """Return ``[{"name": ...}]`` for the last resolved registry.

        Empty after a single-document fetch or before any fetch.
        """
        if self._registry is None:
            return []
        return [{"name": entry.name} for entry in self._registry.urls]

    def get_doc_by_source(self, name: str) -> Optional[SourceTaggedDocument]:
        """Return the retained document fetched for source *name*, if any."""
        return self._retained.get(name)
