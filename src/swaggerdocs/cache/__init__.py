"""In-memory document caching for swaggerdocs.

This package provides :class:`DocumentCache`, which stores fetched
composite documents keyed by their top-level URL. Freshness is judged
against the ``cache_ttl_ms`` setting
(:class:`~swaggerdocs.models.Settings`) by
:class:`~swaggerdocs.pipeline.DocumentPipeline`.
"""

from swaggerdocs.cache.cache import CacheEntry, DocumentCache

__all__ = ["CacheEntry", "DocumentCache"]
