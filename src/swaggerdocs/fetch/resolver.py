"""Decide between single-document and hub mode, and fetch every source.

A URL ending in ``.json``, ``.yaml`` or ``.yml`` is fetched as one
document. Any other URL is treated as a Swagger UI hub: the origin's
``swagger-config.json`` lists the sub-documents, which are fetched one at
a time in registry order.

Failure policy:

* Single-document fetch or decode failure is fatal (:class:`FetchFailed`).
* Registry fetch or decode failure is fatal (:class:`FetchFailed`); a
  missing (HTTP 404), empty, or zero-entry registry raises
  :class:`NoSourcesFound`.
* A sub-document that fails to fetch or decode is logged, recorded as a
  :class:`~swaggerdocs.models.SourceFailure`, and skipped. If every source
  fails the resolution is simply empty.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from swaggerdocs.exceptions import (
    DecodeError,
    EmptyDocumentError,
    FetchFailed,
    NoSourcesFound,
    TransportError,
)
from swaggerdocs.fetch.fetcher import DocumentFetcher
from swaggerdocs.models import (
    Resolution,
    SourceFailure,
    SourceRegistry,
    SourceTaggedDocument,
)
from swaggerdocs.output import debug, warning
from swaggerdocs.parser.decoder import decode_document, decode_registry

DIRECT_SUFFIXES = (".json", ".yaml", ".yml")
REGISTRY_FILENAME = "swagger-config.json"


def is_direct_document(url: str) -> bool:
    """Return True when *url* names a document rather than a hub."""
    return url.endswith(DIRECT_SUFFIXES)


def origin_of(url: str) -> str:
    """Return ``scheme://host[:port]`` of *url*, discarding path and query.

    Raises:
        FetchFailed: If *url* has no scheme or host.
    """
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise FetchFailed(f"Cannot determine the origin of '{url}'")
    return f"{parts.scheme}://{parts.netloc}"


def source_url(origin: str, location: str) -> str:
    """Resolve a registry entry's ``url`` against the hub origin.

    Absolute ``http(s)`` locations are used unchanged; anything else is
    appended to *origin*.
    """
    if urlsplit(location).scheme in ("http", "https"):
        return location
    return f"{origin}/{location.lstrip('/')}"


class SourceResolver:
    """Turn a top-level URL into source-tagged documents.

    Args:
        fetcher: Performs the authenticated GETs.
    """

    def __init__(self, fetcher: DocumentFetcher) -> None:
        self._fetcher = fetcher

    def close(self) -> None:
        self._fetcher.close()

    def resolve(self, url: str) -> Resolution:
        """Fetch and decode everything *url* refers to.

        Returns:
            A :class:`~swaggerdocs.models.Resolution` whose ``documents``
            are in fetch-success order. In single-document mode it holds
            one unnamed document and no registry.

        Raises:
            FetchFailed: On any fatal failure (see module docstring).
            NoSourcesFound: If a hub lists no sources.
        """
        if is_direct_document(url):
            return self._resolve_direct(url)
        return self._resolve_hub(url)

    def fetch_registry(self, origin: str) -> SourceRegistry:
        """Fetch and decode ``<origin>/swagger-config.json``."""
        config_url = f"{origin}/{REGISTRY_FILENAME}"
        debug(f"Fetching source registry from {config_url}")
        try:
            text = self._fetcher.fetch(config_url)
        except TransportError as exc:
            if exc.status_code == 404:
                raise NoSourcesFound(f"No {REGISTRY_FILENAME} found at {config_url}") from exc
            raise FetchFailed(f"Failed to fetch {REGISTRY_FILENAME}: {exc}") from exc

        try:
            return decode_registry(text)
        except EmptyDocumentError as exc:
            raise NoSourcesFound(f"{REGISTRY_FILENAME} at {config_url} is empty") from exc
        except DecodeError as exc:
            raise FetchFailed(f"Failed to parse {REGISTRY_FILENAME}: {exc}") from exc

    def _resolve_direct(self, url: str) -> Resolution:
        debug(f"Detected direct document URL, fetching {url}")
        try:
            document = decode_document(self._fetcher.fetch(url))
        except (TransportError, DecodeError) as exc:
            raise FetchFailed(f"Failed to fetch Swagger documentation: {exc}") from exc
        return Resolution(documents=[SourceTaggedDocument.from_document(document, None)])

    def _resolve_hub(self, url: str) -> Resolution:
        origin = origin_of(url)
        debug(f"Treating {url} as a documentation hub at {origin}")
        registry = self.fetch_registry(origin)
        if not registry.urls:
            raise NoSourcesFound(f"No API URLs found in {REGISTRY_FILENAME}")

        debug(f"Found {len(registry.urls)} API sources to fetch")
        documents: list[SourceTaggedDocument] = []
        failures: list[SourceFailure] = []
        for entry in registry.urls:
            location = source_url(origin, entry.url)
            try:
                document = decode_document(self._fetcher.fetch(location))
            except (TransportError, DecodeError) as exc:
                warning(f"Skipping API source '{entry.name}': {exc}")
                failures.append(
                    SourceFailure(name=entry.name, url=location, message=str(exc))
                )
                continue
            debug(f"Fetched source '{entry.name}' with {len(document.paths)} paths")
            documents.append(SourceTaggedDocument.from_document(document, entry.name))

        return Resolution(documents=documents, registry=registry, failures=failures)
