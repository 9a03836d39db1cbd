"""Authenticated retrieval of raw document text.

:class:`DocumentFetcher` issues exactly one GET per call through an
:class:`httpx.Client`, with credentials added by
:meth:`~swaggerdocs.auth.manager.AuthManager.decorate`. The body is
returned as ``response.text`` and is never JSON-decoded by the client;
:mod:`swaggerdocs.parser.decoder` decides the format.

There is no retry loop: a failed GET fails the call with a
:class:`~swaggerdocs.exceptions.TransportError`.
"""

from __future__ import annotations

from typing import Optional

import httpx

from swaggerdocs.auth.manager import AuthManager, create_default_manager
from swaggerdocs.exceptions import TransportError
from swaggerdocs.models import AuthSpec
from swaggerdocs.output import debug

_ACCEPT = "application/json, application/yaml, text/yaml, text/plain, */*"


class DocumentFetcher:
    """Fetch documents over HTTP as raw text.

    Can be used as a context manager; the underlying client is closed on
    exit only when the fetcher created it.

    Args:
        auth: Credentials added to every request.
        client: Optional pre-built client (tests pass one backed by
            :class:`httpx.MockTransport`).
        timeout: Request timeout in seconds for a client created here.
        auth_manager: Plugin registry used to decorate requests. Defaults
            to :func:`~swaggerdocs.auth.manager.create_default_manager`.

    Example::

        with DocumentFetcher(AuthSpec(type="bearer", token="t")) as fetcher:
            text = fetcher.fetch("https://api.example.com/openapi.yaml")
    """

    def __init__(
        self,
        auth: AuthSpec,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
        auth_manager: Optional[AuthManager] = None,
    ) -> None:
        self._auth = auth
        self._auth_manager = auth_manager or create_default_manager()
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def __enter__(self) -> DocumentFetcher:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client if this fetcher created it."""
        if self._owns_client:
            self._client.close()

    def fetch(self, url: str) -> str:
        """GET *url* and return the body as text.

        Args:
            url: Absolute document URL.

        Returns:
            The undecoded response body.

        Raises:
            TransportError: On a non-2xx status or any network failure
                (DNS, connection refused, timeout, invalid URL).
        """
        headers = self._auth_manager.decorate({"Accept": _ACCEPT}, self._auth)
        debug(f"GET {url} (auth: {self._auth.type.value})")
        try:
            response = self._client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TransportError(
                f"HTTP {status} fetching {url}", url=url, status_code=status
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"Failed to fetch {url}: {exc}", url=url) from exc

        debug(f"GET {url} -> {response.status_code} ({len(response.text)} chars)")
        return response.text
