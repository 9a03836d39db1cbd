"""Abstract base class for authentication plugins.

This module defines the two foundational types of the auth subsystem:

- :class:`AuthResult` -- a plain container for the HTTP headers an auth
  plugin produces.
- :class:`AuthPlugin` -- the abstract base class that every credential
  strategy must extend.

Plugins never raise for missing credentials: an :class:`AuthSpec` whose
relevant fields are empty yields an empty :class:`AuthResult`, so that
decorating a request is a total operation.

See Also:
    :mod:`swaggerdocs.auth.manager` for plugin registration and dispatch.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from swaggerdocs.models import AuthSpec


class AuthResult:
    """Container for authentication headers to inject into HTTP requests.

    Args:
        headers: HTTP headers to add (e.g. ``{"Authorization": "Bearer ..."}``).

    Example::

        result = AuthResult(headers={"Authorization": "Bearer tok123"})
        assert result.headers["Authorization"] == "Bearer tok123"
    """

    def __init__(self, headers: dict[str, str] | None = None):
        self.headers = headers or {}


class AuthPlugin(ABC):
    """Abstract base class for authentication plugins.

    Every concrete strategy must provide:

    1. An :attr:`auth_type` property returning the :class:`AuthSpec` type
       string it handles (``"basic"``, ``"bearer"``, ``"apiKey"``).
    2. An :meth:`authenticate` implementation that turns the credential
       fields of an :class:`~swaggerdocs.models.AuthSpec` into an
       :class:`AuthResult`.
    """

    @property
    @abstractmethod
    def auth_type(self) -> str:
        """Return the auth type identifier this plugin handles."""
        ...

    @abstractmethod
    def authenticate(self, auth: AuthSpec) -> AuthResult:
        """Return the headers for *auth*, or an empty result when credentials are missing.

        Args:
            auth: The process-wide credential configuration.

        Returns:
            An :class:`AuthResult` with the headers to inject.
        """
        ...
