"""API key auth plugin.

Implements the ``apiKey`` auth type: the key is sent in the header named by
``AuthSpec.api_key_header`` (``X-API-Key`` unless configured otherwise).
"""

from __future__ import annotations

from swaggerdocs.auth.base import AuthPlugin, AuthResult
from swaggerdocs.models import AuthSpec

DEFAULT_HEADER = "X-API-Key"


class APIKeyAuthPlugin(AuthPlugin):
    """Authenticate via an API key request header.

    An empty key disables the plugin; an empty header name falls back to
    :data:`DEFAULT_HEADER`.
    """

    @property
    def auth_type(self) -> str:
        return "apiKey"

    def authenticate(self, auth: AuthSpec) -> AuthResult:
        if not auth.api_key:
            return AuthResult()
        header = auth.api_key_header or DEFAULT_HEADER
        return AuthResult(headers={header: auth.api_key})
