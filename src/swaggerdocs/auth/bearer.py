"""Bearer token authentication plugin.

Implements the ``bearer`` auth type: a pre-existing token is sent as an
``Authorization: Bearer <token>`` header. No token exchange or refresh is
performed.
"""

from __future__ import annotations

from swaggerdocs.auth.base import AuthPlugin, AuthResult
from swaggerdocs.models import AuthSpec


class BearerAuthPlugin(AuthPlugin):
    """Authenticate via Bearer token in the Authorization header."""

    @property
    def auth_type(self) -> str:
        return "bearer"

    def authenticate(self, auth: AuthSpec) -> AuthResult:
        if not auth.token:
            return AuthResult()
        return AuthResult(headers={"Authorization": f"Bearer {auth.token}"})
