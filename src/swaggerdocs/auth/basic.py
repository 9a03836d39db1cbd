"""HTTP Basic authentication plugin.

Implements the ``basic`` auth type: ``username:password`` is Base64-encoded
and sent as an ``Authorization: Basic <encoded>`` header per :rfc:`7617`.
"""

from __future__ import annotations

import base64

from swaggerdocs.auth.base import AuthPlugin, AuthResult
from swaggerdocs.models import AuthSpec


class BasicAuthPlugin(AuthPlugin):
    """Authenticate via HTTP Basic authentication.

    Only activates when both ``username`` and ``password`` are non-empty.
    """

    @property
    def auth_type(self) -> str:
        return "basic"

    def authenticate(self, auth: AuthSpec) -> AuthResult:
        if not (auth.username and auth.password):
            return AuthResult()
        raw = f"{auth.username}:{auth.password}"
        encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
        return AuthResult(headers={"Authorization": f"Basic {encoded}"})
