"""Plugin-based request authentication for swaggerdocs.

Every document request passes through :meth:`AuthManager.decorate`, which
adds the headers for the configured :class:`~swaggerdocs.models.AuthSpec`:

- ``basic`` -- ``Authorization: Basic <base64(user:pass)>``
- ``bearer`` -- ``Authorization: Bearer <token>``
- ``apiKey`` -- ``<api_key_header>: <api_key>``

Typical usage::

    from swaggerdocs.auth import create_default_manager

    headers = create_default_manager().decorate({}, settings.auth)
"""

from swaggerdocs.auth.base import AuthPlugin, AuthResult
from swaggerdocs.auth.manager import AuthManager, create_default_manager

__all__ = [
    "AuthPlugin",
    "AuthResult",
    "AuthManager",
    "create_default_manager",
]
