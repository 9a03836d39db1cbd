"""Auth manager -- registry and dispatcher for auth plugins.

The :class:`AuthManager` maps auth-type strings (``"basic"``, ``"bearer"``,
``"apiKey"``) to concrete :class:`~swaggerdocs.auth.base.AuthPlugin`
instances and exposes :meth:`~AuthManager.decorate`, the function the
document fetcher calls to add credentials to an outbound request.

For most use cases, call :func:`create_default_manager` to get a manager
pre-loaded with every built-in plugin.
"""

from __future__ import annotations

from swaggerdocs.auth.base import AuthPlugin, AuthResult
from swaggerdocs.models import AuthSpec, AuthType


class AuthManager:
    """Registry and dispatcher for authentication plugins.

    Example::

        manager = create_default_manager()
        headers = manager.decorate({}, AuthSpec(type="bearer", token="abc"))
        assert headers == {"Authorization": "Bearer abc"}
    """

    def __init__(self) -> None:
        self._plugins: dict[str, AuthPlugin] = {}

    def register(self, plugin: AuthPlugin) -> None:
        """Register an auth plugin, keyed by its :attr:`~AuthPlugin.auth_type`.

        If a plugin for the same type is already registered it is silently
        replaced.
        """
        self._plugins[plugin.auth_type] = plugin

    def get_plugin(self, auth_type: str) -> AuthPlugin | None:
        """Return the plugin registered for *auth_type*, or ``None``."""
        return self._plugins.get(auth_type)

    def authenticate(self, auth: AuthSpec) -> AuthResult:
        """Resolve *auth* into headers.

        Returns an empty :class:`AuthResult` for ``none`` and for types with
        no registered plugin.
        """
        if auth.type == AuthType.NONE:
            return AuthResult()
        plugin = self.get_plugin(auth.type.value)
        if plugin is None:
            return AuthResult()
        return plugin.authenticate(auth)

    def decorate(self, headers: dict[str, str], auth: AuthSpec) -> dict[str, str]:
        """Add the credential headers for *auth* to *headers*.

        Never fails and never removes existing headers; the map is extended
        in place and returned for convenience.

        Args:
            headers: The outbound request's header map.
            auth: The process-wide credential configuration.

        Returns:
            The same *headers* mapping.
        """
        headers.update(self.authenticate(auth).headers)
        return headers


def create_default_manager() -> AuthManager:
    """Create an :class:`AuthManager` with the ``basic``, ``bearer`` and ``apiKey`` plugins."""
    from swaggerdocs.auth.api_key import APIKeyAuthPlugin
    from swaggerdocs.auth.basic import BasicAuthPlugin
    from swaggerdocs.auth.bearer import BearerAuthPlugin

    manager = AuthManager()
    manager.register(BasicAuthPlugin())
    manager.register(BearerAuthPlugin())
    manager.register(APIKeyAuthPlugin())
    return manager
