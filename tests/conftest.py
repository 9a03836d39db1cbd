"""Shared test fixtures for swaggerdocs.

Provides a fake documentation server backed by :class:`httpx.MockTransport`,
a controllable clock for cache TTL tests, sample OpenAPI 3 and Swagger 2
documents, and isolation of the global output manager and environment.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import httpx
import pytest

from swaggerdocs.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams and the
    test finishes, the cached references become stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


_ENV_VARS = [
    "SWAGGER_URL",
    "AUTH_TYPE",
    "AUTH_USERNAME",
    "AUTH_PASSWORD",
    "AUTH_TOKEN",
    "API_KEY",
    "API_KEY_HEADER",
    "CACHE_TTL",
    "SWAGGERDOCS_TIMEOUT",
    "NO_COLOR",
]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Clear swaggerdocs environment variables and chdir into tmp_path.

    Keeps a developer's ``SWAGGER_URL`` or ``./swaggerdocs.json`` from
    leaking into tests.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Fake HTTP server
# ---------------------------------------------------------------------------


class FakeServer:
    """In-memory URL -> response table served through httpx.MockTransport.

    Unknown URLs answer 404. Every request is recorded so tests can assert
    on headers and on how many times a URL was hit.
    """

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, str]] = {}
        self.failures: dict[str, Exception] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, body: Any = "", status: int = 200) -> None:
        """Serve *body* (a string, or any value encoded as JSON) at *url*."""
        text = body if isinstance(body, str) else json.dumps(body)
        self.routes[url] = (status, text)

    def fail(self, url: str, exc: Optional[Exception] = None) -> None:
        """Make requests to *url* raise a connection error."""
        self.failures[url] = exc or httpx.ConnectError("connection refused")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url in self.failures:
            raise self.failures[url]
        status, text = self.routes.get(url, (404, "Not Found"))
        return httpx.Response(status, text=text)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def hits(self, url: str) -> int:
        return sum(1 for request in self.requests if str(request.url) == url)


@pytest.fixture
def server() -> FakeServer:
    """A fresh fake documentation server."""
    return FakeServer()


# ---------------------------------------------------------------------------
# Fake clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Callable clock returning a manually advanced time in seconds."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------


@pytest.fixture
def openapi_doc() -> dict[str, Any]:
    """A small OpenAPI 3.0 document with two tagged paths and one schema."""
    return {
        "openapi": "3.0.3",
        "info": {"title": "Pet API", "version": "2.1.0", "description": "Pets"},
        "tags": [
            {"name": "pets", "description": "Pet operations"},
            {"name": "store"},
        ],
        "paths": {
            "/pets": {
                "get": {
                    "summary": "List pets",
                    "operationId": "listPets",
                    "tags": ["pets"],
                    "parameters": [{"name": "limit", "in": "query"}],
                    "responses": {"200": {"description": "ok"}},
                },
                "post": {
                    "summary": "Create a pet",
                    "operationId": "createPet",
                    "tags": ["pets"],
                    "requestBody": {"content": {"application/json": {}}},
                    "responses": {"201": {"description": "created"}},
                },
            },
            "/store/orders": {
                "get": {
                    "summary": "List orders",
                    "description": "Returns every open order",
                    "tags": ["store"],
                    "responses": {"200": {"description": "ok"}},
                },
            },
        },
        "components": {
            "schemas": {"Pet": {"type": "object", "properties": {"id": {"type": "integer"}}}},
            "securitySchemes": {"bearer": {"type": "http", "scheme": "bearer"}},
        },
    }


@pytest.fixture
def swagger_doc() -> dict[str, Any]:
    """A small Swagger 2.0 document with one path and one definition."""
    return {
        "swagger": "2.0",
        "info": {"title": "Legacy API", "version": "1.0"},
        "tags": [{"name": "users"}],
        "paths": {
            "/users": {
                "get": {
                    "summary": "List users",
                    "operationId": "listUsers",
                    "tags": ["users"],
                    "responses": {"200": {"description": "ok"}},
                },
            },
        },
        "definitions": {"User": {"type": "object"}},
        "securityDefinitions": {"key": {"type": "apiKey", "in": "header", "name": "X-Key"}},
    }


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
