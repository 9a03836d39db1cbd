"""Exception hierarchy for swaggerdocs.

All exceptions inherit from :class:`SwaggerDocsError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`swaggerdocs.exit_codes`.
The CLI entry point in :func:`swaggerdocs.app.main` catches
``SwaggerDocsError`` and exits with the appropriate code, while
:meth:`swaggerdocs.service.SwaggerDocsService.dispatch` turns every error
into a structured ``{"error": true, "message": ...}`` response.

Subclass hierarchy::

    SwaggerDocsError (exit 1)
    +-- ConfigError              (exit 1)
    +-- InvalidUsageError        (exit 2)
    +-- TransportError           (exit 6)
    +-- DecodeError              (exit 7)
    |   +-- EmptyDocumentError   (exit 7)
    +-- FetchFailed              (exit 6)
    |   +-- NoSourcesFound       (exit 8)
    +-- NoDocumentLoaded         (exit 9)
    +-- NotFoundError            (exit 4)
    |   +-- SchemaNotFound       (exit 4)
    |   +-- SourceNotFound       (exit 4)
    +-- DocumentValidationError  (exit 10)
"""

from __future__ import annotations

from swaggerdocs.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NO_DOCUMENT,
    EXIT_NO_SOURCES,
    EXIT_NOT_FOUND,
    EXIT_VALIDATION_ERROR,
)


class SwaggerDocsError(Exception):
    """Base exception for all swaggerdocs errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`swaggerdocs.exit_codes`.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(SwaggerDocsError):
    """Raised for configuration problems (invalid JSON, bad TTL, unknown auth type)."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidUsageError(SwaggerDocsError):
    """Raised for invalid tool arguments or CLI usage."""

    exit_code = EXIT_INVALID_USAGE


class TransportError(SwaggerDocsError):
    """Raised when a single GET fails: non-2xx status, DNS failure, timeout.

    Args:
        message: Human-readable error description.
        url: The URL that could not be fetched.
        status_code: The HTTP status code, when a response was received.
    """

    exit_code = EXIT_CONNECTION_ERROR

    def __init__(self, message: str, url: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeError(SwaggerDocsError):
    """Raised when raw text is neither valid YAML nor valid JSON."""

    exit_code = EXIT_DECODE_ERROR


class EmptyDocumentError(DecodeError):
    """Raised when a fetched body is empty or whitespace only."""


class FetchFailed(SwaggerDocsError):
    """Raised when a top-level fetch cannot produce a document.

    Wraps the underlying :class:`TransportError` or :class:`DecodeError`
    (available as ``__cause__``).
    """

    exit_code = EXIT_CONNECTION_ERROR


class NoSourcesFound(FetchFailed):
    """Raised when a hub's ``swagger-config.json`` lists no API sources."""

    exit_code = EXIT_NO_SOURCES


class NoDocumentLoaded(SwaggerDocsError):
    """Raised when a query runs before any documentation has been fetched."""

    exit_code = EXIT_NO_DOCUMENT

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "No Swagger documentation loaded. Please fetch a Swagger document first."
        )


class NotFoundError(SwaggerDocsError):
    """Raised when a named lookup misses."""

    exit_code = EXIT_NOT_FOUND


class SchemaNotFound(NotFoundError):
    """Raised when a schema name is not present in the loaded document."""

    def __init__(self, name: str):
        super().__init__(f"Schema '{name}' not found")
        self.name = name


class SourceNotFound(NotFoundError):
    """Raised when no retained source document has the requested name."""

    def __init__(self, name: str):
        super().__init__(f"API source '{name}' not found")
        self.name = name


class DocumentValidationError(SwaggerDocsError):
    """Raised by a structural validator when a document is malformed."""

    exit_code = EXIT_VALIDATION_ERROR
