"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~swaggerdocs.exceptions.SwaggerDocsError` subclass.

Example::

    $ swaggerdocs fetch https://api.example.com/docs
    $ echo $?
    8   # EXIT_NO_SOURCES -- the hub's swagger-config.json lists no APIs
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_NOT_FOUND = 4
"""A named schema or source was not found in the loaded documentation."""

EXIT_CONNECTION_ERROR = 6
"""A network-level or HTTP error occurred while fetching a document."""

EXIT_DECODE_ERROR = 7
"""A fetched document could not be decoded as YAML or JSON."""

EXIT_NO_SOURCES = 8
"""A hub registry was missing or listed no API sources."""

EXIT_NO_DOCUMENT = 9
"""A query was issued before any documentation was loaded."""

EXIT_VALIDATION_ERROR = 10
"""A document failed structural validation."""
