"""Typer application and CLI entry point for swaggerdocs.

Every command runs in a fresh process, so query commands fetch the
documentation URL first (``--url``, falling back to ``SWAGGER_URL`` or the
project config) and then answer from the composite document.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Errors raised inside commands are reported on stderr and
mapped to the exit code of the :class:`~swaggerdocs.exceptions.SwaggerDocsError`
subclass; see :mod:`swaggerdocs.exit_codes`.

See Also:
    :mod:`swaggerdocs.config`: Settings resolution.
    :mod:`swaggerdocs.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import json
import signal
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

import typer

from swaggerdocs import __version__
from swaggerdocs.exceptions import InvalidUsageError, SwaggerDocsError
from swaggerdocs.exit_codes import EXIT_GENERIC_FAILURE, EXIT_VALIDATION_ERROR
from swaggerdocs.models import Settings
from swaggerdocs.output import (
    OutputFormat,
    error,
    format_response,
    get_output,
    info,
    success,
)
from swaggerdocs.service import TOOL_DEFINITIONS, SwaggerDocsService

app = typer.Typer(
    name="swaggerdocs",
    help="Fetch, merge and query Swagger/OpenAPI documentation.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

_URL_HELP = "Documentation URL (defaults to SWAGGER_URL)."
_FETCHING_TOOLS = {"fetch_swagger", "validate_swagger"}


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"swaggerdocs {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~swaggerdocs.output.OutputManager` from
    the output flags.
    """
    from swaggerdocs.output import OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Report a :class:`SwaggerDocsError` and exit with its code."""
    try:
        yield
    except SwaggerDocsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _build_service(settings: Settings) -> SwaggerDocsService:
    return SwaggerDocsService.from_settings(settings)


def _settings(url: Optional[str], require_url: bool = True) -> Settings:
    from swaggerdocs.config import load_settings

    settings = load_settings(cli_url=url)
    if require_url and not settings.default_url:
        raise InvalidUsageError(
            "No documentation URL given. Pass --url or set SWAGGER_URL."
        )
    return settings


@contextmanager
def _session(
    url: Optional[str], preload: bool = True, require_url: bool = True
) -> Iterator[tuple[SwaggerDocsService, Optional[str]]]:
    """Yield a service and the documentation URL; the service is closed on exit.

    With *preload* the documentation is fetched before the service is
    handed out.
    """
    settings = _settings(url, require_url=require_url or preload)
    with _build_service(settings) as service:
        if preload:
            service.fetch_document(settings.default_url)
        yield service, settings.default_url


def _print_endpoints(endpoints: list[dict[str, Any]], title: str) -> None:
    output = get_output()
    if output.format == OutputFormat.JSON:
        format_response(endpoints)
        return
    rows = [
        [
            endpoint["method"],
            endpoint["path"],
            endpoint.get("summary", ""),
            ", ".join(endpoint.get("tags", [])),
        ]
        for endpoint in endpoints
    ]
    output.print_table(["Method", "Path", "Summary", "Tags"], rows, title=title)


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #


@app.command("fetch")
def fetch_command(
    url: Optional[str] = typer.Option(None, "--url", "-u", help=_URL_HELP),
) -> None:
    """Fetch documentation and print a summary.

    Example::

        swaggerdocs fetch --url https://petstore.swagger.io/v2/swagger.json
    """
    with _handle_errors():
        with _session(url, preload=False) as (service, resolved):
            summary = service.fetch_document(resolved)
    format_response(summary)
    success(f"Loaded {summary['pathCount']} paths from {resolved}")


@app.command("endpoints")
def endpoints_command(
    url: Optional[str] = typer.Option(None, "--url", "-u", help=_URL_HELP),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Only endpoints with this tag."),
) -> None:
    """List every endpoint, optionally filtered by tag."""
    with _handle_errors():
        with _session(url) as (service, _):
            endpoints = service.list_endpoints(tag)
    _print_endpoints(endpoints, title=f"Endpoints tagged '{tag}'" if tag else "Endpoints")


@app.command("search")
def search_command(
    query: str = typer.Argument(..., help="Keywords to look for."),
    url: Optional[str] = typer.Option(None, "--url", "-u", help=_URL_HELP),
) -> None:
    """Search endpoints by path, method, summary, description, operationId or tag."""
    with _handle_errors():
        with _session(url) as (service, _):
            endpoints = service.search_endpoints(query)
    if not endpoints:
        info(f"No endpoints match '{query}'")
    _print_endpoints(endpoints, title=f"Endpoints matching '{query}'")


@app.command("schema")
def schema_command(
    name: str = typer.Argument(..., help="Schema name."),
    url: Optional[str] = typer.Option(None, "--url", "-u", help=_URL_HELP),
) -> None:
    """Print one schema definition."""
    with _handle_errors():
        with _session(url) as (service, _):
            schema = service.get_schema(name)
    format_response(schema)


@app.command("info")
def info_command(
    url: Optional[str] = typer.Option(None, "--url", "-u", help=_URL_HELP),
) -> None:
    """Print API metadata, tags, and schema names."""
    with _handle_errors():
        with _session(url) as (service, _):
            summary = service.get_api_info()
    format_response(summary)


@app.command("validate")
def validate_command(
    url: Optional[str] = typer.Option(None, "--url", "-u", help=_URL_HELP),
) -> None:
    """Check that the documentation has a valid OpenAPI/Swagger skeleton.

    Exits with code 10 when the document is invalid.
    """
    with _handle_errors():
        with _session(url, preload=False) as (service, resolved):
            valid = service.validate_document(resolved)
    if valid:
        success("Swagger document is valid")
        return
    error("Swagger document is invalid")
    raise typer.Exit(code=EXIT_VALIDATION_ERROR)


@app.command("sources")
def sources_command(
    url: Optional[str] = typer.Option(None, "--url", "-u", help=_URL_HELP),
) -> None:
    """List the API sources of a documentation hub."""
    with _handle_errors():
        with _session(url) as (service, _):
            sources = service.list_sources()
    output = get_output()
    if output.format == OutputFormat.JSON:
        format_response({"sources": sources, "count": len(sources)})
        return
    output.print_table(["Name"], [[source["name"]] for source in sources], title="API sources")


@app.command("source")
def source_command(
    name: str = typer.Argument(..., help="API source name from the hub registry."),
    url: Optional[str] = typer.Option(None, "--url", "-u", help=_URL_HELP),
) -> None:
    """Print the documentation of one hub source."""
    with _handle_errors():
        with _session(url) as (service, _):
            document = service.get_source_document(name)
    format_response(document)


@app.command("call")
def call_command(
    tool: str = typer.Argument(..., help="Tool name (see `swaggerdocs tools`)."),
    args: Optional[str] = typer.Option(None, "--args", "-a", help="Tool arguments as a JSON object."),
    url: Optional[str] = typer.Option(None, "--url", "-u", help=_URL_HELP),
) -> None:
    """Invoke a tool by name and print its JSON result.

    Tools other than ``fetch_swagger`` and ``validate_swagger`` need loaded
    documentation, so ``--url`` (or ``SWAGGER_URL``) is fetched first.

    Example::

        swaggerdocs call get_schema --args '{"schemaName": "Pet"}'
    """
    with _handle_errors():
        arguments = _parse_arguments(args)
        preload = tool not in _FETCHING_TOOLS
        with _session(url, preload=preload, require_url=False) as (service, _):
            result = service.dispatch(tool, arguments)
    format_response(result)
    if isinstance(result, dict) and result.get("error") is True:
        raise typer.Exit(code=EXIT_GENERIC_FAILURE)


@app.command("tools")
def tools_command() -> None:
    """List the tools available to `swaggerdocs call`."""
    output = get_output()
    if output.format == OutputFormat.JSON:
        format_response(TOOL_DEFINITIONS)
        return
    rows = [
        [tool["name"], ", ".join(tool["inputSchema"]["required"]), tool["description"]]
        for tool in TOOL_DEFINITIONS
    ]
    output.print_table(["Name", "Required", "Description"], rows, title="Tools")


def _parse_arguments(raw: Optional[str]) -> dict[str, Any]:
    """Parse the ``--args`` JSON object."""
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidUsageError(f"--args is not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise InvalidUsageError("--args must be a JSON object")
    return parsed


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``swaggerdocs`` console script.

    Unhandled :class:`~swaggerdocs.exceptions.SwaggerDocsError` instances
    cause a clean exit with the error's ``exit_code``. All other exceptions
    print an error and exit with a generic failure.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except SwaggerDocsError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
