"""Terminal output for the ``swaggerdocs`` CLI.

Data (endpoint lists, schemas, tool results) goes to **stdout** and is the
only thing a pipe sees. Everything else, from fetch progress to skipped
sources and errors, goes to **stderr**.

Three data formats are supported. ``json`` is for scripts, ``plain`` prints
tab-separated lines, and ``rich`` adds tables and highlighted JSON when stdout
is a terminal. ``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` all turn colour
off.

The CLI builds one :class:`OutputManager` in
:func:`~swaggerdocs.app.main_callback` and installs it with
:func:`set_output`. The fetch pipeline logs through the module-level
:func:`info`, :func:`warning` and :func:`debug` helpers, so nothing below the
CLI needs a manager passed in.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text


class OutputFormat(str, Enum):
    """Data output format. ``AUTO`` picks ``RICH`` on a colour TTY, else ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# level -> (prefix, rich style)
_LEVELS: dict[str, tuple[str, str]] = {
    "info": ("", ""),
    "success": ("", "green"),
    "warning": ("Warning: ", "yellow"),
    "error": ("Error: ", "bold red"),
    "debug": ("[debug] ", "dim"),
}


class OutputManager:
    """Routes data to stdout and diagnostics to stderr.

    Args:
        format: Desired data format; ``AUTO`` is resolved on construction.
        no_color: Disable colour even on a terminal.
        quiet: Hide ``info`` and ``success`` messages.
        verbose: Show ``debug`` messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # -- stdout ----------------------------------------------------------- #

    def format_response(self, data: Any) -> None:
        """Write *data* (usually a dict or list) to stdout in the active format."""
        if self._format == OutputFormat.JSON:
            _write(_to_json(data, indent=2))
        elif self._format == OutputFormat.PLAIN:
            for line in _plain_lines(data):
                _write(line)
        elif isinstance(data, (dict, list)):
            self._stdout.print(
                Syntax(_to_json(data, indent=2), "json", theme="monokai", word_wrap=True)
            )
        else:
            self._stdout.print(Text(str(data)))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write rows to stdout.

        JSON mode emits a list of objects keyed by *headers*; plain mode emits
        a header line followed by one tab-separated line per row. *title* is
        only shown in rich mode.
        """
        if self._format == OutputFormat.JSON:
            _write(_to_json([dict(zip(headers, row)) for row in rows], indent=2))
            return
        if self._format == OutputFormat.PLAIN:
            for cells in [headers, *rows]:
                _write("\t".join(cells))
            return

        table = Table(title=title, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*(Text(cell) for cell in row))
        self._stdout.print(table)

    # -- stderr ----------------------------------------------------------- #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic("info", message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic("success", message)

    def warning(self, message: str) -> None:
        self._diagnostic("warning", message)

    def error(self, message: str) -> None:
        self._diagnostic("error", message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic("debug", message)

    def _diagnostic(self, level: str, message: str) -> None:
        prefix, style = _LEVELS[level]
        if self._no_color:
            print(prefix + message, file=sys.stderr, flush=True)
        else:
            # Text is never parsed as markup, so brackets in URLs or schema
            # names print literally.
            self._stderr.print(Text(prefix + message, style=style), soft_wrap=True)


def _write(line: str) -> None:
    print(line, file=sys.stdout, flush=True)


def _to_json(data: Any, indent: Optional[int] = None) -> str:
    return json.dumps(data, indent=indent, ensure_ascii=False, default=str)


def _plain_lines(data: Any) -> Iterator[str]:
    if isinstance(data, dict):
        for key, value in data.items():
            if isinstance(value, (dict, list)):
                value = _to_json(value)
            yield f"{key}\t{value}"
    elif isinstance(data, list):
        for item in data:
            if isinstance(item, dict):
                yield "\t".join(str(value) for value in item.values())
            else:
                yield str(item)
    else:
        yield str(data)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# ---------------------------------------------------------------------------
# Global instance
# ---------------------------------------------------------------------------

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the installed manager; the next :func:`get_output` builds a fresh one."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
