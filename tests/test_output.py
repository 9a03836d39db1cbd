"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- format_response and print_table in JSON and plain modes
- Markup escaping of diagnostics
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from swaggerdocs import output as output_module
from swaggerdocs.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("swaggerdocs.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("swaggerdocs.output._is_tty", lambda: True)


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(format=OutputFormat.AUTO).format == OutputFormat.RICH

    def test_no_color_flag_forces_plain(self, tty, monkeypatch):
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager(format=OutputFormat.AUTO, no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout vs stderr discipline
# ------------------------------------------------------------------ #


class TestStreams:
    @pytest.mark.parametrize("method", ["info", "success", "warning", "error"])
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method: str):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        getattr(mgr, method)("fetching sources")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "fetching sources" in captured.err

    def test_data_goes_to_stdout(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.format_response({"pathCount": 2})
        captured = capfd.readouterr()
        assert json.loads(captured.out) == {"pathCount": 2}
        assert captured.err == ""

    def test_warning_and_error_prefixes(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.warning("skipped B")
        mgr.error("no sources")
        err = capfd.readouterr().err
        assert "Warning: skipped B" in err
        assert "Error: no sources" in err


class TestQuietAndVerbose:
    def test_quiet_suppresses_info_and_success(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden too")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_warnings_and_errors(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.warning("shown")
        mgr.error("also shown")
        err = capfd.readouterr().err
        assert "shown" in err
        assert "also shown" in err

    def test_debug_hidden_by_default(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("GET /x")
        assert capfd.readouterr().err == ""

    def test_debug_shown_when_verbose(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
        mgr.debug("GET /x")
        assert "[debug] GET /x" in capfd.readouterr().err

    def test_colored_debug_keeps_literal_brackets(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, verbose=True)
        mgr.debug("schema [Pet]")
        assert "[debug] schema [Pet]" in capfd.readouterr().err

    def test_colored_warning_escapes_markup(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN).warning("tag [bold]x[/bold]")
        assert "tag [bold]x[/bold]" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Data rendering
# ------------------------------------------------------------------ #


class TestRendering:
    def test_plain_dict_is_tab_separated(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.format_response({"title": "API", "tags": ["a"]})
        lines = capfd.readouterr().out.splitlines()
        assert lines == ["title\tAPI", 'tags\t["a"]']

    def test_plain_list_of_dicts(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.format_response([{"name": "A"}, {"name": "B"}])
        assert capfd.readouterr().out.splitlines() == ["A", "B"]

    def test_json_table_is_records(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.JSON, no_color=True)
        mgr.print_table(["Method", "Path"], [["GET", "/pets"]])
        assert json.loads(capfd.readouterr().out) == [{"Method": "GET", "Path": "/pets"}]

    def test_plain_table(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_table(["Method", "Path"], [["GET", "/pets"]])
        assert capfd.readouterr().out.splitlines() == ["Method\tPath", "GET\t/pets"]


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalOutput:
    def test_get_output_creates_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_output_installs_instance(self):
        mgr = OutputManager(format=OutputFormat.JSON)
        set_output(mgr)
        assert get_output() is mgr

    def test_module_helpers_delegate(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.info("via helper")
        output_module.format_response("plain text")
        captured = capfd.readouterr()
        assert "via helper" in captured.err
        assert captured.out.strip() == "plain text"
