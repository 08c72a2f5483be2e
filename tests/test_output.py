"""Tests for the output formatting system.

Covers:
- stdout vs stderr discipline
- NO_COLOR / TERM=dumb color disabling
- JSON rendering of models with API field names
- Table, field and total rendering
- Quiet and verbose modes
"""

from __future__ import annotations

import json

import pytest

from pyhangar.models import DailyStats, OutputFormat, Project
from pyhangar.output import OutputManager, _should_disable_color, jsonable


class TestColorDetection:
    def test_no_color_env(self) -> None:
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR")
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_color_allowed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR")
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestJson:
    def test_jsonable_models_and_containers(self) -> None:
        data = {"2024-01-01": DailyStats(downloads=1, views=2), "list": [Project(id=1, name="A")]}
        converted = jsonable(data)
        assert converted["2024-01-01"] == {"downloads": 1, "views": 2}
        assert converted["list"][0]["namespace"] == {"owner": "", "slug": ""}
        assert "createdAt" in converted["list"][0]

    def test_print_json_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = OutputManager(format=OutputFormat.JSON)
        assert out.is_json
        out.print_json(Project(id=7, name="ViaVersion"))
        captured = capsys.readouterr()
        assert json.loads(captured.out)["name"] == "ViaVersion"
        assert captured.err == ""


class TestTables:
    def test_table_on_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = OutputManager()
        out.print_table(["Name", "Stars"], [["FancyGlow", 12], ["Empty", None]])
        captured = capsys.readouterr()
        assert "Name" in captured.out
        assert "FancyGlow" in captured.out
        assert "None" not in captured.out
        assert captured.err == ""

    def test_fields_and_total(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = OutputManager()
        out.print_fields([("ID", 1950)])
        out.print_total(2426, "projects")
        captured = capsys.readouterr().out
        assert "Field" in captured and "Value" in captured
        assert captured.rstrip().endswith("Total: 2426 projects")


class TestDiagnostics:
    def test_error_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager().error("failed to get project: boom [x]")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.strip() == "Error: failed to get project: boom [x]"

    def test_debug_requires_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager().debug("hidden")
        OutputManager(verbose=True).debug("shown")
        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "[debug] shown" in err

    def test_markup_escaped_with_color(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.delenv("NO_COLOR")
        monkeypatch.delenv("TERM", raising=False)
        OutputManager().error('status 400: {"errors": ["[bold]bad[/bold]"]}')
        err = capsys.readouterr().err
        assert '["[bold]bad[/bold]"]' in err
