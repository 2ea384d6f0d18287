"""Tests for rk.output.console module."""

from __future__ import annotations

import pytest

from rk.output.console import (
    ConsoleProtocol,
    MockConsole,
    OutputRecord,
    RichConsole,
    Style,
)


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.ERROR) == "error"
        assert str(Style.DEFAULT) == "default"

    def test_all_styles_exist(self) -> None:
        expected = {"DEFAULT", "SUCCESS", "ERROR", "WARNING", "INFO", "DIM", "BOLD"}
        assert {s.name for s in Style} == expected


class TestMockConsole:
    """MockConsole captures everything for assertions."""

    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs == [OutputRecord("hello", Style.DEFAULT)]

    def test_levels_are_prefixed(self) -> None:
        console = MockConsole()
        console.success("saved")
        console.error("failed")
        console.warning("careful")
        console.info("note")

        assert console.messages == ["OK saved", "error: failed", "warning: careful", "info: note"]
        assert [o.style for o in console.outputs] == [
            Style.SUCCESS,
            Style.ERROR,
            Style.WARNING,
            Style.INFO,
        ]

    def test_has_error(self) -> None:
        console = MockConsole()
        console.warning("w")
        assert not console.has_error()
        console.error("e")
        assert console.has_error()

    def test_text_joins_lines(self) -> None:
        console = MockConsole()
        console.print("a")
        console.print("b")
        assert console.text == "a\nb"

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.print("x")


class TestRichConsole:
    def test_streams(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("plain")
        console.success("done")
        console.error("broken")
        console.warning("hmm")

        captured = capsys.readouterr()
        assert "plain" in captured.out
        assert "OK done" in captured.out
        assert "error: broken" in captured.err
        assert "warning: hmm" in captured.err
        assert "broken" not in captured.out

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.info("chore: bump version [skip ci]")
        console.print("[bold]literal[/bold]", Style.BOLD)

        out = capsys.readouterr().out
        assert "[skip ci]" in out
        assert "[bold]literal[/bold]" in out
