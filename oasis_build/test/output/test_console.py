"""Tests for oasis_build.output.console module."""

from __future__ import annotations

import pytest

from oasis_build.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestMockConsole:
    def test_print_default_style(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_prefixed_helpers(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("broken")
        console.warning("careful")
        console.info("fyi")
        assert console.messages == ["OK done", "error: broken", "warning: careful", "info: fyi"]
        assert console.has_error()
        assert console.has_success()

    def test_step(self) -> None:
        console = MockConsole()
        console.step(2, 7, "Build frontend")
        assert console.text == "[2/7] Build frontend"
        assert console.count(Style.HEADER) == 1

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.print("x", Style.DIM)


class TestRichConsole:
    def test_step_and_success_go_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.step(1, 7, "Install frontend dependencies")
        console.success("Build complete.")
        out = capsys.readouterr().out
        assert "[1/7] Install frontend dependencies" in out
        assert "OK Build complete." in out

    def test_errors_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("not found: backend/target/release/oasis")
        captured = capsys.readouterr()
        assert "error: not found" in captured.err
        assert captured.out == ""

    def test_print_does_not_interpret_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().print("copy [red]x[/red]", Style.DIM)
        assert "[red]x[/red]" in capsys.readouterr().out
