"""
Tests for the Messenger output helper.

Consoles are not bound to a stream, so capsys sees their output.
"""

import pytest as _pytest

import skillshelf.ui.console as console


@_pytest.fixture
def messenger(monkeypatch: _pytest.MonkeyPatch) -> console.Messenger:
    for key in ("NO_COLOR", "FORCE_COLOR", "TTY_COMPATIBLE"):
        monkeypatch.delenv(key, raising=False)
    return console.Messenger("never")


class TestPrefixes:
    """Each message kind has its own prefix and stream."""

    def test_info_success_warning_go_to_stdout(
        self, messenger: console.Messenger, capsys: _pytest.CaptureFixture[str]
    ) -> None:
        """Informational messages use stdout."""
        messenger.info("one")
        messenger.success("two")
        messenger.warning("three")

        captured = capsys.readouterr()
        assert captured.out == "Info: one\nSuccess: two\nWarning: three\n"
        assert captured.err == ""

    def test_error_goes_to_stderr(
        self, messenger: console.Messenger, capsys: _pytest.CaptureFixture[str]
    ) -> None:
        """Errors use stderr."""
        messenger.error("broken")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Error: broken\n"

    def test_info_can_target_stderr(
        self, messenger: console.Messenger, capsys: _pytest.CaptureFixture[str]
    ) -> None:
        """Banners that must not pollute stdout go to stderr."""
        messenger.info("banner", err=True)
        assert capsys.readouterr().err == "Info: banner\n"


class TestItems:
    """Icon-prefixed lines."""

    def test_item_and_notice(
        self, messenger: console.Messenger, capsys: _pytest.CaptureFixture[str]
    ) -> None:
        """Items carry a check or cross, notices a warning sign."""
        messenger.item("alpha")
        messenger.item("beta: broken", ok=False)
        messenger.notice("alpha: long body")
        messenger.line("  plain")
        messenger.line()

        assert capsys.readouterr().out == (
            "✓ alpha\n✗ beta: broken\n⚠ alpha: long body\n  plain\n\n"
        )

    def test_markup_is_not_interpreted(
        self, messenger: console.Messenger, capsys: _pytest.CaptureFixture[str]
    ) -> None:
        """Square brackets and emoji codes in names print literally."""
        messenger.item("[bold]x[/bold] :smile:")
        assert capsys.readouterr().out == "✓ [bold]x[/bold] :smile:\n"


class TestColor:
    """Color mode handling."""

    def test_never_has_no_escape_codes(
        self, messenger: console.Messenger, capsys: _pytest.CaptureFixture[str]
    ) -> None:
        """never prints plain text."""
        messenger.success("done")
        assert "\x1b[" not in capsys.readouterr().out

    def test_always_has_escape_codes(
        self, monkeypatch: _pytest.MonkeyPatch, capsys: _pytest.CaptureFixture[str]
    ) -> None:
        """always colors even when stdout is not a terminal."""
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        console.Messenger("always").success("done")

        out = capsys.readouterr().out
        assert "\x1b[" in out
        assert "Success: done" in out
