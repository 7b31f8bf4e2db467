"""
Colored message output for the command line.

Messages follow one scheme everywhere:
- info (blue), success (green), warning (yellow) go to stdout
- error (red) goes to stderr

Markup and emoji codes are disabled so that skill names and
descriptions are printed exactly as written.
"""

import typing as _typing

import rich.console as _rich_console
import rich.text as _rich_text

import skillshelf.ui.icons as icons

ColorMode = _typing.Literal["auto", "always", "never"]

STYLE_INFO = "blue"
STYLE_SUCCESS = "green"
STYLE_WARNING = "yellow"
STYLE_ERROR = "red"


def _make_console(color: ColorMode, *, stderr: bool) -> _rich_console.Console:
    """Build a Console for one stream.

    No file is bound: Rich looks up sys.stdout/sys.stderr on every
    write, which keeps output capturable.
    """
    options: dict[str, _typing.Any] = {
        "stderr": stderr,
        "soft_wrap": True,
        "markup": False,
        "emoji": False,
        "highlight": False,
    }
    if color == "always":
        options["force_terminal"] = True
        options["no_color"] = False
    elif color == "never":
        options["color_system"] = None
    return _rich_console.Console(**options)


class Messenger:
    """
    Prints user-facing messages.

    Usage:
        messenger = Messenger(color="auto")
        messenger.info("Listing all skills...")
        messenger.item("alpha", ok=True)
        messenger.error("Skill not found: beta")
    """

    def __init__(self, color: ColorMode = "auto") -> None:
        """
        Initialize the messenger.

        Args:
            color: auto (TTY detection, honors NO_COLOR), always, or never.
        """
        self._out = _make_console(color, stderr=False)
        self._err = _make_console(color, stderr=True)

    def _print(
        self,
        text: str | _rich_text.Text,
        style: str | None = None,
        *,
        err: bool = False,
    ) -> None:
        console = self._err if err else self._out
        console.print(text, style=style)

    def info(self, message: str, *, err: bool = False) -> None:
        """Print an `Info:` line."""
        self._print(f"Info: {message}", STYLE_INFO, err=err)

    def success(self, message: str) -> None:
        """Print a `Success:` line."""
        self._print(f"Success: {message}", STYLE_SUCCESS)

    def warning(self, message: str) -> None:
        """Print a `Warning:` line."""
        self._print(f"Warning: {message}", STYLE_WARNING)

    def error(self, message: str) -> None:
        """Print an `Error:` line to stderr."""
        self._print(f"Error: {message}", STYLE_ERROR, err=True)

    def line(self, text: str = "", style: str | None = None) -> None:
        """Print a plain line to stdout."""
        self._print(text, style)

    def item(self, text: str, *, ok: bool = True) -> None:
        """Print `text` after a colored ✓ (ok) or ✗ icon."""
        if ok:
            icon, style = icons.icon_success(), STYLE_SUCCESS
        else:
            icon, style = icons.icon_failure(), STYLE_ERROR
        self._print(_rich_text.Text.assemble((icon, style), text))

    def notice(self, text: str) -> None:
        """Print `text` after a yellow ⚠ icon."""
        self._print(_rich_text.Text.assemble((icons.icon_warning(), STYLE_WARNING), text))
