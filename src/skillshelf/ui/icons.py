"""
Icon utilities for consistent terminal display.

Unicode icons render at different widths across terminals, fonts,
and systems. This module pads them by terminal cell width (Rich's
cell_len) so that the names following them line up.
"""

import rich.cells as _rich_cells

# =============================================================================
# Icon Constants
# =============================================================================

ICON_SUCCESS = "✓"       # Valid skill, match, installed
ICON_FAILURE = "✗"       # Invalid skill
ICON_WARNING = "⚠"       # Non-fatal finding

# Default target width for icon + padding (in terminal cells)
DEFAULT_ICON_WIDTH = 2


def cell_ljust(text: str, width: int) -> str:
    """Left-justify text to a cell width (pad on right).

    Like str.ljust() but uses terminal cell width instead of character count.

    Args:
        text: The text to pad.
        width: Target width in terminal cells.

    Returns:
        Text with trailing spaces to reach width.
    """
    current = _rich_cells.cell_len(text)
    return text + " " * max(0, width - current)


def icon_success() -> str:
    """Padded success icon (✓)."""
    return cell_ljust(ICON_SUCCESS, DEFAULT_ICON_WIDTH)


def icon_failure() -> str:
    """Padded failure icon (✗)."""
    return cell_ljust(ICON_FAILURE, DEFAULT_ICON_WIDTH)


def icon_warning() -> str:
    """Padded warning icon (⚠)."""
    return cell_ljust(ICON_WARNING, DEFAULT_ICON_WIDTH)
