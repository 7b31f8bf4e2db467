"""
Terminal output for skillshelf.

Provides colored status messages and cell-width-aware icons.
"""

from skillshelf.ui.console import ColorMode, Messenger
from skillshelf.ui.icons import ICON_FAILURE, ICON_SUCCESS, ICON_WARNING

__all__ = ["ColorMode", "ICON_FAILURE", "ICON_SUCCESS", "ICON_WARNING", "Messenger"]
