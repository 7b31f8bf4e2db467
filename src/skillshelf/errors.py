"""
Exception hierarchy for skillshelf.

Structural problems in a SKILL.md are not exceptions: they are reported
as ValidationResult values. Exceptions cover conditions that stop an
operation (missing skills directory, unknown skill, failed install,
broken config file).
"""

from __future__ import annotations

import pathlib as _pathlib


class SkillshelfError(Exception):
    """Base error for all skillshelf failures."""


class SkillsDirectoryNotFoundError(SkillshelfError, FileNotFoundError):
    """Raised when the skills/ root itself does not exist."""

    def __init__(self, path: _pathlib.Path) -> None:
        self.path = path
        super().__init__(f"Skills directory not found: {path}")


class SkillNotFoundError(SkillshelfError, LookupError):
    """Raised when a named skill has no directory (or no SKILL.md)."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Skill not found: {name}")


class InstallError(SkillshelfError):
    """Raised when a skill cannot be copied to the install target."""

    def __init__(self, message: str, *, name: str | None = None) -> None:
        self.name = name
        super().__init__(message)


class ConfigFileError(SkillshelfError):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")
