"""
Skill repository: discovery and read-only queries over a skills/ root.

A repository is a directory with one subdirectory per skill. Hidden
directories (leading `.`) are ignored. Every query re-reads the
filesystem; nothing is cached between calls.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import skillshelf.constants as constants
import skillshelf.errors as errors
import skillshelf.skills.skill as skill_module
import skillshelf.skills.validation as validation

_logger = _logging.getLogger(__name__)


def find_skills_dir(start_path: _pathlib.Path | None = None) -> _pathlib.Path:
    """
    Find the skills/ directory for the current project.

    Walks up from start_path looking for a directory that contains
    `skills/`. Falls back to `<start_path>/skills` so that error
    messages name the expected location.

    Args:
        start_path: Starting path for search. Defaults to cwd.
    """
    if start_path is None:
        start_path = _pathlib.Path.cwd()

    current = start_path.resolve()
    while True:
        candidate = current / constants.SKILLS_DIRNAME
        if candidate.is_dir():
            return candidate
        if current == current.parent:
            break
        current = current.parent

    return start_path.resolve() / constants.SKILLS_DIRNAME


@_dataclasses.dataclass(frozen=True)
class RepositoryStats:
    """Counts produced by `SkillRepository.stats`."""

    total: int
    valid: int
    invalid: int

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {"total": self.total, "valid": self.valid, "invalid": self.invalid}


class SkillRepository:
    """
    Read-only view of a skills/ directory.

    Operations that scan the whole repository raise
    SkillsDirectoryNotFoundError before doing any per-skill work when
    the root is missing.
    """

    def __init__(self, root: _pathlib.Path) -> None:
        """
        Initialize the repository.

        Args:
            root: Path to the skills/ directory.
        """
        self._root = root

    @property
    def root(self) -> _pathlib.Path:
        """Path to the skills/ directory."""
        return self._root

    def exists(self) -> bool:
        """Whether the skills/ directory exists."""
        return self._root.is_dir()

    def ensure_exists(self) -> None:
        """Raise SkillsDirectoryNotFoundError if the root is missing."""
        if not self.exists():
            raise errors.SkillsDirectoryNotFoundError(self._root)

    # Discovery
    def iter_skill_dirs(self) -> _typing.Iterator[_pathlib.Path]:
        """
        Yield every immediate, non-hidden subdirectory, sorted by name.

        Directories without a SKILL.md are included; `list` and `search`
        skip them, `stats` and `validate` count them as invalid.
        """
        self.ensure_exists()
        for entry in sorted(self._root.iterdir()):
            if entry.name.startswith(".") or not entry.is_dir():
                continue
            yield entry

    def iter_skills(self) -> _typing.Iterator[skill_module.Skill]:
        """
        Yield a Skill for every skill directory that has a SKILL.md.

        Unreadable files are logged and skipped.
        """
        for skill_dir in self.iter_skill_dirs():
            try:
                skill = skill_module.load_skill(skill_dir)
            except FileNotFoundError:
                _logger.debug("Skipping %s: no %s", skill_dir, constants.SKILL_FILENAME)
                continue
            except OSError as e:
                _logger.warning("Skipping %s: cannot read %s", skill_dir, e)
                continue
            yield skill

    def list_skills(self) -> list[skill_module.Skill]:
        """List all skills that have a SKILL.md."""
        return list(self.iter_skills())

    # Lookup
    def _skill_dir_for(self, name: str) -> _pathlib.Path:
        """
        Map a skill identifier to its directory path.

        Names that are not a single path component can never be skills.
        """
        if (
            not name
            or name in (".", "..")
            or "/" in name
            or (_os.sep != "/" and _os.sep in name)
        ):
            raise errors.SkillNotFoundError(name)
        return self._root / name

    def get_skill_dir(self, name: str) -> _pathlib.Path:
        """
        Get a skill's directory.

        Raises:
            SkillNotFoundError: If the directory does not exist.
        """
        skill_dir = self._skill_dir_for(name)
        if not skill_dir.is_dir():
            raise errors.SkillNotFoundError(name)
        return skill_dir

    def get_skill_file(self, name: str) -> _pathlib.Path:
        """
        Get a skill's SKILL.md path.

        Raises:
            SkillNotFoundError: If SKILL.md does not exist.
        """
        skill_file = self._skill_dir_for(name) / constants.SKILL_FILENAME
        if not skill_file.is_file():
            raise errors.SkillNotFoundError(name)
        return skill_file

    def read_raw(self, name: str) -> bytes:
        """
        Read a skill's SKILL.md exactly as stored.

        Does not validate: structurally invalid skills are returned too.

        Raises:
            SkillNotFoundError: If SKILL.md does not exist.
        """
        return self.get_skill_file(name).read_bytes()

    # Queries
    def search(self, term: str) -> list[skill_module.Skill]:
        """
        Find skills whose directory name or SKILL.md text contains `term`.

        Matching is a case-insensitive substring test. Unreadable files are
        logged and skipped.

        Args:
            term: Non-empty search term.

        Returns:
            Matching skills, sorted by directory name.
        """
        if not term:
            raise ValueError("search term must not be empty")

        needle = term.casefold()
        matches: list[skill_module.Skill] = []

        for skill_dir in self.iter_skill_dirs():
            skill_file = skill_dir / constants.SKILL_FILENAME
            if not skill_file.is_file():
                continue

            try:
                if needle in skill_dir.name.casefold():
                    matches.append(skill_module.load_skill(skill_dir))
                    continue

                content = skill_file.read_text(encoding="utf-8", errors="replace")
                if needle in content.casefold():
                    matches.append(skill_module.load_skill(skill_dir))
            except OSError as e:
                _logger.warning("Skipping %s: cannot read %s", skill_dir, e)

        _logger.debug("Search for %r matched %d skills", term, len(matches))
        return matches

    def validate(self, name: str | None = None) -> list[validation.ValidationResult]:
        """
        Validate one skill or every skill directory.

        Args:
            name: Skill to validate; None validates every directory.

        Returns:
            One ValidationResult per checked directory.

        Raises:
            SkillsDirectoryNotFoundError: If the root is missing.
            SkillNotFoundError: If `name` has no directory.
        """
        self.ensure_exists()
        if name is not None:
            return [validation.validate_skill_dir(self.get_skill_dir(name))]
        return [validation.validate_skill_dir(d) for d in self.iter_skill_dirs()]

    def stats(self) -> RepositoryStats:
        """Count skill directories and how many of them are valid."""
        results = self.validate()
        valid = sum(1 for r in results if r.valid)
        return RepositoryStats(total=len(results), valid=valid, invalid=len(results) - valid)

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        skills = self.list_skills()
        return {
            "skills_dir": str(self._root),
            "count": len(skills),
            "skills": [s.to_dict() for s in skills],
        }
