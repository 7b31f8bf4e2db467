"""
Skill installation into a global skills location.

Target resolution, in order:
1. An explicit target directory (created if missing)
2. The primary location, if it is already a directory
3. The fallback location, if it is already a directory
4. The primary location, created

Installing copies the whole skill directory to `<target>/<name>/`. What
happens to an existing copy is decided by the overwrite policy:
- replace: remove the existing copy, then copy fresh (default)
- merge: copy over the existing tree; files only in the old copy stay
- error: refuse and leave the existing copy untouched
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib
import shutil as _shutil
import typing as _typing

import skillshelf.errors as errors
import skillshelf.skills.repository as repository

_logger = _logging.getLogger(__name__)

OnExisting = _typing.Literal["replace", "merge", "error"]

ON_EXISTING_CHOICES: tuple[str, ...] = _typing.get_args(OnExisting)


def _is_within(path: _pathlib.Path, other: _pathlib.Path) -> bool:
    """Whether resolved `path` is `other` or lies below it."""
    path, other = path.resolve(), other.resolve()
    return path == other or other in path.parents


@_dataclasses.dataclass(frozen=True)
class InstallLocations:
    """The candidate install directories (already expanded)."""

    primary: _pathlib.Path
    fallback: _pathlib.Path
    explicit: _pathlib.Path | None = None

    def choose(self) -> _pathlib.Path:
        """
        Pick the install target without touching the filesystem.

        Returns the directory `resolve_target` would use; it may not
        exist yet.
        """
        if self.explicit is not None:
            return self.explicit
        if self.primary.is_dir():
            return self.primary
        if self.fallback.is_dir():
            return self.fallback
        return self.primary

    def resolve_target(self) -> _pathlib.Path:
        """
        Pick the install target, creating it if needed.

        Raises:
            InstallError: If the target cannot be created.
        """
        target = self.choose()
        if not target.is_dir():
            _logger.debug("Creating install target %s", target)
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise errors.InstallError(f"Cannot create install directory {target}: {e}") from e
        return target


@_dataclasses.dataclass(frozen=True)
class InstallResult:
    """A single installed skill."""

    name: str
    source: _pathlib.Path
    destination: _pathlib.Path
    replaced: bool = False
    """True when an existing copy was removed first."""

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "source": str(self.source),
            "destination": str(self.destination),
            "replaced": self.replaced,
        }


class SkillInstaller:
    """
    Copies skills from a repository into an install target.

    The target is passed in already resolved so that a batch install
    uses one directory for every skill.
    """

    def __init__(
        self,
        repo: repository.SkillRepository,
        target: _pathlib.Path,
        *,
        on_existing: OnExisting = "replace",
    ) -> None:
        """
        Initialize the installer.

        Args:
            repo: Repository to copy skills from.
            target: Existing directory to install into.
            on_existing: Policy for an already installed copy.
        """
        if on_existing not in ON_EXISTING_CHOICES:
            raise ValueError(f"Unknown overwrite policy: {on_existing}")
        self._repo = repo
        self._target = target
        self._on_existing = on_existing

    @property
    def target(self) -> _pathlib.Path:
        """Directory skills are installed into."""
        return self._target

    def check_target(self) -> None:
        """
        Refuse a target inside the skills directory.

        Installing there would add to, or remove from, the repository.
        """
        if _is_within(self._target, self._repo.root):
            raise errors.InstallError(
                f"Install target {self._target} is inside the skills directory "
                f"{self._repo.root}"
            )

    def _copy(self, name: str, source: _pathlib.Path) -> InstallResult:
        """Copy one skill directory, applying the overwrite policy."""
        destination = self._target / name
        replaced = False

        if _is_within(source, destination) or _is_within(destination, source):
            raise errors.InstallError(
                f"Cannot install skill {name} over its own source: {destination}", name=name
            )

        try:
            if destination.exists() or destination.is_symlink():
                if self._on_existing == "error":
                    raise errors.InstallError(
                        f"Skill {name} is already installed at {destination}", name=name
                    )
                if self._on_existing == "replace":
                    _logger.debug("Removing existing copy %s", destination)
                    if destination.is_dir() and not destination.is_symlink():
                        _shutil.rmtree(destination)
                    else:
                        destination.unlink()
                    replaced = True

            _logger.debug("Copying %s -> %s", source, destination)
            _shutil.copytree(source, destination, dirs_exist_ok=True)
        except (OSError, _shutil.Error) as e:
            raise errors.InstallError(
                f"Failed to install skill {name}: {e}", name=name
            ) from e

        return InstallResult(
            name=name, source=source, destination=destination, replaced=replaced
        )

    def install(self, name: str) -> InstallResult:
        """
        Install a single skill.

        Raises:
            SkillNotFoundError: If the skill directory does not exist.
            InstallError: If the target overlaps the skills directory, the
                copy fails, or the policy refuses it.
        """
        source = self._repo.get_skill_dir(name)
        self.check_target()
        return self._copy(name, source)

    def install_all(self) -> list[InstallResult]:
        """
        Install every skill directory in the repository.

        Stops at the first failure.

        Raises:
            SkillsDirectoryNotFoundError: If the repository root is missing.
            InstallError: If the target overlaps the skills directory, a
                copy fails, or the policy refuses it.
        """
        self._repo.ensure_exists()
        self.check_target()
        return [self._copy(d.name, d) for d in self._repo.iter_skill_dirs()]
