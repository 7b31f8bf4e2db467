"""Configuration type definitions for skillshelf settings.

This module defines the Pydantic models used to represent configuration
sections nested within the main Settings class:

- InstallConfig: install locations and overwrite policy
- OutputConfig: color handling
- LoggingConfig: log level

Design decision: All types use `extra="allow"` to preserve unknown fields.
This enables auditing a config file for typos and unknown keys. Use
`collect_all_extra_fields()` to inspect them.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic

import skillshelf.constants as constants

# =============================================================================
# Base class with introspection
# =============================================================================


class ConfigBase(_pydantic.BaseModel):
    """
    Base class for all config types.

    All config types use `extra="allow"` so unknown fields are preserved
    rather than silently dropped.
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Return fields that were provided but not in the schema."""
        return dict(self.model_extra) if self.model_extra else {}

    def collect_all_extra_fields(
        self,
        prefix: str = "",
    ) -> dict[str, _typing.Any]:
        """
        Recursively collect extra fields from this config and nested configs.

        Returns a flat dict with dotted paths as keys, e.g.:
            {"install.on_exsting": "merge"}
        """
        result: dict[str, _typing.Any] = {}

        for key, value in self.get_extra_fields().items():
            path = f"{prefix}.{key}" if prefix else key
            result[path] = value

        for field_name in self.__class__.model_fields:
            value = getattr(self, field_name, None)
            if isinstance(value, ConfigBase):
                child_prefix = f"{prefix}.{field_name}" if prefix else field_name
                result.update(value.collect_all_extra_fields(child_prefix))

        return result


def expand_path(value: str) -> _pathlib.Path:
    """Expand `~` and environment variables in a configured path."""
    return _pathlib.Path(_os.path.expandvars(_os.path.expanduser(value)))


# =============================================================================
# Install Settings
# =============================================================================


class InstallConfig(ConfigBase):
    """
    Where `install` and `install-all` copy skills to.

    YAML section: install.*
    """

    primary_dir: str = constants.DEFAULT_PRIMARY_INSTALL_DIR
    """Used when it exists, and created when no location exists."""

    fallback_dir: str = constants.DEFAULT_FALLBACK_INSTALL_DIR
    """Used only if it exists and the primary location does not."""

    target_dir: str | None = None
    """Explicit target; skips the primary/fallback lookup when set."""

    on_existing: _typing.Literal["replace", "merge", "error"] = _pydantic.Field(
        default=constants.DEFAULT_ON_EXISTING,
    )
    """What to do when a skill is already installed at the target."""

    @property
    def primary_path(self) -> _pathlib.Path:
        """Primary location, expanded."""
        return expand_path(self.primary_dir)

    @property
    def fallback_path(self) -> _pathlib.Path:
        """Fallback location, expanded."""
        return expand_path(self.fallback_dir)

    @property
    def target_path(self) -> _pathlib.Path | None:
        """Explicit target, expanded (None when unset)."""
        return expand_path(self.target_dir) if self.target_dir else None


# =============================================================================
# Output Settings
# =============================================================================


class OutputConfig(ConfigBase):
    """
    Terminal output settings.

    YAML section: output.*
    """

    color: _typing.Literal["auto", "always", "never"] = "auto"
    """auto: color when stdout is a TTY and NO_COLOR is unset."""


# =============================================================================
# Logging Settings
# =============================================================================


class LoggingConfig(ConfigBase):
    """
    Diagnostic logging settings.

    YAML section: logging.*
    """

    level: _typing.Literal["debug", "info", "warning", "error"] = "warning"
    """Log level for messages written to stderr."""
