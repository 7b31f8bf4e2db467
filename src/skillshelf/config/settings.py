"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with SKILLSHELF_ prefix
3. Layered YAML config files:
   - Project config: .skillshelf/config.yaml in the working directory
   - User config: ~/.config/skillshelf/config.yaml
4. Field defaults (lowest)

Nested config uses double underscore delimiter:
  SKILLSHELF_INSTALL__TARGET_DIR=/opt/skills
  SKILLSHELF_INSTALL__ON_EXISTING=merge
"""

import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import skillshelf.config.sources as sources
import skillshelf.config.types as types
import skillshelf.skills.installer as installer
import skillshelf.skills.repository as repository


class Settings(_pydantic_settings.BaseSettings):
    """
    skillshelf configuration settings.

    All settings can be overridden via environment variables with SKILLSHELF_ prefix.
    For nested config, use double underscore: SKILLSHELF_INSTALL__PRIMARY_DIR=~/skills
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="SKILLSHELF_",
        env_nested_delimiter="__",  # SKILLSHELF_INSTALL__TARGET_DIR
        extra="allow",  # Preserve unknown fields for config auditing
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args), highest
        2. env_settings (SKILLSHELF_* env vars)
        3. yaml_settings (project, then user config.yaml)
        4. (defaults via Field definitions), lowest
        """
        return (
            init_settings,
            env_settings,
            sources.LayeredYamlSettingsSource(settings_cls, _pathlib.Path.cwd()),
        )

    # =========================================================================
    # Top-level fields
    # =========================================================================

    skills_dir: str | None = _pydantic.Field(
        default=None,
        description="Skills directory (default: nearest skills/ from the working directory)",
    )

    # =========================================================================
    # Nested config sections
    # =========================================================================

    install: types.InstallConfig = _pydantic.Field(default_factory=types.InstallConfig)
    """Install locations and overwrite policy."""

    output: types.OutputConfig = _pydantic.Field(default_factory=types.OutputConfig)
    """Terminal output settings."""

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Logging settings."""

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def config_dir(self) -> _pathlib.Path:
        """User configuration directory (~/.config/skillshelf/)."""
        return sources.get_user_config_dir()

    @property
    def skills_path(self) -> _pathlib.Path:
        """Skills directory in use (configured or discovered)."""
        if self.skills_dir:
            return types.expand_path(self.skills_dir)
        return repository.find_skills_dir()

    def get_repository(self) -> repository.SkillRepository:
        """Repository over the configured skills directory."""
        return repository.SkillRepository(self.skills_path)

    def get_install_locations(
        self,
        target_override: _pathlib.Path | None = None,
    ) -> installer.InstallLocations:
        """
        Install locations from config.

        Args:
            target_override: Explicit target (e.g. from --target); wins
                over install.target_dir.
        """
        return installer.InstallLocations(
            primary=self.install.primary_path,
            fallback=self.install.fallback_path,
            explicit=target_override or self.install.target_path,
        )

    # =========================================================================
    # Introspection
    # =========================================================================

    def collect_all_extra_fields(self) -> dict[str, _typing.Any]:
        """
        Collect unknown fields from Settings and nested configs.

        Returns a flat dict with dotted paths as keys.
        """
        result: dict[str, _typing.Any] = dict(self.model_extra) if self.model_extra else {}
        for field_name in ["install", "output", "logging"]:
            nested = getattr(self, field_name)
            result.update(nested.collect_all_extra_fields(prefix=field_name))
        return result

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert settings to dictionary (for JSON output)."""
        locations = self.get_install_locations()
        return {
            "skills_dir": str(self.skills_path),
            "config_dir": str(self.config_dir),
            "install": {
                "primary_dir": str(locations.primary),
                "fallback_dir": str(locations.fallback),
                "target_dir": str(locations.explicit) if locations.explicit else None,
                "resolved_target": str(locations.choose()),
                "on_existing": self.install.on_existing,
            },
            "output": {"color": self.output.color},
            "logging": {"level": self.logging.level},
        }
