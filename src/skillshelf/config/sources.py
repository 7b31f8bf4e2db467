"""Custom pydantic-settings sources for skillshelf configuration.

This module provides:

- LayeredYamlSettingsSource: A pydantic-settings source that loads
  configuration from layered YAML files and deep-merges them.

Configuration layers (in precedence order, highest first):
1. Environment variables (handled by pydantic-settings)
2. Project config: .skillshelf/config.yaml in the working directory
3. User config: ~/.config/skillshelf/config.yaml (or SKILLSHELF_CONFIG_DIR)

Nested mappings merge key by key; any other value in a higher layer
replaces the lower one.

Environment variables:
- SKILLSHELF_CONFIG_DIR: Override user config directory (default: ~/.config/skillshelf)
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

import skillshelf.errors as errors

# Environment variable for overriding user config directory
ENV_CONFIG_DIR = "SKILLSHELF_CONFIG_DIR"

CONFIG_FILENAME = "config.yaml"
PROJECT_CONFIG_DIRNAME = ".skillshelf"


def get_user_config_dir() -> _pathlib.Path:
    """
    Get the user config directory.

    Respects SKILLSHELF_CONFIG_DIR environment variable if set,
    otherwise uses XDG standard path.
    """
    config_dir_env = _os.environ.get(ENV_CONFIG_DIR)
    if config_dir_env:
        return _pathlib.Path(config_dir_env)
    return _pathlib.Path.home() / ".config" / "skillshelf"


def get_user_config_path() -> _pathlib.Path:
    """Get the path to the user config file."""
    return get_user_config_dir() / CONFIG_FILENAME


def get_project_config_path(project_root: _pathlib.Path) -> _pathlib.Path:
    """
    Get the path to the project config file.

    Args:
        project_root: The project root directory.

    Returns:
        Path to .skillshelf/config.yaml within the project.
    """
    return project_root / PROJECT_CONFIG_DIRNAME / CONFIG_FILENAME


def deep_merge(
    base: dict[str, _typing.Any],
    override: _typing.Mapping[str, _typing.Any],
) -> dict[str, _typing.Any]:
    """Merge `override` into a copy of `base`, recursing into nested dicts."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, _typing.Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_yaml_file(path: _pathlib.Path) -> dict[str, _typing.Any] | None:
    """
    Load a YAML config file.

    Returns:
        Parsed mapping, or None if the file is empty.

    Raises:
        ConfigFileError: If the file cannot be read, is malformed YAML,
            or contains non-dict content at the top level.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise errors.ConfigFileError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise errors.ConfigFileError(path, f"cannot read file: {e}") from e

    try:
        parsed = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise errors.ConfigFileError(path, f"invalid YAML: {e}") from e

    if parsed is None:
        return None

    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise errors.ConfigFileError(
            path,
            f"config must be a YAML mapping (dict), got {type_name}",
        )

    return parsed


class LayeredYamlSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that loads and merges user and project YAML files.

    Missing files are normal (nobody has created one yet) and are
    skipped. Broken files are not: they raise ConfigFileError.
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        project_root: _pathlib.Path | None = None,
        *,
        user_config_path: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the settings source.

        Args:
            settings_cls: The Settings class being populated.
            project_root: Directory holding `.skillshelf/config.yaml`.
            user_config_path: Override path for user config file (for testing).
        """
        super().__init__(settings_cls)
        self._project_root = project_root
        self._user_config_path = user_config_path
        self._loaded_layers: list[tuple[str, _pathlib.Path]] = []
        self._data = self._load_layers()

    def get_layer_paths(self) -> list[tuple[str, _pathlib.Path]]:
        """All candidate config files, lowest precedence first."""
        layers = [("user", self._user_config_path or get_user_config_path())]
        if self._project_root is not None:
            layers.append(("project", get_project_config_path(self._project_root)))
        return layers

    def get_loaded_layers(self) -> list[tuple[str, _pathlib.Path]]:
        """Config files that existed and had content, lowest precedence first."""
        return list(self._loaded_layers)

    def _load_layers(self) -> dict[str, _typing.Any]:
        merged: dict[str, _typing.Any] = {}
        for layer_name, path in self.get_layer_paths():
            if not path.exists():
                continue
            content = load_yaml_file(path)
            if content:
                merged = deep_merge(merged, content)
                self._loaded_layers.append((layer_name, path))
        return merged

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        """
        Get value for a field from the merged YAML.

        Returns:
            Tuple of (value, field_name, is_complex).
        """
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """
        Return merged config as a plain dict for Pydantic validation.

        Unknown keys are kept so Settings.model_extra can report them.
        """
        return dict(self._data)
