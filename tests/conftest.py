"""
Shared pytest fixtures for skillshelf tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import click.testing as _click_testing
import pytest as _pytest

VALID_SKILL_TEMPLATE = """\
---
name: {name}
description: Use when {purpose}
---

# {name}

Follow these steps.
"""

MakeSkill = _typing.Callable[..., _pathlib.Path]


def render_skill(name: str, purpose: str = "testing things") -> str:
    """SKILL.md content that passes every validation check."""
    return VALID_SKILL_TEMPLATE.format(name=name, purpose=purpose)


@_pytest.fixture
def isolated_env(
    tmp_path: _pathlib.Path,
    monkeypatch: _pytest.MonkeyPatch,
) -> _pathlib.Path:
    """
    Isolate a test from the user's environment and config files.

    - clears SKILLSHELF_* and color-forcing variables
    - points HOME and SKILLSHELF_CONFIG_DIR into tmp_path
    - changes the working directory to tmp_path/work

    Returns:
        The working directory.
    """
    for key in list(_os.environ):
        if key.startswith("SKILLSHELF_"):
            monkeypatch.delenv(key, raising=False)
    for key in ("NO_COLOR", "FORCE_COLOR", "TTY_COMPATIBLE"):
        monkeypatch.delenv(key, raising=False)

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("SKILLSHELF_CONFIG_DIR", str(tmp_path / "config"))

    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@_pytest.fixture
def skills_root(isolated_env: _pathlib.Path) -> _pathlib.Path:
    """Empty skills/ directory inside the isolated working directory."""
    root = isolated_env / "skills"
    root.mkdir()
    return root


@_pytest.fixture
def make_skill(skills_root: _pathlib.Path) -> MakeSkill:
    """
    Factory that writes a skill directory under skills_root.

    Usage:
        make_skill("alpha")                      # valid skill
        make_skill("beta", content="no front matter")
        make_skill("gamma", content=None)        # directory without SKILL.md
    """

    def _make(
        name: str,
        content: str | None = "",
        *,
        extra_files: dict[str, str] | None = None,
    ) -> _pathlib.Path:
        skill_dir = skills_root / name
        skill_dir.mkdir(parents=True, exist_ok=True)
        if content == "":
            content = render_skill(name)
        if content is not None:
            (skill_dir / "SKILL.md").write_text(content, encoding="utf-8")
        for relative, text in (extra_files or {}).items():
            path = skill_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return skill_dir

    return _make


@_pytest.fixture
def runner() -> _click_testing.CliRunner:
    """Click test runner (stdout and stderr are captured separately)."""
    return _click_testing.CliRunner()
