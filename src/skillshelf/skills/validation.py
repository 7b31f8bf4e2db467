"""
Structural validation of skill directories.

A skill is valid when, in this order:
1. SKILL.md exists
2. it opens with a `---` delimited front-matter block
3. the block declares `name`
4. the block declares `description`
5. the description carries the "Use when" trigger phrase

The first failing check decides the reason. Warnings (name/directory
mismatch, oversized body) are reported alongside but never make a
skill invalid.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import pathlib as _pathlib
import typing as _typing

import skillshelf.constants as constants
import skillshelf.skills.skill as skill_module

REASON_NO_SKILL_FILE = f"{constants.SKILL_FILENAME} not found"
REASON_NO_FRONTMATTER = "YAML frontmatter not found"
REASON_NO_NAME = "'name' field not found in frontmatter"
REASON_NO_DESCRIPTION = "'description' field not found in frontmatter"
REASON_NO_TRIGGER = f"description must start with '{constants.DESCRIPTION_TRIGGER}'"


@_dataclasses.dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one skill directory."""

    name: str
    """Skill identifier (directory name)."""

    valid: bool

    reason: str | None = None
    """Why the skill is invalid (None when valid)."""

    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "valid": self.valid,
            "reason": self.reason,
            "warnings": list(self.warnings),
        }


def check_frontmatter(frontmatter: skill_module.FrontmatterResult) -> str | None:
    """
    Apply checks 2-5 to parsed front matter.

    Returns:
        The reason of the first failing check, or None if all pass.
    """
    if not frontmatter.found:
        return REASON_NO_FRONTMATTER
    if not frontmatter.has_field("name"):
        return REASON_NO_NAME
    if not frontmatter.has_field("description"):
        return REASON_NO_DESCRIPTION

    description = frontmatter.get_text("description") or ""
    if constants.DESCRIPTION_TRIGGER not in description:
        return REASON_NO_TRIGGER
    return None


def collect_warnings(skill: skill_module.Skill) -> tuple[str, ...]:
    """Non-fatal findings for an otherwise valid skill."""
    warnings: list[str] = []

    declared = skill.frontmatter.get_text("name")
    if declared is not None and declared != skill.dir_name:
        warnings.append(
            f"name '{declared}' does not match directory '{skill.dir_name}'"
        )

    if skill.exceeds_soft_limit:
        warnings.append(
            f"body exceeds recommended limit "
            f"({skill.body_line_count} > {constants.SKILL_BODY_SOFT_LIMIT} lines)"
        )

    return tuple(warnings)


def validate_skill_dir(skill_dir: _pathlib.Path) -> ValidationResult:
    """
    Validate a single skill directory.

    Args:
        skill_dir: Path to the skill directory.

    Returns:
        ValidationResult; never raises for structural problems.
    """
    name = skill_dir.name

    try:
        skill = skill_module.load_skill(skill_dir)
    except FileNotFoundError:
        return ValidationResult(name=name, valid=False, reason=REASON_NO_SKILL_FILE)
    except OSError as e:
        return ValidationResult(
            name=name, valid=False, reason=f"cannot read {constants.SKILL_FILENAME}: {e}"
        )

    reason = check_frontmatter(skill.frontmatter)
    if reason is not None:
        return ValidationResult(name=name, valid=False, reason=reason)

    return ValidationResult(name=name, valid=True, warnings=collect_warnings(skill))
