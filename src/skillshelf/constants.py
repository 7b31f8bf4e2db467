"""
Shared constants for skillshelf.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Skill layout
SKILL_FILENAME = "SKILL.md"
"""File every skill directory must contain (case-sensitive)."""

SKILLS_DIRNAME = "skills"
"""Name of the directory holding one subdirectory per skill."""

FRONTMATTER_DELIMITER = "---"
"""Line that opens and closes the front-matter block."""

DESCRIPTION_TRIGGER = "Use when"
"""Phrase a skill description must carry to be picked up by an agent."""

SKILL_BODY_SOFT_LIMIT = 500
"""Recommended maximum number of lines in a SKILL.md body."""

# Global installation locations (expanded at runtime)
DEFAULT_PRIMARY_INSTALL_DIR = "~/.claude/skills"
"""Primary install location, created when no install location exists."""

DEFAULT_FALLBACK_INSTALL_DIR = "~/.config/opencode/skill"
"""Fallback install location, used only if it already exists."""

DEFAULT_ON_EXISTING = "replace"
"""Policy when an installed copy of a skill already exists."""

# Placeholder shown by `list` when a description cannot be read
NO_DESCRIPTION = "No description"
