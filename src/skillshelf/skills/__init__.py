"""
Skill library management.

A skill is a directory under a skills/ root holding a SKILL.md file with
a `---` delimited front-matter block (at minimum `name` and a
`description` carrying the "Use when" trigger phrase).

Modules:
- skill: front-matter parsing and the Skill model
- validation: the ordered structural checks
- repository: discovery, lookup, search and stats
- installer: copying skills into a global location
"""

from skillshelf.skills.installer import (
    ON_EXISTING_CHOICES,
    InstallLocations,
    InstallResult,
    OnExisting,
    SkillInstaller,
)
from skillshelf.skills.repository import (
    RepositoryStats,
    SkillRepository,
    find_skills_dir,
)
from skillshelf.skills.skill import (
    FrontmatterResult,
    FrontmatterStatus,
    Skill,
    load_skill,
    parse_frontmatter,
    summarize_description,
)
from skillshelf.skills.validation import ValidationResult, validate_skill_dir

__all__ = [
    # Parsing
    "FrontmatterResult",
    "FrontmatterStatus",
    "Skill",
    "load_skill",
    "parse_frontmatter",
    "summarize_description",
    # Validation
    "ValidationResult",
    "validate_skill_dir",
    # Repository
    "RepositoryStats",
    "SkillRepository",
    "find_skills_dir",
    # Installation
    "ON_EXISTING_CHOICES",
    "InstallLocations",
    "InstallResult",
    "OnExisting",
    "SkillInstaller",
]
