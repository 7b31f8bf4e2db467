"""
Skill definition and SKILL.md front-matter parsing.

Skills are defined by a SKILL.md file whose first line opens a block
delimited by `---` lines. The block holds key/value metadata (at minimum
`name` and `description`); everything after it is the skill body.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import logging as _logging
import pathlib as _pathlib
import re as _re
import typing as _typing

import yaml as _yaml

import skillshelf.constants as constants

_logger = _logging.getLogger(__name__)

# Top-level "key: value" line for the line-based fallback reader
_KEY_LINE_RE = _re.compile(r"^([A-Za-z0-9_][A-Za-z0-9_-]*)\s*:(.*)$")

# YAML block scalar indicators ("|", ">", "|-", ">+", ...)
_BLOCK_SCALAR_RE = _re.compile(r"^[|>][+-]?$")


class FrontmatterStatus(_enum.Enum):
    """Outcome of looking for a front-matter block."""

    MISSING = "missing"
    """No `---` delimited block at the top of the file."""

    PRESENT = "present"
    """Block found and read into key/value fields."""


@_dataclasses.dataclass(frozen=True)
class FrontmatterResult:
    """Typed result of parsing a SKILL.md file."""

    status: FrontmatterStatus

    fields: dict[str, _typing.Any] = _dataclasses.field(default_factory=dict)
    """Key/value pairs from the block (empty when MISSING)."""

    body: str = ""
    """Markdown after the block (whole content when MISSING)."""

    strict_yaml: bool = True
    """False when the block was not valid YAML and the line reader was used."""

    @property
    def found(self) -> bool:
        """Whether a front-matter block was found."""
        return self.status is FrontmatterStatus.PRESENT

    def has_field(self, key: str) -> bool:
        """Whether the block declares `key` (even with an empty value)."""
        return key in self.fields

    def get_text(self, key: str) -> str | None:
        """Return a field as stripped text, or None if absent or empty."""
        value = self.fields.get(key)
        if value is None:
            return None
        text = str(value).strip()
        return text or None


def _split_frontmatter(content: str) -> tuple[list[str], str] | None:
    """
    Split content into front-matter lines and body.

    Returns None unless the first line is the delimiter and a closing
    delimiter line follows.
    """
    lines = content.splitlines()
    if not lines or lines[0].strip() != constants.FRONTMATTER_DELIMITER:
        return None

    for index in range(1, len(lines)):
        if lines[index].strip() == constants.FRONTMATTER_DELIMITER:
            body = "\n".join(lines[index + 1 :]).strip()
            return lines[1:index], body

    return None


def _read_key_values(lines: list[str]) -> dict[str, _typing.Any]:
    """
    Line-based reader for blocks that are not valid YAML.

    Top-level `key: value` lines start a field. Indented lines that follow
    are continuation lines: joined with newlines after a block scalar
    indicator (`|`, `>`), otherwise with spaces.
    """
    fields: dict[str, _typing.Any] = {}
    current_key: str | None = None
    current_parts: list[str] = []
    block_scalar = False

    def flush() -> None:
        if current_key is None:
            return
        joiner = "\n" if block_scalar else " "
        fields[current_key] = joiner.join(p for p in current_parts if p)

    for line in lines:
        if not line.strip() or line.lstrip().startswith("#"):
            continue

        match = _KEY_LINE_RE.match(line)
        if match and not line[0].isspace():
            flush()
            current_key = match.group(1)
            value = match.group(2).strip()
            block_scalar = bool(_BLOCK_SCALAR_RE.match(value))
            current_parts = [] if block_scalar else [_unquote(value)]
            continue

        if current_key is not None:
            current_parts.append(line.strip())

    flush()
    return fields


def _unquote(value: str) -> str:
    """Strip one level of matching quotes from a scalar."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_frontmatter(content: str) -> FrontmatterResult:
    """
    Parse SKILL.md content into front matter and body.

    The block is read with YAML first. Blocks that are not strict YAML
    (unquoted colons in a description are common) are read line by line
    instead, so a hand-written SKILL.md is never rejected for syntax alone.
    A leading UTF-8 byte order mark is ignored.

    Args:
        content: Raw markdown content.

    Returns:
        FrontmatterResult with status MISSING or PRESENT.
    """
    content = content.removeprefix("\ufeff")
    split = _split_frontmatter(content)
    if split is None:
        return FrontmatterResult(status=FrontmatterStatus.MISSING, body=content)

    block_lines, body = split
    block = "\n".join(block_lines)

    try:
        data = _yaml.safe_load(block) if block.strip() else {}
    except _yaml.YAMLError as e:
        _logger.debug("Front matter is not strict YAML, using line reader: %s", e)
        data = None

    if isinstance(data, dict):
        fields = {str(k): v for k, v in data.items()}
        return FrontmatterResult(
            status=FrontmatterStatus.PRESENT, fields=fields, body=body
        )

    return FrontmatterResult(
        status=FrontmatterStatus.PRESENT,
        fields=_read_key_values(block_lines),
        body=body,
        strict_yaml=False,
    )


def summarize_description(description: str | None) -> str:
    """First non-empty line of a description, for one-line listings."""
    if description:
        for line in description.splitlines():
            if line.strip():
                return line.strip()
    return constants.NO_DESCRIPTION


@_dataclasses.dataclass
class Skill:
    """
    A skill directory and its parsed SKILL.md.

    Skills are read-only: nothing here writes back to the directory.
    """

    path: _pathlib.Path
    """Path to skill directory."""

    frontmatter: FrontmatterResult
    """Parsed front matter (status MISSING if the block is absent)."""

    @property
    def dir_name(self) -> str:
        """Skill identifier (directory name)."""
        return self.path.name

    @property
    def name(self) -> str:
        """Name from front matter, falling back to the directory name."""
        return self.frontmatter.get_text("name") or self.dir_name

    @property
    def description(self) -> str | None:
        """Description from front matter, if any."""
        return self.frontmatter.get_text("description")

    @property
    def summary(self) -> str:
        """One-line description for listings."""
        return summarize_description(self.description)

    @property
    def body(self) -> str:
        """Skill instructions (markdown body after front matter)."""
        return self.frontmatter.body

    @property
    def skill_file(self) -> _pathlib.Path:
        """Path to the SKILL.md file."""
        return self.path / constants.SKILL_FILENAME

    @property
    def body_line_count(self) -> int:
        """Number of lines in the skill body."""
        return len(self.body.splitlines())

    @property
    def exceeds_soft_limit(self) -> bool:
        """Whether body exceeds the soft limit."""
        return self.body_line_count > constants.SKILL_BODY_SOFT_LIMIT

    def list_files(self) -> list[_pathlib.Path]:
        """All files in the skill directory, relative to it, sorted."""
        return sorted(
            p.relative_to(self.path) for p in self.path.rglob("*") if p.is_file()
        )

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.dir_name,
            "description": self.summary,
            "path": str(self.path),
            "body_lines": self.body_line_count,
            "exceeds_limit": self.exceeds_soft_limit,
            "files": [str(p) for p in self.list_files()],
        }


def load_skill(skill_dir: _pathlib.Path) -> Skill:
    """
    Load a skill from a directory.

    Args:
        skill_dir: Path to skill directory (must contain SKILL.md).

    Returns:
        Skill instance. A file without front matter still loads; use
        the validation module to decide whether it is well-formed.

    Raises:
        FileNotFoundError: If SKILL.md doesn't exist.
    """
    skill_file = skill_dir / constants.SKILL_FILENAME
    if not skill_file.is_file():
        raise FileNotFoundError(f"{constants.SKILL_FILENAME} not found: {skill_file}")

    content = skill_file.read_text(encoding="utf-8", errors="replace")
    return Skill(path=skill_dir, frontmatter=parse_frontmatter(content))
