"""
Tests for SkillRepository discovery, lookup, search and stats.
"""

import pathlib as _pathlib

import pytest as _pytest

import skillshelf.errors as errors
import skillshelf.skills.repository as repository


class TestFindSkillsDir:
    """Tests for find_skills_dir."""

    def test_finds_skills_in_start_dir(self, tmp_path: _pathlib.Path) -> None:
        """A skills/ directory next to the start path is found."""
        (tmp_path / "skills").mkdir()
        assert repository.find_skills_dir(tmp_path) == (tmp_path / "skills").resolve()

    def test_walks_up_to_ancestor(self, tmp_path: _pathlib.Path) -> None:
        """A skills/ directory in an ancestor is found from a nested path."""
        (tmp_path / "skills").mkdir()
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert repository.find_skills_dir(nested) == (tmp_path / "skills").resolve()

    def test_falls_back_to_start_dir(self, tmp_path: _pathlib.Path) -> None:
        """Without any skills/ directory the expected path is still returned."""
        start = tmp_path / "project"
        start.mkdir()
        result = repository.find_skills_dir(start)
        assert result.name == "skills"
        assert not (start / "skills").exists()


class TestDiscovery:
    """Tests for iterating skill directories."""

    def test_missing_root_raises(self, tmp_path: _pathlib.Path) -> None:
        """Whole-repository operations fail when skills/ is missing."""
        repo = repository.SkillRepository(tmp_path / "skills")

        assert not repo.exists()
        with _pytest.raises(errors.SkillsDirectoryNotFoundError, match="Skills directory not found"):
            repo.list_skills()
        with _pytest.raises(errors.SkillsDirectoryNotFoundError):
            repo.stats()
        with _pytest.raises(FileNotFoundError):
            repo.validate()

    def test_hidden_and_plain_files_are_skipped(self, make_skill, skills_root) -> None:
        """Dot-directories and loose files are not skills."""
        make_skill("alpha")
        make_skill(".hidden")
        (skills_root / "README.md").write_text("readme\n")

        repo = repository.SkillRepository(skills_root)
        assert [d.name for d in repo.iter_skill_dirs()] == ["alpha"]

    def test_sorted_by_name(self, make_skill, skills_root) -> None:
        """Directories are returned in name order."""
        for name in ["gamma", "alpha", "beta"]:
            make_skill(name)

        repo = repository.SkillRepository(skills_root)
        assert [s.dir_name for s in repo.list_skills()] == ["alpha", "beta", "gamma"]

    def test_list_skips_directories_without_skill_file(self, make_skill, skills_root) -> None:
        """list counts only directories that have a SKILL.md."""
        make_skill("alpha")
        make_skill("empty", content=None)

        repo = repository.SkillRepository(skills_root)
        assert [s.dir_name for s in repo.list_skills()] == ["alpha"]
        assert [d.name for d in repo.iter_skill_dirs()] == ["alpha", "empty"]

    def test_to_dict(self, make_skill, skills_root) -> None:
        """to_dict lists every skill with its summary."""
        make_skill("alpha")

        data = repository.SkillRepository(skills_root).to_dict()
        assert data["skills_dir"] == str(skills_root)
        assert data["count"] == 1
        assert data["skills"][0]["name"] == "alpha"
        assert data["skills"][0]["description"] == "Use when testing things"


class TestLookup:
    """Tests for looking up a single skill."""

    def test_read_raw_returns_exact_bytes(self, make_skill, skills_root) -> None:
        """read_raw does not decode or normalize the file."""
        skill_dir = make_skill("alpha")
        raw = b"---\r\nname: alpha\r\n---\r\n\xe2\x9c\x93 caf\xc3\xa9\r\n"
        (skill_dir / "SKILL.md").write_bytes(raw)

        assert repository.SkillRepository(skills_root).read_raw("alpha") == raw

    def test_read_raw_returns_invalid_skills(self, make_skill, skills_root) -> None:
        """Invalid skills can still be shown."""
        make_skill("plain", content="no front matter\n")
        assert repository.SkillRepository(skills_root).read_raw("plain") == b"no front matter\n"

    def test_unknown_skill_raises(self, skills_root) -> None:
        """Unknown names raise SkillNotFoundError (a LookupError)."""
        repo = repository.SkillRepository(skills_root)

        with _pytest.raises(errors.SkillNotFoundError, match="Skill not found: nope"):
            repo.read_raw("nope")
        with _pytest.raises(LookupError):
            repo.get_skill_dir("nope")

    def test_directory_without_skill_file(self, make_skill, skills_root) -> None:
        """The directory exists but there is nothing to show."""
        make_skill("empty", content=None)
        repo = repository.SkillRepository(skills_root)

        assert repo.get_skill_dir("empty") == skills_root / "empty"
        with _pytest.raises(errors.SkillNotFoundError):
            repo.get_skill_file("empty")

    @_pytest.mark.parametrize("name", ["", ".", "..", "../skills", "a/b"])
    def test_path_like_names_are_rejected(self, make_skill, skills_root, name: str) -> None:
        """Names must be a single path component."""
        make_skill("alpha")
        with _pytest.raises(errors.SkillNotFoundError):
            repository.SkillRepository(skills_root).get_skill_dir(name)


class TestSearch:
    """Tests for SkillRepository.search."""

    def test_matches_name_and_content_case_insensitively(self, make_skill, skills_root) -> None:
        """The term is matched against directory names and file text."""
        make_skill("testing-helper")
        make_skill(
            "writer",
            content="---\nname: writer\ndescription: Use when writing TESTS\n---\n",
        )
        make_skill("other", content="---\nname: other\ndescription: Use when idle\n---\n")

        repo = repository.SkillRepository(skills_root)
        names = [s.dir_name for s in repo.search("Test")]

        assert names == ["testing-helper", "writer"]

    def test_no_matches(self, make_skill, skills_root) -> None:
        """No match returns an empty list."""
        make_skill("alpha")
        assert repository.SkillRepository(skills_root).search("zzz") == []

    def test_directories_without_skill_file_never_match(self, make_skill, skills_root) -> None:
        """A name match alone is not enough without SKILL.md."""
        make_skill("testing", content=None)
        assert repository.SkillRepository(skills_root).search("testing") == []

    def test_empty_term_is_rejected(self, skills_root) -> None:
        """An empty term is a caller error."""
        with _pytest.raises(ValueError):
            repository.SkillRepository(skills_root).search("")


class TestValidateAndStats:
    """Tests for whole-repository validation and counts."""

    def test_stats_counts_directories(self, make_skill, skills_root) -> None:
        """Directories without SKILL.md count as invalid."""
        make_skill("alpha")
        make_skill("beta", content="---\nname: beta\ndescription: Helps\n---\n")
        make_skill("empty", content=None)

        stats = repository.SkillRepository(skills_root).stats()

        assert (stats.total, stats.valid, stats.invalid) == (3, 1, 2)
        assert stats.to_dict() == {"total": 3, "valid": 1, "invalid": 2}

    def test_validate_single(self, make_skill, skills_root) -> None:
        """Validating a named skill returns one result."""
        make_skill("alpha")
        make_skill("beta", content="# nothing\n")

        results = repository.SkillRepository(skills_root).validate("beta")

        assert len(results) == 1
        assert results[0].name == "beta"
        assert results[0].reason == "YAML frontmatter not found"

    def test_validate_unknown_name(self, skills_root) -> None:
        """A named skill without a directory is not found."""
        with _pytest.raises(errors.SkillNotFoundError):
            repository.SkillRepository(skills_root).validate("nope")


class TestUnreadableSkillFile:
    """A SKILL.md that cannot be read is skipped, not fatal."""

    @_pytest.fixture
    def locked(self, make_skill, monkeypatch: _pytest.MonkeyPatch) -> _pathlib.Path:
        """A `locked-tool` skill whose SKILL.md raises PermissionError on read."""
        make_skill("alpha")
        locked_dir = make_skill("locked-tool")
        original_read_text = _pathlib.Path.read_text

        def read_text(path: _pathlib.Path, *args, **kwargs) -> str:
            if path.parent.name == "locked-tool":
                raise PermissionError(13, "Permission denied", str(path))
            return original_read_text(path, *args, **kwargs)

        monkeypatch.setattr(_pathlib.Path, "read_text", read_text)
        return locked_dir

    def test_list_skips_it(self, locked, skills_root, caplog: _pytest.LogCaptureFixture) -> None:
        """The remaining skills are still listed and the failure is logged."""
        repo = repository.SkillRepository(skills_root)

        with caplog.at_level("WARNING", logger="skillshelf"):
            assert [s.dir_name for s in repo.list_skills()] == ["alpha"]

        assert "Permission denied" in caplog.text
        assert repo.to_dict()["count"] == 1

    def test_search_skips_it(self, locked, skills_root) -> None:
        """Neither a name match nor a content match is reported."""
        repo = repository.SkillRepository(skills_root)

        assert repo.search("locked") == []
        assert [s.dir_name for s in repo.search("testing things")] == ["alpha"]

    def test_validate_reports_it(self, locked, skills_root) -> None:
        """validate turns the read failure into an invalid result."""
        results = repository.SkillRepository(skills_root).validate("locked-tool")
        assert not results[0].valid
