"""Tests for output-directory staging."""
from pathlib import Path

import pytest

from npm_packager.core.staging import reset_dir, stage_root_assets, stage_sources
from npm_packager.errors import SourceNotFoundError


class TestResetDir:

    def test_creates_missing_dir(self, tmp_path: Path):
        out = reset_dir(tmp_path / "a" / "out")
        assert out.is_dir()
        assert list(out.iterdir()) == []

    def test_empties_existing_dir(self, tmp_path: Path):
        out = tmp_path / "out"
        (out / "stale").mkdir(parents=True)
        (out / "stale" / "old.js").write_text("x")
        (out / "package.json").write_text("{}")

        reset_dir(out)

        assert out.is_dir()
        assert list(out.iterdir()) == []


class TestStageSources:

    def test_full_walk_copies_every_file(self, deno_project: Path, tmp_path: Path, list_files):
        dest = tmp_path / "out" / "src"
        staged = stage_sources(deno_project / "src", dest)

        expected = list_files(deno_project / "src")
        assert sorted(staged) == expected
        assert list_files(dest) == expected

    def test_explicit_list_copies_exactly(self, deno_project: Path, tmp_path: Path, list_files):
        dest = tmp_path / "out" / "src"
        files = ["mod.ts", "utils/math.ts"]

        staged = stage_sources(deno_project / "src", dest, files)

        assert staged == files
        assert list_files(dest) == sorted(files)
        assert (dest / "utils" / "math.ts").read_text() == \
            (deno_project / "src" / "utils" / "math.ts").read_text()

    def test_missing_src_dir(self, tmp_path: Path):
        with pytest.raises(SourceNotFoundError):
            stage_sources(tmp_path / "nope", tmp_path / "out")

    def test_missing_explicit_file(self, deno_project: Path, tmp_path: Path):
        with pytest.raises(SourceNotFoundError, match="ghost.ts"):
            stage_sources(deno_project / "src", tmp_path / "out", ["mod.ts", "ghost.ts"])

    def test_source_not_found_is_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            stage_sources(tmp_path / "nope", tmp_path / "out")


class TestStageRootAssets:

    def test_copies_files_and_directories(self, deno_project: Path, tmp_path: Path):
        out = tmp_path / "out"
        out.mkdir()

        copied, missing = stage_root_assets(["LICENSE", "docs"], out, deno_project)

        assert copied == ["LICENSE", "docs"]
        assert missing == []
        assert (out / "LICENSE").read_text() == "MIT License\n"
        assert (out / "docs" / "guide.md").read_text() == "# guide\n"

    def test_missing_asset_warns_and_continues(self, deno_project: Path, tmp_path: Path, caplog):
        out = tmp_path / "out"
        out.mkdir()

        with caplog.at_level("WARNING", logger="npm_packager.core.staging"):
            copied, missing = stage_root_assets(
                ["API.md", "README.md", "AGENTS.md"], out, deno_project,
            )

        assert copied == ["README.md"]
        assert missing == ["API.md", "AGENTS.md"]
        assert "API.md not found, skipping" in caplog.text
        assert (out / "README.md").exists()

    def test_other_errors_propagate(self, deno_project: Path, tmp_path: Path, monkeypatch):
        out = tmp_path / "out"
        out.mkdir()

        def denied(src, dest):
            raise PermissionError(13, "Permission denied", str(src))

        monkeypatch.setattr("npm_packager.core.staging.copy_recursive", denied)

        with pytest.raises(PermissionError):
            stage_root_assets(["LICENSE"], out, deno_project)

    def test_missing_nested_asset_leaves_no_empty_dir(self, deno_project: Path, tmp_path: Path):
        out = tmp_path / "out"
        out.mkdir()

        copied, missing = stage_root_assets(["notes/extra.md"], out, deno_project)

        assert copied == []
        assert missing == ["notes/extra.md"]
        assert not (out / "notes").exists()
