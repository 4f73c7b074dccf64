"""Tests for source file discovery."""

from pathlib import Path

from classprefix.discovery import find_sources


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


class TestFindSources:
    def test_filters_by_extension_and_sorts(self, tmp_path: Path):
        _touch(tmp_path / "b.tsx")
        _touch(tmp_path / "a.js")
        _touch(tmp_path / "sub" / "c.ts")
        _touch(tmp_path / "style.css")
        _touch(tmp_path / "README.md")
        found = find_sources(tmp_path)
        assert found == [tmp_path / "a.js", tmp_path / "b.tsx", tmp_path / "sub" / "c.ts"]

    def test_skips_node_modules_and_hidden_dirs(self, tmp_path: Path):
        _touch(tmp_path / "node_modules" / "lib" / "index.js")
        _touch(tmp_path / ".git" / "hook.js")
        keep = _touch(tmp_path / "src" / "index.js")
        assert find_sources(tmp_path) == [keep]

    def test_custom_extensions_and_excludes(self, tmp_path: Path):
        _touch(tmp_path / "dist" / "out.js")
        keep = _touch(tmp_path / "src" / "a.mjs")
        _touch(tmp_path / "src" / "b.js")
        found = find_sources(tmp_path, extensions=["mjs"], excludes=["dist"])
        assert found == [keep]


class TestIgnoreFiles:
    def test_gitignored_directory_is_not_returned(self, tmp_path: Path):
        (tmp_path / ".gitignore").write_text("dist/\nbuild\n", encoding="utf-8")
        _touch(tmp_path / "dist" / "bundle.js")
        _touch(tmp_path / "build" / "out.js")
        keep = _touch(tmp_path / "src" / "index.js")
        assert find_sources(tmp_path) == [keep]

    def test_file_patterns_and_negation(self, tmp_path: Path):
        (tmp_path / ".gitignore").write_text("*.gen.ts\n!keep.gen.ts\n", encoding="utf-8")
        _touch(tmp_path / "a.gen.ts")
        keep = _touch(tmp_path / "keep.gen.ts")
        other = _touch(tmp_path / "b.ts")
        assert find_sources(tmp_path) == [other, keep]

    def test_nested_ignore_file_applies_to_its_own_tree(self, tmp_path: Path):
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / ".gitignore").write_text("/generated\n", encoding="utf-8")
        _touch(tmp_path / "pkg" / "generated" / "types.ts")
        top = _touch(tmp_path / "generated" / "types.ts")
        keep = _touch(tmp_path / "pkg" / "index.ts")
        assert find_sources(tmp_path) == [top, keep]

    def test_dot_ignore_file(self, tmp_path: Path):
        (tmp_path / ".ignore").write_text("legacy/\n", encoding="utf-8")
        _touch(tmp_path / "legacy" / "old.js")
        assert find_sources(tmp_path) == []

    def test_ignore_files_can_be_disabled(self, tmp_path: Path):
        (tmp_path / ".gitignore").write_text("dist/\n", encoding="utf-8")
        bundle = _touch(tmp_path / "dist" / "bundle.js")
        assert find_sources(tmp_path, use_ignore_files=False) == [bundle]

    def test_hidden_files_are_skipped(self, tmp_path: Path):
        _touch(tmp_path / ".eslintrc.js")
        keep = _touch(tmp_path / "index.js")
        assert find_sources(tmp_path) == [keep]
