"""Tests for Prefixer and Runner: per-file processing and whole runs."""

from __future__ import annotations

from pathlib import Path

import pytest

from classprefix.config import PrefixConfig
from classprefix.errors import ConfigError, ScopeSyntaxError, SourceParseError, StylesheetError
from classprefix.events import EventBus, FileProcessed, RunCompleted, RunStarted
from classprefix.model.outcome import FileStatus
from classprefix.runner import Prefixer, Runner
from classprefix.scope import parse_scopes
from classprefix.stylesheet import ClassSet


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _prefixer(classes, scopes="att:class,className fn:createElement", prefix="legacy-") -> Prefixer:
    return Prefixer(prefix=prefix, class_set=ClassSet.of(classes), scopes=parse_scopes([scopes]))


def _rewrite(code: str, classes, scopes="att:class,className fn:createElement", path="a.tsx") -> str:
    out = _prefixer(classes, scopes).transform(code.encode("utf-8"), path)
    return code if out is None else out.decode("utf-8")


def _config(root: Path, css: Path, **kwargs) -> PrefixConfig:
    kwargs.setdefault("prefix", "tw-")
    return PrefixConfig(stylesheet=css, root=root, **kwargs)


# ---------------------------------------------------------------------------
# Prefixer.transform: end-to-end scenarios on strings
# ---------------------------------------------------------------------------


class TestTransformScenarios:
    def test_basic_attribute(self):
        code = 'const a = <div className="bg-blue-500 untouched hover:bg-blue-600" />;'
        out = _rewrite(code, {"bg-blue-500", "hover:bg-blue-600"})
        assert out == (
            'const a = <div className="legacy-bg-blue-500 untouched hover:legacy-bg-blue-600" />;'
        )

    def test_arbitrary_variant_bracket(self):
        code = 'const a = <Button className="[&>.Foo]:absolute" />;'
        out = _rewrite(code, {"[&>.Foo]:absolute"})
        assert out == 'const a = <Button className="[&>.Foo]:legacy-absolute" />;'

    def test_non_class_identifiers_survive_wide_scan(self):
        code = 'const b = cva({ intent: "primary", size: "medium", class: "uppercase" });'
        out = _rewrite(code, {"uppercase"}, scopes="fn:cva")
        assert out == 'const b = cva({ intent: "primary", size: "medium", class: "legacy-uppercase" });'

    def test_wide_property_scope_on_attribute(self):
        code = 'const a = <Paper classes={{root: "bg-white", paper: "bg-blue-500"}} />;'
        out = _rewrite(code, {"bg-white", "bg-blue-500"}, scopes="prop:classes")
        assert out == (
            'const a = <Paper classes={{root: "legacy-bg-white", paper: "legacy-bg-blue-500"}} />;'
        )

    def test_no_match_returns_none(self):
        code = 'const a = <div className="untouched" title="bg-white" />;\n'
        assert _prefixer({"bg-white"}).transform(code.encode(), "a.tsx") is None

    def test_only_token_bytes_change(self):
        code = (
            "// bg-white in a comment\n"
            "const a = <div\n"
            "  className='  bg-white\tuntouched '\n"
            '  title="bg-white"\n'
            "/>;\n"
        )
        out = _rewrite(code, {"bg-white"})
        assert out == code.replace("'  bg-white", "'  legacy-bg-white")

    def test_parse_error_raises(self):
        with pytest.raises(SourceParseError):
            _prefixer({"x"}).transform(b"const = ;", "a.ts")


# ---------------------------------------------------------------------------
# Prefixer.process_file
# ---------------------------------------------------------------------------


class TestProcessFile:
    def test_rewrites_in_place(self, tmp_path: Path):
        path = tmp_path / "a.jsx"
        path.write_text('const a = <div className="bg-white" />;\n', encoding="utf-8")
        outcome = _prefixer({"bg-white"}).process_file(path)
        assert outcome.status is FileStatus.REWRITTEN
        assert outcome.replacements == 1
        assert path.read_text(encoding="utf-8") == 'const a = <div className="legacy-bg-white" />;\n'

    def test_dry_run_does_not_write(self, tmp_path: Path):
        path = tmp_path / "a.jsx"
        original = 'const a = <div className="bg-white" />;\n'
        path.write_text(original, encoding="utf-8")
        outcome = _prefixer({"bg-white"}).process_file(path, dry_run=True)
        assert outcome.status is FileStatus.REWRITTEN
        assert path.read_text(encoding="utf-8") == original

    def test_unchanged_file_is_not_written(self, tmp_path: Path):
        path = tmp_path / "a.js"
        path.write_text("const a = 1;\n", encoding="utf-8")
        before = path.stat().st_mtime_ns
        outcome = _prefixer({"bg-white"}).process_file(path)
        assert outcome.status is FileStatus.UNCHANGED
        assert path.stat().st_mtime_ns == before

    def test_parse_error_is_skipped(self, tmp_path: Path):
        path = tmp_path / "a.ts"
        path.write_text("const = ;\n", encoding="utf-8")
        outcome = _prefixer({"bg-white"}).process_file(path)
        assert outcome.status is FileStatus.SKIPPED
        assert "a.ts" in outcome.error

    def test_write_error_is_reported(self, tmp_path: Path, monkeypatch):
        def fail(path, content):
            raise PermissionError("read-only")

        monkeypatch.setattr("classprefix.runner.write_atomic", fail)
        path = tmp_path / "a.jsx"
        path.write_text('const a = <div className="bg-white" />;\n', encoding="utf-8")
        outcome = _prefixer({"bg-white"}).process_file(path)
        assert outcome.status is FileStatus.FAILED
        assert "read-only" in outcome.error

    def test_missing_file_is_reported(self, tmp_path: Path):
        outcome = _prefixer({"bg-white"}).process_file(tmp_path / "gone.js")
        assert outcome.status is FileStatus.FAILED


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


class TestRunnerFatalErrors:
    def test_missing_stylesheet(self, project: Path, tmp_path: Path):
        with pytest.raises(ConfigError):
            Runner(_config(project, tmp_path / "nope.css")).run()

    def test_root_must_be_a_directory(self, css_path: Path, tmp_path: Path):
        with pytest.raises(ConfigError):
            Runner(_config(tmp_path / "missing", css_path)).run()

    def test_empty_prefix(self, project: Path, css_path: Path):
        with pytest.raises(ConfigError):
            Runner(_config(project, css_path, prefix="")).run()

    def test_bad_scope_touches_nothing(self, project: Path, css_path: Path):
        before = {p: p.read_bytes() for p in project.rglob("*") if p.is_file()}
        with pytest.raises(ScopeSyntaxError):
            Runner(_config(project, css_path, scopes=("attr:className",))).run()
        assert {p: p.read_bytes() for p in project.rglob("*") if p.is_file()} == before

    def test_unusable_stylesheet(self, project: Path, tmp_path: Path):
        css = tmp_path / "plain.css"
        css.write_text("body { margin: 0; }", encoding="utf-8")
        with pytest.raises(StylesheetError):
            Runner(_config(project, css)).run()


class TestRunnerRun:
    def test_processes_every_source(self, project: Path, css_path: Path):
        summary = Runner(_config(project, css_path)).run()
        statuses = {o.path.relative_to(project).as_posix(): o.status for o in summary.outcomes}
        assert statuses == {
            "sample.tsx": FileStatus.REWRITTEN,
            "sample2.tsx": FileStatus.REWRITTEN,
            "nested/button.ts": FileStatus.REWRITTEN,
            "nested/broken.tsx": FileStatus.SKIPPED,
            "nested/nested/sample.jsx": FileStatus.REWRITTEN,
        }
        assert summary.exit_code == 0

    def test_single_worker(self, project: Path, css_path: Path):
        summary = Runner(_config(project, css_path, workers=1)).run()
        assert summary.count(FileStatus.REWRITTEN) == 4

    def test_dry_run(self, project: Path, css_path: Path):
        before = (project / "sample.tsx").read_bytes()
        summary = Runner(_config(project, css_path, dry_run=True)).run()
        assert summary.count(FileStatus.REWRITTEN) == 4
        assert (project / "sample.tsx").read_bytes() == before

    def test_events(self, project: Path, css_path: Path):
        bus = EventBus()
        seen: list[object] = []
        bus.on_all(seen.append)
        Runner(_config(project, css_path), event_bus=bus).run()
        assert isinstance(seen[0], RunStarted)
        assert seen[0].files == 5
        assert sum(isinstance(e, FileProcessed) for e in seen) == 5
        assert isinstance(seen[-1], RunCompleted)

    def test_exit_code_when_nothing_succeeds(self, tmp_path: Path, css_path: Path):
        root = tmp_path / "src"
        root.mkdir()
        (root / "bad.ts").write_text("const = ;", encoding="utf-8")
        summary = Runner(_config(root, css_path)).run()
        assert summary.exit_code == 1

    def test_empty_project(self, tmp_path: Path, css_path: Path):
        summary = Runner(_config(tmp_path, css_path)).run()
        assert summary.outcomes == []
        assert summary.exit_code == 0

    def test_gitignored_build_output_is_left_alone(self, project: Path, css_path: Path):
        (project / ".gitignore").write_text("dist/\n", encoding="utf-8")
        dist = project / "dist"
        dist.mkdir()
        bundle = dist / "bundle.js"
        bundle.write_text('const a = <div className="sr-only" />;\n', encoding="utf-8")
        summary = Runner(_config(project, css_path)).run()
        assert bundle not in [o.path for o in summary.outcomes]
        assert bundle.read_text(encoding="utf-8") == 'const a = <div className="sr-only" />;\n'

    def test_scope_rules_are_logged(self, project: Path, css_path: Path, caplog):
        with caplog.at_level("DEBUG", logger="classprefix.runner"):
            Runner(_config(project, css_path, scopes=("prop:classes", "fn:cva,cx"))).prepare()
        assert "scopes: prop:classes fn:cva fn:cx" in caplog.text
