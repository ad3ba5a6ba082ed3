"""Tests for the documentation coverage tallier and analyzer."""

from __future__ import annotations

from pathlib import Path

import pytest

from tsdoc_coverage.analyzers.coverage import DocCoverageAnalyzer, tally_source_unit
from tsdoc_coverage.config import CheckConfig
from tsdoc_coverage.models.coverage import DeclarationStatus, FileCoverage
from tsdoc_coverage.models.source import SourceUnit
from tsdoc_coverage.parsing.treesitter import parse_code
from tsdoc_coverage.project import Project, ProjectError
from tsdoc_coverage.tsdoc.messages import ParserMessage, TSDocMessageId
from tsdoc_coverage.tsdoc.validator import DocCommentValidator

# ── Helpers ─────────────────────────────────────────────────────


def _unit(code: str, language: str = "typescript") -> SourceUnit:
    source = code.encode("utf-8")
    return SourceUnit(
        file_path=Path("/project/src/sample.ts"),
        source=source,
        language=language,
        tree=parse_code(source, language),
    )


def _tally(code: str) -> FileCoverage:
    return tally_source_unit(_unit(code))


class _RejectEverything(DocCommentValidator):
    def validate(self, comment: str) -> list[ParserMessage]:
        return [ParserMessage(TSDocMessageId.UNDEFINED_TAG, "rejected", 1, 1)]


_DOCUMENTED = (
    "/**\n"
    " * Greets someone.\n"
    " *\n"
    " * @param name - Who to greet.\n"
    " */\n"
    "export function greet(name: string): string {\n"
    "  return `Hello ${name}`;\n"
    "}\n"
)

_UNDOCUMENTED = "export const shout = (text: string) => text.toUpperCase();\n"


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create a small TypeScript project with one documented and one bare file."""
    (tmp_path / "a.ts").write_text(_DOCUMENTED, encoding="utf-8")
    (tmp_path / "b.ts").write_text(_UNDOCUMENTED, encoding="utf-8")
    return tmp_path


# ── Tallier ─────────────────────────────────────────────────────


class TestTallySourceUnit:
    def test_documented_function(self) -> None:
        coverage = _tally("/** Adds two numbers. */\nfunction add(a: number, b: number) {}\n")
        assert coverage.total == 1
        assert coverage.documented == 1
        assert coverage.undocumented_lines == ""
        assert coverage.percentage == "100%"

    def test_bare_arrow_function(self) -> None:
        coverage = _tally("const f = () => 1;\n")
        assert coverage.total == 1
        assert coverage.documented == 0
        assert coverage.undocumented_lines == "1-1"
        assert coverage.percentage == "0%"
        assert coverage.findings[0].status is DeclarationStatus.MISSING

    def test_invalid_doc_comment(self) -> None:
        coverage = _tally("/** @return nothing */\nfunction f() {}\n")
        assert coverage.documented == 0
        assert coverage.undocumented_ranges == ["2-2"]
        (finding,) = coverage.findings
        assert finding.status is DeclarationStatus.INVALID
        assert [m.message_id for m in finding.messages] == [TSDocMessageId.UNDEFINED_TAG]

    @pytest.mark.parametrize(
        "code",
        [
            "// helper\nfunction f() {}\n",
            "/* helper */\nconst f = () => 1;\n",
        ],
    )
    def test_plain_comment_is_in_neither_bucket(self, code: str) -> None:
        coverage = _tally(code)
        assert coverage.total == 1
        assert coverage.documented == 0
        assert coverage.undocumented_ranges == []
        assert coverage.informal == 1
        assert coverage.percentage == "0%"

    def test_documented_exported_const(self) -> None:
        coverage = _tally("/** Doubles a number. */\nexport const double = (x: number) => x * 2;\n")
        assert coverage.documented == 1

    def test_nearest_comment_wins(self) -> None:
        coverage = _tally("/** Old docs. */\n// scratch note\nfunction f() {}\n")
        assert coverage.findings[0].status is DeclarationStatus.INFORMAL

    def test_later_declarator_reads_comment_after_comma(self) -> None:
        code = "/** First. */\nconst a = () => 1,\n  /** Second. */\n  b = () => 2;\n"
        coverage = _tally(code)
        assert coverage.total == 2
        assert coverage.documented == 2

    def test_later_declarator_without_comment(self) -> None:
        code = "/** Both? */\nconst a = () => 1,\n  b = () => 2;\n"
        coverage = _tally(code)
        assert coverage.documented == 1
        assert coverage.undocumented_lines == "3-3"

    def test_same_line_comment_is_trailing(self) -> None:
        coverage = _tally("setup(); /** Not a doc for f. */\nfunction f() {}\n")
        assert coverage.findings[0].status is DeclarationStatus.MISSING

    def test_shebang_file(self) -> None:
        coverage = _tally("#!/usr/bin/env node\n/** Entry point. */\nfunction main() {}\n")
        assert coverage.documented == 1

    def test_no_declarations(self) -> None:
        coverage = _tally("const answer = 42;\nclass Box {}\n")
        assert coverage.total == 0
        assert coverage.percentage == "N/A"

    def test_ranges_follow_collection_order(self) -> None:
        code = (
            "const c = () => 1;\n"
            "function a() {}\n"
            "/** Documented. */\n"
            "function b() {}\n"
        )
        coverage = _tally(code)
        assert coverage.total == 3
        assert coverage.documented == 1
        # Functions are tallied before variables.
        assert coverage.undocumented_lines == "2-2, 1-1"
        assert coverage.percentage == "33%"

    def test_counts_stay_consistent(self) -> None:
        code = (
            "/** Ok. */\nfunction a() {}\n"
            "// note\nfunction b() {}\n"
            "/** @foo */\nfunction c() {}\n"
            "function d() {}\n"
            "export const e = async () => {};\n"
        )
        coverage = _tally(code)
        assert coverage.total == 5
        assert coverage.documented + len(coverage.undocumented_ranges) <= coverage.total
        assert coverage.documented + len(coverage.undocumented_ranges) + coverage.informal == 5

    def test_file_path_is_recorded(self) -> None:
        assert _tally("").file_path == "/project/src/sample.ts"

    def test_custom_validator(self) -> None:
        coverage = tally_source_unit(
            _unit("/** Fine. */\nfunction f() {}\n"), validator=_RejectEverything()
        )
        assert coverage.findings[0].status is DeclarationStatus.INVALID
        assert coverage.undocumented_lines == "2-2"

    def test_custom_collector(self) -> None:
        coverage = tally_source_unit(_unit("function f() {}\n"), collector=lambda unit: [])
        assert coverage.total == 0


# ── Project loading ─────────────────────────────────────────────


class TestProject:
    def test_loads_sorted_units(self, project_root: Path) -> None:
        units = Project(CheckConfig(root=project_root)).add_source_files()
        assert [u.file_path.name for u in units] == ["a.ts", "b.ts"]
        assert all(u.file_path.is_absolute() for u in units)

    def test_skips_installed_packages(self, project_root: Path) -> None:
        package = project_root / "node_modules" / "pkg"
        package.mkdir(parents=True)
        (package / "index.ts").write_text("export function dep() {}\n", encoding="utf-8")
        nested = project_root / "src" / "node_modules"
        nested.mkdir(parents=True)
        (nested / "shim.ts").write_text("export function shim() {}\n", encoding="utf-8")
        (project_root / "src" / "app.ts").write_text("function app() {}\n", encoding="utf-8")

        units = Project(CheckConfig(root=project_root)).add_source_files()
        assert [u.file_path.relative_to(project_root).as_posix() for u in units] == [
            "a.ts",
            "b.ts",
            "src/app.ts",
        ]

    def test_skips_hidden_entries(self, tmp_path: Path) -> None:
        for hidden in (".storybook", ".git", ".husky"):
            (tmp_path / hidden).mkdir()
            (tmp_path / hidden / "main.ts").write_text("function cfg() {}\n", encoding="utf-8")
        (tmp_path / ".eslintrc.ts").write_text("function lint() {}\n", encoding="utf-8")
        (tmp_path / "index.ts").write_text("function run() {}\n", encoding="utf-8")

        units = Project(CheckConfig(root=tmp_path)).add_source_files()
        assert [u.file_path.name for u in units] == ["index.ts"]

    def test_hidden_only_project_is_empty(self, tmp_path: Path) -> None:
        (tmp_path / ".storybook").mkdir()
        (tmp_path / ".storybook" / "main.ts").write_text("function cfg() {}\n", encoding="utf-8")
        summary = DocCoverageAnalyzer(CheckConfig(root=tmp_path)).run()
        assert summary.files == []

    def test_file_types(self, tmp_path: Path) -> None:
        (tmp_path / "view.tsx").write_text("export const View = () => <div />;\n", encoding="utf-8")
        (tmp_path / "legacy.js").write_text("function old() {}\n", encoding="utf-8")
        (tmp_path / "notes.md").write_text("# notes\n", encoding="utf-8")

        units = Project(CheckConfig(root=tmp_path)).add_source_files()
        assert [(u.file_path.name, u.language) for u in units] == [("view.tsx", "tsx")]

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(ProjectError, match="not a directory"):
            Project(CheckConfig(root=tmp_path / "missing")).add_source_files()

    def test_syntax_errors_are_tolerated(self, tmp_path: Path) -> None:
        (tmp_path / "broken.ts").write_text("function (oops {\n", encoding="utf-8")
        units = Project(CheckConfig(root=tmp_path)).add_source_files()
        assert len(units) == 1


# ── Analyzer ────────────────────────────────────────────────────


class TestDocCoverageAnalyzer:
    def test_summary(self, project_root: Path) -> None:
        summary = DocCoverageAnalyzer(CheckConfig(root=project_root)).run()

        assert [Path(f.file_path).name for f in summary.files] == ["a.ts", "b.ts"]
        assert summary.files[0].file_path == str((project_root / "a.ts").resolve())
        first, second = summary.files
        assert (first.total, first.documented, first.percentage) == (1, 1, "100%")
        assert (second.total, second.documented, second.undocumented_lines) == (1, 0, "1-1")
        assert summary.total == 2
        assert summary.documented == 1
        assert summary.percentage == "50%"

    def test_empty_project(self, tmp_path: Path) -> None:
        summary = DocCoverageAnalyzer(CheckConfig(root=tmp_path)).run()
        assert summary.files == []
        assert summary.percentage == "N/A"

    def test_file_without_declarations_is_listed(self, tmp_path: Path) -> None:
        (tmp_path / "types.ts").write_text("export type Id = string;\n", encoding="utf-8")
        summary = DocCoverageAnalyzer(CheckConfig(root=tmp_path)).run()
        (coverage,) = summary.files
        assert coverage.total == 0
        assert coverage.percentage == "N/A"

    def test_custom_validator(self, project_root: Path) -> None:
        analyzer = DocCoverageAnalyzer(
            CheckConfig(root=project_root), validator=_RejectEverything()
        )
        summary = analyzer.run()
        assert summary.documented == 0
        assert summary.files[0].undocumented_lines == "6-8"

    def test_analyze_unit(self) -> None:
        analyzer = DocCoverageAnalyzer(CheckConfig(root=Path("/unused")))
        coverage = analyzer.analyze_unit(_unit("/** Hi. */\nfunction hi() {}\n"))
        assert coverage.documented == 1
