"""Diagnostic reporters: rustc-style terminal text and machine-readable JSON."""

import json
from typing import TypedDict

import typer

from impl_trait_linter.domain.constants import GENERIC_NAME_PLACEHOLDER, LEVEL_DENY
from impl_trait_linter.domain.entities import FileReport, LintReport
from impl_trait_linter.domain.protocols import DiagnosticReporterProtocol
from impl_trait_linter.domain.rules import SuggestedEdit, Violation
from impl_trait_linter.domain.source_map import SourceFile
from impl_trait_linter.domain.spans import Span


class SpanDict(TypedDict, total=False):
    file_name: str
    byte_start: int
    byte_end: int
    line_start: int
    line_end: int
    column_start: int
    column_end: int
    is_primary: bool
    text: str
    suggested_replacement: str
    suggestion_applicability: str
    suggestion_style: str


class ChildDict(TypedDict):
    message: str
    level: str
    spans: list[SpanDict]


class DiagnosticDict(TypedDict):
    code: str
    symbol: str
    level: str
    message: str
    spans: list[SpanDict]
    children: list[ChildDict]


def _level_label(level: str) -> str:
    return "error" if level == LEVEL_DENY else "warning"


class TerminalDiagnosticReporter(DiagnosticReporterProtocol):
    """Renders violations the way rustc renders lint diagnostics."""

    def __init__(self, color: bool = True) -> None:
        self._color = color

    def report(self, lint_report: LintReport) -> None:
        typer.echo(self.render(lint_report), nl=False)

    def render(self, lint_report: LintReport) -> str:
        blocks: list[str] = []
        for file_report in lint_report.files:
            for violation in file_report.violations:
                blocks.append(self.render_violation(file_report.source, violation, lint_report.level))
        blocks.append(self._summary(lint_report))
        return "\n".join(blocks)

    def render_violation(self, source: SourceFile, violation: Violation, level: str) -> str:
        label = _level_label(level)
        line, column = source.lookup(violation.span.lo)
        end_line, end_column = source.lookup(violation.span.hi)
        shown_lines = [line]
        for edit in violation.suggestions:
            shown_lines.append(self._patched_range(source, edit)[1])
        width = len(str(max(shown_lines)))
        pad = " " * width

        header = self._style(f"{label}[{violation.code}]", fg=typer.colors.RED if label == "error" else typer.colors.YELLOW)
        out = [
            f"{header}: {self._style(violation.message, bold=True)}",
            f"{pad}--> {source.location(violation.span)}",
            f"{pad} |",
            f"{line:>{width}} | {source.line_text(line)}",
        ]
        carets = (end_column - column) if end_line == line else len(source.line_text(line)) - column + 1
        out.append(f"{pad} | {' ' * (column - 1)}{'^' * max(carets, 1)}")
        out.append(f"{pad} |")
        for edit in violation.suggestions:
            out.extend(self._render_suggestion(source, edit, width))
        out.append(f"{pad} = note: `{violation.code}` ({violation.symbol}) is enabled")
        if any(GENERIC_NAME_PLACEHOLDER in e.replacement for e in violation.suggestions):
            out.append(f"{pad} = help: replace `{GENERIC_NAME_PLACEHOLDER}` with a type parameter name")
        return "\n".join(out) + "\n"

    def _render_suggestion(self, source: SourceFile, edit: SuggestedEdit, width: int) -> list[str]:
        pad = " " * width
        first, last, patched_lines = self._patched_range(source, edit)
        out = [f"{self._style('help', fg=typer.colors.CYAN)}: {edit.message}", f"{pad} |"]
        for number in range(first, last + 1):
            out.append(f"{number:>{width}} | {patched_lines[number - 1]}")
        edit_line, edit_column = source.lookup(edit.span.lo)
        edit_end_line, _ = source.lookup(edit.span.hi)
        if edit_line == edit_end_line and "\n" not in edit.replacement:
            marker = "+" if edit.is_insertion else "~"
            out.append(f"{pad} | {' ' * (edit_column - 1)}{marker * len(edit.replacement)}")
        out.append(f"{pad} |")
        return out

    @staticmethod
    def _patched_range(source: SourceFile, edit: SuggestedEdit) -> tuple[int, int, list[str]]:
        """First and last 1-based line of the edited region in the patched text, plus its lines."""
        first, _ = source.lookup(edit.span.lo)
        patched_lines = source.apply(edit.span, edit.replacement).split("\n")
        return first, first + edit.replacement.count("\n"), patched_lines

    def _summary(self, lint_report: LintReport) -> str:
        count = lint_report.violation_count
        label = _level_label(lint_report.level)
        noun = label if count == 1 else f"{label}s"
        text = f"{lint_report.files_checked} file(s) checked: {count} {noun} emitted"
        if lint_report.skipped_paths:
            text += f", {len(lint_report.skipped_paths)} file(s) skipped"
        return text + "\n"

    def _style(self, text: str, **kwargs: object) -> str:
        if not self._color:
            return text
        return typer.style(text, **kwargs)  # type: ignore[arg-type]


class JsonDiagnosticReporter(DiagnosticReporterProtocol):
    """One JSON document per run; span fields follow rustc's JSON diagnostics."""

    def report(self, lint_report: LintReport) -> None:
        typer.echo(json.dumps(self.to_dict(lint_report), indent=2))

    def to_dict(self, lint_report: LintReport) -> dict[str, object]:
        diagnostics: list[DiagnosticDict] = []
        for file_report in lint_report.files:
            diagnostics.extend(self._file_diagnostics(file_report, lint_report.level))
        return {
            "diagnostics": diagnostics,
            "files_checked": lint_report.files_checked,
            "violation_count": lint_report.violation_count,
            "skipped_paths": list(lint_report.skipped_paths),
            "level": lint_report.level,
        }

    def _file_diagnostics(self, file_report: FileReport, level: str) -> list[DiagnosticDict]:
        source = file_report.source
        result: list[DiagnosticDict] = []
        for violation in file_report.violations:
            primary = self._span_dict(source, violation.span)
            primary["is_primary"] = True
            children: list[ChildDict] = []
            for edit in violation.suggestions:
                span = self._span_dict(source, edit.span)
                span["suggested_replacement"] = edit.replacement
                span["suggestion_applicability"] = edit.applicability.value
                span["suggestion_style"] = edit.style.value
                children.append({"message": edit.message, "level": "help", "spans": [span]})
            result.append(
                {
                    "code": violation.code,
                    "symbol": violation.symbol,
                    "level": _level_label(level),
                    "message": violation.message,
                    "spans": [primary],
                    "children": children,
                }
            )
        return result

    @staticmethod
    def _span_dict(source: SourceFile, span: Span) -> SpanDict:
        line_start, column_start = source.lookup(span.lo)
        line_end, column_end = source.lookup(span.hi)
        return {
            "file_name": source.path,
            "byte_start": span.lo,
            "byte_end": span.hi,
            "line_start": line_start,
            "line_end": line_end,
            "column_start": column_start,
            "column_end": column_end,
            "is_primary": False,
            "text": source.snippet(span),
        }
