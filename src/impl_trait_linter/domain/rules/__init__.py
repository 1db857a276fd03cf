"""Domain models for rules, violations and suggested edits."""

from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "Applicability",
    "Checkable",
    "DiagnosticBuilder",
    "LintDeclaration",
    "SuggestedEdit",
    "SuggestionStyle",
    "Violation",
    "span_lint_and_then",
]

from typing import TYPE_CHECKING, Callable, Protocol

from impl_trait_linter.domain.spans import Span

if TYPE_CHECKING:
    from impl_trait_linter.domain.declarations import Declaration


class Applicability(Enum):
    """How confident a suggestion is that applying it yields correct code."""

    MACHINE_APPLICABLE = "MachineApplicable"
    MAYBE_INCORRECT = "MaybeIncorrect"
    HAS_PLACEHOLDERS = "HasPlaceholders"
    UNSPECIFIED = "Unspecified"


class SuggestionStyle(Enum):
    """Rendering hint for a suggestion."""

    SHOW_CODE = "show_code"
    SHOW_ALWAYS = "show_always"
    HIDE_CODE_INLINE = "hide_code_inline"


@dataclass(frozen=True)
class SuggestedEdit:
    """Replace ``span`` with ``replacement``. An empty span is a pure insertion."""

    span: Span
    message: str
    replacement: str
    applicability: Applicability
    style: SuggestionStyle = SuggestionStyle.SHOW_CODE

    @property
    def is_insertion(self) -> bool:
        return self.span.is_empty()


@dataclass(frozen=True)
class LintDeclaration:
    code: str
    symbol: str
    description: str
    explanation: str = ""


@dataclass(frozen=True)
class Violation:
    """A rule violation anchored at ``span`` with zero or more suggested edits."""

    code: str
    symbol: str
    message: str
    span: Span
    suggestions: tuple[SuggestedEdit, ...] = field(default_factory=tuple)


class DiagnosticBuilder:
    """Collects suggestions for one diagnostic while the decorate callback runs."""

    def __init__(self, lint: LintDeclaration, span: Span, message: str) -> None:
        self._lint = lint
        self._span = span
        self._message = message
        self._suggestions: list[SuggestedEdit] = []

    def span_suggestion_with_style(
        self,
        span: Span,
        message: str,
        replacement: str,
        applicability: Applicability,
        style: SuggestionStyle,
    ) -> "DiagnosticBuilder":
        self._suggestions.append(
            SuggestedEdit(
                span=span,
                message=message,
                replacement=replacement,
                applicability=applicability,
                style=style,
            )
        )
        return self

    def build(self) -> Violation:
        return Violation(
            code=self._lint.code,
            symbol=self._lint.symbol,
            message=self._message,
            span=self._span,
            suggestions=tuple(self._suggestions),
        )


def span_lint_and_then(
    lint: LintDeclaration,
    span: Span,
    message: str,
    decorate: Callable[[DiagnosticBuilder], None],
) -> Violation:
    """Emit one diagnostic at ``span``; ``decorate`` attaches suggestions."""
    builder = DiagnosticBuilder(lint, span, message)
    decorate(builder)
    return builder.build()


class Checkable(Protocol):
    """One-and-done check: given a declaration, return violations."""

    lint: LintDeclaration

    def check(self, declaration: "Declaration") -> list[Violation]:
        """Interrogate a declaration for this rule."""
        ...
