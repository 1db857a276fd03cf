from dataclasses import dataclass, field

from impl_trait_linter.domain.constants import LEVEL_DENY
from impl_trait_linter.domain.declarations import Declaration
from impl_trait_linter.domain.rules import Violation
from impl_trait_linter.domain.source_map import SourceFile


@dataclass(frozen=True)
class ParsedSource:
    """Declarations of one file, as produced by the Rust gateway."""

    source: SourceFile
    declarations: tuple[Declaration, ...] = field(default_factory=tuple)
    has_syntax_errors: bool = False


@dataclass(frozen=True)
class FileReport:
    source: SourceFile
    violations: tuple[Violation, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LintReport:
    """Result of one run across all discovered files."""

    files: tuple[FileReport, ...] = field(default_factory=tuple)
    level: str = "warn"
    skipped_paths: tuple[str, ...] = field(default_factory=tuple)

    @property
    def violation_count(self) -> int:
        return sum(len(f.violations) for f in self.files)

    @property
    def files_checked(self) -> int:
        return len(self.files)

    def has_violations(self) -> bool:
        return self.violation_count > 0

    def is_denied(self) -> bool:
        """True if the run should fail CI: level deny and at least one violation."""
        return self.level == LEVEL_DENY and self.has_violations()
