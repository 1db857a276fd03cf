from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from impl_trait_linter.domain.source_map import SourceFile
    from impl_trait_linter.domain.entities import LintReport, ParsedSource


class InTestContextProtocol(Protocol):
    """Classifies whether a declaration lives in test-only code."""

    def is_in_test_context(self, handle: object) -> bool:
        """True if the declaration behind ``handle`` is a test or inside one."""
        ...


class RustSourceProtocol(Protocol):
    """Produces the typed declaration tree for one source file."""

    def parse_source(self, source: "SourceFile") -> "ParsedSource":
        """Parse a file and return its declarations plus the host tree."""
        ...


class FileSystemProtocol(Protocol):
    def resolve_path(self, path: str) -> str:
        ...

    def is_directory(self, path: str) -> bool:
        ...

    def glob_rust_files(self, path: str, excluded_dirs: frozenset[str]) -> list[str]:
        """Get all Rust files in path (recursive if directory), sorted."""
        ...

    def read_text(self, path: str) -> str:
        """Read a UTF-8 file. Raises SourceReadError."""
        ...


class DiagnosticReporterProtocol(Protocol):
    """Renders a lint report. Implemented by terminal and JSON reporters."""

    def report(self, lint_report: "LintReport") -> None:
        ...
