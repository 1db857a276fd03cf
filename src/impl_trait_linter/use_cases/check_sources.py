"""Check Sources Use Case - discover Rust files, build declarations, run the rule."""

import logging
from typing import TYPE_CHECKING

from impl_trait_linter.domain.constants import DEFAULT_EXCLUDED_DIRS
from impl_trait_linter.domain.entities import FileReport, LintReport
from impl_trait_linter.domain.exceptions import SourceReadError
from impl_trait_linter.domain.source_map import SourceFile

if TYPE_CHECKING:
    from impl_trait_linter.domain.config import ConfigurationLoader
    from impl_trait_linter.domain.protocols import FileSystemProtocol, RustSourceProtocol
    from impl_trait_linter.domain.rules import Checkable, Violation

logger = logging.getLogger(__name__)


class CheckSourcesUseCase:
    """Orchestrates one lint run. Each file is processed independently."""

    def __init__(
        self,
        rust_gateway: "RustSourceProtocol",
        filesystem: "FileSystemProtocol",
        rule: "Checkable",
        config_loader: "ConfigurationLoader",
    ) -> None:
        self.rust_gateway = rust_gateway
        self.filesystem = filesystem
        self.rule = rule
        self.config_loader = config_loader

    def execute(self, paths: list[str]) -> LintReport:
        files: list[FileReport] = []
        skipped: list[str] = []
        for path in self.discover(paths):
            try:
                text = self.filesystem.read_text(path)
            except SourceReadError as exc:
                logger.warning("Skipping %s", exc)
                skipped.append(path)
                continue
            files.append(self.check_source(SourceFile(path=path, text=text)))
        report = LintReport(
            files=tuple(files),
            level=self.config_loader.level,
            skipped_paths=tuple(skipped),
        )
        logger.info(
            "Checked %d file(s): %d violation(s)", report.files_checked, report.violation_count
        )
        return report

    def check_source(self, source: SourceFile) -> FileReport:
        parsed = self.rust_gateway.parse_source(source)
        violations: list["Violation"] = []
        for declaration in parsed.declarations:
            violations.extend(self.rule.check(declaration))
        return FileReport(source=source, violations=tuple(violations))

    def discover(self, paths: list[str]) -> list[str]:
        """Rust files under the given paths, de-duplicated, minus excluded fragments."""
        excluded_fragments = self.config_loader.exclude_paths
        seen: set[str] = set()
        discovered: list[str] = []
        for path in paths:
            if not self.filesystem.is_directory(path) and not path.endswith(".rs"):
                logger.warning("Not a Rust file or directory: %s", path)
                continue
            for file_path in self.filesystem.glob_rust_files(path, DEFAULT_EXCLUDED_DIRS):
                if any(fragment in file_path for fragment in excluded_fragments):
                    logger.debug("Excluded by config: %s", file_path)
                    continue
                key = self.filesystem.resolve_path(file_path)
                if key in seen:
                    continue
                seen.add(key)
                discovered.append(file_path)
        return discovered
