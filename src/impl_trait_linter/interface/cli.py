"""CLI entry points for impl-trait-linter - Thin Controller using Typer."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

import typer

from impl_trait_linter.domain.config import ConfigurationLoader
from impl_trait_linter.domain.constants import LEVEL_DENY
from impl_trait_linter.domain.protocols import (
    DiagnosticReporterProtocol,
    FileSystemProtocol,
    RustSourceProtocol,
)
from impl_trait_linter.domain.rules import Checkable
from impl_trait_linter.domain.rules.impl_trait_in_params import IMPL_TRAIT_IN_PARAMS
from impl_trait_linter.use_cases.check_sources import CheckSourcesUseCase

_OUTPUT_FORMATS: tuple[str, ...] = ("text", "json")
_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    rust_gateway: RustSourceProtocol
    filesystem: FileSystemProtocol
    rule_factory: Callable[[ConfigurationLoader], Checkable]
    reporter_factory: Callable[[str], DiagnosticReporterProtocol]


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_target_paths(paths: Optional[List[Path]]) -> list[str]:
        """Explicit paths, else src/ if it exists, else '.'."""
        if paths:
            return [str(p) for p in paths]
        src_dir = Path.cwd() / "src"
        if src_dir.is_dir():
            return ["src"]
        return ["."]

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format=_LOG_FORMAT,
            force=True,
        )

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="impl-trait-linter",
            help="Flag `impl Trait` parameters in public Rust signatures and suggest named generic parameters.",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: Optional[List[Path]] = typer.Argument(None, help="Rust files or directories (default: src/ if present, else .)"),  # noqa: B008
            output_format: str = typer.Option("text", "--format", help="Output format: text or json"),
            avoid_breaking_exported_api: Optional[bool] = typer.Option(
                None,
                "--avoid-breaking-exported-api/--no-avoid-breaking-exported-api",
                help="Skip trait methods (overrides config; default: true)",
            ),
            deny: bool = typer.Option(False, "--deny", help="Treat violations as errors and exit with status 1"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
        ) -> None:
            """Lint Rust sources for `impl Trait` in public parameter lists."""
            if output_format not in _OUTPUT_FORMATS:
                raise typer.BadParameter(
                    f"expected one of {', '.join(_OUTPUT_FORMATS)}", param_hint="--format"
                )
            CLIAppFactory.configure_logging(verbose)
            config_loader = deps.config_loader.with_overrides(
                avoid_breaking_exported_api=avoid_breaking_exported_api,
                level=LEVEL_DENY if deny else None,
            )
            use_case = CheckSourcesUseCase(
                rust_gateway=deps.rust_gateway,
                filesystem=deps.filesystem,
                rule=deps.rule_factory(config_loader),
                config_loader=config_loader,
            )
            report = use_case.execute(CLIAppFactory.resolve_target_paths(paths))
            deps.reporter_factory(output_format).report(report)
            if report.is_denied():
                raise typer.Exit(code=1)

        @app.command()
        def explain() -> None:
            """Print the documentation of the impl-trait-in-params lint."""
            lint = IMPL_TRAIT_IN_PARAMS
            typer.echo(f"{lint.code} ({lint.symbol}): {lint.description}\n")
            typer.echo(lint.explanation)

        return app
