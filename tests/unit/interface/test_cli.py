"""Unit tests for the Typer-based CLI interface."""

import json
import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from typer.testing import CliRunner

from impl_trait_linter.domain.config import ConfigurationLoader
from impl_trait_linter.domain.rules.impl_trait_in_params import ImplTraitInParamsRule
from impl_trait_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from impl_trait_linter.infrastructure.gateways.rust_gateway import RustGateway
from impl_trait_linter.infrastructure.reporters import (
    JsonDiagnosticReporter,
    TerminalDiagnosticReporter,
)
from impl_trait_linter.infrastructure.services.test_context import TreeSitterTestContext
from impl_trait_linter.interface.cli import CLIAppFactory, CLIDependencies

runner = CliRunner()

TRAIT_SOURCE = "pub trait Tr {\n    fn f(x: impl Clone);\n}\n"


def _rule_factory(config_loader: ConfigurationLoader) -> ImplTraitInParamsRule:
    return ImplTraitInParamsRule(
        TreeSitterTestContext(),
        avoid_breaking_exported_api=config_loader.avoid_breaking_exported_api,
    )


def _reporter_factory(output_format: str):
    if output_format == "json":
        return JsonDiagnosticReporter()
    return TerminalDiagnosticReporter(color=False)


def _make_deps(config: dict[str, object] | None = None, **overrides) -> CLIDependencies:
    defaults: dict = {
        "config_loader": ConfigurationLoader(config),
        "rust_gateway": RustGateway(),
        "filesystem": FileSystemGateway(),
        "rule_factory": _rule_factory,
        "reporter_factory": _reporter_factory,
    }
    defaults.update(overrides)
    return CLIDependencies(**defaults)


@pytest.fixture(autouse=True)
def _no_logging_reconfiguration() -> Iterator[None]:
    with patch.object(CLIAppFactory, "configure_logging"):
        yield


@pytest.fixture
def crate(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    src.mkdir()
    (src / "lib.rs").write_text("pub fn f(x: impl Clone) {}\nfn g(x: impl Clone) {}\n")
    (src / "tr.rs").write_text(TRAIT_SOURCE)
    return tmp_path


class TestResolveTargetPaths:
    def test_explicit_paths(self) -> None:
        assert CLIAppFactory.resolve_target_paths([Path("a.rs"), Path("b")]) == ["a.rs", "b"]

    def test_defaults_to_src_when_exists(self, crate: Path) -> None:
        original_cwd = Path.cwd()
        try:
            os.chdir(crate)
            assert CLIAppFactory.resolve_target_paths(None) == ["src"]
        finally:
            os.chdir(original_cwd)

    def test_defaults_to_dot_when_src_missing(self, tmp_path: Path) -> None:
        original_cwd = Path.cwd()
        try:
            os.chdir(tmp_path)
            assert CLIAppFactory.resolve_target_paths(None) == ["."]
        finally:
            os.chdir(original_cwd)


class TestCheckCommand:
    def test_warns_and_exits_zero(self, crate: Path) -> None:
        app = CLIAppFactory.create_app(_make_deps())
        result = runner.invoke(app, ["check", str(crate / "src")])
        assert result.exit_code == 0
        assert result.output.count("warning[W9401]") == 1
        assert "2 file(s) checked: 1 warning emitted" in result.output

    def test_deny_exits_one(self, crate: Path) -> None:
        app = CLIAppFactory.create_app(_make_deps())
        result = runner.invoke(app, ["check", str(crate / "src"), "--deny"])
        assert result.exit_code == 1
        assert "error[W9401]" in result.output

    def test_deny_from_config(self, crate: Path) -> None:
        app = CLIAppFactory.create_app(_make_deps({"level": "deny"}))
        assert runner.invoke(app, ["check", str(crate / "src")]).exit_code == 1

    def test_deny_without_violations_exits_zero(self, tmp_path: Path) -> None:
        (tmp_path / "clean.rs").write_text("pub fn f<T: Clone>(x: T) {}\n")
        app = CLIAppFactory.create_app(_make_deps())
        result = runner.invoke(app, ["check", str(tmp_path / "clean.rs"), "--deny"])
        assert result.exit_code == 0

    def test_flag_enables_trait_methods(self, crate: Path) -> None:
        app = CLIAppFactory.create_app(_make_deps())
        result = runner.invoke(
            app, ["check", str(crate / "src"), "--no-avoid-breaking-exported-api"]
        )
        assert result.output.count("warning[W9401]") == 2

    def test_cli_flag_beats_config(self, crate: Path) -> None:
        app = CLIAppFactory.create_app(_make_deps({"avoid-breaking-exported-api": False}))
        result = runner.invoke(
            app, ["check", str(crate / "src"), "--avoid-breaking-exported-api"]
        )
        assert result.output.count("warning[W9401]") == 1

    def test_json_format(self, crate: Path) -> None:
        app = CLIAppFactory.create_app(_make_deps())
        result = runner.invoke(app, ["check", str(crate / "src" / "lib.rs"), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["violation_count"] == 1
        assert data["diagnostics"][0]["spans"][0]["text"] == "impl Clone"

    def test_unknown_format_is_rejected(self, crate: Path) -> None:
        reporter_factory = Mock()
        app = CLIAppFactory.create_app(_make_deps(reporter_factory=reporter_factory))
        result = runner.invoke(app, ["check", str(crate), "--format", "xml"])
        assert result.exit_code == 2
        reporter_factory.assert_not_called()

    def test_verbose_configures_debug_logging(self, crate: Path) -> None:
        app = CLIAppFactory.create_app(_make_deps())
        runner.invoke(app, ["check", str(crate / "src"), "-v"])
        CLIAppFactory.configure_logging.assert_called_once_with(True)  # type: ignore[attr-defined]

    def test_rule_receives_overridden_config(self, crate: Path) -> None:
        rule_factory = Mock(side_effect=_rule_factory)
        app = CLIAppFactory.create_app(_make_deps(rule_factory=rule_factory))
        runner.invoke(app, ["check", str(crate), "--no-avoid-breaking-exported-api", "--deny"])
        [loader] = rule_factory.call_args.args
        assert loader.avoid_breaking_exported_api is False
        assert loader.level == "deny"


class TestExplainCommand:
    def test_explain(self) -> None:
        app = CLIAppFactory.create_app(_make_deps(rust_gateway=Mock(), filesystem=Mock()))
        result = runner.invoke(app, ["explain"])
        assert result.exit_code == 0
        assert result.output.startswith("W9401 (impl-trait-in-params): ")
        assert "avoid-breaking-exported-api" in result.output
