from typing import TYPE_CHECKING, Any, cast

from impl_trait_linter.domain.config import ConfigurationLoader
from impl_trait_linter.domain.rules.impl_trait_in_params import ImplTraitInParamsRule
from impl_trait_linter.infrastructure.config_file_loader import ConfigFileLoader
from impl_trait_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from impl_trait_linter.infrastructure.gateways.rust_gateway import RustGateway
from impl_trait_linter.infrastructure.reporters import (
    JsonDiagnosticReporter,
    TerminalDiagnosticReporter,
)
from impl_trait_linter.infrastructure.services.test_context import TreeSitterTestContext

if TYPE_CHECKING:
    from impl_trait_linter.domain.protocols import (
        DiagnosticReporterProtocol,
        FileSystemProtocol,
        InTestContextProtocol,
        RustSourceProtocol,
    )
    from impl_trait_linter.domain.rules import Checkable


class LinterContainer:
    """Dependency Injection Container for the impl-trait linter."""

    def __init__(self, config_dict: dict[str, object] | None = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_dict)

    def _register_defaults(self, config_dict: dict[str, object] | None) -> None:
        """Register default implementations for protocols."""
        if config_dict is None:
            config_dict = ConfigFileLoader.load_config_from_fs()
        self.register_singleton("ConfigurationLoader", ConfigurationLoader(config_dict))
        self.register_singleton("RustGateway", RustGateway())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("TestContext", TreeSitterTestContext())
        self.register_singleton("TerminalReporter", TerminalDiagnosticReporter())
        self.register_singleton("JsonReporter", JsonDiagnosticReporter())

    # JUSTIFICATION: DI Container must handle any type of service
    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    # JUSTIFICATION: DI Container must return any type of service
    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_rust_gateway(self) -> "RustSourceProtocol":
        return cast("RustSourceProtocol", self.get("RustGateway"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_test_context(self) -> "InTestContextProtocol":
        return cast("InTestContextProtocol", self.get("TestContext"))

    def get_reporter(self, output_format: str) -> "DiagnosticReporterProtocol":
        """Return the reporter for 'text' or 'json'."""
        key = "JsonReporter" if output_format == "json" else "TerminalReporter"
        return cast("DiagnosticReporterProtocol", self.get(key))

    def create_rule(self, config_loader: ConfigurationLoader) -> "Checkable":
        """Build the rule for a run; config may carry CLI overrides."""
        return ImplTraitInParamsRule(
            test_context=self.get_test_context(),
            avoid_breaking_exported_api=config_loader.avoid_breaking_exported_api,
        )
