"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from impl_trait_linter.infrastructure.di.container import LinterContainer
from impl_trait_linter.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = LinterContainer()
    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        rust_gateway=container.get_rust_gateway(),
        filesystem=container.get_filesystem_gateway(),
        rule_factory=container.create_rule,
        reporter_factory=container.get_reporter,
    )
    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
