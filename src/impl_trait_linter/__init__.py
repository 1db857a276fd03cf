"""impl-trait-linter: flags `impl Trait` parameters in public Rust signatures."""

__version__ = "0.1.0"
