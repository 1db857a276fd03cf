"""Exceptions raised by impl-trait-linter."""


class ImplTraitLinterError(Exception):
    """Base class for all linter errors."""


class SpanError(ImplTraitLinterError, ValueError):
    """Span arithmetic produced an offset outside the source file."""


class SourceReadError(ImplTraitLinterError):
    """A source file could not be read or decoded as UTF-8."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(ImplTraitLinterError):
    """A configuration file exists but could not be parsed."""
