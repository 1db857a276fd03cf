"""Configuration for linter settings. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

from impl_trait_linter.domain.constants import LEVEL_DENY, LEVEL_WARN

logger = logging.getLogger(__name__)

_KNOWN_KEYS: frozenset[str] = frozenset(
    {"avoid_breaking_exported_api", "level", "exclude_paths"}
)


class ConfigurationLoader:
    """
    Immutable configuration for linter settings.

    Created by Infrastructure from a config dict. Domain does not read the
    filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict) at composition root.
    Keys are normalized from kebab-case to snake_case.
    """

    def __init__(self, config_dict: dict[str, object] | None = None) -> None:
        self._config: dict[str, object] = {
            str(key).replace("-", "_"): value for key, value in (config_dict or {}).items()
        }
        if self._config:
            self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about unknown keys and values of the wrong type."""
        for key in sorted(set(config) - _KNOWN_KEYS):
            logger.warning("Configuration Warning: unknown key '%s' ignored.", key)
        avoid = config.get("avoid_breaking_exported_api")
        if avoid is not None and not isinstance(avoid, bool):
            logger.warning(
                "Configuration Warning: 'avoid-breaking-exported-api' must be a boolean, got %r.",
                avoid,
            )
        level = config.get("level")
        if level is not None and level not in (LEVEL_WARN, LEVEL_DENY):
            logger.warning(
                "Configuration Warning: 'level' must be '%s' or '%s', got %r.",
                LEVEL_WARN,
                LEVEL_DENY,
                level,
            )

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return dict(self._config)

    @property
    def avoid_breaking_exported_api(self) -> bool:
        """Skip trait methods: a new generic parameter breaks every implementor."""
        raw = self._config.get("avoid_breaking_exported_api", True)
        return raw if isinstance(raw, bool) else True

    @property
    def level(self) -> str:
        raw = self._config.get("level", LEVEL_WARN)
        return raw if raw in (LEVEL_WARN, LEVEL_DENY) else LEVEL_WARN

    @property
    def exclude_paths(self) -> list[str]:
        """Path fragments to exclude from file discovery."""
        raw = self._config.get("exclude_paths", [])
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        return []

    def with_overrides(self, **overrides: object) -> ConfigurationLoader:
        """Return a new loader with non-None overrides applied (CLI flags beat files)."""
        merged = dict(self._config)
        merged.update({k: v for k, v in overrides.items() if v is not None})
        return ConfigurationLoader(merged)
