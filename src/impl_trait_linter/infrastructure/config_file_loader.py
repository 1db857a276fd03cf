"""Load [tool.impl-trait-linter] from pyproject.toml and clippy.toml settings. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path

from impl_trait_linter.domain.constants import CLIPPY_CONFIG_FILES, CONFIG_SECTION
from impl_trait_linter.domain.exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

logger = logging.getLogger(__name__)

_CLIPPY_KEYS: frozenset[str] = frozenset({"avoid-breaking-exported-api"})


class ConfigFileLoader:
    """
    Loads config from pyproject.toml and clippy.toml, walking up from a start directory.

    The nearest file of each kind wins; pyproject values override clippy.toml.
    """

    @staticmethod
    def read_toml(config_file: Path) -> dict[str, object]:
        """Parse one TOML file. Raises ConfigError."""
        try:
            with config_file.open("rb") as f:
                return toml_lib.load(f)
        except (OSError, toml_lib.TOMLDecodeError) as exc:
            raise ConfigError(f"{config_file}: {exc}") from exc

    @staticmethod
    def find_upwards(start: Path, names: tuple[str, ...]) -> Path | None:
        current_path = start.resolve()
        while True:
            for name in names:
                candidate = current_path / name
                if candidate.is_file():
                    return candidate
            if current_path.parent == current_path:
                return None
            current_path = current_path.parent

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Return the merged config dict (keys as written; the domain normalizes them)."""
        start_path = start or Path.cwd()
        config: dict[str, object] = {}

        clippy_file = ConfigFileLoader.find_upwards(start_path, CLIPPY_CONFIG_FILES)
        if clippy_file is not None:
            try:
                data = ConfigFileLoader.read_toml(clippy_file)
            except ConfigError as exc:
                logger.warning("Ignoring unreadable config: %s", exc)
            else:
                config.update({k: v for k, v in data.items() if k in _CLIPPY_KEYS})
                logger.debug("Loaded %s", clippy_file)

        pyproject = ConfigFileLoader.find_upwards(start_path, ("pyproject.toml",))
        if pyproject is not None:
            try:
                data = ConfigFileLoader.read_toml(pyproject)
            except ConfigError as exc:
                logger.warning("Ignoring unreadable config: %s", exc)
            else:
                tool_section = data.get("tool", {}) or {}
                section = tool_section.get(CONFIG_SECTION, {}) if isinstance(tool_section, dict) else {}
                if isinstance(section, dict):
                    config.update(section)
                    logger.debug("Loaded [tool.%s] from %s", CONFIG_SECTION, pyproject)
        return config
