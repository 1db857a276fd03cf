"""Unit tests for ConfigFileLoader."""

import logging
from pathlib import Path

import pytest

from impl_trait_linter.domain.exceptions import ConfigError
from impl_trait_linter.infrastructure.config_file_loader import ConfigFileLoader


class TestConfigFileLoader:
    def test_pyproject_section(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[tool.impl-trait-linter]\navoid-breaking-exported-api = false\nlevel = "deny"\n'
        )
        config = ConfigFileLoader.load_config_from_fs(tmp_path)
        assert config == {"avoid-breaking-exported-api": False, "level": "deny"}

    def test_clippy_toml_only_known_keys(self, tmp_path: Path) -> None:
        (tmp_path / "clippy.toml").write_text(
            "avoid-breaking-exported-api = false\ntoo-many-arguments-threshold = 9\n"
        )
        assert ConfigFileLoader.load_config_from_fs(tmp_path) == {"avoid-breaking-exported-api": False}

    def test_dot_clippy_toml(self, tmp_path: Path) -> None:
        (tmp_path / ".clippy.toml").write_text("avoid-breaking-exported-api = false\n")
        assert ConfigFileLoader.load_config_from_fs(tmp_path) == {"avoid-breaking-exported-api": False}

    def test_pyproject_overrides_clippy(self, tmp_path: Path) -> None:
        (tmp_path / "clippy.toml").write_text("avoid-breaking-exported-api = false\n")
        (tmp_path / "pyproject.toml").write_text(
            "[tool.impl-trait-linter]\navoid-breaking-exported-api = true\n"
        )
        assert ConfigFileLoader.load_config_from_fs(tmp_path) == {"avoid-breaking-exported-api": True}

    def test_walks_up_from_nested_directory(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool.impl-trait-linter]\nexclude_paths = ["gen/"]\n')
        nested = tmp_path / "crates" / "core" / "src"
        nested.mkdir(parents=True)
        assert ConfigFileLoader.load_config_from_fs(nested) == {"exclude_paths": ["gen/"]}

    def test_pyproject_without_section(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        assert ConfigFileLoader.load_config_from_fs(tmp_path) == {}

    def test_malformed_file_is_ignored_with_warning(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (tmp_path / "clippy.toml").write_text("avoid-breaking-exported-api = \n")
        with caplog.at_level(logging.WARNING):
            assert ConfigFileLoader.load_config_from_fs(tmp_path) == {}
        assert "Ignoring unreadable config" in caplog.text

    def test_read_toml_raises_config_error(self, tmp_path: Path) -> None:
        bad = tmp_path / "broken.toml"
        bad.write_text("[unterminated\n")
        with pytest.raises(ConfigError):
            ConfigFileLoader.read_toml(bad)

    def test_find_upwards_returns_none(self, tmp_path: Path) -> None:
        assert ConfigFileLoader.find_upwards(tmp_path, ("no-such-file.toml",)) is None
