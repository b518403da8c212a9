"""Tests for ngpack.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from ngpack.config import ConfigError, PackagerConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, PackagerConfig)
    assert config.root == tmp_path.resolve()
    assert config.escape_delimiter == "__"
    assert config.umd_suffix == ".umd"
    assert config.metadata_version == 3
    assert config.strip_amd_modules is True
    assert config.manifest_indent == 2
    assert config.log_file is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".ngpack.yml"
    config_file.write_text(
        """
escape_delimiter: "--"
umd_suffix: ".bundle"
metadata_version: 4
strip_amd_modules: false
manifest_indent: 4
log_file: "logs/ngpack.log"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.escape_delimiter == "--"
    assert config.umd_suffix == ".bundle"
    assert config.metadata_version == 4
    assert config.strip_amd_modules is False
    assert config.manifest_indent == 4
    assert config.log_file == tmp_path.resolve() / "logs" / "ngpack.log"


def test_load_config_accepts_empty_file(tmp_path: Path) -> None:
    (tmp_path / ".ngpack.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).escape_delimiter == "__"


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".ngpack.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".ngpack.yml").write_text("escape_delimiter: [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_empty_delimiter(tmp_path: Path) -> None:
    (tmp_path / ".ngpack.yml").write_text('escape_delimiter: ""\n', encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
