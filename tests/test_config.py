"""Tests for configuration resolution."""

import argparse
import os

import pytest

from config import SyncConfig, build_config, default_cargo_home, load_config_file
from sync.models import LoadError


def _args(**kwargs):
    defaults = {"CONFIG": None, "CARGO_HOME": None, "CARGO": None}
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv("CARGO_HOME", raising=False)
    monkeypatch.setenv("CARGO_BACKUP_CONFIG", str(tmp_path / "absent.yml"))


class TestDefaults:
    """Cargo home discovery."""

    def test_env_cargo_home(self, monkeypatch, tmp_path):
        """Test CARGO_HOME sets the cargo home."""
        monkeypatch.setenv("CARGO_HOME", str(tmp_path))
        assert default_cargo_home() == str(tmp_path)

    def test_home_fallback(self):
        """Test the cargo home defaults to ~/.cargo."""
        assert default_cargo_home() == os.path.join(os.path.expanduser("~"), ".cargo")

    def test_for_cargo_home(self):
        """Test record and binary paths derive from the cargo home."""
        config = SyncConfig.for_cargo_home("/c")
        assert config.record_path == os.path.join("/c", ".crates2.json")
        assert config.binary_directory == os.path.join("/c", "bin")
        assert config.cargo_executable == "cargo"


class TestConfigFile:
    """YAML config loading and precedence."""

    def test_missing_default_file_is_ignored(self):
        """Test a missing default config file yields no settings."""
        assert load_config_file(None) == {}

    def test_missing_explicit_file_fails(self, tmp_path):
        """Test a missing explicitly requested config file raises LoadError."""
        with pytest.raises(LoadError):
            load_config_file(str(tmp_path / "missing.yml"))

    def test_invalid_yaml_fails(self, tmp_path):
        """Test invalid YAML raises LoadError."""
        path = tmp_path / "config.yml"
        path.write_text("cargo_home: [unclosed\n")
        with pytest.raises(LoadError):
            load_config_file(str(path))

    def test_file_values(self, tmp_path):
        """Test config file values are applied."""
        path = tmp_path / "config.yml"
        path.write_text(
            "cargo_home: /opt/cargo\n"
            "cargo_executable: /usr/local/bin/cargo\n"
            "binary_directory: /usr/local/cargo-bin\n"
        )
        config = build_config(_args(CONFIG=str(path)))
        assert config.record_path == os.path.join("/opt/cargo", ".crates2.json")
        assert config.binary_directory == "/usr/local/cargo-bin"
        assert config.cargo_executable == "/usr/local/bin/cargo"

    def test_cli_overrides_file(self, tmp_path):
        """Test CLI options take precedence over the config file."""
        path = tmp_path / "config.yml"
        path.write_text("cargo_home: /opt/cargo\nbinary_directory: /elsewhere\n")
        config = build_config(_args(CONFIG=str(path), CARGO_HOME="/cli/home", CARGO="mycargo"))
        assert config.record_path == os.path.join("/cli/home", ".crates2.json")
        assert config.binary_directory == os.path.join("/cli/home", "bin")
        assert config.cargo_executable == "mycargo"
