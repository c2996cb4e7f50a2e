"""
Runtime Configuration Unit Tests
Tests for core/config/runtime.py
"""
import pytest

from core.config import (
    CSVConfig,
    OutputConfig,
    RuntimeConfig,
)
from core.schemas.errors import ConfigError


class TestDefaults:
    def test_defaults(self):
        config = RuntimeConfig()

        assert config.csv.file_path is None
        assert config.csv.has_header is True
        assert config.output.write_files is True
        assert config.output.leaves_file_limit == 1000
        assert config.output.preview_count == 5
        assert config.output.spot_check_index == 100


class TestFromDict:
    def test_partial_data(self):
        config = RuntimeConfig.from_dict({"csv": {"file_path": "a.csv"}})

        assert config.csv.file_path == "a.csv"
        assert config.output == OutputConfig()

    def test_empty_sections(self):
        config = RuntimeConfig.from_dict({"csv": None, "output": None})

        assert config.csv == CSVConfig()

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown configuration key"):
            RuntimeConfig.from_dict({"output": {"colour": "red"}})

    def test_to_dict_roundtrip(self):
        config = RuntimeConfig.from_dict(
            {"csv": {"file_path": "a.csv", "has_header": False}, "output": {"preview_count": 2}}
        )

        assert RuntimeConfig.from_dict(config.to_dict()) == config


class TestFromYaml:
    def test_load_yaml(self, tmp_path):
        path = tmp_path / "merkle.yaml"
        path.write_text(
            "csv:\n"
            "  file_path: data/airdrop.csv\n"
            "output:\n"
            "  leaves_file_limit: 10\n"
            "  write_files: false\n"
        )

        config = RuntimeConfig.from_yaml(path)

        assert config.csv.file_path == "data/airdrop.csv"
        assert config.output.leaves_file_limit == 10
        assert config.output.write_files is False

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert RuntimeConfig.from_yaml(path) == RuntimeConfig()

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "nope.yaml")


class TestEnvOverrides:
    def test_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("MERKLE_CSV_FILE", "env.csv")
        monkeypatch.setenv("MERKLE_LEAVES_FILE_LIMIT", "7")
        monkeypatch.setenv("MERKLE_PREVIEW_COUNT", "3")
        monkeypatch.setenv("MERKLE_WRITE_FILES", "false")

        config = RuntimeConfig.from_env()

        assert config.csv.file_path == "env.csv"
        assert config.output.leaves_file_limit == 7
        assert config.output.preview_count == 3
        assert config.output.write_files is False

    def test_env_overlays_file_config(self, clean_env, monkeypatch):
        base = RuntimeConfig.from_dict({"csv": {"file_path": "file.csv"}, "output": {"preview_count": 9}})
        monkeypatch.setenv("MERKLE_CSV_FILE", "env.csv")

        config = base.with_env_overrides()

        assert config.csv.file_path == "env.csv"
        assert config.output.preview_count == 9
        assert base.csv.file_path == "file.csv"

    def test_no_overrides_returns_same(self, clean_env):
        base = RuntimeConfig()

        assert base.with_env_overrides() is base

    def test_bad_integer(self, clean_env, monkeypatch):
        monkeypatch.setenv("MERKLE_LEAVES_FILE_LIMIT", "lots")

        with pytest.raises(ConfigError, match="Invalid integer"):
            RuntimeConfig.from_env()


class TestValidate:
    def test_file_path_required(self):
        with pytest.raises(ConfigError, match="csv.file_path is required"):
            RuntimeConfig().validate()

    def test_negative_limit(self):
        config = RuntimeConfig.from_dict(
            {"csv": {"file_path": "a.csv"}, "output": {"leaves_file_limit": -1}}
        )

        with pytest.raises(ConfigError):
            config.validate()

    def test_negative_preview(self):
        config = RuntimeConfig.from_dict(
            {"csv": {"file_path": "a.csv"}, "output": {"preview_count": -1}}
        )

        with pytest.raises(ConfigError):
            config.validate()

    def test_valid(self):
        RuntimeConfig.from_dict({"csv": {"file_path": "a.csv"}}).validate()
