# tests/test_config_utils.py
"""
Tests for config_utils.py - Configuration loading with YAML support
"""
from pathlib import Path

import pytest

from transcription_cli.config_utils import DEFAULT_OEMBED_URL, ConfigLoader, ToolConfig, get_config
from transcription_cli.errors import ConfigurationError


class TestToolConfig:
    """Tests for ToolConfig dataclass"""

    def test_default_values(self):
        config = ToolConfig()

        assert config.courses_dir == "courses"
        assert config.link_workers == 1
        assert config.link_timeout is None
        assert config.oembed_url == DEFAULT_OEMBED_URL

    def test_courses_root(self, tmp_path):
        config = ToolConfig(working_dir=tmp_path)

        assert config.courses_root == tmp_path / "courses"


class TestConfigLoader:
    """Tests for loading from YAML and environment"""

    def test_no_config_keeps_defaults(self, tmp_path):
        config = get_config(tmp_path)

        assert config.courses_dir == "courses"
        assert config._sources == {}

    def test_yaml_file(self, tmp_path):
        (tmp_path / "transcription.yaml").write_text(
            "courses_dir: library\n"
            "links:\n"
            "  workers: 4\n"
            "  timeout: 10\n"
        )

        config = get_config(tmp_path)

        assert config.courses_dir == "library"
        assert config.link_workers == 4
        assert config.link_timeout == 10.0
        assert config._sources["link_workers"] == "transcription.yaml"

    def test_global_config(self, tmp_path):
        global_dir = Path.home() / ".transcription"
        global_dir.mkdir()
        (global_dir / "config.yaml").write_text("links:\n  workers: 2\n")

        config = get_config(tmp_path)

        assert config.link_workers == 2
        assert config._sources["link_workers"] == "global"

    def test_env_takes_priority(self, tmp_path, monkeypatch):
        (tmp_path / "transcription.yaml").write_text("courses_dir: library\nlinks:\n  workers: 4\n")
        monkeypatch.setenv("TRANSCRIPTION_COURSES_DIR", "env_courses")
        monkeypatch.setenv("TRANSCRIPTION_LINK_WORKERS", "8")
        monkeypatch.setenv("TRANSCRIPTION_LINK_TIMEOUT", "2.5")

        config = ConfigLoader(tmp_path).load()

        assert config.courses_dir == "env_courses"
        assert config.link_workers == 8
        assert config.link_timeout == 2.5

    def test_links_can_be_skipped(self, tmp_path, monkeypatch):
        (tmp_path / "transcription.yaml").write_text("courses_dir: library\nlinks:\n  timeout: -1\n")
        monkeypatch.setenv("TRANSCRIPTION_LINK_WORKERS", "many")

        config = get_config(tmp_path, include_links=False)

        assert config.courses_dir == "library"
        assert config.link_workers == 1
        assert config.link_timeout is None

    @pytest.mark.parametrize("value", ["many", "0"])
    def test_invalid_workers(self, tmp_path, monkeypatch, value):
        monkeypatch.setenv("TRANSCRIPTION_LINK_WORKERS", value)

        with pytest.raises(ConfigurationError):
            get_config(tmp_path)

    def test_invalid_timeout(self, tmp_path):
        (tmp_path / "transcription.yaml").write_text("links:\n  timeout: -1\n")

        with pytest.raises(ConfigurationError):
            get_config(tmp_path)

    def test_malformed_yaml(self, tmp_path):
        (tmp_path / "transcription.yaml").write_text("links: [unclosed\n")

        with pytest.raises(ConfigurationError):
            get_config(tmp_path)

    def test_non_mapping_yaml(self, tmp_path):
        (tmp_path / "transcription.yaml").write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            get_config(tmp_path)
