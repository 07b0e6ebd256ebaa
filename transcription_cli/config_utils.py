# config_utils.py - YAML Configuration System for transcription-cli
"""
transcription-cli configuration with YAML file support.

Configuration Resolution Order (highest to lowest priority):
1. Environment variables (TRANSCRIPTION_COURSES_DIR, TRANSCRIPTION_LINK_WORKERS,
   TRANSCRIPTION_LINK_TIMEOUT)
2. transcription.yaml in the working directory
3. ~/.transcription/config.yaml (global defaults)

With nothing configured, every setting keeps its built-in default.

Usage:
    from transcription_cli.config_utils import get_config

    config = get_config()
    print(config.courses_dir)
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

import yaml

from transcription_cli.errors import ConfigurationError


DEFAULT_OEMBED_URL = "https://www.youtube.com/oembed"
CONFIG_FILENAME = "transcription.yaml"


@dataclass
class ToolConfig:
    """Complete transcription-cli configuration"""
    # Scaffolding
    courses_dir: str = "courses"

    # Link checking
    link_workers: int = 1
    link_timeout: Optional[float] = None
    oembed_url: str = DEFAULT_OEMBED_URL

    # Paths (resolved at load time)
    working_dir: Optional[Path] = None

    # Track where values came from (for debugging)
    _sources: Dict[str, str] = field(default_factory=dict)

    @property
    def courses_root(self) -> Path:
        return (self.working_dir or Path.cwd()) / self.courses_dir


class ConfigLoader:
    """Load configuration from multiple sources"""

    def __init__(self, working_dir: Optional[Path] = None, include_links: bool = True):
        self.working_dir = Path(working_dir) if working_dir else Path.cwd()
        self.include_links = include_links
        self.config = ToolConfig(working_dir=self.working_dir)

    def load(self) -> ToolConfig:
        """Load configuration from all sources in priority order"""
        # Load in reverse priority (lowest first, higher overwrites)
        self._load_global_config()
        self._load_yaml_config()
        self._load_env_vars()
        return self.config

    def _load_global_config(self):
        """Load ~/.transcription/config.yaml if it exists"""
        global_config = Path.home() / ".transcription" / "config.yaml"
        if global_config.exists():
            self._load_yaml_file(global_config, "global")

    def _load_yaml_config(self):
        """Load transcription.yaml from the working directory"""
        yaml_path = self.working_dir / CONFIG_FILENAME
        if yaml_path.exists():
            self._load_yaml_file(yaml_path, CONFIG_FILENAME)

    def _load_yaml_file(self, path: Path, source_name: str):
        """Load settings from a YAML file"""
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                message=f"Failed to parse {path}",
                suggestion="Fix the YAML syntax or delete the file",
                context={"file": str(path)},
                cause=e,
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                message=f"{path} must contain a mapping of settings",
                context={"file": str(path), "found_type": type(data).__name__},
            )

        if "courses_dir" in data:
            self.config.courses_dir = str(data["courses_dir"])
            self.config._sources["courses_dir"] = source_name

        # Handle nested link settings
        links = data.get("links")
        if self.include_links and isinstance(links, dict):
            if "workers" in links:
                self.config.link_workers = _parse_workers(links["workers"], source_name)
                self.config._sources["link_workers"] = source_name
            if "timeout" in links:
                self.config.link_timeout = _parse_timeout(links["timeout"], source_name)
                self.config._sources["link_timeout"] = source_name
            if "oembed_url" in links:
                self.config.oembed_url = str(links["oembed_url"])
                self.config._sources["oembed_url"] = source_name

    def _load_env_vars(self):
        """Load from environment variables (highest priority)"""
        if os.environ.get("TRANSCRIPTION_COURSES_DIR"):
            self.config.courses_dir = os.environ["TRANSCRIPTION_COURSES_DIR"]
            self.config._sources["courses_dir"] = "env:TRANSCRIPTION_COURSES_DIR"

        if not self.include_links:
            return

        workers = os.environ.get("TRANSCRIPTION_LINK_WORKERS")
        if workers:
            self.config.link_workers = _parse_workers(workers, "env:TRANSCRIPTION_LINK_WORKERS")
            self.config._sources["link_workers"] = "env:TRANSCRIPTION_LINK_WORKERS"

        timeout = os.environ.get("TRANSCRIPTION_LINK_TIMEOUT")
        if timeout:
            self.config.link_timeout = _parse_timeout(timeout, "env:TRANSCRIPTION_LINK_TIMEOUT")
            self.config._sources["link_timeout"] = "env:TRANSCRIPTION_LINK_TIMEOUT"


def _parse_workers(value: Any, source_name: str) -> int:
    try:
        workers = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            message=f"Invalid link worker count: {value!r}",
            suggestion="Use a whole number of at least 1",
            context={"source": source_name},
            cause=e,
        )
    if workers < 1:
        raise ConfigurationError(
            message=f"Invalid link worker count: {workers}",
            suggestion="Use a whole number of at least 1",
            context={"source": source_name},
        )
    return workers


def _parse_timeout(value: Any, source_name: str) -> Optional[float]:
    if value is None:
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            message=f"Invalid link timeout: {value!r}",
            suggestion="Use a number of seconds, or leave it unset",
            context={"source": source_name},
            cause=e,
        )
    if timeout <= 0:
        raise ConfigurationError(
            message=f"Invalid link timeout: {timeout}",
            suggestion="Use a positive number of seconds",
            context={"source": source_name},
        )
    return timeout


# ============================================================================
# Public API
# ============================================================================

def get_config(working_dir: Optional[Path] = None, include_links: bool = True) -> ToolConfig:
    """
    Get complete transcription-cli configuration.

    Args:
        working_dir: Directory commands run from (defaults to cwd)
        include_links: Read the link-checking settings. Commands that never
            check links pass False so a bad link setting cannot stop them.

    Returns:
        ToolConfig with all settings resolved
    """
    loader = ConfigLoader(working_dir, include_links=include_links)
    return loader.load()
