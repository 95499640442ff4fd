# config_utils.py - YAML Configuration System for quarjar
"""
quarjar configuration utilities with YAML file support.

Configuration Resolution Order (highest to lowest priority):
1. Environment variables (SKILLJAR_API_KEY, SKILLJAR_BASE_URL, SKILLJAR_COURSE_ID)
2. quarjar.yaml in the project root
3. ~/.quarjar/config.yaml (global defaults)

Usage:
    from quarjar.config_utils import get_config, make_client

    config = get_config()
    client = make_client(config)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, Tuple

import yaml

from quarjar.errors import ConfigurationError, missing_api_key_error
from quarjar.security_utils import DEFAULT_TIMEOUT, UPLOAD_TIMEOUT, as_path

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.skilljar.com"
CONFIG_FILENAME = "quarjar.yaml"


@dataclass
class QuarjarConfig:
    """Complete quarjar configuration"""
    # Skilljar connection
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    course_id: Optional[str] = None

    # HTTP timeouts (connect, read)
    timeout: Tuple[float, float] = DEFAULT_TIMEOUT
    upload_timeout: Tuple[float, float] = UPLOAD_TIMEOUT

    # Paths (resolved at load time)
    project_root: Optional[Path] = None

    # Extra settings from config file
    extra: Dict[str, Any] = field(default_factory=dict)

    # Track where values came from (for debugging)
    _sources: Dict[str, str] = field(default_factory=dict)

    def source_of(self, name: str) -> str:
        return self._sources.get(name, "default")


class ConfigLoader:
    """Load configuration from multiple sources"""

    KNOWN_KEYS = {"api_key", "base_url", "course_id", "timeout"}

    def __init__(self, project_dir: Optional[Path] = None, global_config: Optional[Path] = None):
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.global_config = global_config or Path.home() / ".quarjar" / "config.yaml"
        self.config = QuarjarConfig(project_root=self.project_dir)

    def load(self) -> QuarjarConfig:
        """Load configuration from all sources in priority order"""
        # Lowest priority first, later sources overwrite
        if self.global_config.exists():
            self._load_yaml_file(self.global_config, "global")

        project_yaml = self.project_dir / CONFIG_FILENAME
        if project_yaml.exists():
            self._load_yaml_file(project_yaml, CONFIG_FILENAME)

        self._load_env_vars()
        return self.config

    def _load_yaml_file(self, path: Path, source_name: str):
        """Load settings from a YAML file"""
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("[config] Failed to parse %s: %s", path, e)
            return

        if not isinstance(data, dict):
            logger.warning("[config] Ignoring %s: expected a mapping at top level", path)
            return

        if data.get("api_key"):
            self.config.api_key = str(data["api_key"])
            self.config._sources["api_key"] = source_name

        if data.get("base_url"):
            self.config.base_url = str(data["base_url"]).rstrip("/")
            self.config._sources["base_url"] = source_name

        if data.get("course_id") is not None:
            self.config.course_id = str(data["course_id"])
            self.config._sources["course_id"] = source_name

        # Handle nested timeout settings
        timeout = data.get("timeout")
        if isinstance(timeout, dict):
            self._load_timeouts(timeout, path, source_name)

        for key, value in data.items():
            if key not in self.KNOWN_KEYS:
                self.config.extra[key] = value

    def _load_timeouts(self, timeout: Dict[str, Any], path: Path, source_name: str):
        """Apply connect/read/upload seconds; invalid values keep the defaults"""
        connect, read = self.config.timeout
        upload = self.config.upload_timeout[1]
        try:
            connect = float(timeout.get("connect", connect))
            read = float(timeout.get("read", read))
            upload = float(timeout.get("upload", upload))
        except (TypeError, ValueError) as e:
            logger.warning("[config] Ignoring timeout settings in %s: %s", path, e)
            return

        self.config.timeout = (connect, read)
        if "upload" in timeout:
            self.config.upload_timeout = (connect, upload)
        self.config._sources["timeout"] = source_name

    def _load_env_vars(self):
        """Load from environment variables (highest priority)"""
        if os.environ.get("SKILLJAR_API_KEY"):
            self.config.api_key = os.environ["SKILLJAR_API_KEY"]
            self.config._sources["api_key"] = "env:SKILLJAR_API_KEY"

        if os.environ.get("SKILLJAR_BASE_URL"):
            self.config.base_url = os.environ["SKILLJAR_BASE_URL"].rstrip("/")
            self.config._sources["base_url"] = "env:SKILLJAR_BASE_URL"

        if os.environ.get("SKILLJAR_COURSE_ID"):
            self.config.course_id = os.environ["SKILLJAR_COURSE_ID"]
            self.config._sources["course_id"] = "env:SKILLJAR_COURSE_ID"


# ============================================================================
# Public API
# ============================================================================

def get_config(project_dir: Optional[Path] = None) -> QuarjarConfig:
    """
    Get complete quarjar configuration.

    Args:
        project_dir: Project directory (defaults to cwd)

    Returns:
        QuarjarConfig with all settings resolved
    """
    global_override = os.environ.get("QUARJAR_CONFIG")
    loader = ConfigLoader(
        project_dir,
        global_config=as_path(global_override) if global_override else None,
    )
    return loader.load()


def get_api_key(config: Optional[QuarjarConfig] = None) -> str:
    """
    Return the configured API key.

    Raises:
        ConfigurationError: If no key is configured anywhere
    """
    if config is None:
        config = get_config()
    if not config.api_key:
        raise missing_api_key_error()
    return config.api_key


def make_client(config: Optional[QuarjarConfig] = None):
    """
    Create a SkilljarClient from configuration.

    Raises:
        ConfigurationError: If the API key is not configured
    """
    from quarjar.skilljar_client import SkilljarClient

    if config is None:
        config = get_config()
    return SkilljarClient.from_config(config)


def require_course_id(course_id: Optional[str], config: QuarjarConfig) -> str:
    """Use an explicit course id, falling back to the configured one."""
    if course_id:
        return str(course_id)
    if config.course_id:
        return config.course_id
    raise ConfigurationError(
        message="Course ID not configured",
        suggestion=(
            "Pass --course-id, or set it using one of these methods:\n\n"
            "1. Environment variable:\n"
            "   export SKILLJAR_COURSE_ID=abc123\n\n"
            "2. quarjar.yaml in the project root:\n"
            "   course_id: abc123"
        ),
    )


def create_config_template(include_comments: bool = True) -> str:
    """
    Generate a quarjar.yaml template.

    Returns:
        YAML string ready to write to file
    """
    if include_comments:
        return '''# quarjar configuration file

# Skilljar course that lessons are created in
course_id: REPLACE_WITH_YOUR_COURSE_ID

# API base URL (defaults to https://api.skilljar.com)
# base_url: https://api.skilljar.com

# API key: prefer the SKILLJAR_API_KEY environment variable
# api_key: your_api_key_here

# HTTP timeouts in seconds
timeout:
  connect: 10
  read: 30
  upload: 120
'''
    return '''course_id: REPLACE_WITH_YOUR_COURSE_ID
timeout:
  connect: 10
  read: 30
  upload: 120
'''
