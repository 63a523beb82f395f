"""
Configuration management for regscan.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. Working-directory .env file (.regscan/.env)
3. Global config file (~/.regscan/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    global_config_dir,
    load_env_file,
    load_global_config,
    load_project_config,
)
from .getters import (
    DEFAULT_AXE_VERSION,
    DEFAULT_LOCALE,
    get_axe_source_path,
    get_axe_version,
    get_cache_dir,
    get_config,
    get_flag,
    get_headless,
    get_locale,
    get_verbose,
)

__all__ = [
    # env_loader
    "global_config_dir",
    "load_env_file",
    "load_global_config",
    "load_project_config",
    # getters
    "DEFAULT_AXE_VERSION",
    "DEFAULT_LOCALE",
    "get_axe_source_path",
    "get_axe_version",
    "get_cache_dir",
    "get_config",
    "get_flag",
    "get_headless",
    "get_locale",
    "get_verbose",
]
