"""Typed accessors for regscan settings."""

import os
from pathlib import Path
from typing import Any

from .env_loader import global_config_dir, load_global_config, load_project_config

DEFAULT_LOCALE = "en"
DEFAULT_AXE_VERSION = "4.10.2"
ENV_PREFIX = "REGSCAN_"
_TRUTHY = {"1", "true", "yes", "on"}


def _yaml_key(key: str) -> str:
    # REGSCAN_AXE_VERSION -> axe_version in config.yml
    return key.removeprefix(ENV_PREFIX).lower()


def get_config(key: str, project_dir: Path | None = None, default: Any = None) -> Any:
    """Look up ``key`` in the environment, then ``.regscan/.env``, then ``config.yml``.

    The global YAML file may spell keys either as the environment name
    (``REGSCAN_LOCALE``) or as its short lower-case form (``locale``).
    Empty environment values count as unset.
    """
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    project_config = load_project_config(project_dir)
    if key in project_config:
        return project_config[key]

    global_config = load_global_config()
    for name in (key, _yaml_key(key)):
        if name in global_config:
            return global_config[name]

    return default


def get_flag(key: str, project_dir: Path | None = None, default: bool = False) -> bool:
    """Read a boolean option; accepts YAML booleans and 1/true/yes/on strings."""
    value = get_config(key, project_dir)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def get_locale(project_dir: Path | None = None) -> str:
    return str(get_config("REGSCAN_LOCALE", project_dir, default=DEFAULT_LOCALE))


def get_axe_source_path(project_dir: Path | None = None) -> Path | None:
    """Explicit axe-core script to inject instead of downloading one."""
    value = get_config("REGSCAN_AXE_SOURCE", project_dir)
    return Path(value).expanduser() if value else None


def get_axe_version(project_dir: Path | None = None) -> str:
    return str(get_config("REGSCAN_AXE_VERSION", project_dir, default=DEFAULT_AXE_VERSION))


def get_cache_dir(project_dir: Path | None = None) -> Path:
    """Where downloaded axe-core builds are kept (default ~/.regscan/cache)."""
    value = get_config("REGSCAN_CACHE_DIR", project_dir)
    if value:
        return Path(value).expanduser()
    return global_config_dir() / "cache"


def get_verbose(project_dir: Path | None = None) -> bool:
    return get_flag("REGSCAN_VERBOSE", project_dir)


def get_headless(project_dir: Path | None = None) -> bool:
    return get_flag("REGSCAN_HEADLESS", project_dir, default=True)
