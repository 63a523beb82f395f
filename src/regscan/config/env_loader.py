"""Read the .env and YAML files that back ``get_config``."""

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".regscan"


def global_config_dir() -> Path:
    """Return the per-user configuration directory (~/.regscan)."""
    return Path.home() / CONFIG_DIR_NAME


def _parse_env_line(raw: str) -> tuple[str, str] | None:
    line = raw.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export ") :].lstrip()
    key, sep, value = line.partition("=")
    if not sep or not key.strip():
        return None
    return key.strip(), value.strip().strip("\"'")


def load_env_file(env_path: Path) -> dict[str, str]:
    """Parse ``KEY=value`` lines; comments, blanks and malformed lines are skipped."""
    if not env_path.is_file():
        return {}
    pairs = (_parse_env_line(line) for line in env_path.read_text(encoding="utf-8").splitlines())
    return dict(pair for pair in pairs if pair is not None)


def load_global_config() -> dict[str, Any]:
    """Load ~/.regscan/config.yml; a file that is not a mapping is ignored."""
    config_path = global_config_dir() / "config.yml"
    if not config_path.is_file():
        return {}
    with config_path.open(encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a mapping at top level", config_path)
        return {}
    return data


def load_project_config(project_dir: Path | None = None) -> dict[str, str]:
    """Load ``.regscan/.env`` from ``project_dir`` or the working directory."""
    base = project_dir or Path.cwd()
    return load_env_file(base / CONFIG_DIR_NAME / ".env")
