"""
Run configuration and the recognized product table.

Settings come from three layers applied in order: an optional JSON settings
file, OSAC_* environment variables, then explicit overrides from the CLI.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from osac.core.errors import ConfigurationError
from osac.utils.validators import validate_url


DEFAULT_BASE_URL = "https://opensource.apple.com"
DEFAULT_USER_AGENT = "osac/1.0 (Open Source Archive Client)"

# key -> visible title of the product section on the index page
PRODUCTS: Mapping[str, str] = MappingProxyType({
    "mac": "macOS",
    "devtools": "Developer Tools",
    "ios": "iOS",
    "server": "OS X Server",
})

ENV_OVERRIDES = {
    "OSAC_BASE_URL": "base_url",
    "OSAC_OUTPUT_DIR": "output_dir",
    "OSAC_LOG_DIR": "log_dir",
}

logger = logging.getLogger(__name__)


def default_log_dir() -> str:
    base_dir = Path(os.getenv("XDG_STATE_HOME", "~/.local/state"))
    return str(base_dir.expanduser() / "osac" / "logs")


@dataclass(frozen=True)
class RunConfig:
    base_url: str = DEFAULT_BASE_URL
    output_dir: str = "."
    timeout: Optional[float] = None  # None = transport default
    user_agent: str = DEFAULT_USER_AGENT
    log_dir: str = field(default_factory=default_log_dir)
    verbose: int = 0

    def __post_init__(self):
        ok, normalized, err = validate_url(self.base_url)
        if not ok:
            raise ConfigurationError(f"invalid base URL {self.base_url!r}: {err}")
        object.__setattr__(self, "base_url", normalized)
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")


def default_settings_path() -> Path:
    base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "osac" / "settings.json"


def _read_settings_file(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        logger.debug(f"No settings file at {path}, using defaults")
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"couldn't read settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"settings file {path} must contain a JSON object")
    known = {f.name for f in fields(RunConfig)}
    ignored = sorted(set(data) - known)
    if ignored:
        logger.warning(f"Ignoring unknown settings in {path}: {', '.join(ignored)}")
    return {k: v for k, v in data.items() if k in known}


def load_settings(path: Optional[Path] = None,
                  environ: Optional[Mapping[str, str]] = None,
                  **overrides: Any) -> RunConfig:
    """
    Build a RunConfig from the settings file, the environment and overrides.
    
    Args:
        path: Settings file to read (defaults to the XDG config location)
        environ: Environment mapping (defaults to os.environ)
        **overrides: Explicit values; None means "not given"
        
    Returns:
        Validated RunConfig
        
    Raises:
        ConfigurationError: If the file is malformed or a value is invalid
    """
    environ = os.environ if environ is None else environ
    values = _read_settings_file(path or default_settings_path())
    
    for env_name, field_name in ENV_OVERRIDES.items():
        if environ.get(env_name):
            values[field_name] = environ[env_name]
    
    values.update({k: v for k, v in overrides.items() if v is not None})
    
    try:
        return RunConfig(**values)
    except TypeError as e:
        raise ConfigurationError(f"invalid settings: {e}") from e

