"""
Runtime settings for f2b.

Precedence (lowest first): built-in defaults, the YAML config file
($F2B_CONFIG or ~/.config/f2b/config.yml), then F2B_* variables from the
environment or a .env file in the working directory.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from f2b.lib.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "~/.config/f2b/config.yml"
ENV_PREFIX = "F2B_"


class Settings(BaseModel):
    """f2b settings"""

    model_config = ConfigDict(extra="forbid")

    client_bin: str = "fail2ban-client"
    """Daemon client binary"""
    regex_bin: str = "fail2ban-regex"
    """Filter test binary"""
    systemctl_bin: str = "systemctl"
    service_name: str = "fail2ban"
    """systemd unit controlled by `f2b service`"""
    socket: Optional[str] = None
    """Alternative daemon socket passed as `-s`"""
    sudo: Literal["auto", "always", "never"] = "auto"
    """Prefix privileged commands with sudo. 'auto' elevates when not root."""
    timeout: int = Field(10, gt=0)
    """Seconds to wait for a single client call"""
    log_file: str = "/var/log/fail2ban.log"
    filter_dir: str = "/etc/fail2ban/filter.d"
    poll_interval: float = Field(1.0, gt=0)
    """Seconds between polls in `f2b logs --follow`"""


def read_config_file(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping, or nothing if the file does not exist."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")

    logger.debug(f"Loaded settings from {path}")
    return data


def env_overrides(environ: Mapping[str, str]) -> Dict[str, str]:
    """Pick F2B_<FIELD> variables that name a known setting."""
    overrides = {}
    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX):].lower()
        if name in Settings.model_fields:
            overrides[name] = value
    return overrides


def load_settings(config_file: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    if environ is None:
        load_dotenv(Path.cwd() / ".env")
        environ = os.environ

    path = config_file or Path(environ.get("F2B_CONFIG", DEFAULT_CONFIG_FILE)).expanduser()
    values = read_config_file(path)
    values.update(env_overrides(environ))

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
