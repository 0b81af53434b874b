"""
Configuration module for pve-manage.

Settings come from environment variables. The API token is read from a
shell-style secrets file next to the program, falling back to the TOKEN
environment variable.
"""

import math
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import dotenv_values

from .errors import ConfigError

# Proxmox VE API configuration
DEFAULT_HOST = "https://pve.local:8006"
DEFAULT_NODE = "pve"
DEFAULT_TIMEOUT = 30.0
SECRET_FILE_NAME = ".secret.sh"
TOKEN_KEY = "TOKEN"


@dataclass(frozen=True)
class Config:
    """Static settings for one invocation."""

    host: str
    node: str
    token: str
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        return f"Config(host={self.host!r}, node={self.node!r}, token='***', timeout={self.timeout})"


def default_secret_file() -> Path:
    """Path of the secrets file adjacent to the running program."""
    return Path(sys.argv[0]).resolve().parent / SECRET_FILE_NAME


def load_token(secret_file: Union[str, Path, None] = None) -> str:
    """
    Load the API token.

    The secrets file wins when it exists. A file given explicitly must
    exist; only the default file next to the program is optional. The file
    is parsed, never executed, so only plain ``TOKEN=value`` assignments
    (optionally prefixed with ``export``) are understood.

    Raises:
        ConfigError: if an explicit file is missing, or if neither the file
            nor the environment provides a token.
    """
    if secret_file:
        path = Path(secret_file)
        if not path.is_file():
            raise ConfigError(f"{path} does not exist.")
    else:
        path = default_secret_file()

    if path.is_file():
        token = dotenv_values(path).get(TOKEN_KEY) or ""
        if not token:
            raise ConfigError(f"{path} exists but does not define {TOKEN_KEY}.")
        return token

    token = os.environ.get(TOKEN_KEY, "")
    if not token:
        raise ConfigError(
            "No token for the Proxmox VE API has been provided. "
            f"Please define the {TOKEN_KEY} variable in a '{SECRET_FILE_NAME}' file "
            "in the program's directory or set it as an environment variable."
        )
    return token


def load_config(
    host: Optional[str] = None,
    node: Optional[str] = None,
    secret_file: Union[str, Path, None] = None,
) -> Config:
    """
    Build the configuration, with explicit arguments overriding the environment.

    Raises:
        ConfigError: on a missing token or invalid setting.
    """
    host = (host or os.environ.get("PVE_HOST") or DEFAULT_HOST).rstrip("/")
    node = node or os.environ.get("PVE_NODE") or DEFAULT_NODE

    raw_timeout = os.environ.get("PVE_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigError(f"PVE_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from None
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"PVE_TIMEOUT must be a positive finite number, got {raw_timeout!r}")

    if not host.startswith(("https://", "http://")):
        raise ConfigError(f"PVE_HOST must be an http(s) URL, got {host!r}")

    secret_file = secret_file or os.environ.get("PVE_SECRET_FILE") or None
    token = load_token(secret_file)

    return Config(host=host, node=node, token=token, timeout=timeout)
