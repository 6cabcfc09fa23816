"""Server configuration stored as TOML under data/config.toml."""

from __future__ import annotations

import logging
import secrets
import string
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from ordermenu.logsetup import LogConfig

_log = logging.getLogger(__name__)

_ALPHANUMERIC = string.ascii_letters + string.digits
_config: ServerConfig | None = None


def generate_secret(length: int) -> str:
    """Return a random alphanumeric string of the given length."""
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(length))


@dataclass
class JwtConfig:
    """Token signing secret and token lifetime in seconds."""

    secret: str = field(default_factory=lambda: generate_secret(32))
    expiry: int = 3600


def _str_field(mapping: dict[str, Any], section: str, key: str) -> str:
    value = mapping[key]
    if not isinstance(value, str):
        raise ValueError(f"{section}{key} must be a string")
    return value


def _int_field(mapping: dict[str, Any], section: str, key: str) -> int:
    value = mapping[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{section}{key} must be an integer")
    return value


@dataclass
class ServerConfig:
    """Listen address, token settings and log settings."""

    listen_addr: str = "127.0.0.1:8008"
    jwt: JwtConfig = field(default_factory=JwtConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServerConfig:
        """Build a config from a mapping; raise ValueError if anything is missing or mistyped."""
        try:
            jwt = data["jwt"]
            log = data["log"]
            signing = _str_field(jwt, "jwt.", "secret")
            return cls(
                listen_addr=_str_field(data, "", "listen_addr"),
                jwt=JwtConfig(
                    secret=signing,
                    expiry=_int_field(jwt, "jwt.", "expiry"),
                ),
                log=LogConfig(
                    file_name=_str_field(log, "log.", "file_name"),
                    level=_str_field(log, "log.", "level"),
                    rolling=_str_field(log, "log.", "rolling"),
                ),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"invalid server config: {exc}") from exc


def check_config_file(path: str | Path, current_dir: str | Path) -> ServerConfig:
    """Read the config at path, writing a fresh default one if it is missing or malformed."""
    path = Path(path)
    if path.exists():
        _log.info("config file exists")
        try:
            return ServerConfig.from_dict(tomllib.loads(path.read_text(encoding="utf-8")))
        except (tomllib.TOMLDecodeError, ValueError):
            _log.error("config file is malformed, it will be recreated")
    else:
        _log.info("config file missing, creating it")
        (Path(current_dir) / "data").mkdir(parents=True, exist_ok=True)
    config = ServerConfig()
    path.write_text(tomli_w.dumps(config.to_dict()), encoding="utf-8")
    return config


def load_config(base_dir: str | Path | None = None) -> ServerConfig:
    """Load base_dir/data/config.toml and make it the current config."""
    global _config
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    _config = check_config_file(base / "data" / "config.toml", base)
    return _config


def get_config() -> ServerConfig:
    """Return the config set by load_config."""
    if _config is None:
        raise RuntimeError("config should be set")
    return _config