"""Configuration helpers for the Wardrobe Stylist service."""

from dataclasses import dataclass, field
from pathlib import Path
import os
from typing import Dict, List, Mapping, Optional

DEFAULT_DATABASE_PATH = "data/wardrobe.db"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3001
DEFAULT_CONFIG_DIR = "config/environments"

_QUOTES = ("'", '"')


def read_settings_file(path: Path) -> Dict[str, str]:
    """Read flat ``key: value`` (or ``key=value``) lines into a dict.

    Keys are lower-cased so they line up with environment variable names.
    Blank lines, ``#`` comments and lines without a separator are skipped; one
    pair of matching surrounding quotes is removed from a value.
    """

    settings: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        separators = [index for index in (line.find(":"), line.find("=")) if index > 0]
        if not separators:
            continue
        split_at = min(separators)
        key, value = line[:split_at].strip().lower(), line[split_at + 1 :].strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
            value = value[1:-1]
        settings[key] = value
    return settings


def _settings_path(environ: Mapping[str, str]) -> Optional[Path]:
    if environ.get("APP_CONFIG_PATH"):
        return Path(environ["APP_CONFIG_PATH"])
    if environ.get("APP_ENV"):
        return Path(environ.get("APP_CONFIG_DIR", DEFAULT_CONFIG_DIR)) / f"{environ['APP_ENV']}.yaml"
    return None


@dataclass
class AppConfig:
    """Configuration values for the stylist service.

    Values come from environment variables, optionally merged with a small
    settings file so that local, test and deployed environments share one code
    path. Environment variables always win over file values.
    """

    database_path: str = DEFAULT_DATABASE_PATH
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    environment: str | None = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build a config from ``environ`` (the process environment by default).

        The settings file is ``APP_CONFIG_PATH`` when set, otherwise
        ``<APP_CONFIG_DIR>/<APP_ENV>.yaml`` with ``config/environments`` as the
        default directory. A missing file is ignored.
        """

        environ = os.environ if environ is None else environ
        path = _settings_path(environ)
        file_settings = read_settings_file(path) if path and path.exists() else {}

        def get_value(key: str, default: str) -> str:
            return environ.get(key.upper()) or file_settings.get(key) or default

        return cls(
            database_path=get_value("wardrobe_db_path", DEFAULT_DATABASE_PATH),
            host=get_value("host", DEFAULT_HOST),
            port=cls._parse_port(get_value("port", str(DEFAULT_PORT))),
            cors_origins=[
                origin.strip() for origin in get_value("cors_origins", "*").split(",") if origin.strip()
            ],
            log_level=get_value("log_level", "INFO").upper(),
            environment=environ.get("APP_ENV") or None,
        )

    @staticmethod
    def _parse_port(raw: str) -> int:
        try:
            port = int(raw)
        except ValueError:
            raise ValueError(f"Invalid port value '{raw}'") from None
        if not 0 < port < 65536:
            raise ValueError(f"Port out of range: {port}")
        return port


__all__ = ["AppConfig", "read_settings_file"]
