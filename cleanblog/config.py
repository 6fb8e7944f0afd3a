"""
Configuration management for cleanblog.

Settings are read from a YAML file, then overridden by environment
variables (a ``.env`` file is loaded first when present).
"""

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

import yaml
from dotenv import load_dotenv

from .core.exceptions import ConfigurationError


DEFAULT_CONFIG_PATH = Path(__file__).parent / "configs" / "config.yaml"
ENV_PREFIX = "CLEANBLOG_"


@dataclass
class DatabaseSettings:
    """Database connection settings. ``url`` wins over the individual parts."""
    url: Optional[str] = None
    host: str = "localhost"
    port: int = 5432
    user: str = "cleanblog"
    password: str = ""
    dbname: str = "cleanblog"
    echo: bool = False

    @property
    def dsn(self) -> str:
        if self.url:
            return self.url
        auth = quote(self.user, safe="")
        if self.password:
            auth += ":" + quote(self.password, safe="")
        return f"postgresql+asyncpg://{auth}@{self.host}:{self.port}/{self.dbname}"


@dataclass
class RedisSettings:
    """Redis connection settings. ``url`` wins over the individual parts."""
    url: Optional[str] = None
    addr: str = "localhost:6379"
    password: str = ""
    db: int = 0

    @property
    def dsn(self) -> str:
        if self.url:
            return self.url
        auth = f":{quote(self.password, safe='')}@" if self.password else ""
        return f"redis://{auth}{self.addr}/{self.db}"


@dataclass
class JWTSettings:
    secret: str = ""
    expires_in_minutes: int = 24 * 60
    algorithm: str = "HS256"


@dataclass
class LogFileSettings:
    filename: Optional[str] = None
    max_size_mb: int = 10
    max_backups: int = 5


@dataclass
class LoggerSettings:
    level: str = "INFO"
    file: LogFileSettings = field(default_factory=LogFileSettings)


@dataclass
class AuditLogSettings:
    file: Optional[str] = None


@dataclass
class Settings:
    """Complete application configuration."""
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    redis: RedisSettings = field(default_factory=RedisSettings)
    jwt: JWTSettings = field(default_factory=JWTSettings)
    logger: LoggerSettings = field(default_factory=LoggerSettings)
    audit_log: AuditLogSettings = field(default_factory=AuditLogSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)

    def to_safe_dict(self) -> Dict[str, Any]:
        """Dictionary with secrets masked, for display."""
        data = self.to_dict()
        for section, key in (("database", "password"), ("redis", "password"), ("jwt", "secret")):
            if data[section][key]:
                data[section][key] = "********"
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Create from dictionary"""
        logger_data = _section(data, "logger")
        return cls(
            database=_build(DatabaseSettings, _section(data, "database"), "database"),
            redis=_build(RedisSettings, _section(data, "redis"), "redis"),
            jwt=_build(JWTSettings, _section(data, "jwt"), "jwt"),
            logger=LoggerSettings(
                level=str(logger_data.get("level", "INFO")),
                file=_build(LogFileSettings, _section(logger_data, "file"), "logger.file"),
            ),
            audit_log=_build(AuditLogSettings, _section(data, "audit_log"), "audit_log"),
        )


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Config section '{name}' must be a mapping")
    return value


def _build(cls, data: Dict[str, Any], name: str):
    known = {f.name: f for f in fields(cls)}
    unknown = set(data) - set(known)
    if unknown:
        raise ConfigurationError(
            f"Unknown keys in config section '{name}': {', '.join(sorted(unknown))}"
        )

    values = {}
    for key, value in data.items():
        if value is not None and known[key].type in (int, "int"):
            value = _to_int(value, f"{name}.{key}")
        values[key] = value
    return cls(**values)


def _to_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"'{name}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"'{name}' must be an integer, got {value!r}") from None


def _apply_env(settings: Settings) -> None:
    env = os.environ
    if env.get(f"{ENV_PREFIX}DATABASE_URL"):
        settings.database.url = env[f"{ENV_PREFIX}DATABASE_URL"]
    if env.get(f"{ENV_PREFIX}REDIS_URL"):
        settings.redis.url = env[f"{ENV_PREFIX}REDIS_URL"]
    if env.get(f"{ENV_PREFIX}JWT_SECRET"):
        settings.jwt.secret = env[f"{ENV_PREFIX}JWT_SECRET"]
    if env.get(f"{ENV_PREFIX}JWT_EXPIRES_IN_MINUTES"):
        settings.jwt.expires_in_minutes = _to_int(
            env[f"{ENV_PREFIX}JWT_EXPIRES_IN_MINUTES"], f"{ENV_PREFIX}JWT_EXPIRES_IN_MINUTES"
        )
    if env.get(f"{ENV_PREFIX}LOG_LEVEL"):
        settings.logger.level = env[f"{ENV_PREFIX}LOG_LEVEL"]
    if env.get(f"{ENV_PREFIX}LOG_FILE"):
        settings.logger.file.filename = env[f"{ENV_PREFIX}LOG_FILE"]


def load_settings(
    path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None,
) -> Settings:
    """
    Load settings.

    Args:
        path: YAML config file (defaults to the packaged configs/config.yaml).
              A missing file yields the defaults.
        env_file: Optional .env file; the current directory's .env otherwise

    Raises:
        ConfigurationError: If the file is not valid YAML, is not a mapping,
            or holds values of the wrong type
    """
    load_dotenv(dotenv_path=env_file, override=False)

    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    data: Any = {}
    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}", {"error": str(e)}) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    settings = Settings.from_dict(data)
    _apply_env(settings)

    if settings.jwt.expires_in_minutes <= 0:
        raise ConfigurationError("'jwt.expires_in_minutes' must be positive")
    return settings
