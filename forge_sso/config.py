"""Configuration for the SSO chain and its cookies."""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class SSOSettings:
    """Settings consumed by the SSO methods, the sign-in writer and the app."""

    lfs_start_server: bool = False
    enable_reverse_proxy_auth: bool = False
    reverse_proxy_auth_user: str = "X-WEBAUTH-USER"
    langs: list[str] = field(default_factory=lambda: ["en-US"])
    locale_cookie_name: str = "lang"
    csrf_cookie_name: str = "_csrf"
    cookie_path: str = "/"
    cookie_secure: bool = False
    session_secret: str = "forge-sso-dev-secret"
    token_cache_ttl_seconds: int = 300
    log_level: str = "INFO"

    @property
    def default_lang(self) -> str:
        return self.langs[0] if self.langs else "en-US"


# field name -> environment variable
_ENV_VARS = {
    "lfs_start_server": "LFS_START_SERVER",
    "enable_reverse_proxy_auth": "ENABLE_REVERSE_PROXY_AUTHENTICATION",
    "reverse_proxy_auth_user": "REVERSE_PROXY_AUTHENTICATION_USER",
    "langs": "LANGS",
    "locale_cookie_name": "LOCALE_COOKIE_NAME",
    "csrf_cookie_name": "CSRF_COOKIE_NAME",
    "cookie_path": "COOKIE_PATH",
    "cookie_secure": "COOKIE_SECURE",
    "session_secret": "SESSION_SECRET",
    "token_cache_ttl_seconds": "AUTH_CACHE_TTL_SECONDS",
    "log_level": "LOG_LEVEL",
}


def _parse_bool(name: str, value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    logger.warning("Invalid boolean setting, using default", setting=name, value=value)
    return default


def _parse_int(name: str, value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid integer setting, using default", setting=name, value=value)
        return default


def _parse_langs(value: Any) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    return [str(lang).strip() for lang in value if str(lang).strip()]


def _coerce(raw: dict[str, Any]) -> SSOSettings:
    defaults = SSOSettings()
    values: dict[str, Any] = {}
    for f in fields(SSOSettings):
        if f.name not in raw:
            continue
        default = getattr(defaults, f.name)
        value = raw[f.name]
        if isinstance(default, bool):
            values[f.name] = _parse_bool(f.name, value, default)
        elif isinstance(default, int):
            values[f.name] = _parse_int(f.name, value, default)
        elif f.name == "langs":
            values[f.name] = _parse_langs(value) or default
        else:
            values[f.name] = str(value)
    return SSOSettings(**values)


def _from_env() -> dict[str, Any]:
    return {
        name: os.environ[env_var]
        for name, env_var in _ENV_VARS.items()
        if env_var in os.environ
    }


def get_settings() -> SSOSettings:
    """Build settings from environment variables."""
    return _coerce(_from_env())


def load_settings(path: str | Path) -> SSOSettings:
    """Load settings from a YAML file, falling back to the environment.

    Keys in the file use the SSOSettings field names. A missing or unreadable
    file yields the environment-only settings.
    """
    settings_file = Path(path)
    raw = _from_env()

    if not settings_file.exists():
        logger.warning("Settings file does not exist", file=str(settings_file))
        return _coerce(raw)

    try:
        with open(settings_file) as f:
            content = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(
            "Failed to load settings file", file=str(settings_file), error=str(e)
        )
        return _coerce(raw)

    if not isinstance(content, dict):
        logger.error("Settings file is not a mapping", file=str(settings_file))
        return _coerce(raw)

    known = {f.name for f in fields(SSOSettings)}
    for key, value in content.items():
        if key in known:
            raw[key] = value
        else:
            logger.warning("Unknown setting ignored", setting=key)
    return _coerce(raw)
