"""Configuration loading from an optional YAML file and environment variables."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import dotenv_values

from .core.exceptions import ConfigurationError

logger = logging.getLogger("longcat-proxy")

DEFAULT_CONFIG_PATH = "configs/config.yaml"
CONFIG_PATH_ENV = "LONGCAT_PROXY_CONFIG"

DEFAULT_UPSTREAM_URL = "https://longcat.chat/api/v1/chat-completion-oversea"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 30.0
DEFAULT_READ_TIMEOUT = 120.0


def resolve_config_path(path: str) -> Path:
    """Resolve config path relative to project root if needed."""
    if Path(path).is_absolute():
        return Path(path)
    project_root = Path(__file__).parent.parent
    return project_root / path


def resolve_env_path(config_path: Path) -> Path:
    """The .env file that sits next to a config file."""
    return config_path.with_name(".env")


def load_env_values(env_path: Path) -> dict[str, str]:
    """Load environment values from a .env file without mutating os.environ."""
    if not env_path.exists():
        return {}
    raw_values = dotenv_values(env_path)
    return {key: value for key, value in raw_values.items() if value is not None}


def load_config(path: str | None = None, substitute_env: bool = True) -> dict:
    """Load configuration from a YAML file.

    Args:
        path: Path to the config file. Defaults to $LONGCAT_PROXY_CONFIG, or
              configs/config.yaml in the project root.
        substitute_env: Whether to substitute environment variables in the config.

    Returns:
        Parsed configuration dictionary. Empty when the default file is absent.

    Raises:
        ConfigurationError: If an explicitly requested file does not exist or
            does not contain a mapping.
    """
    explicit = path or os.getenv(CONFIG_PATH_ENV)
    config_path = resolve_config_path(explicit or DEFAULT_CONFIG_PATH)

    if not config_path.exists():
        if explicit:
            logger.error(f"Config file not found: {config_path}")
            raise ConfigurationError(f"Config file not found: {config_path}")
        logger.info("No config file at %s, using environment only", config_path)
        return {}

    logger.info(f"Loading configuration from {config_path}")

    env_values: dict[str, str] = {}
    if substitute_env:
        env_file = resolve_env_path(config_path)
        if env_file.exists():
            logger.info(f"Loading environment variables from {env_file}")
            env_values = load_env_values(env_file)

    with config_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    if substitute_env:
        data = _substitute_env_vars(data, env_values)

    logger.info(f"Configuration loaded successfully from {config_path}")
    return data


def _substitute_env_vars(
    obj: Any, env_values: Mapping[str, str] | None = None
) -> Any:
    """Recursively substitute ${VAR_NAME} / $VAR_NAME placeholders.

    Values from the .env file win over the process environment. Unknown
    variables are left as literal placeholders.
    """
    import re

    env_values = env_values or {}

    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v, env_values) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_substitute_env_vars(item, env_values) for item in obj]
    if isinstance(obj, str):
        pattern = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")

        def replace_var(match):
            var_name = match.group(1) or match.group(2)
            value = env_values.get(var_name)
            if value is None:
                value = os.getenv(var_name)
            if value is None:
                logger.warning(
                    f"CONFIG ERROR: Environment variable '${var_name}' is not set! "
                    f"The literal placeholder will be used."
                )
                return match.group(0)
            return value

        return pattern.sub(replace_var, obj)
    return obj


def _get(cfg: Mapping[str, Any], *keys: str) -> Any:
    cur: Any = cfg
    for key in keys:
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(key)
    return cur


def _pick(environ: Mapping[str, str], env_key: str, config_value: Any) -> Any:
    """Environment variables take priority over config file values."""
    value = environ.get(env_key)
    if value is not None and value != "":
        return value
    return config_value


def _parse_int(name: str, value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc


def _parse_timeout(name: str, value: Any, default: Optional[float]) -> Optional[float]:
    if value is None or value == "":
        return default
    if isinstance(value, str) and value.strip().lower() in {"none", "off"}:
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc
    if parsed <= 0:
        return None
    return parsed


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class GatewaySettings:
    """Resolved runtime settings for the gateway."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    api_key: Optional[str] = None
    upstream_url: str = DEFAULT_UPSTREAM_URL
    cookie: str = ""
    app_key: str = ""
    trace_id: str = ""
    timeout: float = DEFAULT_TIMEOUT
    read_timeout: Optional[float] = DEFAULT_READ_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "GatewaySettings":
        config = config or {}
        environ = os.environ if environ is None else environ

        host = _pick(environ, "HOST", _get(config, "server", "host"))
        port = _pick(environ, "PORT", _get(config, "server", "port"))
        api_key = _pick(environ, "SERVER_API_KEY", _get(config, "server", "api_key"))
        upstream_url = _pick(environ, "LONGCAT_URL", _get(config, "upstream", "url"))
        cookie = _pick(environ, "LONGCAT_COOKIE", _get(config, "upstream", "cookie"))
        app_key = _pick(environ, "LONGCAT_APPKEY", _get(config, "upstream", "app_key"))
        trace_id = _pick(environ, "LONGCAT_TRACEID", _get(config, "upstream", "trace_id"))
        timeout = _pick(environ, "LONGCAT_TIMEOUT", _get(config, "upstream", "timeout"))
        read_timeout = _pick(
            environ, "LONGCAT_READ_TIMEOUT", _get(config, "upstream", "read_timeout")
        )
        log_level = _pick(environ, "LOG_LEVEL", _get(config, "logging", "level"))
        debug = _pick(environ, "DEBUG", _get(config, "logging", "debug"))

        resolved_timeout = _parse_timeout("LONGCAT_TIMEOUT", timeout, DEFAULT_TIMEOUT)
        return cls(
            host=str(host or DEFAULT_HOST),
            port=_parse_int("PORT", port, DEFAULT_PORT),
            api_key=str(api_key) if api_key else None,
            upstream_url=str(upstream_url or DEFAULT_UPSTREAM_URL),
            cookie=str(cookie or ""),
            app_key=str(app_key or ""),
            trace_id=str(trace_id or ""),
            timeout=resolved_timeout or DEFAULT_TIMEOUT,
            read_timeout=_parse_timeout(
                "LONGCAT_READ_TIMEOUT", read_timeout, DEFAULT_READ_TIMEOUT
            ),
            log_level="DEBUG" if _parse_bool(debug) else str(log_level or "INFO").upper(),
        )


def load_settings(path: str | None = None) -> GatewaySettings:
    """Load the config file (if any) and resolve settings against the environment."""
    return GatewaySettings.from_config(load_config(path))
