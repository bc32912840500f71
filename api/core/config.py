"""
Environment-driven settings.

Each setting is a small function so it is read at call time; tests can set
environment variables without reloading modules.
"""

from __future__ import annotations

import os
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's sslmode values it does not know.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _url_from_parts() -> str:
    host = _env_str("DB_HOST")
    name = _env_str("DB_NAME")
    if not host or not name:
        raise RuntimeError("Set DATABASE_URL, or DB_HOST and DB_NAME.")

    user = _env_str("DB_USER")
    password = os.environ.get("DB_PASSWORD", "")
    port = _env_int("DB_PORT", 5432)

    credentials = ""
    if user:
        credentials = quote(user, safe="")
        if password:
            credentials += ":" + quote(password, safe="")
        credentials += "@"
    return f"postgresql://{credentials}{host}:{port}/{quote(name, safe='')}"


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        return _url_from_parts()
    return _sanitize_database_url(url)


def pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", 1), 0)


def pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 5), pool_min_size(), 1)


def command_timeout() -> int:
    return _env_int("DB_COMMAND_TIMEOUT", 30)


def listen_host() -> str:
    return _env_str("HOST", "0.0.0.0")


def listen_port() -> int:
    return _env_int("PORT", 8080)


def cors_allow_origins() -> list[str]:
    raw = _env_str("CORS_ALLOW_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",")]
    return [origin for origin in origins if origin] or ["*"]


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def json_logs() -> bool:
    return _env_bool("JSON_LOGS")
