from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _getenv(name: str, default: str) -> str:
    return os.environ.get(name, default).strip()


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (got {raw!r})")


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    port: int
    database_url: str | None
    leaderboard_size: int = 10
    seed_sample_data: bool = False

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    port_raw = _getenv("PORT", "8000")
    leaderboard_size_raw = _getenv("LEADERBOARD_SIZE", "10")

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    try:
        port = int(port_raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer (got {port_raw!r})") from None

    try:
        leaderboard_size = int(leaderboard_size_raw)
    except ValueError:
        raise ValueError(
            f"LEADERBOARD_SIZE must be an integer (got {leaderboard_size_raw!r})"
        ) from None
    if leaderboard_size < 1:
        raise ValueError(
            f"LEADERBOARD_SIZE must be at least 1 (got {leaderboard_size})"
        )

    log_json = _parse_bool("LOG_JSON", _getenv("LOG_JSON", "false"))

    # Sample units are only seeded into the in-memory repo, and only in dev
    # unless explicitly requested.
    seed_default = "true" if app_env_raw == "dev" else "false"
    seed_sample_data = _parse_bool(
        "SEED_SAMPLE_DATA", _getenv("SEED_SAMPLE_DATA", seed_default)
    )

    database_url = _getenv("DATABASE_URL", "") or None

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=log_json,
        port=port,
        database_url=database_url,
        leaderboard_size=leaderboard_size,
        seed_sample_data=seed_sample_data,
    )


SETTINGS = load_settings()
