"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class ReportAPISettings:
    """
    HTTP behavior settings for the analytics report API.
    """

    api_version: str = "v59.0"
    timeout_seconds: float = 15.0
    max_retries: int = 3
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    rate_limit_per_second: float = 5.0
    list_limit: int = 100


@dataclass(frozen=True)
class ReportAPICredentials:
    """
    Opaque credential pair issued by the OAuth collaborator.
    """

    access_token: str
    instance_url: str


@dataclass(frozen=True)
class RefreshSchedulerSettings:
    """
    Periodic snapshot refresh settings.

    An empty ``report_ids`` tuple means every report returned by the
    report listing call is refreshed.
    """

    enabled: bool = False
    interval_minutes: int = 60
    report_ids: tuple[str, ...] = ()


@lru_cache(maxsize=1)
def get_report_api_settings() -> ReportAPISettings:
    """
    Return report API settings from environment variables.
    """

    return ReportAPISettings(
        api_version=_get_str_env("REPORT_API_VERSION", "v59.0"),
        timeout_seconds=max(1.0, _get_float_env("REPORT_API_TIMEOUT_SECONDS", 15.0)),
        max_retries=max(0, _get_int_env("REPORT_API_MAX_RETRIES", 3)),
        backoff_initial_seconds=max(0.1, _get_float_env("REPORT_API_BACKOFF_INITIAL_SECONDS", 0.5)),
        backoff_multiplier=max(1.0, _get_float_env("REPORT_API_BACKOFF_MULTIPLIER", 2.0)),
        rate_limit_per_second=max(0.1, _get_float_env("REPORT_API_RATE_LIMIT_PER_SECOND", 5.0)),
        list_limit=min(2000, max(1, _get_int_env("REPORT_LIST_LIMIT", 100))),
    )


def get_report_api_credentials() -> ReportAPICredentials | None:
    """
    Return the stored report API credentials, or None when not connected.

    Not cached: tokens are rotated by the OAuth collaborator and must be
    re-read on every fetch.
    """

    access_token = _get_optional_str_env("REPORT_API_ACCESS_TOKEN")
    instance_url = _get_optional_str_env("REPORT_API_INSTANCE_URL")
    if access_token is None or instance_url is None:
        return None
    return ReportAPICredentials(
        access_token=access_token,
        instance_url=instance_url.rstrip("/"),
    )


def _parse_report_ids(raw: str) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for token in raw.split(","):
        token = token.strip()
        if token:
            seen[token] = None
    return tuple(seen)


@lru_cache(maxsize=1)
def get_refresh_scheduler_settings() -> RefreshSchedulerSettings:
    """
    Return periodic refresh settings from environment variables.
    """

    return RefreshSchedulerSettings(
        enabled=_get_bool_env("REPORT_REFRESH_ENABLED", False),
        interval_minutes=max(1, _get_int_env("REPORT_REFRESH_INTERVAL_MINUTES", 60)),
        report_ids=_parse_report_ids(_get_str_env("REPORT_REFRESH_IDS", "")),
    )
