"""
DataUI configuration — all environment variables in one place.

Read from environment at import time.
"""

from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def _int_list_env(name: str, default: str) -> tuple[int, ...]:
    raw = os.environ.get(name, "") or default
    try:
        return tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError:
        raise RuntimeError(f"{name} must be a comma-separated list of integers, got {raw!r}") from None


class Settings:
    """Application settings from environment variables."""

    # Pagination
    DEFAULT_PAGE_SIZE: int = _int_env("DATAUI_DEFAULT_PAGE_SIZE", 10)
    PAGE_SIZE_OPTIONS: tuple[int, ...] = _int_list_env("DATAUI_PAGE_SIZE_OPTIONS", "5,10,25,50")

    # Remote API the encoded query strings are meant for (no transport here)
    API_URL: str = os.environ.get("DATAUI_API_URL", "").rstrip("/")

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")

    def query_url(self, resource: str, query_string: str, api_url: str | None = None) -> str:
        """Full URL for a resource query, or the bare query string without an API URL."""
        api_url = (api_url or self.API_URL).rstrip("/")
        if not api_url:
            return query_string
        resource = resource.strip("/")
        base = f"{api_url}/{resource}" if resource else api_url
        return f"{base}?{query_string}" if query_string else base


# Singleton instance
settings = Settings()

if settings.DEFAULT_PAGE_SIZE <= 0:
    raise RuntimeError("DATAUI_DEFAULT_PAGE_SIZE must be positive")
if any(n <= 0 for n in settings.PAGE_SIZE_OPTIONS):
    raise RuntimeError("DATAUI_PAGE_SIZE_OPTIONS must only contain positive sizes")
if settings.DEFAULT_PAGE_SIZE not in settings.PAGE_SIZE_OPTIONS:
    raise RuntimeError("DATAUI_DEFAULT_PAGE_SIZE must be one of DATAUI_PAGE_SIZE_OPTIONS")
