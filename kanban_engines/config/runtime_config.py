"""Runtime configuration helpers for the Kanban engines."""
from __future__ import annotations

import os
from typing import Optional

DEFAULT_INITIAL_STAGE = "Requested"
DEFAULT_STORE_BACKEND = "memory"
_TRUTHY = {"1", "true", "yes", "on"}


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def get_store_backend() -> str:
    return (_get_env("KANBAN_STORE_BACKEND") or DEFAULT_STORE_BACKEND).lower()


def get_store_dir() -> Optional[str]:
    return _get_env("KANBAN_STORE_DIR")


def get_initial_stage() -> str:
    # Blank values fall back to the default; the holder rejects blank stages.
    value = _get_env("KANBAN_INITIAL_STAGE")
    if value is None or not value.strip():
        return DEFAULT_INITIAL_STAGE
    return value


def allow_duplicate_rules() -> bool:
    return (_get_env("KANBAN_ALLOW_DUPLICATE_RULES") or "").strip().lower() in _TRUTHY


def get_log_level() -> str:
    return (_get_env("KANBAN_LOG_LEVEL") or "INFO").upper()


def get_host() -> str:
    return _get_env("KANBAN_HOST") or "127.0.0.1"


def get_port() -> int:
    return int(_get_env("KANBAN_PORT") or "8000")
