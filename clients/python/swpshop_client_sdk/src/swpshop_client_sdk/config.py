from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    base_url: str | None
    token: str | None = None
    timeout_seconds: float = 10.0
    verify_ssl: bool = True


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _optional(name: str) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or None


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override.

    A missing ``DIRECTUS_URL`` is not an error here: the client reports it as a
    ``config`` failure on every request instead.
    """
    load_dotenv(env_file)

    timeout_seconds = _read_float("DIRECTUS_TIMEOUT_SECONDS", "10")
    if timeout_seconds <= 0:
        raise ConfigError(f"Invalid DIRECTUS_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}")

    return ClientConfig(
        base_url=_optional("DIRECTUS_URL"),
        token=_optional("DIRECTUS_TOKEN"),
        timeout_seconds=timeout_seconds,
        verify_ssl=_coerce_bool(os.getenv("DIRECTUS_VERIFY_SSL"), True),
    )
