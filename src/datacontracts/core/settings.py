"""Settings for datacontracts.

The marshalling engines are configuration-free apart from a handful of
knobs: how numeric epochs are read into timestamps, how the JSON codec
formats text, and how the CLI logs. ``ContractSettings`` gathers them in one
validated, cached object driven by ``DATACONTRACTS_*`` environment variables
and ``.env`` files.

Examples:
    >>> from datacontracts.core.settings import get_settings
    >>> get_settings().timestamp_epoch_unit
    's'

Tags:
    settings, configuration, pydantic, environment, datacontracts

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ContractSettings(BaseSettings):
    """datacontracts configuration.

    Fields
    ──────
    log_level             : Structlog log level used by the CLI
    log_format            : ``json`` or ``console`` rendering
    json_indent           : Indentation of emitted JSON (``None`` = compact)
    json_ensure_ascii     : Escape non-ASCII characters in emitted JSON
    timestamp_epoch_unit  : Unit of numeric epochs coerced to timestamps
    """

    model_config = SettingsConfigDict(
        env_prefix="DATACONTRACTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: Literal["json", "console"] = Field(default="console")

    # ── JSON codec ───────────────────────────────────────────────
    json_indent: int | None = Field(default=None, ge=0)
    json_ensure_ascii: bool = Field(default=False)

    # ── Coercion ─────────────────────────────────────────────────
    timestamp_epoch_unit: Literal["s", "ms"] = Field(
        default="s",
        description="Unit of numeric epochs deserialized into timestamp members",
    )


_settings: ContractSettings | None = None


def get_settings(*, _force_reload: bool = False) -> ContractSettings:
    """Load, validate, and cache a :class:`ContractSettings` instance."""
    global _settings
    if _settings is None or _force_reload:
        _settings = ContractSettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (primarily for tests)."""
    global _settings
    _settings = None
