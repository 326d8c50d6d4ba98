"""Cross-cutting primitives: errors, logging, settings."""

from datacontracts.core.errors import (
    ContractError,
    ContractNotFoundError,
    DecodeError,
    EncodeError,
    ErrorCategory,
    ErrorContext,
    InvalidValueError,
)
from datacontracts.core.logging import configure_logging, get_logger
from datacontracts.core.settings import ContractSettings, get_settings, reset_settings

__all__ = [
    "ContractError",
    "ContractNotFoundError",
    "DecodeError",
    "EncodeError",
    "ErrorCategory",
    "ErrorContext",
    "InvalidValueError",
    "configure_logging",
    "get_logger",
    "ContractSettings",
    "get_settings",
    "reset_settings",
]
