"""
Structured error types for datacontracts.

Marshalling fails in a small number of well-defined ways: a field value does
not satisfy its declaration, the wire text is not valid JSON, or a contract
named on the command line cannot be imported. Each of those has its own
``ContractError`` subclass carrying a category, a structured context, and an
optional chained cause.

Manifesto:
    - **One marshalling error:** ``InvalidValueError`` carries the dotted
      member path and the literal offending value, for both validation and
      deserialization failures
    - **Rich Context:** Errors carry the record type and path for logging
    - **Error Chaining:** Preserve original exceptions (``json`` errors,
      ``ValueError`` from parsing) as ``cause``

Architecture:
    ::

        ┌───────────────────────────────────────────────────────────┐
        │                      ContractError                         │
        │              (category, context, cause)                    │
        ├───────────────────────────────────────────────────────────┤
        │                                                            │
        │  InvalidValueError     DecodeError       EncodeError       │
        │  (VALIDATION)          (PARSE)           (PARSE)           │
        │                                                            │
        │  ContractNotFoundError                                     │
        │  (CONFIG)                                                  │
        └───────────────────────────────────────────────────────────┘

Examples:
    >>> error = InvalidValueError("nested.item.y", -1)
    >>> error.member_name
    'nested.item.y'
    >>> str(error)
    'Value "-1" is not valid for member "nested.item.y"'

    >>> error.to_dict()["category"]
    'VALIDATION'

Guardrails:
    ❌ DON'T: Raise ValueError from the engines
    ✅ DO: Raise InvalidValueError with the path reached by recursion

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, datacontracts

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Error categories for classification and routing.

    Attributes:
        VALIDATION: A value does not satisfy its member declaration
        PARSE: Wire text could not be decoded or encoded
        CONFIG: A contract target or setting is wrong
        INTERNAL: Bugs, unexpected state
    """

    VALIDATION = "VALIDATION"     # Member constraint or coercion failures
    PARSE = "PARSE"               # JSON text encode/decode
    CONFIG = "CONFIG"             # Unknown contract target, bad settings
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        path: Dotted member path where the error was detected
        record_type: Qualified name of the record type involved
        metadata: Additional key-value pairs
    """

    path: str | None = None
    record_type: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["path", "record_type"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ContractError(Exception):
    """
    Base exception for all datacontracts errors.

    Subclasses set ``default_category`` to classify themselves.

    Examples:
        >>> error = ContractError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> error = ContractError("Bad input").with_context(path="a.b")
        >>> error.context.path
        'a.b'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ContractError:
        """
        Add context to this error (fluent API).

        Usage:
            raise DecodeError("bad json").with_context(source="payload.json")
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class InvalidValueError(ContractError):
    """
    A member value cannot be accepted.

    Raised by validation when the first non-conforming member is found, and by
    deserialization when a raw value cannot be coerced to its declared kind.
    Never retryable: the input must be fixed.

    Attributes:
        member_name: Dotted path of the member (``"nested.item.y"``)
        member_value: The literal offending value
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(self, member_name: str, member_value: Any, **kwargs: Any):
        super().__init__(
            f'Value "{member_value}" is not valid for member "{member_name}"',
            **kwargs,
        )
        self.member_name = member_name
        self.member_value = member_value
        self.context.path = member_name

    @property
    def path(self) -> str:
        return self.member_name

    @property
    def value(self) -> Any:
        return self.member_value


class DecodeError(ContractError):
    """Wire text could not be parsed into a tree."""

    default_category = ErrorCategory.PARSE


class EncodeError(ContractError):
    """A tree holds a value the wire format cannot represent."""

    default_category = ErrorCategory.PARSE


class ContractNotFoundError(ContractError):
    """A ``module:Class`` contract target could not be imported."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, target: str, reason: str, **kwargs: Any):
        super().__init__(f"Contract '{target}' not found: {reason}", **kwargs)
        self.target = target


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ContractError",
    "InvalidValueError",
    "DecodeError",
    "EncodeError",
    "ContractNotFoundError",
]
