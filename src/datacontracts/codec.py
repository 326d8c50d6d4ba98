"""JSON text codec for key/value trees.

The engines never touch text; this module is the boundary that turns JSON
into the tree shape they expect and back. Timestamps in a tree are written
as ISO-8601 strings and ``Decimal`` values as numbers. Formatting defaults
(indent, ASCII escaping) come from :class:`ContractSettings`.

Examples:
    >>> dumps({"version": "4.0", "takes": 100})
    '{"version":"4.0","takes":100}'
    >>> loads('{"takes": [1, 2]}')
    {'takes': [1, 2]}
"""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from datacontracts.core.errors import DecodeError, EncodeError
from datacontracts.core.settings import get_settings


def _default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def loads(text: str | bytes) -> Any:
    """Parse JSON text into a tree.

    Raises:
        DecodeError: the text is not valid JSON
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid JSON: {exc.msg}", cause=exc).with_context(
            line=exc.lineno, column=exc.colno
        ) from exc


def dumps(
    tree: Any,
    *,
    indent: int | None = None,
    ensure_ascii: bool | None = None,
) -> str:
    """Render a tree as JSON text.

    Raises:
        EncodeError: the tree holds a value JSON cannot represent
    """
    settings = get_settings()
    if indent is None:
        indent = settings.json_indent
    if ensure_ascii is None:
        ensure_ascii = settings.json_ensure_ascii
    separators = (",", ":") if indent is None else (",", ": ")
    try:
        return json.dumps(
            tree,
            default=_default,
            indent=indent,
            ensure_ascii=ensure_ascii,
            separators=separators,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise EncodeError(f"Cannot encode tree: {exc}", cause=exc) from exc
