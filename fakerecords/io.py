"""I/O utilities for writing generated records as JSON lines."""

from __future__ import annotations

import dataclasses
import json
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional, TextIO
from urllib.parse import ParseResult
from uuid import UUID

import numpy as np


def to_jsonable(value: Any) -> Any:
    """Convert a generated record or value into JSON-compatible data."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {item.name: to_jsonable(getattr(value, item.name)) for item in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, ParseResult):
        return value.geturl()
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, Decimal):
        # Money renders with its currency symbol
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, np.generic):
        return value.item()
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if hasattr(value, "__dict__"):
        return {key: to_jsonable(item) for key, item in vars(value).items() if not key.startswith("_")}
    return str(value)


def write_jsonl(
    records: Iterable[Any],
    output_handle: TextIO,
    progress_callback: Optional[Callable[[int], None]] = None,
) -> int:
    """Write records to ``output_handle`` one JSON object per line."""

    written = 0
    for record in records:
        output_handle.write(json.dumps(to_jsonable(record)))
        output_handle.write("\n")
        written += 1
        if progress_callback:
            progress_callback(written)
    return written
