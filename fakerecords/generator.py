"""Bulk generation of synthetic records."""

from __future__ import annotations

import dataclasses
import logging
import operator
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import yaml

from .config import GeneratorConfig
from .fields import FieldDescriptor, coerce_shape
from .resolver import Strategy, resolve

logger = logging.getLogger(__name__)

DEFAULT_TOTAL = 100

Plan = list[tuple[FieldDescriptor, Strategy]]


class InvalidArgumentError(ValueError):
    """Raised when a generation call is given arguments it cannot honour."""


def load_shape(path: Path) -> list[FieldDescriptor]:
    """Load a record shape from YAML.

    The file is either a mapping of field name to type tag or a mapping with
    such a table under ``fields``.
    """

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise InvalidArgumentError("Shape must be a mapping")
    fields = data.get("fields", data)
    if not isinstance(fields, dict):
        raise InvalidArgumentError("Shape 'fields' must be a mapping of name to type")
    return _checked_shape(fields)


def resolve_shape(shape: Any, config: Optional[GeneratorConfig] = None) -> Plan:
    """Resolve one strategy per field, in shape order."""

    active_config = config or GeneratorConfig()
    return [
        (descriptor, resolve(descriptor.name, descriptor.declared_type, active_config))
        for descriptor in _checked_shape(shape)
    ]


def iter_records(
    shape: Any,
    total: int = DEFAULT_TOTAL,
    config: Optional[GeneratorConfig] = None,
) -> Iterator[Any]:
    """Iterate over ``total`` synthetic records of ``shape``.

    Arguments are validated and strategies resolved before the iterator is
    returned, so bad input fails at the call site rather than on first use.
    """

    if isinstance(total, bool):
        raise InvalidArgumentError(f"total must be an integer, got {total!r}")
    try:
        total = operator.index(total)
    except TypeError:
        raise InvalidArgumentError(f"total must be an integer, got {total!r}") from None
    if total < 0:
        raise InvalidArgumentError(f"total must not be negative, got {total}")

    active_config = config or GeneratorConfig()
    faker = active_config.faker()
    plan = resolve_shape(shape, active_config)
    build = _record_builder(shape)
    logger.info(
        "Generating %s record(s) over %s field(s) with seed %s",
        total,
        len(plan),
        active_config.seed,
    )

    def _record_iterator() -> Iterator[Any]:
        for _ in range(total):
            values = {descriptor.name: strategy(faker) for descriptor, strategy in plan}
            yield build(values)

    return _record_iterator()


def generate(
    shape: Any,
    total: int = DEFAULT_TOTAL,
    config: Optional[GeneratorConfig] = None,
) -> list[Any]:
    """Generate ``total`` records of ``shape`` as a list."""

    return list(iter_records(shape, total, config))


def _checked_shape(shape: Any) -> list[FieldDescriptor]:
    descriptors = coerce_shape(shape)
    seen: set[str] = set()
    for descriptor in descriptors:
        if descriptor.name in seen:
            raise InvalidArgumentError(f"Duplicate field name in shape: {descriptor.name!r}")
        seen.add(descriptor.name)
    return descriptors


def _record_builder(shape: Any) -> Callable[[dict[str, Any]], Any]:
    if not isinstance(shape, type):
        return dict
    if dataclasses.is_dataclass(shape):
        init_names = {item.name for item in dataclasses.fields(shape) if item.init}

        def build_dataclass(values: dict[str, Any]) -> Any:
            record = shape(**{name: value for name, value in values.items() if name in init_names})
            for name, value in values.items():
                if name not in init_names:
                    object.__setattr__(record, name, value)
            return record

        return build_dataclass

    def build_instance(values: dict[str, Any]) -> Any:
        record = shape()
        for name, value in values.items():
            setattr(record, name, value)
        return record

    return build_instance
