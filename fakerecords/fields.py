"""Field descriptors and declared-type tags for record shapes."""

from __future__ import annotations

import dataclasses
import re
import types
import typing
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Optional, Union
from urllib.parse import ParseResult
from uuid import UUID

import numpy as np

STRING = "string"
INTEGER = "integer"
FLOATING = "floating"
DECIMAL = "decimal"
BOOLEAN = "boolean"
DATETIME = "datetime"
UUID_KIND = "uuid"
URI = "uri"
DURATION = "duration"
NULLABLE = "nullable"

_WIDTHS = {INTEGER: {16, 32, 64}, FLOATING: {32, 64}}


class UnsupportedFieldTypeError(TypeError):
    """Raised when a field's declared type has no generation support."""

    def __init__(self, field_name: str, declared: Any) -> None:
        super().__init__(f"Field {field_name!r} has unsupported type {declared!r}")
        self.field_name = field_name
        self.declared = declared


@dataclass(frozen=True, slots=True)
class TypeTag:
    """Declared type of a field, independent of any host annotation."""

    kind: str
    width: Optional[int] = None
    inner: Optional["TypeTag"] = None

    def __post_init__(self) -> None:
        if self.kind in _WIDTHS and self.width not in _WIDTHS[self.kind]:
            raise ValueError(f"{self.kind} width must be one of {sorted(_WIDTHS[self.kind])}")
        if (self.kind == NULLABLE) != (self.inner is not None):
            raise ValueError("only nullable tags carry an inner type")

    @property
    def is_nullable(self) -> bool:
        return self.kind == NULLABLE

    @property
    def base(self) -> "TypeTag":
        """The tag with any nullable wrapper removed."""

        tag = self
        while tag.inner is not None:
            tag = tag.inner
        return tag

    def __str__(self) -> str:
        if self.inner is not None:
            return f"{self.kind}({self.inner})"
        if self.width is not None:
            return f"{self.kind}({self.width})"
        return self.kind


def nullable(tag: TypeTag) -> TypeTag:
    if tag.is_nullable:
        return tag
    return TypeTag(NULLABLE, inner=tag)


STRING_TAG = TypeTag(STRING)
INT16 = TypeTag(INTEGER, 16)
INT32 = TypeTag(INTEGER, 32)
INT64 = TypeTag(INTEGER, 64)
FLOAT32 = TypeTag(FLOATING, 32)
FLOAT64 = TypeTag(FLOATING, 64)
DECIMAL_TAG = TypeTag(DECIMAL)
BOOLEAN_TAG = TypeTag(BOOLEAN)
DATETIME_TAG = TypeTag(DATETIME)
OPTIONAL_DATETIME = nullable(DATETIME_TAG)
UUID_TAG = TypeTag(UUID_KIND)
URI_TAG = TypeTag(URI)
DURATION_TAG = TypeTag(DURATION)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A named, typed field of a record shape."""

    name: str
    declared_type: TypeTag


# bool before int: bool is an int subclass
_ANNOTATION_TAGS: tuple[tuple[type, TypeTag], ...] = (
    (bool, BOOLEAN_TAG),
    (np.bool_, BOOLEAN_TAG),
    (str, STRING_TAG),
    (np.int16, INT16),
    (np.int32, INT32),
    (np.int64, INT64),
    (int, INT32),
    (np.float32, FLOAT32),
    (np.float64, FLOAT64),
    (float, FLOAT64),
    (Decimal, DECIMAL_TAG),
    (datetime, DATETIME_TAG),
    (UUID, UUID_TAG),
    (ParseResult, URI_TAG),
    (timedelta, DURATION_TAG),
)

_TEXT_TAGS: dict[str, TypeTag] = {
    "str": STRING_TAG,
    "string": STRING_TAG,
    "text": STRING_TAG,
    "int": INT32,
    "integer": INT32,
    "int32": INT32,
    "short": INT16,
    "int16": INT16,
    "long": INT64,
    "int64": INT64,
    "float": FLOAT64,
    "double": FLOAT64,
    "float64": FLOAT64,
    "single": FLOAT32,
    "float32": FLOAT32,
    "decimal": DECIMAL_TAG,
    "bool": BOOLEAN_TAG,
    "boolean": BOOLEAN_TAG,
    "datetime": DATETIME_TAG,
    "timestamp": DATETIME_TAG,
    "uuid": UUID_TAG,
    "guid": UUID_TAG,
    "uri": URI_TAG,
    "url": URI_TAG,
    "duration": DURATION_TAG,
    "timedelta": DURATION_TAG,
    "timespan": DURATION_TAG,
}

_WRAPPED = re.compile(r"^(?:optional|nullable)\s*[\[(]\s*(?P<inner>.+?)\s*[\])]$")


def parse_type_tag(text: str, field_name: str = "<anonymous>") -> TypeTag:
    """Parse a textual tag such as ``"long"``, ``"datetime?"`` or ``"optional[int]"``."""

    candidate = text.strip().lower()
    if candidate.endswith("?"):
        return nullable(parse_type_tag(candidate[:-1], field_name))
    wrapped = _WRAPPED.match(candidate)
    if wrapped:
        return nullable(parse_type_tag(wrapped.group("inner"), field_name))
    tag = _TEXT_TAGS.get(candidate)
    if tag is None:
        raise UnsupportedFieldTypeError(field_name, text)
    return tag


def tag_for_annotation(annotation: Any, field_name: str = "<anonymous>") -> TypeTag:
    """Translate a Python annotation into a ``TypeTag``."""

    if isinstance(annotation, TypeTag):
        return annotation
    if isinstance(annotation, str):
        return parse_type_tag(annotation, field_name)

    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(members) == 1 and len(members) < len(typing.get_args(annotation)):
            return nullable(tag_for_annotation(members[0], field_name))
        raise UnsupportedFieldTypeError(field_name, annotation)
    if origin is not None:
        raise UnsupportedFieldTypeError(field_name, annotation)

    if isinstance(annotation, type):
        for python_type, tag in _ANNOTATION_TAGS:
            if annotation is python_type:
                return tag
        for python_type, tag in _ANNOTATION_TAGS:
            if issubclass(annotation, python_type):
                return tag
    raise UnsupportedFieldTypeError(field_name, annotation)


def describe_fields(target: type) -> list[FieldDescriptor]:
    """Enumerate ``(name, type)`` descriptors of a dataclass or annotated class."""

    hints = typing.get_type_hints(target)
    if dataclasses.is_dataclass(target):
        names = [item.name for item in dataclasses.fields(target)]
    else:
        names = [
            name
            for name, hint in hints.items()
            if not name.startswith("_") and typing.get_origin(hint) is not typing.ClassVar
        ]
    return [FieldDescriptor(name, tag_for_annotation(hints[name], name)) for name in names]


def coerce_shape(shape: Any) -> list[FieldDescriptor]:
    """Normalise any accepted shape form into an ordered descriptor list.

    Accepts a class, a mapping of name to type, or an iterable of
    ``FieldDescriptor`` objects / ``(name, type)`` pairs. Types may be
    ``TypeTag`` values, Python annotations or textual tags.
    """

    if isinstance(shape, type):
        return describe_fields(shape)

    if isinstance(shape, Mapping):
        items: Iterable[Any] = shape.items()
    else:
        items = shape

    descriptors: list[FieldDescriptor] = []
    for item in items:
        if isinstance(item, FieldDescriptor):
            descriptors.append(item)
            continue
        name, declared = item
        descriptors.append(FieldDescriptor(str(name), tag_for_annotation(declared, str(name))))
    return descriptors
