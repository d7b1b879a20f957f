"""Realistic fake records inferred from field names and declared types."""

from .config import GeneratorConfig
from .fields import FieldDescriptor, TypeTag, UnsupportedFieldTypeError, describe_fields
from .generator import InvalidArgumentError, generate, iter_records
from .resolver import PATTERN_RULES, Strategy, resolve

__all__ = [
    "GeneratorConfig",
    "FieldDescriptor",
    "TypeTag",
    "UnsupportedFieldTypeError",
    "InvalidArgumentError",
    "PATTERN_RULES",
    "Strategy",
    "describe_fields",
    "generate",
    "iter_records",
    "resolve",
]
