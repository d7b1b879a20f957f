import unittest
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import ClassVar, Optional, Union
from urllib.parse import ParseResult
from uuid import UUID

import numpy as np

from fakerecords import fields


@dataclass
class Reading:
    sensor_id: np.int64
    level: np.int16
    ratio: np.float32
    value: float
    cost: Decimal
    ok: bool
    taken_at: datetime
    cleared_at: Optional[datetime]
    ref: UUID
    link: ParseResult
    window: timedelta
    retries: int | None


class Widget:
    kind: ClassVar[str] = "widget"
    name: str
    count: int


class TypeTagTests(unittest.TestCase):
    def test_rendering(self) -> None:
        self.assertEqual(str(fields.INT64), "integer(64)")
        self.assertEqual(str(fields.OPTIONAL_DATETIME), "nullable(datetime)")
        self.assertEqual(str(fields.STRING_TAG), "string")

    def test_nullable_is_idempotent(self) -> None:
        wrapped = fields.nullable(fields.INT32)
        self.assertIs(fields.nullable(wrapped), wrapped)
        self.assertEqual(wrapped.base, fields.INT32)

    def test_invalid_width(self) -> None:
        with self.assertRaises(ValueError):
            fields.TypeTag(fields.INTEGER, 8)


class ParseTypeTagTests(unittest.TestCase):
    def test_aliases(self) -> None:
        cases = {
            "String": fields.STRING_TAG,
            "int": fields.INT32,
            "long": fields.INT64,
            "short": fields.INT16,
            "double": fields.FLOAT64,
            "single": fields.FLOAT32,
            "guid": fields.UUID_TAG,
            "url": fields.URI_TAG,
            "TimeSpan": fields.DURATION_TAG,
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                self.assertEqual(fields.parse_type_tag(text), expected)

    def test_nullable_forms(self) -> None:
        for text in ("datetime?", "optional[datetime]", "Nullable(DateTime)"):
            with self.subTest(text=text):
                self.assertEqual(fields.parse_type_tag(text), fields.OPTIONAL_DATETIME)

    def test_unknown_tag(self) -> None:
        with self.assertRaises(fields.UnsupportedFieldTypeError) as ctx:
            fields.parse_type_tag("blob", "payload")
        self.assertEqual(ctx.exception.field_name, "payload")


class DescribeFieldsTests(unittest.TestCase):
    def test_dataclass_fields_in_declaration_order(self) -> None:
        described = fields.describe_fields(Reading)
        self.assertEqual(
            [(item.name, str(item.declared_type)) for item in described],
            [
                ("sensor_id", "integer(64)"),
                ("level", "integer(16)"),
                ("ratio", "floating(32)"),
                ("value", "floating(64)"),
                ("cost", "decimal"),
                ("ok", "boolean"),
                ("taken_at", "datetime"),
                ("cleared_at", "nullable(datetime)"),
                ("ref", "uuid"),
                ("link", "uri"),
                ("window", "duration"),
                ("retries", "nullable(integer(32))"),
            ],
        )

    def test_class_variables_are_not_fields(self) -> None:
        described = fields.describe_fields(Widget)
        self.assertEqual([item.name for item in described], ["name", "count"])

    def test_unsupported_annotations(self) -> None:
        for annotation in (list[str], dict, Union[int, str], bytes):
            with self.subTest(annotation=annotation):
                with self.assertRaises(fields.UnsupportedFieldTypeError):
                    fields.tag_for_annotation(annotation, "field")

    def test_coerce_shape_forms(self) -> None:
        from_mapping = fields.coerce_shape({"id": "int", "name": str})
        from_pairs = fields.coerce_shape([("id", fields.INT32), ("name", "string")])
        self.assertEqual(from_mapping, from_pairs)


if __name__ == "__main__":
    unittest.main()
