"""Name-driven resolution of per-field value strategies.

A field's lowercased name is matched against ``PATTERN_RULES`` in order and
the first rule whose name predicate matches decides the field. A matched rule
whose values do not fit the declared type hands the field to the type
fallback table instead of leaving it unpopulated. Fields no rule matches go
straight to the type fallback.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Callable, Optional
from urllib.parse import urlparse

import numpy as np
from faker import Faker

from .config import PAST_WINDOW, GeneratorConfig
from .fields import (
    BOOLEAN,
    DATETIME,
    DECIMAL,
    DURATION,
    FLOATING,
    INTEGER,
    STRING,
    URI,
    UUID_KIND,
    TypeTag,
)
from .providers import Money

logger = logging.getLogger(__name__)

Producer = Callable[[Faker], Any]
Binder = Callable[[TypeTag, GeneratorConfig], Optional[Producer]]


@dataclass(frozen=True, slots=True)
class Strategy:
    """A value producer bound to one field for one generation call."""

    rule: str
    produce: Producer

    def __call__(self, faker: Faker) -> Any:
        return self.produce(faker)


@dataclass(frozen=True, slots=True)
class PatternRule:
    name: str
    matches: Callable[[str], bool]
    bind: Binder


def _exact(*names: str) -> Callable[[str], bool]:
    options = frozenset(names)
    return lambda name: name in options


def _contains(fragment: str) -> Callable[[str], bool]:
    return lambda name: fragment in name


def _prefix(*prefixes: str) -> Callable[[str], bool]:
    return lambda name: name.startswith(prefixes)


def _suffix(fragment: str) -> Callable[[str], bool]:
    return lambda name: name.endswith(fragment) and name != fragment


def _cents(faker: Faker, low: int, high: int) -> Decimal:
    return Decimal(faker.random_int(low * 100, high * 100)).scaleb(-2)


def _past(anchor: datetime) -> Producer:
    start = anchor - PAST_WINDOW

    def produce(faker: Faker) -> datetime:
        return faker.date_time_between(start_date=start, end_date=anchor, tzinfo=anchor.tzinfo)

    return produce


def _state(faker: Faker) -> str:
    provider = getattr(faker, "administrative_unit", None) or faker.state
    return provider()


def _strings(provider: Producer) -> Binder:
    def bind(tag: TypeTag, config: GeneratorConfig) -> Optional[Producer]:
        return provider if tag.base.kind == STRING else None

    return bind


def _integers(low: int, high: int) -> Binder:
    def bind(tag: TypeTag, config: GeneratorConfig) -> Optional[Producer]:
        if tag.base.kind != INTEGER:
            return None
        return lambda faker: faker.random_int(low, high)

    return bind


def _identity(tag: TypeTag, config: GeneratorConfig) -> Optional[Producer]:
    kind = tag.base.kind
    if kind == UUID_KIND:
        return lambda faker: faker.uuid4(cast_to=None)
    if kind == INTEGER:
        counter = itertools.count(1)
        return lambda faker: next(counter)
    return None


def _amount(tag: TypeTag, config: GeneratorConfig) -> Optional[Producer]:
    if tag.base.kind != DECIMAL:
        return None
    return lambda faker: _cents(faker, 10, 1000)


def _price(tag: TypeTag, config: GeneratorConfig) -> Optional[Producer]:
    symbol = config.currency_symbol
    kind = tag.base.kind
    if kind == STRING:
        return lambda faker: f"{symbol}{_cents(faker, 100, 1000)}"
    if kind == DECIMAL:
        return lambda faker: Money(_cents(faker, 100, 1000), symbol)
    return None


def _booleans(tag: TypeTag, config: GeneratorConfig) -> Optional[Producer]:
    if tag.base.kind != BOOLEAN:
        return None
    return lambda faker: faker.boolean()


def _dates(tag: TypeTag, config: GeneratorConfig) -> Optional[Producer]:
    if tag.base.kind != DATETIME:
        return None
    return _past(config.anchor())


PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule("id", _exact("id"), _identity),
    PatternRule("foreign_key", _suffix("id"), _integers(1, 5)),
    PatternRule("product", _exact("item", "product"), _strings(lambda faker: faker.product())),
    PatternRule(
        "product_name",
        _exact("itemname", "productname"),
        _strings(lambda faker: faker.product_name()),
    ),
    PatternRule("color", _contains("color"), _strings(lambda faker: faker.color_name())),
    PatternRule("quantity", _exact("qty", "quantity"), _integers(1, 10)),
    PatternRule("amount", _exact("amnt", "amount"), _amount),
    PatternRule("price", _exact("price"), _price),
    PatternRule("full_name", _exact("fullname", "name"), _strings(lambda faker: faker.name())),
    PatternRule("username", _exact("username"), _strings(lambda faker: faker.user_name())),
    PatternRule("password", _exact("password"), _strings(lambda faker: faker.password())),
    PatternRule("first_name", _exact("fname", "firstname"), _strings(lambda faker: faker.first_name())),
    PatternRule("last_name", _exact("lname", "lastname"), _strings(lambda faker: faker.last_name())),
    PatternRule("email", _exact("email"), _strings(lambda faker: faker.email())),
    PatternRule(
        "phone",
        _exact("phone", "contactno", "cp", "contactnumber", "phonenumber"),
        _strings(lambda faker: faker.phone_number()),
    ),
    PatternRule(
        "address",
        _exact("address"),
        _strings(lambda faker: faker.address().replace("\n", ", ")),
    ),
    PatternRule(
        "street_address",
        _exact("streetaddress"),
        _strings(lambda faker: faker.street_address()),
    ),
    PatternRule("city", _exact("city"), _strings(lambda faker: faker.city())),
    PatternRule("state", _exact("state"), _strings(_state)),
    PatternRule("zipcode", _exact("zipcode"), _strings(lambda faker: faker.postcode())),
    PatternRule("country", _exact("country"), _strings(lambda faker: faker.country())),
    PatternRule("country_code", _exact("countrycode"), _strings(lambda faker: faker.country_code())),
    PatternRule("score", _contains("score"), _integers(30, 50)),
    PatternRule("grade", _contains("grade"), _integers(65, 100)),
    PatternRule(
        "body",
        _exact("body", "description"),
        _strings(lambda faker: "\n\n".join(faker.paragraphs(nb=3))),
    ),
    PatternRule("title", _exact("title"), _strings(lambda faker: faker.word())),
    PatternRule("flag", _prefix("has", "is"), _booleans),
    PatternRule("gender", _exact("gender"), _integers(1, 2)),
    PatternRule("date", _contains("date"), _dates),
)


def _fallback_integer(tag: TypeTag, config: GeneratorConfig) -> Producer:
    if tag.width == 64:
        return lambda faker: faker.random_int(1, 10000)
    if tag.width == 16:
        return lambda faker: np.int16(faker.random_int(1, 100))
    return lambda faker: faker.random_int(1, 100)


def _fallback_floating(tag: TypeTag, config: GeneratorConfig) -> Producer:
    if tag.width == 32:
        return lambda faker: float(np.float32(faker.random.uniform(1, 100)))
    return lambda faker: faker.random.uniform(1, 100)


_FALLBACKS: dict[str, Callable[[TypeTag, GeneratorConfig], Producer]] = {
    STRING: lambda tag, config: lambda faker: faker.word(),
    INTEGER: _fallback_integer,
    FLOATING: _fallback_floating,
    DECIMAL: lambda tag, config: lambda faker: Decimal(repr(faker.random.uniform(1, 100))),
    BOOLEAN: lambda tag, config: lambda faker: faker.boolean(),
    DATETIME: lambda tag, config: _past(config.anchor()),
    UUID_KIND: lambda tag, config: lambda faker: faker.uuid4(cast_to=None),
    URI: lambda tag, config: lambda faker: urlparse(faker.url()),
    DURATION: lambda tag, config: lambda faker: timedelta(minutes=faker.random_int(1, 500)),
}


def fallback(declared_type: TypeTag, config: Optional[GeneratorConfig] = None) -> Strategy:
    """Type-driven strategy; nullable types get a present value of the inner type."""

    base = declared_type.base
    factory = _FALLBACKS[base.kind]
    return Strategy(f"fallback:{base}", factory(base, config or GeneratorConfig()))


def resolve(
    field_name: str,
    declared_type: TypeTag,
    config: Optional[GeneratorConfig] = None,
) -> Strategy:
    """Select the value strategy for one field."""

    active_config = config or GeneratorConfig()
    key = field_name.lower()
    for rule in PATTERN_RULES:
        if not rule.matches(key):
            continue
        produce = rule.bind(declared_type, active_config)
        if produce is None:
            logger.debug(
                "Field %r matched rule %r but %s does not align; using type fallback",
                field_name,
                rule.name,
                declared_type,
            )
            return fallback(declared_type, active_config)
        logger.debug("Field %r resolved by rule %r", field_name, rule.name)
        return Strategy(rule.name, produce)

    logger.debug("Field %r matched no name rule; using type fallback", field_name)
    return fallback(declared_type, active_config)
