"""Generation configuration and the per-call value provider."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional

import yaml
from faker import Faker
from faker.config import AVAILABLE_LOCALES

from .providers import CommerceProvider

DEFAULT_SEED = 123
DEFAULT_LOCALE = "en"
DEFAULT_CURRENCY_SYMBOL = "$"

PAST_WINDOW = timedelta(days=365)
DEFAULT_REFERENCE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


class ConfigError(ValueError):
    """Raised when a configuration file cannot be applied."""


@dataclass(slots=True)
class GeneratorConfig:
    """Configuration for deterministic record generation."""

    seed: int = DEFAULT_SEED
    locale: str = DEFAULT_LOCALE
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    reference_time: Optional[datetime] = None

    def with_overrides(self, **values: Any) -> "GeneratorConfig":
        """Return a copy with every non-``None`` value applied."""

        changes = {key: value for key, value in values.items() if value is not None}
        return dataclasses.replace(self, **changes)

    def faker(self) -> Faker:
        """Create a Faker instance seeded for a single generation call."""

        faker = Faker(faker_locale(self.locale))
        faker.add_provider(CommerceProvider)
        faker.seed_instance(self.seed)
        return faker

    def anchor(self) -> datetime:
        """Upper bound for generated past dates."""

        if self.reference_time is not None:
            return self.reference_time
        return DEFAULT_REFERENCE_TIME


def faker_locale(tag: str) -> str:
    """Map a BCP-47-ish tag (``en``, ``en-US``, ``fr_FR``) onto a Faker locale.

    Tags Faker does not know are returned as-is so Faker reports them.
    """

    candidate = tag.strip().replace("-", "_")
    if "_" in candidate:
        language, _, region = candidate.partition("_")
        candidate = f"{language.lower()}_{region.upper()}"
        return candidate

    language = candidate.lower()
    preferred = ["en_US"] if language == "en" else [f"{language}_{language.upper()}"]
    preferred.extend(sorted(name for name in AVAILABLE_LOCALES if name.startswith(f"{language}_")))
    for name in preferred:
        if name in AVAILABLE_LOCALES:
            return name
    return candidate


def load_config(path: Path, base: Optional[GeneratorConfig] = None) -> GeneratorConfig:
    """Load configuration overrides from a YAML mapping."""

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    known = {item.name for item in dataclasses.fields(GeneratorConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    values = dict(data)
    if "seed" in values and not isinstance(values["seed"], int):
        raise ConfigError("seed must be an integer")
    reference = values.get("reference_time")
    if isinstance(reference, str):
        if reference.endswith("Z"):
            reference = reference[:-1] + "+00:00"
        try:
            values["reference_time"] = datetime.fromisoformat(reference)
        except ValueError as exc:
            raise ConfigError(f"reference_time is not ISO-8601: {reference}") from exc

    return (base or GeneratorConfig()).with_overrides(**values)
