"""Synthesis domain configuration: the reference date for relative years."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from dateutil import parser as dt_parser

from ZaguanSearch.config.common import get_section

_MIN_YEAR = 1000
_MAX_YEAR = 9999


@dataclass(frozen=True, slots=True)
class SynthesisConfig:
    """Settings of the query-synthesis pass.

    Attributes:
        reference_year: Year that "últimos N años" counts back from.
    """

    reference_year: int


def load_synthesis(raw: Mapping[str, Any]) -> SynthesisConfig:
    """Load the optional `synthesis` section.

    `synthesis.reference_date` may be a year (int), a date string, or null
    for the current year.

    Raises:
        TypeError: If the value is neither an int, a string nor null.
        ValueError: If the string is not a recognizable date.
    """
    section = get_section(raw, "synthesis", required=False)
    return SynthesisConfig(reference_year=_parse_reference_year(section.get("reference_date")))


def check_synthesis(config: SynthesisConfig) -> None:
    if not _MIN_YEAR <= config.reference_year <= _MAX_YEAR:
        raise ValueError("synthesis.reference_date must resolve to a four-digit year")


def _parse_reference_year(value: Any) -> int:
    if value is None:
        return date.today().year
    if isinstance(value, date):
        # YAML turns unquoted ISO dates into date objects.
        return value.year
    if isinstance(value, bool):
        raise TypeError("synthesis.reference_date must be a year or a date string")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return dt_parser.parse(value).year
        except (ValueError, OverflowError) as e:
            raise ValueError(f"synthesis.reference_date is not a valid date: {value}") from e
    raise TypeError("synthesis.reference_date must be a year or a date string")
