"""Index domain configuration: where the index lives and which fields to query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ZaguanSearch.config.common import (
    expect_str,
    expect_str_list,
    get_required_value,
    get_section,
)
from ZaguanSearch.core.query import FieldName

_ALLOWED_FIELDS = tuple(f.value for f in FieldName)


@dataclass(frozen=True, slots=True)
class IndexConfig:
    """Index location and the immutable queryable field set."""

    dir: str
    fields: tuple[str, ...] = _ALLOWED_FIELDS


def load_index(raw: Mapping[str, Any]) -> IndexConfig:
    """Load the `index` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If `index.dir` is missing.
    """
    section = get_section(raw, "index", required=True)
    fields: tuple[str, ...] = _ALLOWED_FIELDS
    if "fields" in section:
        fields = _parse_fields(section["fields"])
    return IndexConfig(
        dir=expect_str(get_required_value(section, "dir", "index.dir"), "index.dir"),
        fields=fields,
    )


def check_index(config: IndexConfig) -> None:
    if not config.dir.strip():
        raise ValueError("index.dir must not be empty")
    if not config.fields:
        raise ValueError("index.fields must include at least one field")


def _parse_fields(value: Any) -> tuple[str, ...]:
    """Normalize field names, keeping configured order and dropping repeats.

    Raises:
        ValueError: If a name is not part of the fixed field schema.
    """
    out: list[str] = []
    for idx, item in enumerate(expect_str_list(value, "index.fields")):
        name = item.strip().lower()
        if name not in _ALLOWED_FIELDS:
            raise ValueError(f"index.fields[{idx}] has unknown field: {item}")
        if name not in out:
            out.append(name)
    return tuple(out)
