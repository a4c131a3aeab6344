"""Search domain configuration: paging and hit rendering."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from ZaguanSearch.config.common import (
    expect_bool,
    expect_positive_int,
    get_section,
)


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Presentation settings of interactive searches.

    Attributes:
        hits_per_page: Hits shown per page.
        prefetch_pages: Pages collected by the first search before asking
            to collect more.
        raw: Print `doc=<n> score=<s>` instead of document names.
    """

    hits_per_page: int = 10
    prefetch_pages: int = 5
    raw: bool = False

    def with_overrides(self, *, hits_per_page: int | None = None, raw: bool | None = None) -> SearchConfig:
        """Return a copy with CLI overrides applied (None keeps the value)."""
        return replace(
            self,
            hits_per_page=self.hits_per_page if hits_per_page is None else hits_per_page,
            raw=self.raw if raw is None else raw,
        )


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load the optional `search` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If page sizes are not positive.
    """
    section = get_section(raw, "search", required=False)
    defaults = SearchConfig()
    return SearchConfig(
        hits_per_page=expect_positive_int(section.get("hits_per_page", defaults.hits_per_page), "search.hits_per_page"),
        prefetch_pages=expect_positive_int(
            section.get("prefetch_pages", defaults.prefetch_pages),
            "search.prefetch_pages",
        ),
        raw=expect_bool(section.get("raw", defaults.raw), "search.raw"),
    )


def check_search(config: SearchConfig) -> None:
    if config.hits_per_page <= 0:
        raise ValueError("search.hits_per_page must be positive")
    if config.prefetch_pages <= 0:
        raise ValueError("search.prefetch_pages must be positive")
