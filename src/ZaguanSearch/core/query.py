from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence, Union


class FieldName(str, Enum):
    """Fixed field schema of the document index, in display order."""

    TITLE = "title"
    SUBJECT = "subject"
    DESCRIPTION = "description"
    CREATOR = "creator"
    CONTRIBUTOR = "contributor"
    PUBLISHER = "publisher"
    DATE = "date"
    TYPE = "type"
    LANGUAGE = "language"


class Occur(str, Enum):
    """Clause participation mode inside the combined boolean query."""

    SHOULD = "SHOULD"
    MUST = "MUST"


@dataclass(frozen=True, slots=True)
class RangeLiteral:
    """Lexicographic term range, used for year ranges on `date`.

    `upper` is None for an open-ended range (only a start year was found).
    """

    lower: str
    upper: Optional[str] = None
    include_lower: bool = True
    include_upper: bool = True

    def __post_init__(self) -> None:
        if self.upper is not None and self.lower > self.upper:
            raise ValueError(f"range lower bound {self.lower!r} exceeds upper bound {self.upper!r}")


Literal = Union[str, RangeLiteral]


@dataclass(frozen=True, slots=True)
class Clause:
    """A single field-scoped, weighted query condition.

    Attributes:
        field: Target index field.
        value: Plain term/phrase literal, or a `RangeLiteral`.
        occur: Participation mode; synthesis only emits SHOULD.
        boost: Positive relevance weight.
    """

    field: FieldName
    value: Literal
    occur: Occur = Occur.SHOULD
    boost: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "field", FieldName(self.field))
        if not (self.boost > 0):
            raise ValueError(f"clause boost must be positive, got {self.boost}")
        if isinstance(self.value, str) and not self.value:
            raise ValueError(f"clause value for {self.field.value} must not be empty")


@dataclass(frozen=True, slots=True)
class QueryAST:
    """Ordered clauses, combined as a disjunction.

    Order carries no meaning for matching; it is kept so that compiled
    queries and debug traces are reproducible.
    """

    clauses: Sequence[Clause] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "clauses", tuple(self.clauses))

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def __len__(self) -> int:
        return len(self.clauses)

    def is_empty(self) -> bool:
        return not self.clauses
