from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional


# Universal POS tags the synthesis rules look at.
NOUN: Final[str] = "NOUN"
ADP: Final[str] = "ADP"
NUM: Final[str] = "NUM"


@dataclass(frozen=True, slots=True)
class Token:
    """One annotated token of an information-need text.

    Attributes:
        index: 0-based position in the token sequence.
        text: Surface text as produced by the tokenizer.
        norm: Lowercased surface text.
        stem: Snowball stem of `norm`.
        pos: Universal POS tag (NOUN, ADP, NUM, PROPN, ...).
    """

    index: int
    text: str
    norm: str
    stem: str
    pos: str


@dataclass(frozen=True, slots=True)
class EntitySpan:
    """Half-open token range `[start, end)` of a named-entity mention."""

    start: int
    end: int
    label: Optional[str] = None

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"invalid entity span [{self.start}, {self.end})")

    def indices(self) -> range:
        return range(self.start, self.end)


@dataclass(frozen=True, slots=True)
class InformationNeed:
    """One (identifier, free text) pair read from the batch file."""

    identifier: str
    text: str
