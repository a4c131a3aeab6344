"""Rule-based translation of annotated Spanish text into a `QueryAST`."""

from __future__ import annotations

from ZaguanSearch.synthesis.engine import QuerySynthesizer, synthesize
from ZaguanSearch.synthesis.rules import DEFAULT_RULES, Rule, SynthesisContext

__all__ = [
    "DEFAULT_RULES",
    "QuerySynthesizer",
    "Rule",
    "SynthesisContext",
    "synthesize",
]
