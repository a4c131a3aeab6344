"""Query synthesis engine.

Runs a single left-to-right pass over an annotated token stream. At each
position the first matching rule fires; it may emit clauses and consume
following tokens. The cursor only moves forward, so every token is examined
as a trigger at most once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from ZaguanSearch.core.models import EntitySpan, Token
from ZaguanSearch.core.query import Clause, QueryAST
from ZaguanSearch.synthesis.rules import DEFAULT_RULES, Rule, SynthesisContext
from ZaguanSearch.utils.log import log


def synthesize(
    tokens: Sequence[Token],
    entity_spans: Sequence[EntitySpan],
    *,
    reference_year: int,
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> QueryAST:
    """Build a `QueryAST` from annotated tokens.

    Args:
        tokens: Annotated tokens in text order.
        entity_spans: Named-entity spans over `tokens`.
        reference_year: Year that relative expressions ("últimos N años")
            count back from.
        rules: Rules in priority order.

    Returns:
        The synthesized query; empty when no rule fired.

    Raises:
        RuntimeError: If a rule moves the cursor backwards.
    """
    ctx = SynthesisContext(tokens=tuple(tokens), spans=tuple(entity_spans), reference_year=reference_year)
    clauses: list[Clause] = []

    i = 0
    while i < len(ctx.tokens):
        for rule in rules:
            if not rule.matches(ctx, i):
                continue
            emitted, cursor = rule.apply(ctx, i)
            if cursor < i:
                raise RuntimeError(f"rule {rule.name} moved cursor backwards ({i} -> {cursor})")
            log.debug("rule=%s at=%d token=%r consumed=%d clauses=%d", rule.name, i, ctx.tokens[i].norm, cursor - i, len(emitted))
            clauses.extend(emitted)
            i = cursor
            break
        i += 1

    return QueryAST(clauses)


@dataclass(frozen=True, slots=True)
class QuerySynthesizer:
    """`synthesize` bound to a reference year and rule set."""

    reference_year: int = field(default_factory=lambda: date.today().year)
    rules: Sequence[Rule] = DEFAULT_RULES

    def synthesize(self, tokens: Sequence[Token], entity_spans: Sequence[EntitySpan]) -> QueryAST:
        return synthesize(tokens, entity_spans, reference_year=self.reference_year, rules=self.rules)
