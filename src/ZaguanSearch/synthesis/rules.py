"""Query-synthesis rules for Spanish information needs.

Each rule is a pure `(matches, apply)` pair over a `SynthesisContext`:

- `matches(ctx, i)` decides whether the rule fires at token `i`;
- `apply(ctx, i)` returns the emitted clauses and the index of the last token
  it consumed (never less than `i`).

`DEFAULT_RULES` lists them in priority order; the engine fires the first
matching rule at each position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final, Sequence

from ZaguanSearch.core.models import ADP, NOUN, NUM, EntitySpan, Token
from ZaguanSearch.core.query import Clause, FieldName, Occur, RangeLiteral

AGENT_BOOST: Final[float] = 15.0
PUBLISHER_BOOST: Final[float] = 15.0
TOPIC_SUBJECT_BOOST: Final[float] = 15.0
TOPIC_TEXT_BOOST: Final[float] = 10.0

TYPE_THESIS: Final[str] = "TESIS"
TYPE_BACHELOR_WORK: Final[str] = "TAZ-TFG"
TYPE_MASTER_WORK: Final[str] = "TAZ-TFM"

# Window after "trabajo" searched for the degree keyword.
DEGREE_WINDOW: Final[int] = 4
# Maximum number of nouns taken after "departamento de".
DEPARTMENT_MAX_NOUNS: Final[int] = 3


@dataclass(frozen=True, slots=True)
class SynthesisContext:
    """Immutable input of one synthesis pass."""

    tokens: tuple[Token, ...]
    spans: tuple[EntitySpan, ...]
    reference_year: int

    def at(self, i: int) -> Token | None:
        if 0 <= i < len(self.tokens):
            return self.tokens[i]
        return None

    def norm_at(self, i: int) -> str | None:
        tok = self.at(i)
        return tok.norm if tok is not None else None

    def pos_at(self, i: int) -> str | None:
        tok = self.at(i)
        return tok.pos if tok is not None else None


RuleResult = tuple[list[Clause], int]
Predicate = Callable[[SynthesisContext, int], bool]
Handler = Callable[[SynthesisContext, int], RuleResult]


@dataclass(frozen=True, slots=True)
class Rule:
    name: str
    matches: Predicate
    apply: Handler


def _stem_is(stem: str) -> Predicate:
    def predicate(ctx: SynthesisContext, i: int) -> bool:
        return ctx.tokens[i].stem == stem

    return predicate


def _norm_is(norm: str) -> Predicate:
    def predicate(ctx: SynthesisContext, i: int) -> bool:
        return ctx.tokens[i].norm == norm

    return predicate


def _should(field: FieldName, value: str | RangeLiteral, boost: float = 1.0) -> Clause:
    return Clause(field=field, value=value, occur=Occur.SHOULD, boost=boost)


# 1-2. Agents named after "realizado por" / "dirigido por".


def _agent_handler(field: FieldName) -> Handler:
    def handler(ctx: SynthesisContext, i: int) -> RuleResult:
        clauses: list[Clause] = []
        for span in ctx.spans:
            if span.start <= i:
                continue
            for j in span.indices():
                tok = ctx.at(j)
                if tok is not None:
                    clauses.append(_should(field, tok.norm, AGENT_BOOST))
        return clauses, i

    return handler


# 3. "entre 1990 y 2000", "de 2010 a 2015".


def _matches_year_range(ctx: SynthesisContext, i: int) -> bool:
    tok = ctx.tokens[i]
    return tok.pos == ADP and tok.norm in ("entre", "de") and ctx.pos_at(i + 1) == NUM


def _apply_year_range(ctx: SynthesisContext, i: int) -> RuleResult:
    # The predicate guarantees a NUM at i + 1, so `years` is never empty.
    years = [j for j in range(i, len(ctx.tokens)) if ctx.tokens[j].pos == NUM][:2]
    start_year = ctx.tokens[years[0]].norm
    if len(years) < 2:
        return [_should(FieldName.DATE, RangeLiteral(start_year))], len(ctx.tokens) - 1

    end_year = ctx.tokens[years[1]].norm
    if start_year > end_year:
        start_year, end_year = end_year, start_year
    return [_should(FieldName.DATE, RangeLiteral(start_year, end_year))], years[1]


# 4. "en inglés" -> language prefix.


def _matches_language(ctx: SynthesisContext, i: int) -> bool:
    tok = ctx.tokens[i]
    return tok.pos == ADP and tok.norm == "en"


def _apply_language(ctx: SynthesisContext, i: int) -> RuleResult:
    following = ctx.at(i + 1)
    if following is None:
        return [], i
    return [_should(FieldName.LANGUAGE, following.norm[:2].lower())], i + 1


# 5-6. Document types.


def _apply_thesis(ctx: SynthesisContext, i: int) -> RuleResult:
    return [_should(FieldName.TYPE, TYPE_THESIS)], i


def _apply_degree_work(ctx: SynthesisContext, i: int) -> RuleResult:
    last = min(i + DEGREE_WINDOW, len(ctx.tokens) - 1)
    for j in range(i + 1, last + 1):
        norm = ctx.tokens[j].norm
        if norm == "grado":
            return [_should(FieldName.TYPE, TYPE_BACHELOR_WORK)], j
        if norm == "máster":
            return [_should(FieldName.TYPE, TYPE_MASTER_WORK)], j
    return [
        _should(FieldName.TYPE, TYPE_BACHELOR_WORK),
        _should(FieldName.TYPE, TYPE_MASTER_WORK),
    ], i


# 7. "últimos 5 años".


def _matches_recent_years(ctx: SynthesisContext, i: int) -> bool:
    if ctx.tokens[i].norm != "últimos":
        return False
    amount = ctx.at(i + 1)
    return (
        amount is not None
        and amount.pos == NUM
        and amount.norm.isdecimal()
        and ctx.norm_at(i + 2) == "años"
    )


def _apply_recent_years(ctx: SynthesisContext, i: int) -> RuleResult:
    years = int(ctx.tokens[i + 1].norm)
    start_year = ctx.reference_year - years
    value = RangeLiteral(str(start_year), str(ctx.reference_year))
    return [_should(FieldName.DATE, value)], i + 2


# 8. "departamento de informática" -> publisher.


def _matches_department(ctx: SynthesisContext, i: int) -> bool:
    return ctx.tokens[i].norm == "departamento" and ctx.norm_at(i + 1) == "de"


def _apply_department(ctx: SynthesisContext, i: int) -> RuleResult:
    words: list[str] = []
    cursor = i
    for j in range(i + 2, min(i + 2 + DEPARTMENT_MAX_NOUNS, len(ctx.tokens))):
        if ctx.tokens[j].pos != NOUN:
            break
        words.append(ctx.tokens[j].norm)
        cursor = j
    if not words:
        return [], i
    return [_should(FieldName.PUBLISHER, " ".join(words), PUBLISHER_BOOST)], cursor


# 9. "campo de la robótica" -> subject-weighted topic.


def _apply_topic(ctx: SynthesisContext, i: int) -> RuleResult:
    for j in range(i + 1, len(ctx.tokens)):
        if ctx.tokens[j].pos == NOUN:
            term = ctx.tokens[j].norm
            return [
                _should(FieldName.SUBJECT, term, TOPIC_SUBJECT_BOOST),
                _should(FieldName.TITLE, term, TOPIC_TEXT_BOOST),
                _should(FieldName.DESCRIPTION, term, TOPIC_TEXT_BOOST),
            ], j
    return [], i


# 10. Any other noun.


def _matches_noun(ctx: SynthesisContext, i: int) -> bool:
    return ctx.tokens[i].pos == NOUN


def _apply_noun(ctx: SynthesisContext, i: int) -> RuleResult:
    tok = ctx.tokens[i]
    if tok.stem == "sigl" and i + 1 < len(ctx.tokens):
        return [_should(FieldName.DESCRIPTION, ctx.tokens[i + 1].norm)], i + 1
    return [
        _should(FieldName.DESCRIPTION, tok.norm),
        _should(FieldName.SUBJECT, tok.norm),
        _should(FieldName.TITLE, tok.norm),
    ], i


DEFAULT_RULES: Sequence[Rule] = (
    Rule("creator", _stem_is("realiz"), _agent_handler(FieldName.CREATOR)),
    Rule("contributor", _stem_is("dirig"), _agent_handler(FieldName.CONTRIBUTOR)),
    Rule("year-range", _matches_year_range, _apply_year_range),
    Rule("language", _matches_language, _apply_language),
    Rule("thesis", _stem_is("tesis"), _apply_thesis),
    Rule("degree-work", _stem_is("trabaj"), _apply_degree_work),
    Rule("recent-years", _matches_recent_years, _apply_recent_years),
    Rule("department", _matches_department, _apply_department),
    Rule("topic", _norm_is("campo"), _apply_topic),
    Rule("noun", _matches_noun, _apply_noun),
)
