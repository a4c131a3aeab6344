"""Whoosh query compiler.

Compiles the internal `QueryAST` into an executable Whoosh query.

Rules
- A `RangeLiteral` becomes a `TermRange` on its field.
- Exact-term fields (ID/KEYWORD: date, type, language) get a plain `Term`.
- Text fields are parsed by a per-field `QueryParser` so the literal goes
  through the same analyzer as the indexed text. A literal with several words
  is compiled as a phrase.
- Each compiled clause keeps its AST boost. SHOULD clauses are OR-ed; MUST
  clauses are AND-ed; with both present the SHOULD group only adds score.
"""

from __future__ import annotations

import re
from typing import Iterable

from whoosh.fields import Schema
from whoosh.qparser import MultifieldParser, OrGroup, QueryParser
from whoosh.qparser.common import QueryParserError
from whoosh.query import And, AndMaybe, NullQuery, Or, Query, Term, TermRange

from ZaguanSearch.core.errors import ClauseBuildError
from ZaguanSearch.core.query import Clause, FieldName, Literal, Occur, QueryAST, RangeLiteral
from ZaguanSearch.backend.schema import is_exact_field
from ZaguanSearch.utils.log import log


_RE_RESERVED = re.compile(r"[()\[\]{}\"^~*?:<>\\]")
_RE_WS = re.compile(r"\s+")


class FieldClauseCompiler:
    """Compile one `field:literal` pair into a Whoosh query.

    Args:
        schema: Index schema providing per-field analyzers.
        fields: Fields that queries may target.
    """

    def __init__(self, schema: Schema, fields: Iterable[str]) -> None:
        self._schema = schema
        self._fields: tuple[str, ...] = tuple(FieldName(f).value for f in fields)
        self._parsers: dict[str, QueryParser] = {}

    @property
    def fields(self) -> tuple[str, ...]:
        return self._fields

    @property
    def schema(self) -> Schema:
        return self._schema

    def compile(self, field: str, literal: Literal) -> Query | None:
        """Compile a literal for `field`.

        Returns:
            The Whoosh query, or None when the field analyzer drops every
            word of the literal (e.g. a stop word).

        Raises:
            ClauseBuildError: If the field is not queryable or the literal
                cannot be expressed in the query grammar.
        """
        field = FieldName(field).value
        if field not in self._fields or field not in self._schema:
            raise ClauseBuildError(field, literal, "field is not part of the queryable schema")

        if isinstance(literal, RangeLiteral):
            return TermRange(
                field,
                literal.lower,
                literal.upper,
                startexcl=not literal.include_lower,
                endexcl=not literal.include_upper,
            )

        text = _RE_WS.sub(" ", literal).strip()
        if not text:
            raise ClauseBuildError(field, literal, "empty literal")
        if _RE_RESERVED.search(text):
            raise ClauseBuildError(field, literal, "literal contains query syntax characters")

        if is_exact_field(self._schema, field):
            return Term(field, text)

        source = f'"{text}"' if " " in text else text
        try:
            parsed = self._parser(field).parse(source)
        except QueryParserError as e:
            raise ClauseBuildError(field, literal, str(e)) from e
        if parsed is None or parsed is NullQuery:
            log.debug("Literal %r has no indexable terms in %s", text, field)
            return None
        return parsed

    def _parser(self, field: str) -> QueryParser:
        parser = self._parsers.get(field)
        if parser is None:
            parser = QueryParser(field, schema=self._schema)
            self._parsers[field] = parser
        return parser


class QueryCompiler:
    """Compile a `QueryAST` into one boolean Whoosh query."""

    def __init__(self, field_compiler: FieldClauseCompiler) -> None:
        self._field_compiler = field_compiler

    def compile(self, ast: QueryAST) -> Query:
        """Compile every clause, preserving AST order.

        Raises:
            ClauseBuildError: If any clause literal cannot be compiled.
        """
        should: list[Query] = []
        must: list[Query] = []
        for clause in ast:
            compiled = self._compile_clause(clause)
            if compiled is None:
                continue
            (must if clause.occur is Occur.MUST else should).append(compiled)

        if must and should:
            query: Query = AndMaybe(And(must), Or(should))
        elif must:
            query = And(must)
        else:
            query = Or(should)
        log.debug("Compiled query: %s", query)
        return query

    def parse_query_string(self, text: str) -> Query:
        """Parse raw Whoosh query syntax against every queryable field.

        Raises:
            ClauseBuildError: If the parser rejects the text.
        """
        parser = MultifieldParser(list(self._field_compiler.fields), schema=self._field_compiler.schema, group=OrGroup)
        try:
            return parser.parse(text)
        except QueryParserError as e:
            raise ClauseBuildError("*", text, str(e)) from e

    def _compile_clause(self, clause: Clause) -> Query | None:
        compiled = self._field_compiler.compile(clause.field.value, clause.value)
        if compiled is None:
            return None
        if clause.boost != 1.0:
            compiled = compiled.with_boost(clause.boost)
        return compiled
