"""Whoosh schema for the document index.

The text fields of the catalogue records are analyzed in Spanish; agent names
keep every token; `date`, `type` and `language` are matched as exact terms.
"""

from __future__ import annotations

from whoosh.analysis import LanguageAnalyzer, StandardAnalyzer
from whoosh.fields import ID, KEYWORD, TEXT, Schema

from ZaguanSearch.core.query import FieldName

PATH_FIELD = "path"


def build_schema() -> Schema:
    """Return the index schema: every `FieldName` plus the stored `path`."""
    spanish = LanguageAnalyzer("es")
    names = StandardAnalyzer(stoplist=None)
    return Schema(
        **{
            PATH_FIELD: ID(stored=True, unique=True),
            FieldName.TITLE.value: TEXT(analyzer=spanish, stored=True),
            FieldName.SUBJECT.value: TEXT(analyzer=spanish, stored=True),
            FieldName.DESCRIPTION.value: TEXT(analyzer=spanish, stored=True),
            FieldName.CREATOR.value: TEXT(analyzer=names, stored=True),
            FieldName.CONTRIBUTOR.value: TEXT(analyzer=names, stored=True),
            FieldName.PUBLISHER.value: TEXT(analyzer=spanish, stored=True),
            FieldName.DATE.value: ID(stored=True),
            FieldName.TYPE.value: KEYWORD(stored=True, scorable=True),
            FieldName.LANGUAGE.value: KEYWORD(stored=True, lowercase=True),
        }
    )


def is_exact_field(schema: Schema, field: str) -> bool:
    """Whether `field` is indexed as whole, unanalyzed terms."""
    return isinstance(schema[field], (ID, KEYWORD))
