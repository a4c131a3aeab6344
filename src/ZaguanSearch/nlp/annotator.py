"""Linguistic annotation adapter.

Wraps a spaCy pipeline (tokenizer, POS tagger, NER) and NLTK's Spanish
Snowball stemmer into a single `annotate` call. Every output is computed over
the same spaCy tokenization, so token indices, tags, stems and entity spans
line up.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol, Sequence

from nltk.stem.snowball import SnowballStemmer

from ZaguanSearch.core.errors import ModelLoadError
from ZaguanSearch.core.models import EntitySpan, Token
from ZaguanSearch.utils.log import log

STEMMER_LANGUAGE = "spanish"


class TextAnnotator(Protocol):
    """Anything that turns raw text into aligned tokens and entity spans."""

    def annotate(self, text: str) -> tuple[tuple[Token, ...], tuple[EntitySpan, ...]]:
        """Annotate one text."""
        raise NotImplementedError


class Annotator:
    """spaCy + Snowball implementation of `TextAnnotator`.

    Args:
        nlp: Loaded spaCy `Language` (or any callable returning a doc with
            `pos_`-tagged tokens and `ents`).
        entity_labels: Entity labels to keep; empty keeps every entity.
        stemmer: Stemmer with a `stem(word)` method. Defaults to the Spanish
            Snowball stemmer.
    """

    def __init__(
        self,
        nlp: Any,
        *,
        entity_labels: Iterable[str] = (),
        stemmer: Any | None = None,
    ) -> None:
        self._nlp = nlp
        self._entity_labels = frozenset(label.upper() for label in entity_labels)
        self._stemmer = stemmer if stemmer is not None else SnowballStemmer(STEMMER_LANGUAGE)

    @classmethod
    def load(cls, model: str, *, entity_labels: Sequence[str] = ()) -> Annotator:
        """Load the spaCy pipeline named `model`.

        Raises:
            ModelLoadError: If spaCy or the model package cannot be loaded.
        """
        try:
            import spacy

            nlp = spacy.load(model)
        except (ImportError, OSError, ValueError) as e:
            raise ModelLoadError(f"Cannot load spaCy model {model!r}: {e}") from e
        log.info("Loaded spaCy model %s (pipes=%s)", model, ",".join(nlp.pipe_names))
        return cls(nlp, entity_labels=entity_labels)

    def annotate(self, text: str) -> tuple[tuple[Token, ...], tuple[EntitySpan, ...]]:
        doc = self._nlp(text)
        tokens = tuple(self._make_token(position, tok) for position, tok in enumerate(doc))
        spans = tuple(
            EntitySpan(start=ent.start, end=ent.end, label=ent.label_)
            for ent in doc.ents
            if not self._entity_labels or ent.label_.upper() in self._entity_labels
        )
        log.debug(
            "Annotated %d tokens, %d entities: %s",
            len(tokens),
            len(spans),
            " ".join(f"{t.norm}/{t.pos}/{t.stem}" for t in tokens),
        )
        return tokens, spans

    def _make_token(self, position: int, tok: Any) -> Token:
        norm = tok.text.lower()
        return Token(
            index=position,
            text=tok.text,
            norm=norm,
            stem=self._stemmer.stem(norm).lower(),
            pos=tok.pos_,
        )
