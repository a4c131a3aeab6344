"""Linguistic annotation of information-need texts."""

from __future__ import annotations

from ZaguanSearch.nlp.annotator import Annotator, TextAnnotator

__all__ = ["Annotator", "TextAnnotator"]
