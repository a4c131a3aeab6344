"""NLP domain configuration: spaCy model selection and entity filtering."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from ZaguanSearch.config.common import (
    expect_str,
    expect_str_list,
    get_required_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class NlpConfig:
    """Linguistic model settings.

    Attributes:
        model: spaCy pipeline package or path, after the env override.
        model_env: Environment variable that overrides `model` when set.
        entity_labels: Entity labels kept as agent spans; empty keeps all.
    """

    model: str
    model_env: str | None
    entity_labels: tuple[str, ...]


def load_nlp(raw: Mapping[str, Any]) -> NlpConfig:
    """Load the `nlp` section and apply the environment override."""
    section = get_section(raw, "nlp", required=True)
    model = expect_str(get_required_value(section, "model", "nlp.model"), "nlp.model").strip()

    model_env = section.get("model_env")
    if model_env is not None:
        model_env = expect_str(model_env, "nlp.model_env").strip() or None
    if model_env:
        model = _load_model_from_env(model_env) or model

    labels = expect_str_list(section.get("entity_labels", []), "nlp.entity_labels")
    return NlpConfig(
        model=model,
        model_env=model_env,
        entity_labels=tuple(label.strip().upper() for label in labels if label.strip()),
    )


def check_nlp(config: NlpConfig) -> None:
    if not config.model:
        raise ValueError("nlp.model must not be empty")


def _load_model_from_env(model_env: str) -> str:
    return os.getenv(model_env, "").strip()
