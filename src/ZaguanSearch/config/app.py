"""Application config orchestration and YAML loading entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from ZaguanSearch.config.index import IndexConfig, check_index, load_index
from ZaguanSearch.config.nlp import NlpConfig, check_nlp, load_nlp
from ZaguanSearch.config.runtime import RuntimeConfig, check_runtime, load_runtime
from ZaguanSearch.config.search import SearchConfig, check_search, load_search
from ZaguanSearch.config.synthesis import SynthesisConfig, check_synthesis, load_synthesis

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    index: IndexConfig
    nlp: NlpConfig
    synthesis: SynthesisConfig
    search: SearchConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse a normalized mapping into a validated `AppConfig`."""
    runtime = load_runtime(raw)
    index = load_index(raw)
    nlp = load_nlp(raw)
    synthesis = load_synthesis(raw)
    search = load_search(raw)

    check_runtime(runtime)
    check_index(index)
    check_nlp(nlp)
    check_synthesis(synthesis)
    check_search(search)

    return AppConfig(
        runtime=runtime,
        index=index,
        nlp=nlp,
        synthesis=synthesis,
        search=search,
    )


def load_config(path: Path) -> AppConfig:
    """Load one YAML config file as-is, without merging defaults."""
    return parse_config_dict(_read_yaml(path))


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load `config_path` deep-merged over the defaults file.

    Raises:
        ValueError: If either file is missing or not a YAML mapping.
    """
    merged = _read_yaml(default_path)
    if Path(config_path) != Path(default_path):
        merged = merge_config_dicts(merged, _read_yaml(config_path))
    return parse_config_dict(merged)


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse YAML text; an empty document is an empty mapping."""
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge `override` into `base`; nested sections merge key by key.

    Lists and scalars in `override` replace the base value, so an override
    of `index.fields` replaces the whole field list.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            value = merge_config_dicts(current, value)
        merged[key] = value
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ValueError(f"Config file not found: {path}") from e
    return parse_yaml(text)
