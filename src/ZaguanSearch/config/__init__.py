"""Public configuration API for ZaguanSearch."""

from __future__ import annotations

from ZaguanSearch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from ZaguanSearch.config.index import IndexConfig
from ZaguanSearch.config.nlp import NlpConfig
from ZaguanSearch.config.runtime import RuntimeConfig
from ZaguanSearch.config.search import SearchConfig
from ZaguanSearch.config.synthesis import SynthesisConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    "IndexConfig",
    "NlpConfig",
    "RuntimeConfig",
    "SearchConfig",
    "SynthesisConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
