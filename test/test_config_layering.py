"""Tests for layered config parsing and validation."""

import os
import sys
import unittest
from copy import deepcopy
from datetime import date
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ZaguanSearch.config import parse_config_dict


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "index": {"dir": "index", "fields": ["title", "subject", "description", "type"]},
        "nlp": {"model": "es_core_news_sm", "model_env": "ZAGUAN_SPACY_MODEL", "entity_labels": ["per"]},
        "synthesis": {"reference_date": 2022},
        "search": {"hits_per_page": 10, "prefetch_pages": 5, "raw": False},
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.index.dir, "index")
        self.assertEqual(cfg.index.fields, ("title", "subject", "description", "type"))
        self.assertEqual(cfg.nlp.model, "es_core_news_sm")
        self.assertEqual(cfg.nlp.entity_labels, ("PER",))
        self.assertEqual(cfg.synthesis.reference_year, 2022)
        self.assertEqual(cfg.search.hits_per_page, 10)

    def test_optional_sections_default(self) -> None:
        raw = _base_raw_config()
        for key in ("log", "synthesis", "search"):
            del raw[key]
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.synthesis.reference_year, date.today().year)
        self.assertEqual(cfg.search.prefetch_pages, 5)

    def test_missing_index_dir_error_contains_key(self) -> None:
        raw = _base_raw_config()
        del raw["index"]["dir"]
        with self.assertRaisesRegex(ValueError, "index\\.dir"):
            parse_config_dict(raw)

    def test_fields_normalization(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["index"]["fields"] = ["Title", "title", " date "]
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.index.fields, ("title", "date"))

    def test_fields_unknown_value(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["index"]["fields"] = ["title", "abstract"]
        with self.assertRaisesRegex(ValueError, "index\\.fields\\[1\\]"):
            parse_config_dict(raw)

    def test_fields_omitted_uses_all(self) -> None:
        raw = deepcopy(_base_raw_config())
        del raw["index"]["fields"]
        cfg = parse_config_dict(raw)
        self.assertEqual(len(cfg.index.fields), 9)

    def test_log_level_validation(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "LOUD"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)

    def test_model_env_override(self) -> None:
        with patch.dict(os.environ, {"ZAGUAN_SPACY_MODEL": "es_core_news_lg"}, clear=True):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.nlp.model, "es_core_news_lg")

    def test_reference_date_string(self) -> None:
        raw = _base_raw_config()
        raw["synthesis"]["reference_date"] = "2019-09-01"
        self.assertEqual(parse_config_dict(raw).synthesis.reference_year, 2019)

    def test_reference_date_yaml_date(self) -> None:
        raw = _base_raw_config()
        raw["synthesis"]["reference_date"] = date(2018, 1, 1)
        self.assertEqual(parse_config_dict(raw).synthesis.reference_year, 2018)

    def test_reference_date_invalid(self) -> None:
        raw = _base_raw_config()
        raw["synthesis"]["reference_date"] = "not a date"
        with self.assertRaisesRegex(ValueError, "synthesis\\.reference_date"):
            parse_config_dict(raw)

    def test_reference_year_range(self) -> None:
        raw = _base_raw_config()
        raw["synthesis"]["reference_date"] = 22
        with self.assertRaisesRegex(ValueError, "synthesis\\.reference_date"):
            parse_config_dict(raw)

    def test_hits_per_page_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["search"]["hits_per_page"] = "10"
        with self.assertRaisesRegex(TypeError, "search\\.hits_per_page"):
            parse_config_dict(raw)

    def test_hits_per_page_positive(self) -> None:
        raw = _base_raw_config()
        raw["search"]["hits_per_page"] = 0
        with self.assertRaisesRegex(ValueError, "search\\.hits_per_page"):
            parse_config_dict(raw)

    def test_search_overrides(self) -> None:
        search = parse_config_dict(_base_raw_config()).search
        self.assertEqual(search.with_overrides(hits_per_page=3).hits_per_page, 3)
        self.assertTrue(search.with_overrides(raw=True).raw)
        self.assertEqual(search.with_overrides(), search)


if __name__ == "__main__":
    unittest.main()
