"""
Tests for the practice catalog.
"""
import dataclasses
import json

import pytest

from calmalink.catalog import PracticeCatalog, PracticeRecord, default_catalog, load_catalog
from calmalink.exceptions import CatalogError


def write_catalog(tmp_path, data):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return str(path)


VALID_FILE = {
    "en": {
        "calm_breath": {
            "title": "Calm Breath • 3 min",
            "duration": 3,
            "audioUrl": "https://cdn.example.com/en.mp3",
            "script": "Breathe.",
        },
        "body_scan": {
            "title": "Body Scan • 5 min",
            "duration": 5,
            "audioUrl": "https://cdn.example.com/scan.mp3",
            "script": "Notice your feet.",
        },
    },
    "pt": {
        "calm_breath": {
            "title": "Respiração Calma • 3 min",
            "duration": 3,
            "audioUrl": "https://cdn.example.com/pt.mp3",
            "script": "Respire.",
        },
    },
}


class TestPracticeCatalog:
    """Tests for PracticeCatalog lookups."""

    def test_default_catalog_languages(self):
        catalog = default_catalog()

        assert catalog.languages == ("en", "es")
        assert catalog.has("es")
        assert not catalog.has("fr")

    def test_get_spanish_record(self):
        record = default_catalog().get("es")

        assert record.title == "Respiración Calma • 3 min"
        assert record.language == "es"
        assert record.duration_minutes == 3
        assert record.audio_url.endswith("spanishcalmbreath.mp3")

    def test_missing_language_falls_back_to_english(self):
        catalog = default_catalog()

        assert catalog.get("fr") == catalog.get("en")
        assert catalog.get(None) == catalog.get("en")
        assert catalog.get("") == catalog.get("en")

    def test_missing_practice_falls_back_to_default(self):
        catalog = default_catalog()

        assert catalog.get("es", "unknown_practice") == catalog.get("en")

    def test_to_result_wire_shape(self):
        result = default_catalog().get("en").to_result()

        assert set(result) == {"title", "language", "duration", "audioUrl", "script"}
        assert result["language"] == "en"
        assert result["duration"] == 3

    def test_requires_english_default(self):
        record = default_catalog().get("es")

        with pytest.raises(CatalogError):
            PracticeCatalog({"es": {"calm_breath": record}})

    def test_catalog_is_read_only(self):
        catalog = default_catalog()

        with pytest.raises(TypeError):
            catalog._entries["fr"] = {}
        with pytest.raises(dataclasses.FrozenInstanceError):
            catalog.get("en").title = "Changed"

    def test_practices_and_ids(self):
        catalog = default_catalog()

        assert catalog.practice_ids() == ("calm_breath",)
        assert catalog.practices("es") == (catalog.get("es"),)
        assert catalog.practices("fr") == (catalog.get("en"),)


class TestLoadCatalog:
    """Tests for catalog override files."""

    def test_load_valid_file(self, tmp_path):
        catalog = load_catalog(write_catalog(tmp_path, VALID_FILE))

        assert catalog.languages == ("en", "pt")
        assert catalog.get("pt").title == "Respiração Calma • 3 min"
        assert catalog.get("pt").language == "pt"
        assert catalog.get("en", "body_scan").duration_minutes == 5
        assert catalog.practice_ids() == ("calm_breath", "body_scan")

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            load_catalog(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogError):
            load_catalog(str(path))

    def test_missing_field(self, tmp_path):
        data = {"en": {"calm_breath": {"title": "Calm Breath", "duration": 3}}}

        with pytest.raises(CatalogError, match="en/calm_breath"):
            load_catalog(write_catalog(tmp_path, data))

    def test_top_level_must_be_object(self, tmp_path):
        with pytest.raises(CatalogError):
            load_catalog(write_catalog(tmp_path, ["en"]))

    def test_english_default_required(self, tmp_path):
        data = {"pt": VALID_FILE["pt"]}

        with pytest.raises(CatalogError):
            load_catalog(write_catalog(tmp_path, data))

    def test_record_type(self, tmp_path):
        record = load_catalog(write_catalog(tmp_path, VALID_FILE)).get("en")

        assert isinstance(record, PracticeRecord)
