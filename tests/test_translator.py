#!/usr/bin/env python3
"""
Tests for a complete translation run.

Tests verify:
1. Regional base languages are requested but only requested languages written
2. Missing languages and keys are filled and reported
3. Incremental mode sends only missing keys and merges into saved files
4. Up-to-date translations skip the remote call
5. Structural errors abort before anything is written
"""

import json

import pytest

from shipi18n.api import TranslationResult
from shipi18n.errors import MalformedDocumentError, MissingAPIKeyError
from shipi18n.translator import TranslateOptions, TranslationRun


class FakeAPI:
    """Stands in for Shipi18nAPI and records translate_json calls."""

    def __init__(self, response=None, api_key="test-key"):
        self.api_key = api_key
        self.response = response or {}
        self.calls = []

    def translate_json(self, json_data, target_languages, **kwargs):
        self.calls.append({"json": json_data, "targets": target_languages, **kwargs})
        return TranslationResult.from_response(self.response)


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "en.json"
    path.write_text(json.dumps({
        "greeting": "Hello {{name}}",
        "nav": {"home": "Home", "about": "About"},
    }), encoding="utf-8")
    return path


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "locales"


def make_options(source_file, output_dir, targets, **kwargs):
    return TranslateOptions(
        input_file=str(source_file),
        target_languages=targets,
        output_dir=str(output_dir),
        **kwargs,
    )


def read(output_dir, lang):
    return json.loads((output_dir / f"{lang}.json").read_text(encoding="utf-8"))


def test_full_run_with_fallbacks(source_file, output_dir):
    """Test 1: es complete, fr partial, pt-BR from pt, de from source."""
    api = FakeAPI({
        "es": json.dumps({"greeting": "Hola {{name}}", "nav": {"home": "Inicio", "about": "Acerca"}}),
        "fr": json.dumps({"greeting": "Bonjour {{name}}", "nav": {"home": "Accueil"}}),
        "pt": json.dumps({"greeting": "Olá {{name}}", "nav": {"home": "Início", "about": "Sobre"}}),
        "warnings": [{"message": "Long text"}],
    })
    options = make_options(source_file, output_dir, ["es", "fr", "pt-BR", "de"])

    result = TranslationRun(options, api).run()

    assert api.calls[0]["targets"] == ["es", "fr", "pt-BR", "de", "pt"]
    assert result["status"] == "ok"
    assert sorted(f["language"] for f in result["files"]) == ["de", "es", "fr", "pt-BR"]
    assert not (output_dir / "pt.json").exists()

    assert read(output_dir, "fr")["nav"] == {"home": "Accueil", "about": "About"}
    assert read(output_dir, "pt-BR")["nav"]["about"] == "Sobre"
    assert read(output_dir, "de") == {"greeting": "Hello {{name}}", "nav": {"home": "Home", "about": "About"}}

    info = result["fallback_info"]
    assert info["used"] is True
    assert info["regional_fallbacks"] == {"pt-BR": "pt"}
    assert info["languages_fallback_to_source"] == ["de"]
    assert info["keys_fallback"] == {"fr": ["nav.about"]}
    assert result["missing_languages"] == []
    assert {"message": "Long text"} in result["warnings"]


def test_no_fallback_reports_missing_language(source_file, output_dir):
    """Test 2: With fallbacks off, a missing language is reported, not written."""
    api = FakeAPI({"es": json.dumps({"greeting": "Hola {{name}}"})})
    options = make_options(source_file, output_dir, ["es", "de"],
                           fallback_to_source=False, regional_fallback=False)

    result = TranslationRun(options, api).run()

    assert result["missing_languages"] == ["de"]
    assert read(output_dir, "es") == {"greeting": "Hola {{name}}"}
    assert not (output_dir / "de.json").exists()


def test_placeholder_warnings(source_file, output_dir):
    """Test 3: Lost placeholders are reported as warnings."""
    api = FakeAPI({"es": json.dumps({"greeting": "Hola", "nav": {"home": "Inicio", "about": "Acerca"}})})
    result = TranslationRun(make_options(source_file, output_dir, ["es"]), api).run()

    mismatches = [w for w in result["warnings"] if w.get("type") == "PLACEHOLDER_MISMATCH"]
    assert [(w["language"], w["key"]) for w in mismatches] == [("es", "greeting")]


def test_options_forwarded(source_file, output_dir):
    """Test 4: Skip rules and flags reach the API untouched."""
    api = FakeAPI({"es": json.dumps({"greeting": "Hola {{name}}"})})
    options = make_options(source_file, output_dir, ["es"], skip_keys=["nav.home"],
                           skip_paths=["nav.*"], html_handling="strip", save_keys=True)

    TranslationRun(options, api).run()

    call = api.calls[0]
    assert call["skip_keys"] == ["nav.home"]
    assert call["skip_paths"] == ["nav.*"]
    assert call["html_handling"] == "strip"
    assert call["save_keys"] is True
    assert call["source_language"] == "en"


def test_incremental_sends_missing_keys_and_merges(source_file, output_dir):
    """Test 5: Only missing keys are sent; results merge into saved files."""
    output_dir.mkdir()
    (output_dir / "es.json").write_text(json.dumps(
        {"greeting": "Hola {{name}}", "nav": {"home": "Inicio"}, "extra": "Extra"}
    ), encoding="utf-8")
    (output_dir / "fr.json").write_text(json.dumps(
        {"greeting": "Bonjour {{name}}", "nav": {"home": "Accueil", "about": "À propos"}}
    ), encoding="utf-8")

    api = FakeAPI({
        "es": json.dumps({"nav": {"about": "Acerca"}}),
        "fr": json.dumps({"nav": {"about": "À propos de"}}),
    })
    options = make_options(source_file, output_dir, ["es", "fr"], incremental=True)

    result = TranslationRun(options, api).run()

    assert api.calls[0]["json"] == {"nav": {"about": "About"}}
    assert result["stats"]["total"] == 3
    assert result["stats"]["already_translated"] == 2
    assert result["stats"]["to_translate"] == 1

    assert read(output_dir, "es") == {
        "greeting": "Hola {{name}}",
        "nav": {"home": "Inicio", "about": "Acerca"},
        "extra": "Extra",
    }
    assert read(output_dir, "fr")["nav"]["about"] == "À propos de"
    assert all(f["merged"] for f in result["files"])


def test_incremental_up_to_date_skips_request(source_file, output_dir):
    """Test 6: Nothing missing -> no remote call and status up_to_date."""
    output_dir.mkdir()
    complete = {"greeting": "Hola {{name}}", "nav": {"home": "Inicio", "about": "Acerca"}}
    (output_dir / "es.json").write_text(json.dumps(complete), encoding="utf-8")

    api = FakeAPI()
    result = TranslationRun(make_options(source_file, output_dir, ["es"], incremental=True), api).run()

    assert api.calls == []
    assert result["status"] == "up_to_date"
    assert result["stats"] == {"total": 3, "already_translated": 3, "to_translate": 0}


def test_missing_api_key(source_file, output_dir):
    """Test 7: No key -> MissingAPIKeyError before reading anything."""
    api = FakeAPI(api_key=None)
    with pytest.raises(MissingAPIKeyError):
        TranslationRun(make_options(source_file, output_dir, ["es"]), api).run()
    assert api.calls == []


def test_malformed_source_aborts(tmp_path, output_dir):
    """Test 8: Invalid JSON aborts before the request and writes nothing."""
    bad = tmp_path / "en.json"
    bad.write_text("{not json", encoding="utf-8")
    api = FakeAPI()

    with pytest.raises(MalformedDocumentError):
        TranslationRun(make_options(bad, output_dir, ["es"]), api).run()

    assert api.calls == []
    assert not output_dir.exists()


def test_incremental_fallback_keeps_saved_translations(tmp_path, output_dir):
    """Test 9: Source fallback never overwrites a saved translation."""
    source = tmp_path / "en.json"
    source.write_text(json.dumps({"a": "A", "b": "B", "c": "C"}), encoding="utf-8")
    output_dir.mkdir()
    (output_dir / "es.json").write_text(json.dumps({"a": "EA", "b": "EB"}), encoding="utf-8")
    (output_dir / "fr.json").write_text(json.dumps({"a": "FA"}), encoding="utf-8")
    (output_dir / "de.json").write_text(json.dumps({"a": "DA", "b": "DB"}), encoding="utf-8")

    # es drops b, de is missing entirely
    api = FakeAPI({
        "es": json.dumps({"c": "EC"}),
        "fr": json.dumps({"b": "FB", "c": "FC"}),
    })
    options = make_options(source, output_dir, ["es", "fr", "de"], incremental=True)

    result = TranslationRun(options, api).run()

    assert api.calls[0]["json"] == {"b": "B", "c": "C"}
    assert read(output_dir, "es") == {"a": "EA", "b": "EB", "c": "EC"}
    assert read(output_dir, "fr") == {"a": "FA", "b": "FB", "c": "FC"}
    assert read(output_dir, "de") == {"a": "DA", "b": "DB", "c": "C"}
    assert result["fallback_info"]["languages_fallback_to_source"] == ["de"]
    assert result["fallback_info"]["keys_fallback"] == {"es": ["b"]}


def test_context_forwarded(source_file, output_dir):
    """Test 10: Translator notes reach the API."""
    api = FakeAPI({"es": json.dumps({"greeting": "Hola {{name}}"})})
    options = make_options(source_file, output_dir, ["es"], context={"greeting": "Shown on the homepage"})

    TranslationRun(options, api).run()

    assert api.calls[0]["context"] == {"greeting": "Shown on the homepage"}
