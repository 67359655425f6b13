#!/usr/bin/env python3
"""
Tests for placeholder validation.

Tests verify:
1. i18next {{name}} and ICU {name} placeholders are extracted
2. ICU plural/select strings only require the variable name
3. check_document reports missing placeholders per language and key
"""

from shipi18n.placeholders import check_document, extract_placeholders, missing_placeholders


def test_extract_i18next_and_icu():
    """Test 1: Both styles are found without double counting {{name}}."""
    assert extract_placeholders("Hello {{name}}, you have {count} items") == ["{{name}}", "{count}"]


def test_extract_icu_plural():
    """Test 2: ICU plural bodies are not treated as placeholders."""
    text = "{count, plural, one {# item} other {# items}}"
    assert extract_placeholders(text) == ["{count}"]


def test_missing_placeholders():
    """Test 3: Placeholders lost in translation are reported."""
    assert missing_placeholders("Hello {{name}}", "Hola {{nombre}}") == ["{{name}}"]
    assert missing_placeholders("Hello {{name}}", "Hola {{name}}") == []


def test_check_document():
    """Test 4: Warnings name the language and the dot path."""
    source = {"greeting": "Hello {{name}}", "nav": {"count": "{n} new"}, "plain": "Hi"}
    translated = {"greeting": "Hola {{nombre}}", "nav": {"count": "{n} nuevos"}, "plain": "Hola"}

    warnings = check_document(source, translated, "es")

    assert len(warnings) == 1
    assert warnings[0]["type"] == "PLACEHOLDER_MISMATCH"
    assert warnings[0]["language"] == "es"
    assert warnings[0]["key"] == "greeting"
    assert "{{name}}" in warnings[0]["message"]


def test_check_document_skips_non_strings():
    """Test 5: Missing keys and non-string values are ignored."""
    source = {"greeting": "Hello {{name}}", "count": 3}
    assert check_document(source, {"count": 3}, "fr") == []
