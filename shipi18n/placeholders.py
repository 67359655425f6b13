#!/usr/bin/env python3
"""
Placeholder checks for translated locale documents.

The service is asked to preserve placeholders such as {{name}} or {count};
this module verifies that it did and reports every loss as a warning.
"""

import re
from dataclasses import dataclass

from .documents import Document, get_path, iter_leaves


@dataclass
class PlaceholderPattern:
    """Pattern definition for placeholder detection."""
    name: str
    pattern: str  # Regex pattern

    def find_all(self, text: str) -> list[str]:
        """Find all placeholders matching this pattern."""
        return [match.group(0) for match in re.finditer(self.pattern, text)]


# Placeholder styles found in JSON locale files
PLACEHOLDER_PATTERNS = {
    'i18next': PlaceholderPattern('i18next', r'{{(\w+)}}'),          # {{name}}
    'icu': PlaceholderPattern('icu', r'(?<!\{)\{(\w+)\}(?!\})'),      # {name}
}

DEFAULT_PATTERNS = [
    PLACEHOLDER_PATTERNS['i18next'],
    PLACEHOLDER_PATTERNS['icu'],
]

# ICU MessageFormat detection pattern: {count, plural, ...}
ICU_PATTERN = re.compile(r'\{(\w+),\s*(plural|select|selectordinal)')


def extract_placeholders(text: str, patterns: list[PlaceholderPattern] = None) -> list[str]:
    """
    Extract all placeholders from text.

    Args:
        text: Text to extract placeholders from
        patterns: Patterns to apply (defaults to i18next + ICU)

    Returns:
        List of placeholder strings found (deduplicated, order preserved)
    """
    # ICU plural/select bodies get translated; only the variable names must survive
    icu_matches = ICU_PATTERN.findall(text)
    if icu_matches:
        return list(dict.fromkeys('{' + var_name + '}' for var_name, _ in icu_matches))

    placeholders = []
    for pattern in patterns or DEFAULT_PATTERNS:
        placeholders.extend(pattern.find_all(text))

    return list(dict.fromkeys(placeholders))


def missing_placeholders(source: str, translation: str) -> list[str]:
    """Placeholders present in source but absent from translation."""
    translated = set(extract_placeholders(translation))
    return [p for p in extract_placeholders(source) if p not in translated]


def check_document(source_doc: Document, translated_doc: Document, language: str) -> list[dict]:
    """
    Compare every translated string against its source string.

    Args:
        source_doc: Source document
        translated_doc: Translated document for one language
        language: Language code for the warning entries

    Returns:
        List of PLACEHOLDER_MISMATCH warnings
    """
    warnings = []
    for path, source_value in iter_leaves(source_doc):
        if not isinstance(source_value, str):
            continue
        translated = get_path(translated_doc, path)
        if not isinstance(translated, str):
            continue

        key = ".".join(path)
        for placeholder in missing_placeholders(source_value, translated):
            warnings.append({
                "type": "PLACEHOLDER_MISMATCH",
                "language": language,
                "key": key,
                "message": f"[{language}] {key}: missing placeholder in translation: {placeholder}",
            })

    return warnings
