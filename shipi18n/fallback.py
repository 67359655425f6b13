#!/usr/bin/env python3
"""
Fallback reconciliation of translation results.

Fills languages and keys the translation service did not return, first from
the base language of a regional variant (pt-BR -> pt), then from the source
document. Every substitution is recorded in FallbackInfo.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .documents import Document, find_missing_keys, get_path, is_blank, iter_leaves, set_path

logger = logging.getLogger(__name__)


@dataclass
class FallbackInfo:
    """Record of every fallback applied during reconciliation."""
    regional_fallbacks: dict[str, str] = field(default_factory=dict)  # language -> base language
    languages_fallback_to_source: list[str] = field(default_factory=list)
    keys_fallback: dict[str, list[str]] = field(default_factory=dict)  # language -> dot paths

    @property
    def used(self) -> bool:
        return bool(self.regional_fallbacks or self.languages_fallback_to_source or self.keys_fallback)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "used": self.used,
            "regional_fallbacks": dict(self.regional_fallbacks),
            "languages_fallback_to_source": list(self.languages_fallback_to_source),
            "keys_fallback": {lang: list(keys) for lang, keys in self.keys_fallback.items()},
        }


def _has_content(result: Any) -> bool:
    return isinstance(result, dict) and bool(result)


def reconcile(
    raw_results: dict[str, Any],
    source_doc: Document,
    requested_languages: list[str],
    source_language: str = "en",
    fallback_to_source: bool = True,
    regional_fallback: bool = True,
    regional_map: Optional[dict[str, str]] = None,
) -> tuple[dict[str, Document], FallbackInfo]:
    """
    Reconcile raw per-language results into complete documents.

    Only requested languages are reconciled; synthesized base languages act
    as fallback sources. Inputs are never modified.

    Args:
        raw_results: Map of language -> translated document from the service
        source_doc: Document that was sent for translation
        requested_languages: Languages the user asked for
        source_language: Source language code (for log messages)
        fallback_to_source: Fill gaps with source values
        regional_fallback: Fill gaps from the base language of regional codes
        regional_map: Map of regional code -> base code

    Returns:
        Tuple of (final results per language, FallbackInfo). A language that
        could not be filled by any fallback is absent from final results.
    """
    regional_map = regional_map or {}
    info = FallbackInfo()
    final: dict[str, Document] = {}

    for lang in dict.fromkeys(requested_languages):
        result = raw_results.get(lang)
        base = regional_map.get(lang) if regional_fallback else None
        base_result = raw_results.get(base) if base else None

        # Whole language missing
        if not _has_content(result):
            if _has_content(base_result):
                final[lang] = copy.deepcopy(base_result)
                info.regional_fallbacks[lang] = base
                logger.debug("%s: using regional fallback %s", lang, base)
            elif fallback_to_source:
                final[lang] = copy.deepcopy(source_doc)
                info.languages_fallback_to_source.append(lang)
                logger.debug("%s: using source language %s", lang, source_language)
            else:
                logger.debug("%s: no translation and fallback disabled", lang)
            continue

        final[lang] = copy.deepcopy(result)
        if not fallback_to_source:
            continue

        # Partial keys missing
        missing = find_missing_keys(source_doc, result)
        filled = []
        for path, source_value in iter_leaves(missing):
            value = get_path(base_result, path) if _has_content(base_result) else None
            if is_blank(value) or isinstance(value, dict):
                value = source_value
            if is_blank(value):
                continue
            set_path(final[lang], path, copy.deepcopy(value))
            filled.append(".".join(path))

        if filled:
            info.keys_fallback[lang] = filled
            logger.debug("%s: %d key(s) used fallback", lang, len(filled))

    return final, info
