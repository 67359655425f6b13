#!/usr/bin/env python3
"""
Incremental translation planning.

Computes the smallest document that still needs translation, given the
source document and the translations saved by earlier runs.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .documents import Document, count_keys, find_missing_keys, flatten, unflatten


@dataclass
class IncrementalPlan:
    """Keys still to translate plus counters for reporting."""
    to_translate: Document = field(default_factory=dict)
    total: int = 0
    already_translated: int = 0
    to_translate_count: int = 0

    @property
    def nothing_to_do(self) -> bool:
        """True when every language already has every source key."""
        return self.to_translate_count == 0

    def stats(self) -> dict[str, int]:
        return {
            "total": self.total,
            "already_translated": self.already_translated,
            "to_translate": self.to_translate_count,
        }


def plan_incremental(
    source_doc: Document,
    existing_by_language: dict[str, Optional[Document]],
    languages: Optional[list[str]] = None,
) -> IncrementalPlan:
    """
    Find the keys missing from at least one target language.

    A key missing for any language is sent again so that every language
    eventually receives it. Merging the new results into the saved documents
    is left to the caller (see documents.deep_merge).

    Args:
        source_doc: Source document
        existing_by_language: Map of language -> previously saved document
            (None or absent when there is no prior output)
        languages: Requested languages (defaults to the keys of
            existing_by_language)

    Returns:
        IncrementalPlan with the document to translate and key counts
    """
    if languages is None:
        languages = list(existing_by_language)

    combined: dict[str, Any] = {}
    for lang in languages:
        existing = existing_by_language.get(lang) or {}
        for key, value in flatten(find_missing_keys(source_doc, existing)).items():
            combined.setdefault(key, value)

    total = count_keys(source_doc)
    return IncrementalPlan(
        to_translate=unflatten(combined),
        total=total,
        already_translated=total - len(combined),
        to_translate_count=len(combined),
    )
