#!/usr/bin/env python3
"""
Regional language expansion.

A regional code like "pt-BR" inherits from its base language "pt". When
regional fallback is on, base languages that were not requested are added to
the remote request so the base translation arrives in the same round trip.
"""

from dataclasses import dataclass, field


@dataclass
class RegionalExpansion:
    """Result of expanding a target-language list."""
    requested: list[str] = field(default_factory=list)
    expanded_targets: list[str] = field(default_factory=list)
    regional_map: dict[str, str] = field(default_factory=dict)  # regional code -> base code

    @property
    def added_languages(self) -> list[str]:
        """Base languages that were synthesized for the request."""
        return [lang for lang in self.expanded_targets if lang not in self.requested]


def base_language(language: str) -> str:
    """
    Get the base language of a code ("pt-BR" -> "pt", "zh-Hans-CN" -> "zh").

    Returns an empty string when the code has no usable base.
    """
    if "-" not in language:
        return ""
    return language.split("-", 1)[0]


def resolve_regional_languages(
    target_languages: list[str],
    regional_fallback: bool = True,
) -> RegionalExpansion:
    """
    Expand target languages with the base languages of regional variants.

    Args:
        target_languages: Requested language codes
        regional_fallback: Whether to derive base languages at all

    Returns:
        RegionalExpansion with every requested language once (request order),
        followed by synthesized base languages (discovery order)
    """
    requested = list(dict.fromkeys(target_languages))
    expansion = RegionalExpansion(requested=requested, expanded_targets=list(requested))

    if not regional_fallback:
        return expansion

    for lang in requested:
        base = base_language(lang)
        if not base:
            continue
        expansion.regional_map[lang] = base
        if base not in expansion.expanded_targets:
            expansion.expanded_targets.append(base)

    return expansion
