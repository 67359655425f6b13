"""
shipi18n - Translate JSON locale files with the Shipi18n API

Sends a JSON locale file to the translation service and reconciles the
results locally: regional fallback (pt-BR -> pt), source fallback for
missing languages and keys, and incremental re-translation of new keys.

Quick start:
    shipi18n config set apiKey YOUR_KEY
    shipi18n translate en.json --target es,fr,pt-BR
    shipi18n translate en.json --target es,fr,pt-BR --incremental
"""

__version__ = "1.0.0"

from .documents import deep_merge, find_missing_keys, flatten, unflatten
from .fallback import FallbackInfo, reconcile
from .incremental import IncrementalPlan, plan_incremental
from .regional import RegionalExpansion, resolve_regional_languages

__all__ = [
    "flatten",
    "unflatten",
    "find_missing_keys",
    "deep_merge",
    "resolve_regional_languages",
    "RegionalExpansion",
    "reconcile",
    "FallbackInfo",
    "plan_incremental",
    "IncrementalPlan",
]
