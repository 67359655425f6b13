#!/usr/bin/env python3
"""
Translation run orchestration.

One run translates one source file:

    read source -> expand regional languages -> (incremental) plan
    -> one remote request -> reconcile fallbacks -> placeholder checks
    -> (incremental) merge into saved files -> write output
"""

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .api import Shipi18nAPI, TranslationResult
from .documents import Document, count_keys, deep_merge, get_path, is_blank, iter_leaves, set_path
from .errors import MissingAPIKeyError
from .fallback import FallbackInfo, reconcile
from .incremental import IncrementalPlan, plan_incremental
from .logger import success
from .placeholders import check_document
from .regional import RegionalExpansion, resolve_regional_languages
from .store import LocaleStore, read_source

logger = logging.getLogger(__name__)


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


@dataclass
class TranslateOptions:
    """Options for a single translation run."""
    input_file: str
    target_languages: list[str]
    source_language: str = "en"
    output_dir: str = "./locales"
    preserve_placeholders: bool = True
    html_handling: str = "none"
    fallback_to_source: bool = True
    regional_fallback: bool = True
    incremental: bool = False
    skip_keys: list[str] = field(default_factory=list)
    skip_paths: list[str] = field(default_factory=list)
    save_keys: bool = False
    context: Optional[dict[str, str]] = None  # key path -> note for translators


class TranslationRun:
    """
    Translates one locale file into several languages.

    Handles:
    - Regional expansion of the request (pt-BR also fetches pt)
    - Incremental mode (only keys missing from saved files are sent)
    - Fallback reconciliation of missing languages and keys
    - Merging into saved files and writing the output
    """

    def __init__(self, options: TranslateOptions, api: Shipi18nAPI):
        self.options = options
        self.api = api
        self.store = LocaleStore(options.output_dir, Path(options.input_file).stem)

    def run(self) -> dict:
        """
        Execute the run.

        Returns:
            Result dictionary for the CLI
        """
        opts = self.options
        if not self.api.api_key:
            raise MissingAPIKeyError("API key not found")

        source = read_source(opts.input_file)
        requested = list(dict.fromkeys(opts.target_languages))
        expansion = resolve_regional_languages(requested, opts.regional_fallback)
        if expansion.added_languages:
            logger.debug("Also requesting base languages: %s", ", ".join(expansion.added_languages))

        to_translate = source
        existing: dict[str, Document] = {}
        plan: Optional[IncrementalPlan] = None

        if opts.incremental:
            logger.info("Checking existing translations...")
            existing = self.store.load_existing(requested)
            plan = plan_incremental(source, existing, requested)

            if plan.nothing_to_do:
                success("All translations up to date!")
                return {
                    "status": "up_to_date",
                    "files": [],
                    "stats": plan.stats(),
                    "summary": f"{plural(plan.total, 'key')} already translated",
                }

            to_translate = plan.to_translate
            logger.info(
                "Incremental mode: %s to translate (%d already exist)",
                plural(plan.to_translate_count, "new key"), plan.already_translated,
            )

        key_count = count_keys(to_translate)
        logger.info("Translating %s to %s...", plural(key_count, "key"), plural(len(requested), "language"))

        result = self.api.translate_json(
            to_translate,
            expansion.expanded_targets,
            source_language=opts.source_language,
            preserve_placeholders=opts.preserve_placeholders,
            html_handling=opts.html_handling,
            skip_keys=opts.skip_keys,
            skip_paths=opts.skip_paths,
            save_keys=opts.save_keys,
            context=opts.context,
        )

        final, fallback_info = reconcile(
            result.languages,
            to_translate,
            requested,
            source_language=opts.source_language,
            fallback_to_source=opts.fallback_to_source,
            regional_fallback=opts.regional_fallback,
            regional_map=expansion.regional_map,
        )
        missing_languages = [lang for lang in requested if lang not in final]

        warnings = list(result.warnings)
        if opts.preserve_placeholders:
            for lang in final:
                warnings.extend(check_document(to_translate, final[lang], lang))

        files = self._save(final, existing, fallback_info)

        self._report(fallback_info, missing_languages, warnings)
        success("Successfully translated %s!", plural(len(files), "file"))

        return self._make_result(key_count, plan, expansion, result, fallback_info,
                                 missing_languages, warnings, files)

    @staticmethod
    def _fallback_paths(lang: str, document: Document, fallback_info: FallbackInfo) -> list[tuple[str, ...]]:
        """Key paths of document that were filled by a fallback rather than translated."""
        if lang in fallback_info.regional_fallbacks or lang in fallback_info.languages_fallback_to_source:
            return [path for path, _ in iter_leaves(document)]
        return [tuple(key.split(".")) for key in fallback_info.keys_fallback.get(lang, [])]

    def _merge_saved(self, lang: str, document: Document, saved: Document, fallback_info: FallbackInfo) -> Document:
        """
        Merge new results into a saved translation.

        Fallback values never replace a saved translation that is not blank.
        """
        document = copy.deepcopy(document)
        for path in self._fallback_paths(lang, document, fallback_info):
            saved_value = get_path(saved, path)
            if not is_blank(saved_value) and not isinstance(saved_value, dict):
                set_path(document, path, copy.deepcopy(saved_value))
        return deep_merge(saved, document)

    def _save(
        self,
        final: dict[str, Document],
        existing: dict[str, Document],
        fallback_info: FallbackInfo,
    ) -> list[dict]:
        """Merge with saved translations (incremental) and write every language."""
        files = []
        for lang, document in final.items():
            merged = lang in existing
            if merged:
                document = self._merge_saved(lang, document, existing[lang], fallback_info)
            path = self.store.write(lang, document)
            success("Saved: %s%s", path, " (merged)" if merged else "")
            files.append({"language": lang, "path": str(path), "merged": merged})
        return files

    def _report(self, fallback_info: FallbackInfo, missing_languages: list[str], warnings: list) -> None:
        """Log fallbacks, gaps and warnings."""
        if fallback_info.used:
            logger.info("Fallback information:")
            for lang, base in fallback_info.regional_fallbacks.items():
                logger.info("  %s -> %s (regional fallback)", lang, base)
            for lang in fallback_info.languages_fallback_to_source:
                logger.info("  %s -> %s (source fallback)", lang, self.options.source_language)
            for lang, keys in fallback_info.keys_fallback.items():
                logger.info("  %s: %s used fallback", lang, plural(len(keys), "key"))
                if len(keys) <= 5:
                    for key in keys:
                        logger.info("    - %s", key)

        for lang in missing_languages:
            logger.warning("No translation received for %s and fallback is disabled", lang)

        for warning in warnings:
            message = warning.get("message") if isinstance(warning, dict) else str(warning)
            logger.warning(message)

    def _make_result(
        self,
        key_count: int,
        plan: Optional[IncrementalPlan],
        expansion: RegionalExpansion,
        result: TranslationResult,
        fallback_info: FallbackInfo,
        missing_languages: list[str],
        warnings: list,
        files: list[dict],
    ) -> dict:
        if plan is not None:
            stats = plan.stats()
        else:
            stats = {"total": key_count, "to_translate": key_count}
        stats["languages"] = len(dict.fromkeys(self.options.target_languages))

        output = {
            "status": "ok",
            "files": files,
            "stats": stats,
            "requested_languages": expansion.expanded_targets,
            "regional_map": expansion.regional_map,
            "fallback_info": fallback_info.to_dict(),
            "missing_languages": missing_languages,
            "warnings": warnings,
            "summary": f"Translated {plural(key_count, 'key')}, wrote {plural(len(files), 'file')} to {self.options.output_dir}",
        }
        if result.skipped:
            output["skipped"] = result.skipped
        return output
