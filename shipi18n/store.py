#!/usr/bin/env python3
"""
Local locale file store.

Reads the source document and translations written by earlier runs, and
writes finished per-language documents as indented JSON.

Existing translations are looked up as <output>/<lang>/<stem>.json first,
then <output>/<lang>.json. New files are always written as <output>/<lang>.json.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from .documents import Document
from .errors import InputFileError, MalformedDocumentError

logger = logging.getLogger(__name__)


def parse_document(content: str, source: str = "<input>") -> Document:
    """
    Parse JSON text into a locale document.

    Raises:
        MalformedDocumentError: Invalid JSON or a root that is not an object
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(
            f"Invalid JSON in {source}: {e.msg} at line {e.lineno}",
            suggestion="Fix the JSON syntax and run the command again",
        ) from e

    if not isinstance(data, dict):
        raise MalformedDocumentError(f"Invalid JSON in {source}: root element must be an object")
    return data


def read_source(path: str) -> Document:
    """Read and validate the source locale file."""
    input_path = Path(path)
    if not input_path.is_file():
        raise InputFileError(f"Input file not found: {path}")

    try:
        content = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(
            f"Cannot read input file: {e}",
            suggestion="Ensure the file is readable and properly encoded (UTF-8)",
        ) from e
    return parse_document(content, source=path)


def read_context(path: str) -> dict[str, str]:
    """
    Read translator notes from a JSON file of key path -> note.

    Raises:
        InputFileError: Missing or unreadable file
        MalformedDocumentError: Invalid JSON, or a note that is not a string
    """
    notes = read_source(path)
    for key, note in notes.items():
        if not isinstance(note, str):
            raise MalformedDocumentError(f"Invalid context in {path}: note for {key} must be a string")
    return notes


class LocaleStore:
    """Per-language locale files under one output directory."""

    def __init__(self, output_dir: str, input_name: str):
        """
        Args:
            output_dir: Directory holding the per-language files
            input_name: Stem of the source file (e.g. "en" for en.json)
        """
        self.output_dir = Path(output_dir)
        self.input_name = input_name

    def output_path(self, language: str) -> Path:
        return self.output_dir / f"{language}.json"

    def existing_path(self, language: str) -> Optional[Path]:
        """Find a previously written file for a language."""
        for candidate in (
            self.output_dir / language / f"{self.input_name}.json",
            self.output_path(language),
        ):
            if candidate.is_file():
                return candidate
        return None

    def load_existing(self, languages: list[str]) -> dict[str, Document]:
        """
        Load previously written translations.

        Files that cannot be parsed are skipped with a warning; the language is
        then translated again from scratch.

        Args:
            languages: Languages to look up

        Returns:
            Map of language -> saved document (languages without a file are absent)
        """
        existing = {}
        for lang in languages:
            path = self.existing_path(lang)
            if path is None:
                continue
            try:
                existing[lang] = parse_document(path.read_text(encoding="utf-8"), source=str(path))
            except (OSError, UnicodeDecodeError, MalformedDocumentError):
                logger.warning("Could not parse %s, will re-translate", path)
        return existing

    def write(self, language: str, document: Document) -> Path:
        """Write a finished document for one language."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_path(language)
        path.write_text(
            json.dumps(document, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        return path
