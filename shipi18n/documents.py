#!/usr/bin/env python3
"""
Locale document utilities.

A locale document is a nested dict whose leaves are scalars or lists.
Lists are opaque leaves: they are never descended into, diffed or merged
element-wise.

Flattening uses dot-notation paths ("nav.home"), so
unflatten(flatten(doc)) == doc holds for any document whose keys contain no
literal dot.
"""

import copy
from typing import Any, Iterator, Sequence

Document = dict[str, Any]


def is_blank(value: Any) -> bool:
    """A value counts as untranslated when it is None or an empty string."""
    return value is None or value == ""


def iter_leaves(doc: Document, path: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], Any]]:
    """
    Yield (path, value) for every leaf of a nested document.

    Args:
        doc: Nested document
        path: Path prefix (used for recursion)

    Yields:
        Tuples of key segments and the leaf value
    """
    for key, value in doc.items():
        new_path = path + (key,)
        if isinstance(value, dict):
            yield from iter_leaves(value, new_path)
        else:
            yield new_path, value


def flatten(doc: Document) -> dict[str, Any]:
    """
    Flatten a nested document into dot-notation keys.

    Args:
        doc: Nested document

    Returns:
        Flat map of "a.b.c" -> leaf value
    """
    return {".".join(path): value for path, value in iter_leaves(doc)}


def unflatten(flat: dict[str, Any]) -> Document:
    """
    Rebuild a nested document from dot-notation keys.

    Args:
        flat: Flat map of "a.b.c" -> leaf value

    Returns:
        Nested document
    """
    result: Document = {}
    for key, value in flat.items():
        set_path(result, key.split("."), value)
    return result


def get_path(doc: Document, path: Sequence[str], default: Any = None) -> Any:
    """Look up the value at a key path, or default when any segment is missing."""
    current: Any = doc
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def set_path(doc: Document, path: Sequence[str], value: Any) -> None:
    """
    Set value at nested path, creating intermediate dicts as needed.

    A non-dict value sitting on an intermediate segment is replaced by a dict.

    Args:
        doc: Root document (modified in place)
        path: Key segments to traverse
        value: Value to set at path
    """
    current = doc
    for key in path[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]
    current[path[-1]] = value


def count_keys(doc: Document) -> int:
    """Count leaf keys in a nested document."""
    return sum(1 for _ in iter_leaves(doc))


def find_missing_keys(source: Document, target: Document) -> Document:
    """
    Find keys present in source but absent in target, or blank in target
    while the source value is not blank.

    Recurses only where both sides hold a dict at the same path; anything else
    is compared as a leaf, so a list or scalar is either missing or not.

    Args:
        source: Source document
        target: Target document (e.g. an existing translation)

    Returns:
        Nested document shaped like source, holding the source values of the
        missing keys
    """
    missing: Document = {}
    for key, value in source.items():
        present = isinstance(target, dict) and key in target
        target_value = target[key] if present else None

        if isinstance(value, dict) and isinstance(target_value, dict):
            nested = find_missing_keys(value, target_value)
            if nested:
                missing[key] = nested
        elif not present or (is_blank(target_value) and not is_blank(value)):
            missing[key] = copy.deepcopy(value)

    return missing


def deep_merge(target: Document, source: Document) -> Document:
    """
    Merge source into target without modifying either.

    Nested dicts are merged recursively. Lists and scalars from source
    replace the target value wholesale. Keys only in target are kept.

    Args:
        target: Base document (e.g. previously saved translation)
        source: Document whose values win (e.g. new translations)

    Returns:
        New merged document
    """
    result = copy.deepcopy(target)
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result
