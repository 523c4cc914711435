"""
Key path helpers for hierarchical configuration.

Configuration keys are colon-delimited paths (``Logging:LogLevel:Default``)
compared case-insensitively, so ``logging:loglevel`` and ``Logging:LogLevel``
address the same value.
"""

import typing as _typing

KEY_DELIMITER = ":"
"""Separator between segments of a configuration key path."""


def normalize_key(key: str) -> str:
    """Return the comparison form of a key (case-folded)."""
    return key.casefold()


def combine_path(*segments: str | None) -> str:
    """
    Join path segments with the key delimiter.

    Empty and ``None`` segments are skipped, so ``combine_path(None, "A")``
    is ``"A"``.
    """
    return KEY_DELIMITER.join(s for s in segments if s)


def get_section_key(path: str) -> str:
    """Return the last segment of a key path."""
    if not path:
        return path
    return path.rsplit(KEY_DELIMITER, 1)[-1]


def child_segments(
    keys: _typing.Iterable[str],
    parent_path: str | None = None,
) -> list[str]:
    """
    Collect the distinct immediate child segments below ``parent_path``.

    Segments keep the casing of the first key that introduced them and are
    returned in first-seen order.

    Args:
        keys: Full key paths to scan.
        parent_path: Path to list children of. None means the root.

    Returns:
        Child segment names, without duplicates (case-insensitive).
    """
    # Whole segments are compared; casefolding may change their length
    parent = (
        [normalize_key(s) for s in parent_path.split(KEY_DELIMITER)] if parent_path else []
    )
    depth = len(parent)
    seen: set[str] = set()
    segments: list[str] = []
    for key in keys:
        parts = key.split(KEY_DELIMITER)
        if len(parts) <= depth:
            continue
        if [normalize_key(p) for p in parts[:depth]] != parent:
            continue
        segment = parts[depth]
        if not segment:
            continue
        folded = normalize_key(segment)
        if folded not in seen:
            seen.add(folded)
            segments.append(segment)
    return segments
