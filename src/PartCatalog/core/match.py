"""Case-insensitive matching helpers used by client-side predicates."""

from __future__ import annotations

from typing import Any


def normalize_text(value: Any) -> str:
    """Return ``value`` as trimmed, case-folded text (``None`` -> "")."""
    if value is None:
        return ""
    return str(value).strip().casefold()


def casefold_contains(haystack: Any, needle: Any) -> bool:
    """Check whether ``needle`` occurs in ``haystack`` ignoring case.

    An empty needle is contained in everything.
    """
    needle_text = normalize_text(needle)
    if not needle_text:
        return True
    if haystack is None:
        return False
    return needle_text in str(haystack).casefold()


def contains_any(haystack: Any, needles: tuple[str, ...]) -> bool:
    """Check whether any of the pre-folded ``needles`` occurs in ``haystack``."""
    text = "" if haystack is None else str(haystack).casefold()
    return any(needle in text for needle in needles)
