"""
Generic first-match helpers over the keyword tables.
"""

import re
from typing import Iterable, List, Optional, Sequence, Tuple

# Ordered (label, triggers) pairs
LabelGroups = Sequence[Tuple[str, Sequence[str]]]


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """True if any keyword occurs in text, ignoring case."""
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def first_keyword(text: str, keywords: Iterable[str]) -> Optional[str]:
    """Return the first keyword (in table order) that occurs in text, ignoring case."""
    lowered = text.lower()
    for keyword in keywords:
        if keyword.lower() in lowered:
            return keyword
    return None


def matching_keywords(text: str, keywords: Iterable[str], limit: Optional[int] = None) -> List[str]:
    """All keywords occurring in text, in table order, deduplicated and optionally capped."""
    lowered = text.lower()
    found: List[str] = []
    for keyword in keywords:
        if keyword.lower() in lowered and keyword not in found:
            found.append(keyword)
    return found[:limit] if limit is not None else found


def first_matching_label(text: str, groups: LabelGroups, default: str = '') -> str:
    """Label of the first group with any trigger occurring in text as a substring."""
    for label, triggers in groups:
        if contains_any(text, triggers):
            return label
    return default


def first_matching_pattern_label(text: str, groups: LabelGroups, default: str = '') -> str:
    """Label of the first group with any regex trigger matching text (case-insensitive)."""
    for label, patterns in groups:
        if any(re.search(pattern, text, re.IGNORECASE) for pattern in patterns):
            return label
    return default
