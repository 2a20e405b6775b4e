"""
Keyword-table analysis of generated story summaries and verses.

Same first-match style as the snippet extractors, but run over text produced
by the generation collaborator. Every label comes back in the requested
response language.
"""

import re
from typing import List

from . import keyword_tables
from .constants import ANALYSIS_CONSTANTS
from .matching import contains_any, first_matching_label, matching_keywords
from .models import Language

_YEAR_RE = re.compile(rf"(?<!\d){keyword_tables.YEAR_PATTERN}(?!\d)")
_VERSE_BREAK_RE = re.compile(r"\n\s*\n+")


def extract_themes(summary: str, language: Language) -> List[str]:
    return matching_keywords(summary, keyword_tables.THEME_KEYWORDS[language.value],
                             limit=ANALYSIS_CONSTANTS['MAX_THEMES'])


def extract_mood(summary: str, language: Language) -> str:
    return first_matching_label(summary, keyword_tables.MOOD_GROUPS[language.value],
                                default=keyword_tables.DEFAULT_MOOD[language.value])


def extract_characters(summary: str) -> List[str]:
    return matching_keywords(summary, keyword_tables.CHARACTER_INDICATORS,
                             limit=ANALYSIS_CONSTANTS['MAX_CHARACTERS'])


def extract_cultural_context(summary: str, language: Language) -> str:
    labels = keyword_tables.CULTURAL_LABELS[language.value]
    if contains_any(summary, keyword_tables.CULTURAL_KEYWORDS[language.value]):
        return labels['rooted']
    return labels['general']


def extract_historical_context(summary: str, language: Language) -> str:
    """
    Era label for a summary.

    The first year mentioned decides when it falls in a known era range; otherwise
    any era keyword marks the song as historically significant.
    """
    labels = keyword_tables.HISTORICAL_LABELS[language.value]

    match = _YEAR_RE.search(summary)
    if match:
        year = int(match.group(0))
        for (start, end), era in keyword_tables.ERA_RANGES:
            if start <= year <= end:
                return labels[era]

    if contains_any(summary, keyword_tables.ERA_KEYWORDS[language.value]):
        return labels['significant']
    return labels['contemporary']


def extract_lyrics_theme(lyrics: str, language: Language) -> str:
    return first_matching_label(lyrics, keyword_tables.LYRIC_THEME_GROUPS[language.value],
                                default=keyword_tables.DEFAULT_LYRIC_THEME[language.value])


def split_verses(lyrics: str) -> List[str]:
    """Split generated text on blank lines into trimmed, non-empty verses (capped)."""
    verses = [verse.strip() for verse in _VERSE_BREAK_RE.split(lyrics)]
    return [verse for verse in verses if verse][:ANALYSIS_CONSTANTS['MAX_VERSES']]


def detect_rhyme_scheme(verses: List[str], language: Language) -> str:
    """Line-count heuristic on the first verse."""
    labels = keyword_tables.RHYME_SCHEME_LABELS[language.value]
    if not verses:
        return labels['free']

    lines = [line for line in verses[0].split('\n') if line.strip()]
    if len(lines) >= ANALYSIS_CONSTANTS['ABAB_MIN_LINES']:
        return labels['abab']
    if len(lines) >= ANALYSIS_CONSTANTS['AA_MIN_LINES']:
        return labels['aa']
    return labels['mixed']
