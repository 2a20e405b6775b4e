"""
Language and intent detection for free-text music queries.

Classifies a query by writing system (Devanagari, Latin or a mixture), decides
which language the answer should be written in, maps the query onto one of the
supported intents and pulls out the song title the user is asking about.
Nothing in here raises: the worst outcome is an UNKNOWN intent with an empty
song name.
"""

import logging
import re
from typing import Iterable, Optional

from . import constants, keyword_tables
from .matching import first_keyword, first_matching_label, first_matching_pattern_label
from .models import Intent, Language, QueryAnalysis, Script

logger = logging.getLogger(__name__)

_DEVANAGARI_RE = re.compile(keyword_tables.DEVANAGARI_PATTERN)
_SONG_NAME_RES = [re.compile(pattern, re.IGNORECASE) for pattern in keyword_tables.SONG_NAME_PATTERNS]


def detect_script(text: str) -> Script:
    """
    Classify text by its share of Devanagari characters.

    Args:
        text: Raw query text

    Returns:
        HINDI when Devanagari characters make up more than the threshold share of the
        non-whitespace characters, MIXED when some are present, ENGLISH otherwise
    """
    devanagari_count = len(_DEVANAGARI_RE.findall(text))
    total_count = len(re.sub(r"\s", "", text))

    if total_count and devanagari_count > total_count * constants.DEVANAGARI_THRESHOLD:
        return Script.HINDI
    if devanagari_count > 0:
        return Script.MIXED
    return Script.ENGLISH


def detect_preferred_language(query: str) -> Language:
    """Explicit language markers win (Hindi checked first); otherwise follow the script."""
    marked = first_matching_label(query.lower(), keyword_tables.LANGUAGE_MARKERS)
    if marked:
        return Language(marked)
    # Mixed-script queries are answered in Hindi
    return Language.ENGLISH if detect_script(query) == Script.ENGLISH else Language.HINDI


def classify_intent(query: str) -> Intent:
    """First pattern group (story, then lyrics, then info) with a match decides the intent."""
    label = first_matching_pattern_label(query.lower(), keyword_tables.INTENT_PATTERNS)
    return Intent(label) if label else Intent.UNKNOWN


def find_known_song(query: str, known_songs: Optional[Iterable[str]] = None) -> str:
    """Fallback lookup of a known title or artist as a case-insensitive substring."""
    songs = keyword_tables.KNOWN_SONGS if known_songs is None else known_songs
    return first_keyword(query, songs) or ''


def extract_song_name(query: str, known_songs: Optional[Iterable[str]] = None) -> str:
    """
    Pull a song title out of a query.

    Tries, in order: any quoted phrase, a song marker followed by a quoted phrase,
    a song marker followed by text up to a topic particle, a "for <name> song"
    phrase, and finally the known-songs table. The first non-empty trimmed
    candidate wins.
    """
    for pattern in _SONG_NAME_RES:
        match = pattern.search(query)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return find_known_song(query, known_songs)


def classify(query: str, known_songs: Optional[Iterable[str]] = None) -> QueryAnalysis:
    """Analyze a raw query into intent, script, preferred language and song name."""
    analysis = QueryAnalysis(
        intent=classify_intent(query),
        script=detect_script(query),
        song_name=extract_song_name(query, known_songs),
        preferred_language=detect_preferred_language(query),
        query=query.lower(),
    )
    logger.debug(f"Query analysis: intent={analysis.intent.value}, script={analysis.script.value}, "
                 f"song='{analysis.song_name}', language={analysis.preferred_language.value}")
    return analysis
