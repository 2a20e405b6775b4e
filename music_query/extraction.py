"""
Field extraction from web search snippets.

The extractors here read the free text of search results and pull out named
facts (singer, composer, year, awards, listening links, ...) with
keyword-anchored regular expressions. They are best-effort: the first
acceptable match in snippet order wins, there is no scoring, and a missing
fact is always the empty string or an empty list rather than an error.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence
from urllib.parse import urlsplit

from . import keyword_tables
from .constants import EXTRACTION_CONSTANTS
from .models import Script, Snippet

logger = logging.getLogger(__name__)

_VALUE = r"([^,\n.;]+)"
_YEAR_RE = re.compile(rf"(?<!\d){keyword_tables.YEAR_PATTERN}(?!\d)")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]")

DESCRIPTION_TEMPLATES = {
    'hindi': '"{song}" एक अत्यंत प्रसिद्ध और मधुर गीत है जो अपनी भावनात्मक गहराई और संगीत की मिठास के लिए जाना जाता है। यह गीत लोगों के दिलों में आज भी बसा हुआ है।',
    'english': '"{song}" is a renowned and melodious song celebrated for its emotional depth and musical sweetness. This timeless composition continues to resonate with audiences.',
    'mixed': '"{song}" is a beloved song that showcases the perfect blend of meaningful lyrics and beautiful melody, making it a favorite across generations.',
}
DESCRIPTION_EXTRA_SENTENCE = {
    'hindi': ' इस गीत के बारे में और जानकारी के अनुसार, यह विशेष रूप से अपनी अनूठी शैली के लिए प्रशंसित है।',
    'english': ' Additional information suggests this song is particularly praised for its unique style and composition.',
}


def _anchor_patterns(keyword: str) -> List[re.Pattern]:
    """The three anchors tried for each keyword: 'kw: value', 'kw by value', 'value kw'."""
    kw = re.escape(keyword.lower())
    return [
        re.compile(rf"{kw}[:\s-]+{_VALUE}", re.IGNORECASE),
        re.compile(rf"{kw}\s+by\s+{_VALUE}", re.IGNORECASE),
        re.compile(rf"{_VALUE}\s+{kw}", re.IGNORECASE),
    ]


def extract_field(snippets: Sequence[Snippet], keywords: Sequence[str]) -> str:
    """
    Extract a single named field from search snippets.

    Args:
        snippets: Search results in rank order
        keywords: Anchor keywords for the field, in priority order

    Returns:
        The first captured value (snippet x keyword x anchor order) whose trimmed length
        is strictly between the configured bounds, cut to its first few tokens; '' if none
    """
    min_length = EXTRACTION_CONSTANTS['MIN_FIELD_LENGTH']
    max_length = EXTRACTION_CONSTANTS['MAX_FIELD_LENGTH']
    max_tokens = EXTRACTION_CONSTANTS['MAX_FIELD_TOKENS']
    anchors = [(keyword, _anchor_patterns(keyword)) for keyword in keywords]

    for snippet in snippets:
        text = snippet.text.lower()
        for _, patterns in anchors:
            for pattern in patterns:
                match = pattern.search(text)
                if not match:
                    continue
                value = match.group(1).strip()
                if min_length < len(value) < max_length:
                    return ' '.join(value.split()[:max_tokens])
    return ''


def extract_year(snippets: Sequence[Snippet]) -> str:
    """First 19xx/20xx year token across all snippets."""
    for snippet in snippets:
        match = _YEAR_RE.search(snippet.text)
        if match:
            return match.group(0)
    return ''


def extract_awards(snippets: Sequence[Snippet], keywords: Optional[Iterable[str]] = None) -> List[str]:
    """Sentences mentioning an award keyword, deduplicated and capped."""
    award_keywords = list(keyword_tables.AWARD_KEYWORDS if keywords is None else keywords)
    awards: List[str] = []

    for snippet in snippets:
        text = snippet.text.lower()
        for keyword in award_keywords:
            keyword = keyword.lower()
            if keyword not in text:
                continue
            sentence = next((s for s in _SENTENCE_SPLIT_RE.split(text) if keyword in s), None)
            if sentence and sentence.strip() and sentence.strip() not in awards:
                awards.append(sentence.strip())

    return awards[:EXTRACTION_CONSTANTS['MAX_AWARDS']]


def extract_popularity(snippets: Sequence[Snippet], indicators: Optional[Iterable[str]] = None) -> str:
    """First popularity indicator found, capitalized; a neutral default otherwise."""
    popularity_indicators = list(keyword_tables.POPULARITY_INDICATORS if indicators is None else indicators)
    for snippet in snippets:
        text = snippet.text.lower()
        for indicator in popularity_indicators:
            if indicator.lower() in text:
                return indicator[:1].upper() + indicator[1:]
    return keyword_tables.DEFAULT_POPULARITY


def is_trusted_url(url: str, trusted_domains: Iterable[str]) -> bool:
    """True if the URL's host is one of the trusted domains or a subdomain of one."""
    try:
        host = (urlsplit(url.strip()).hostname or '').lower()
    except ValueError:
        return False
    if not host:
        return False
    return any(host == domain or host.endswith('.' + domain) for domain in trusted_domains)


def extract_legal_links(snippets: Sequence[Snippet], trusted_domains: Optional[Iterable[str]] = None) -> List[str]:
    """Listening/lyrics URLs on trusted domains, deduplicated and capped."""
    domains = [d.lower() for d in (keyword_tables.TRUSTED_DOMAINS if trusted_domains is None else trusted_domains)]
    links: List[str] = []
    for snippet in snippets:
        url = snippet.url.strip()
        if url and url not in links and is_trusted_url(url, domains):
            links.append(url)
    return links[:EXTRACTION_CONSTANTS['MAX_LEGAL_LINKS']]


def extract_detailed_info(snippets: Sequence[Snippet]) -> str:
    """Longer descriptions from the top results, joined."""
    top = snippets[:EXTRACTION_CONSTANTS['DETAILED_INFO_RESULTS']]
    min_length = EXTRACTION_CONSTANTS['DETAILED_INFO_MIN_DESCRIPTION']
    return ' '.join(s.description for s in top if len(s.description) > min_length).strip()


def describe_song(song_name: str, script: Script, snippets: Sequence[Snippet]) -> str:
    """Templated description, extended by one sentence when the top results carry enough context."""
    description = DESCRIPTION_TEMPLATES[Script(script).value].format(song=song_name)

    context = ' '.join(s.description for s in snippets[:EXTRACTION_CONSTANTS['CONTEXT_RESULTS']])
    context = context[:EXTRACTION_CONSTANTS['CONTEXT_MAX_CHARS']]
    if len(context) > EXTRACTION_CONSTANTS['CONTEXT_EXTRA_SENTENCE_THRESHOLD']:
        extra_key = 'hindi' if script == Script.HINDI else 'english'
        description += DESCRIPTION_EXTRA_SENTENCE[extra_key]
    return description


def extract_song_fields(snippets: Sequence[Snippet]) -> Dict[str, str]:
    """Run the field extractor once per keyword-table field; year falls back to the first year token."""
    fields = {name: extract_field(snippets, keywords) for name, keywords in keyword_tables.FIELD_KEYWORDS.items()}
    if not fields['year']:
        fields['year'] = extract_year(snippets)
    return fields
