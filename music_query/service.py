"""
Query orchestration: detector -> collaborators -> extractors -> assembler.

MusicQueryService.handle_query is the single entry point. Every failure,
expected or not, comes back as a MusicResponse with success=False and a
localized message; nothing but cancellation escapes it.
"""

import logging
import time
from typing import List, Optional

from . import constants, detector, extraction, formatting, keyword_tables, text_analysis
from .clients import (
    CollaboratorError,
    SearchOutcome,
    SearchRequest,
    TextGenerationClient,
    WebSearchClient,
    merge_outcomes,
)
from .config import ServiceConfig
from .models import (
    ContinuationLyrics,
    Intent,
    Language,
    MusicResponse,
    QueryAnalysis,
    ResultType,
    Script,
    SongInfo,
    StorySummary,
)
from .prompts import build_messages

logger = logging.getLogger(__name__)

# Factual SongInfo fields counted by the info success policy
INFO_FACT_FIELDS = [
    'artist', 'playback_singer', 'composer', 'lyricist', 'director', 'movie', 'year',
    'genre', 'album', 'record_label', 'duration', 'awards', 'legal_links',
]

MESSAGES = {
    'hindi': {
        'unknown_error': 'आपकी संगीत संबंधी अनुरोध समझ नहीं पाया। कृपया गीत का नाम बताएं।',
        'unknown_display': 'मैं आपकी संगीत संबंधी अनुरोध समझ नहीं पाया। कृपया गीत का नाम और आप क्या जानना चाहते हैं, यह स्पष्ट करें।',
        'internal_error': 'आपकी संगीत संबंधी अनुरोध को प्रोसेस करते समय त्रुटि हुई।',
        'internal_display': 'क्षमा करें, आपकी संगीत संबंधी अनुरोध को प्रोसेस करते समय त्रुटि हुई। कृपया फिर से कोशिश करें।',
        'info_error': '"{song}" के बारे में जानकारी नहीं मिली',
        'info_display': 'क्षमा करें, मैं "{song}" के बारे में जानकारी नहीं ढूंढ पाया। कृपया किसी अन्य गीत का नाम या सही स्पेलिंग की जांच करें।',
        'story_error': '"{song}" के लिए कहानी नहीं बना पाया',
        'story_display': 'क्षमा करें, मैं "{song}" के लिए कहानी नहीं बना पाया। कृपया किसी अन्य गीत का नाम आज़माएं।',
        'lyrics_error': '"{song}" के लिए नए बोल नहीं लिख पाया',
        'lyrics_display': 'क्षमा करें, मैं "{song}" के लिए नए बोल नहीं लिख पाया। कृपया किसी अन्य गीत का नाम आज़माएं।',
    },
    'english': {
        'empty_query': 'Please enter a song name or music query',
        'unknown_error': 'Could not understand your music request. Please specify a song name.',
        'unknown_display': "I couldn't understand your music request. Please specify a song name and what you'd like to know about it.",
        'internal_error': 'An error occurred while processing your music request.',
        'internal_display': 'Sorry, there was an error processing your music request. Please try again.',
        'info_error': 'Could not find information about "{song}"',
        'info_display': "Sorry, I couldn't find information about \"{song}\". Please try a different song or check the spelling.",
        'story_error': 'Could not create story for "{song}"',
        'story_display': "Sorry, I couldn't create a story for \"{song}\". Please try a different song.",
        'lyrics_error': 'Could not generate lyrics for "{song}"',
        'lyrics_display': "Sorry, I couldn't generate lyrics for \"{song}\". Please try a different song.",
    },
}


def count_extracted_facts(info: SongInfo) -> int:
    """Number of factual fields the extractors actually filled in."""
    return sum(1 for name in INFO_FACT_FIELDS if getattr(info, name))


def build_search_requests(song_name: str) -> List[SearchRequest]:
    """The four info query variants followed by the legal-links query."""
    requests = [
        SearchRequest(template.format(song=song_name), constants.SEARCH_CONSTANTS['INFO_RESULT_LIMIT'], True)
        for template in constants.INFO_SEARCH_TEMPLATES
    ]
    requests.append(SearchRequest(
        constants.LINKS_SEARCH_TEMPLATE.format(song=song_name),
        constants.SEARCH_CONSTANTS['LINKS_RESULT_LIMIT'],
        False,
    ))
    return requests


def assemble_song_info(song_name: str, script: Script, language: Language, info_outcomes: List[SearchOutcome],
                       link_outcomes: List[SearchOutcome], trusted_domains: Optional[List[str]] = None) -> SongInfo:
    """Build SongInfo from search outcomes; failed outcomes count as empty result sets."""
    snippets = merge_outcomes(info_outcomes)
    link_snippets = merge_outcomes(link_outcomes)
    fields = extraction.extract_song_fields(snippets)

    return SongInfo(
        title=song_name,
        language=language,
        awards=extraction.extract_awards(snippets),
        popularity_rating=extraction.extract_popularity(snippets),
        legal_links=extraction.extract_legal_links(link_snippets, trusted_domains),
        description=extraction.describe_song(song_name, script, snippets),
        detailed_info=extraction.extract_detailed_info(snippets),
        **fields,
    )


def build_story_summary(song_name: str, language: Language, summary: str) -> StorySummary:
    return StorySummary(
        title=song_name,
        language=language,
        summary=summary,
        themes=text_analysis.extract_themes(summary, language),
        mood=text_analysis.extract_mood(summary, language),
        characters=text_analysis.extract_characters(summary),
        cultural_context=text_analysis.extract_cultural_context(summary, language),
        historical_background=text_analysis.extract_historical_context(summary, language),
    )


def build_continuation_lyrics(song_name: str, language: Language, lyrics: str,
                              style: Optional[str] = None) -> ContinuationLyrics:
    verses = text_analysis.split_verses(lyrics)
    return ContinuationLyrics(
        original_song=song_name,
        language=language,
        new_verses=verses,
        style=style or keyword_tables.LYRICS_STYLE_LABELS[language.value],
        theme=text_analysis.extract_lyrics_theme(lyrics, language),
        rhythm_pattern=keyword_tables.RHYTHM_PATTERN_LABELS[language.value],
        rhyme_scheme=text_analysis.detect_rhyme_scheme(verses, language),
    )


class MusicQueryService:
    """Answers free-text song queries with facts, a story summary or new verses."""

    def __init__(self, config: Optional[ServiceConfig] = None, search_client: Optional[WebSearchClient] = None,
                 generation_client: Optional[TextGenerationClient] = None):
        self.config = config or ServiceConfig()
        self.search_client = search_client or WebSearchClient.from_config(self.config)
        self.generation_client = generation_client or TextGenerationClient.from_config(self.config)

    def analyze(self, query: str) -> QueryAnalysis:
        return detector.classify(query, self.config.known_songs)

    async def search_song_info(self, song_name: str, script: Script, language: Language) -> Optional[SongInfo]:
        """Fan out the info and link searches, then extract; None when the success policy is not met."""
        requests = build_search_requests(song_name)
        outcomes = await self.search_client.search_many(requests)

        failed = [o for o in outcomes if not o.ok]
        if failed:
            logger.info(f"{len(failed)}/{len(outcomes)} searches failed for '{song_name}'; continuing with partial results")

        info = assemble_song_info(song_name, script, language, outcomes[:-1], outcomes[-1:],
                                  self.config.trusted_domains)

        found = count_extracted_facts(info)
        if found < self.config.min_info_fields:
            logger.info(f"Only {found} facts found for '{song_name}' (minimum {self.config.min_info_fields})")
            return None
        return info

    async def generate_story_summary(self, song_name: str, language: Language) -> Optional[StorySummary]:
        settings = constants.GENERATION_SETTINGS['story']
        try:
            summary = await self.generation_client.complete(
                build_messages('story', song_name, language), settings['temperature'], settings['max_tokens'])
        except CollaboratorError as err:
            logger.error(f"Story generation failed for '{song_name}': {err}")
            return None
        return build_story_summary(song_name, language, summary)

    async def generate_continuation_lyrics(self, song_name: str, language: Language,
                                           style: Optional[str] = None) -> Optional[ContinuationLyrics]:
        settings = constants.GENERATION_SETTINGS['lyrics']
        try:
            lyrics = await self.generation_client.complete(
                build_messages('lyrics', song_name, language), settings['temperature'], settings['max_tokens'])
        except CollaboratorError as err:
            logger.error(f"Lyrics generation failed for '{song_name}': {err}")
            return None
        return build_continuation_lyrics(song_name, language, lyrics, style)

    async def handle_query(self, query: str, style: Optional[str] = None) -> MusicResponse:
        """Answer one query; style optionally overrides the lyrics style label. Failures are returned as data."""
        start_time = time.perf_counter()
        try:
            if not query or not query.strip():
                message = MESSAGES['english']['empty_query']
                return MusicResponse.fail(ResultType.INFO, message, message)

            analysis = self.analyze(query)
            messages = MESSAGES[analysis.preferred_language.value]

            if analysis.intent == Intent.UNKNOWN or not analysis.song_name:
                logger.info(f"Could not classify query: '{query[:200]}'")
                return MusicResponse.fail(ResultType.INFO, messages['unknown_error'], messages['unknown_display'])

            song_name = analysis.song_name
            language = analysis.preferred_language
            result_type = ResultType(analysis.intent.value)

            if result_type == ResultType.INFO:
                payload = await self.search_song_info(song_name, analysis.script, language)
            elif result_type == ResultType.STORY:
                payload = await self.generate_story_summary(song_name, language)
            else:
                payload = await self.generate_continuation_lyrics(song_name, language, style)

            if payload is None:
                return MusicResponse.fail(
                    result_type,
                    messages[f'{result_type.value}_error'].format(song=song_name),
                    messages[f'{result_type.value}_display'].format(song=song_name),
                )

            response = MusicResponse.ok(payload, formatting.format_payload(payload))
            logger.info(f"Handled {result_type.value} query for '{song_name}' "
                        f"in {time.perf_counter() - start_time:.2f}s")
            return response

        except Exception as e:
            logger.error(f"Error handling music query: {e}", exc_info=True)
            language = detector.detect_preferred_language(query) if isinstance(query, str) else Language.ENGLISH
            messages = MESSAGES[language.value]
            return MusicResponse.fail(ResultType.INFO, messages['internal_error'], messages['internal_display'])
