"""
Bilingual display formatting for assembled music responses.

Each payload type has a fixed, ordered list of "if the field is present,
append a labeled line" rules. Labels come from per-language tables so the
output language is decided solely by the payload's language field. All
functions are pure.
"""

from typing import Union
from urllib.parse import urlsplit

from .constants import FORMAT_CONSTANTS
from .models import ContinuationLyrics, MusicResponse, SongInfo, StorySummary

SONG_INFO_LABELS = {
    'hindi': {
        'header': '🎵 **गीत की विस्तृत जानकारी: "{title}"**',
        'artist': '👤 **मुख्य गायक/गायिका:**',
        'playback_singer': '🎤 **प्लेबैक सिंगर:**',
        'composer': '🎼 **संगीत निर्देशक:**',
        'lyricist': '✍️ **गीतकार:**',
        'director': '🎬 **फिल्म निर्देशक:**',
        'movie': '🎭 **फिल्म:**',
        'year': '📅 **रिलीज़ वर्ष:**',
        'album': '💿 **एल्बम:**',
        'genre': '🎵 **शैली:**',
        'duration': '⏱️ **अवधि:**',
        'record_label': '🏷️ **रिकॉर्ड लेबल:**',
        'popularity_rating': '⭐ **लोकप्रियता:**',
        'awards': '🏆 **पुरस्कार और सम्मान:**',
        'description': '📝 **विवरण:**',
        'legal_links': '🔗 **गीत सुनने और बोल देखने के लिए:**',
        'detailed_info': '📖 **अतिरिक्त जानकारी:**',
    },
    'english': {
        'header': '🎵 **Comprehensive Song Information: "{title}"**',
        'artist': '👤 **Main Artist:**',
        'playback_singer': '🎤 **Playback Singer:**',
        'composer': '🎼 **Music Director:**',
        'lyricist': '✍️ **Lyricist:**',
        'director': '🎬 **Film Director:**',
        'movie': '🎭 **Movie:**',
        'year': '📅 **Release Year:**',
        'album': '💿 **Album:**',
        'genre': '🎵 **Genre:**',
        'duration': '⏱️ **Duration:**',
        'record_label': '🏷️ **Record Label:**',
        'popularity_rating': '⭐ **Popularity:**',
        'awards': '🏆 **Awards and Recognition:**',
        'description': '📝 **Description:**',
        'legal_links': '🔗 **Listen to the song and find lyrics at:**',
        'detailed_info': '📖 **Additional Information:**',
    },
}

# Single-line fields in display order
SONG_INFO_LINE_FIELDS = [
    'artist', 'playback_singer', 'composer', 'lyricist', 'director', 'movie', 'year',
    'album', 'genre', 'duration', 'record_label', 'popularity_rating',
]

STORY_LABELS = {
    'hindi': {
        'header': '📖 **गीत की कहानी: "{title}"**',
        'themes': '🎭 **मुख्य विषय:**',
        'mood': '💫 **भावनात्मक रंग:**',
        'characters': '👥 **मुख्य पात्र:**',
        'cultural_context': '🏛️ **सांस्कृतिक संदर्भ:**',
        'historical_background': '📚 **ऐतिहासिक पृष्ठभूमि:**',
    },
    'english': {
        'header': '📖 **Song Story: "{title}"**',
        'themes': '🎭 **Main Themes:**',
        'mood': '💫 **Emotional Tone:**',
        'characters': '👥 **Main Characters:**',
        'cultural_context': '🏛️ **Cultural Context:**',
        'historical_background': '📚 **Historical Background:**',
    },
}

LYRICS_LABELS = {
    'hindi': {
        'header': '🎤 **"{title}" की शैली में नए मौलिक श्लोक**',
        'disclaimer': '*ये पूरी तरह से मौलिक रचनाएं हैं जो मूल गीत से प्रेरित हैं*',
        'verse': 'श्लोक',
        'technical': '📊 **तकनीकी विवरण:**',
        'style': '🎨 **संगीत शैली:**',
        'theme': '🎯 **मुख्य विषय:**',
        'rhythm_pattern': '🎵 **छंद पैटर्न:**',
        'rhyme_scheme': '🎼 **तुकांत योजना:**',
    },
    'english': {
        'header': '🎤 **New Original Verses in the Style of "{title}"**',
        'disclaimer': '*These are completely original compositions inspired by the original song*',
        'verse': 'Verse',
        'technical': '📊 **Technical Details:**',
        'style': '🎨 **Musical Style:**',
        'theme': '🎯 **Main Theme:**',
        'rhythm_pattern': '🎵 **Rhythm Pattern:**',
        'rhyme_scheme': '🎼 **Rhyme Scheme:**',
    },
}

DEFAULT_FAILURE_TEXT = 'Sorry, I could not process your music request.'


def link_label(url: str) -> str:
    """Capitalized bare hostname for display; the raw URL when it cannot be parsed."""
    try:
        host = urlsplit(url).hostname or ''
    except ValueError:
        return url
    if not host:
        return url
    if host.startswith('www.'):
        host = host[len('www.'):]
    return host[:1].upper() + host[1:]


def format_song_info(info: SongInfo) -> str:
    labels = SONG_INFO_LABELS[info.language.value]
    formatted = labels['header'].format(title=info.title) + "\n\n"

    for field in SONG_INFO_LINE_FIELDS:
        value = getattr(info, field)
        if not value:
            continue
        if field == 'playback_singer' and value == info.artist:
            continue
        formatted += f"{labels[field]} {value}\n"

    if info.awards:
        formatted += f"\n{labels['awards']}\n"
        for award in info.awards:
            formatted += f"• {award}\n"

    if info.description:
        formatted += f"\n{labels['description']}\n{info.description}\n"

    if info.legal_links:
        formatted += f"\n{labels['legal_links']}\n"
        for link in info.legal_links:
            formatted += f"• {link_label(link)}: {link}\n"

    if len(info.detailed_info) > FORMAT_CONSTANTS['DETAILED_INFO_MIN_LENGTH']:
        preview = info.detailed_info[:FORMAT_CONSTANTS['DETAILED_INFO_PREVIEW']]
        formatted += f"\n{labels['detailed_info']}\n{preview}...\n"

    return formatted


def format_story_summary(story: StorySummary) -> str:
    labels = STORY_LABELS[story.language.value]
    formatted = labels['header'].format(title=story.title) + "\n\n"
    formatted += f"{story.summary}\n\n"

    if story.themes:
        formatted += f"{labels['themes']} {', '.join(story.themes)}\n"
    # Mood is always shown
    formatted += f"{labels['mood']} {story.mood}\n"
    if story.characters:
        formatted += f"{labels['characters']} {', '.join(story.characters)}\n"
    if story.cultural_context:
        formatted += f"{labels['cultural_context']} {story.cultural_context}\n"
    if story.historical_background:
        formatted += f"{labels['historical_background']} {story.historical_background}\n"

    return formatted


def format_continuation_lyrics(lyrics: ContinuationLyrics) -> str:
    labels = LYRICS_LABELS[lyrics.language.value]
    formatted = labels['header'].format(title=lyrics.original_song) + "\n\n"
    formatted += f"{labels['disclaimer']}\n\n"

    for index, verse in enumerate(lyrics.new_verses, start=1):
        formatted += f"**{labels['verse']} {index}:**\n\n{verse}\n\n---\n\n"

    formatted += f"{labels['technical']}\n"
    formatted += f"{labels['style']} {lyrics.style}\n"
    formatted += f"{labels['theme']} {lyrics.theme}\n"
    if lyrics.rhythm_pattern:
        formatted += f"{labels['rhythm_pattern']} {lyrics.rhythm_pattern}\n"
    if lyrics.rhyme_scheme:
        formatted += f"{labels['rhyme_scheme']} {lyrics.rhyme_scheme}\n"

    return formatted


def format_payload(payload: Union[SongInfo, StorySummary, ContinuationLyrics]) -> str:
    """Dispatch on the payload type."""
    if isinstance(payload, SongInfo):
        return format_song_info(payload)
    if isinstance(payload, StorySummary):
        return format_story_summary(payload)
    if isinstance(payload, ContinuationLyrics):
        return format_continuation_lyrics(payload)
    raise TypeError(f"Unsupported payload type: {type(payload).__name__}")


def format_music_response(response: MusicResponse) -> str:
    """Display text for a response; failures show their error message."""
    if not response.success or response.data is None:
        return response.error or DEFAULT_FAILURE_TEXT
    return format_payload(response.data)
