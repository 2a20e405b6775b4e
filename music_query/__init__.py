"""
Music Query Assistant: answers free-text questions about (mostly Hindi film) songs
with factual lookups, story-style summaries or newly written verses.

  from music_query import MusicQueryService
  response = asyncio.run(MusicQueryService().handle_query('"Lag ja gale" information'))
"""

from .config import ServiceConfig
from .models import ContinuationLyrics, MusicResponse, QueryAnalysis, SongInfo, StorySummary
from .service import MusicQueryService

__version__ = "0.1.0"
