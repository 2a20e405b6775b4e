"""
Value records passed between the detector, extractors, assembler and callers.

All records are frozen pydantic models that live for a single query. Optional
factual fields use the empty string for "not found" and sequences default to
empty lists, so callers never have to distinguish None from absent.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Intent(str, Enum):
    INFO = 'info'
    STORY = 'story'
    LYRICS = 'lyrics'
    UNKNOWN = 'unknown'


class Script(str, Enum):
    HINDI = 'hindi'
    ENGLISH = 'english'
    MIXED = 'mixed'


class Language(str, Enum):
    HINDI = 'hindi'
    ENGLISH = 'english'


class ResultType(str, Enum):
    INFO = 'info'
    STORY = 'story'
    LYRICS = 'lyrics'


class Snippet(BaseModel):
    """One search result item."""
    model_config = ConfigDict(frozen=True)

    title: str = ''
    description: str = ''
    url: str = ''

    @field_validator('title', 'description', 'url', mode='before')
    @classmethod
    def _none_to_empty(cls, value):
        return '' if value is None else str(value)

    @property
    def text(self) -> str:
        """Title and description joined the way the extractors read them."""
        return f"{self.title} {self.description}"


class QueryAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    intent: Intent
    script: Script
    song_name: str = ''
    preferred_language: Language
    query: str = ''  # lower-cased raw query


class SongInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal['info'] = 'info'
    title: str
    language: Language
    artist: str = ''
    composer: str = ''
    lyricist: str = ''
    director: str = ''
    movie: str = ''
    year: str = ''
    genre: str = ''
    duration: str = ''
    album: str = ''
    record_label: str = ''
    playback_singer: str = ''
    awards: List[str] = Field(default_factory=list, max_length=3)
    popularity_rating: str = ''
    legal_links: List[str] = Field(default_factory=list, max_length=5)
    description: str = ''
    detailed_info: str = ''


class StorySummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal['story'] = 'story'
    title: str
    language: Language
    summary: str
    themes: List[str] = Field(default_factory=list, max_length=4)
    mood: str = ''
    characters: List[str] = Field(default_factory=list, max_length=3)
    cultural_context: str = ''
    historical_background: str = ''


class ContinuationLyrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal['lyrics'] = 'lyrics'
    original_song: str
    language: Language
    new_verses: List[str] = Field(default_factory=list, max_length=3)
    style: str = ''
    theme: str = ''
    rhythm_pattern: str = ''
    rhyme_scheme: str = ''

    @field_validator('new_verses')
    @classmethod
    def _verses_not_blank(cls, verses: List[str]) -> List[str]:
        if any(not verse.strip() for verse in verses):
            raise ValueError('verses must be non-empty after trimming')
        return verses


Payload = Annotated[Union[SongInfo, StorySummary, ContinuationLyrics], Field(discriminator='kind')]


class MusicResponse(BaseModel):
    """Terminal artifact handed to the presentation layer."""
    model_config = ConfigDict(frozen=True)

    success: bool
    type: ResultType
    data: Optional[Payload] = None
    error: Optional[str] = None
    formatted_response: str = ''

    @model_validator(mode='after')
    def _check_shape(self):
        if self.success:
            if self.data is None:
                raise ValueError('successful response requires data')
            if self.data.kind != self.type.value:
                raise ValueError(f"data kind {self.data.kind!r} does not match type {self.type.value!r}")
        elif self.data is not None:
            raise ValueError('failed response must not carry data')
        return self

    @classmethod
    def ok(cls, payload: Union[SongInfo, StorySummary, ContinuationLyrics], formatted: str) -> 'MusicResponse':
        return cls(success=True, type=ResultType(payload.kind), data=payload, formatted_response=formatted)

    @classmethod
    def fail(cls, result_type: ResultType, error: str, formatted: str) -> 'MusicResponse':
        return cls(success=False, type=result_type, error=error, formatted_response=formatted)
