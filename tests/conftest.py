"""Shared pytest fixtures for music_query tests."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

import pytest

from music_query.clients import CollaboratorError, SearchOutcome, SearchRequest
from music_query.models import Snippet


class FakeSearchClient:
    """Stands in for WebSearchClient; returns canned outcomes and records requests."""

    def __init__(self, outcome_for: Optional[Callable[[SearchRequest], SearchOutcome]] = None):
        self.outcome_for = outcome_for or (lambda request: SearchOutcome(query=request.query))
        self.calls: List[List[SearchRequest]] = []

    async def search_many(self, requests: Sequence[SearchRequest]) -> List[SearchOutcome]:
        self.calls.append(list(requests))
        return [self.outcome_for(request) for request in requests]


class FakeGenerationClient:
    """Stands in for TextGenerationClient; returns fixed text or raises CollaboratorError."""

    def __init__(self, text: str = '', error: Optional[str] = None):
        self.text = text
        self.error = error
        self.calls: List[Dict] = []

    async def complete(self, messages, temperature, max_tokens) -> str:
        self.calls.append({'messages': messages, 'temperature': temperature, 'max_tokens': max_tokens})
        if self.error:
            raise CollaboratorError(self.error)
        return self.text


@pytest.fixture
def info_snippets() -> List[Snippet]:
    return [
        Snippet(
            title="Tum Hi Ho - Aashiqui 2",
            description="Singer: Arijit Singh, music by Mithoon. Released in 2013, the song won the "
                        "Filmfare Award for Best Music.",
            url="https://en.wikipedia.org/wiki/Tum_Hi_Ho",
        ),
        Snippet(
            title="Tum Hi Ho lyrics",
            description="An evergreen romantic ballad from the film Aashiqui 2.",
            url="https://www.youtube.com/watch?v=Umqb9KENgmk",
        ),
    ]


@pytest.fixture
def link_snippets() -> List[Snippet]:
    return [
        Snippet(title="Tum Hi Ho", url="https://www.youtube.com/watch?v=Umqb9KENgmk"),
        Snippet(title="Tum Hi Ho", url="https://genius.com/Arijit-singh-tum-hi-ho-lyrics"),
        Snippet(title="Tum Hi Ho", url="https://en.wikipedia.org/wiki/Tum_Hi_Ho"),
    ]


@pytest.fixture
def search_client_with_results(info_snippets, link_snippets) -> FakeSearchClient:
    """Info variants return info_snippets; the site-restricted links query returns link_snippets."""
    def outcome_for(request: SearchRequest) -> SearchOutcome:
        snippets = link_snippets if 'site:' in request.query else info_snippets
        return SearchOutcome(query=request.query, snippets=snippets)
    return FakeSearchClient(outcome_for)


@pytest.fixture
def failing_search_client() -> FakeSearchClient:
    return FakeSearchClient(lambda request: SearchOutcome(query=request.query, error='network down'))
