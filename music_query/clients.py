"""
Clients for the external collaborators: a web search API and an
OpenAI-compatible chat completions API.

Search calls never raise to the caller. Each one resolves to a SearchOutcome
carrying either snippets or the error that stopped it, and merge_outcomes()
turns failed outcomes into empty snippet lists before the results are
combined. Generation failures raise CollaboratorError so the orchestrator can
report a typed, per-intent failure.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import aiohttp
from openai import APIError, APIStatusError, AsyncOpenAI

from .config import ServiceConfig
from .models import Snippet

logger = logging.getLogger(__name__)


class CollaboratorError(RuntimeError):
    """An external service call failed or returned nothing usable."""


@dataclass(frozen=True)
class SearchRequest:
    query: str
    limit: int
    related_keywords: bool = True


@dataclass(frozen=True)
class SearchOutcome:
    """Result of one search call: snippets on success, the error message otherwise."""
    query: str
    snippets: List[Snippet] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def merge_outcomes(outcomes: Sequence[SearchOutcome]) -> List[Snippet]:
    """Concatenate snippets in outcome order; failed outcomes contribute nothing."""
    merged: List[Snippet] = []
    for outcome in outcomes:
        merged.extend(outcome.snippets if outcome.ok else [])
    return merged


def parse_search_results(payload: Any) -> List[Snippet]:
    """Convert a search API JSON body into snippets, skipping anything malformed."""
    if not isinstance(payload, dict):
        return []
    results = payload.get('results')
    if not isinstance(results, list):
        return []
    return [
        Snippet(title=item.get('title'), description=item.get('description'), url=item.get('url'))
        for item in results if isinstance(item, dict)
    ]


class WebSearchClient:
    """Ranked web search through the RapidAPI Google search proxy."""

    def __init__(self, api_key: Optional[str], api_url: str, api_host: str, timeout: float):
        self.api_key = api_key
        self.api_url = api_url
        self.api_host = api_host
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ServiceConfig) -> 'WebSearchClient':
        return cls(config.search_api_key, config.search_api_url, config.search_api_host, config.timeout)

    def _headers(self) -> Dict[str, str]:
        return {
            'x-rapidapi-key': self.api_key or '',
            'x-rapidapi-host': self.api_host,
        }

    async def search(self, session: aiohttp.ClientSession, request: SearchRequest) -> List[Snippet]:
        """Run one search; raises on transport errors and non-200 status."""
        params = {
            'query': request.query,
            'limit': str(request.limit),
            'related_keywords': 'true' if request.related_keywords else 'false',
        }
        async with session.get(self.api_url, headers=self._headers(), params=params) as response:
            if response.status != 200:
                raise CollaboratorError(f"Search request failed with status {response.status}")
            payload = await response.json(content_type=None)
        return parse_search_results(payload)

    async def search_outcome(self, session: aiohttp.ClientSession, request: SearchRequest) -> SearchOutcome:
        """Run one search and capture any failure as data."""
        try:
            snippets = await self.search(session, request)
        except (aiohttp.ClientError, asyncio.TimeoutError, CollaboratorError, ValueError) as err:
            logger.warning(f"Search failed for '{request.query}': {err!r}")
            return SearchOutcome(query=request.query, error=str(err) or type(err).__name__)
        return SearchOutcome(query=request.query, snippets=snippets)

    async def search_many(self, requests: Sequence[SearchRequest]) -> List[SearchOutcome]:
        """
        Issue all searches concurrently and wait for every one of them.

        Individual failures become failed outcomes; they never abort the batch.
        Cancellation of the caller propagates.
        """
        if not self.api_key:
            logger.warning("Search API key not configured; skipping web search")
            return [SearchOutcome(query=r.query, error='search API key not configured') for r in requests]

        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            results = await asyncio.gather(
                *(self.search_outcome(session, request) for request in requests),
                return_exceptions=True,
            )

        outcomes = []
        for request, result in zip(requests, results):
            if isinstance(result, SearchOutcome):
                outcomes.append(result)
            elif isinstance(result, Exception):
                logger.warning(f"Unexpected search error for '{request.query}': {result!r}")
                outcomes.append(SearchOutcome(query=request.query, error=repr(result)))
            else:
                raise result
        return outcomes


def parse_completion(response: Any) -> str:
    """Generated text from a chat completion envelope."""
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as err:
        raise CollaboratorError(f"Malformed completion: {err}") from err
    if not content or not content.strip():
        raise CollaboratorError("Empty completion")
    return content


class TextGenerationClient:
    """
    Chat completions against any OpenAI-compatible endpoint (Groq by default).

    A fresh AsyncOpenAI client is opened per call so no connection pool outlives
    the event loop that created it; tests may inject a ready client instead.
    """

    def __init__(self, api_key: Optional[str], base_url: str, model: str, timeout: float,
                 client: Optional[AsyncOpenAI] = None):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_config(cls, config: ServiceConfig) -> 'TextGenerationClient':
        return cls(config.llm_api_key, config.llm_base_url, config.llm_model, config.timeout)

    @property
    def available(self) -> bool:
        return self._client is not None or bool(self.api_key)

    async def _create(self, client: AsyncOpenAI, messages: List[Dict[str, str]], temperature: float,
                      max_tokens: int) -> Any:
        try:
            return await client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APIStatusError as err:
            raise CollaboratorError(f"HTTP {err.status_code}: {err.message}") from err
        except APIError as err:
            raise CollaboratorError(f"Generation request failed: {err}") from err

    async def complete(self, messages: List[Dict[str, str]], temperature: float, max_tokens: int) -> str:
        """One completion call; any failure raises CollaboratorError."""
        if not self.available:
            raise CollaboratorError("Text generation API key not configured")

        if self._client is not None:
            response = await self._create(self._client, messages, temperature, max_tokens)
        else:
            async with AsyncOpenAI(api_key=self.api_key, base_url=self.base_url,
                                   timeout=self.timeout, max_retries=0) as client:
                response = await self._create(client, messages, temperature, max_tokens)

        return parse_completion(response)
