"""
Runtime configuration for the music query service.

Credentials and endpoints are injected from the environment at startup; the
heuristic allow-lists default to the tables in keyword_tables but can be
swapped per instance.
"""

import logging
import os
from typing import Dict, List, Optional

from . import constants, keyword_tables

logger = logging.getLogger(__name__)


def _mask(secret: Optional[str]) -> Optional[str]:
    if not secret:
        return None
    return f"{secret[:4]}…" if len(secret) > 8 else "****"


class ServiceConfig:
    """Configuration class for collaborator endpoints, limits and heuristic data."""

    def __init__(self,
        # Web search collaborator
        search_api_key: Optional[str] = None,
        search_api_url: str = constants.DEFAULT_SEARCH_API_URL,
        search_api_host: str = constants.DEFAULT_SEARCH_API_HOST,

        # Text generation collaborator
        llm_api_key: Optional[str] = None,
        llm_base_url: str = constants.DEFAULT_LLM_BASE_URL,
        llm_model: str = constants.DEFAULT_LLM_MODEL,

        # Per-call timeout in seconds (applies to every collaborator request)
        timeout: float = constants.DEFAULT_TIMEOUT_SECONDS,

        # Info path success policy: minimum number of extracted factual fields
        # (0 keeps an all-empty result as a degraded success)
        min_info_fields: int = 0,

        # Swappable heuristic data
        known_songs: Optional[List[str]] = None,
        trusted_domains: Optional[List[str]] = None,
        ):
            """Initialize service configuration with provided values."""
            if timeout <= 0:
                raise ValueError(f"timeout must be positive, got {timeout}")
            if min_info_fields < 0:
                raise ValueError(f"min_info_fields must be non-negative, got {min_info_fields}")

            self.search_api_key = search_api_key
            self.search_api_url = search_api_url
            self.search_api_host = search_api_host

            self.llm_api_key = llm_api_key
            self.llm_base_url = llm_base_url
            self.llm_model = llm_model

            self.timeout = timeout
            self.min_info_fields = min_info_fields

            self.known_songs = list(known_songs) if known_songs is not None else list(keyword_tables.KNOWN_SONGS)
            self.trusted_domains = list(trusted_domains) if trusted_domains is not None else list(keyword_tables.TRUSTED_DOMAINS)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'ServiceConfig':
        """Build a configuration from environment variables."""
        env = os.environ if environ is None else environ

        config = cls(
            search_api_key=env.get('SEARCH_API_KEY') or None,
            search_api_url=env.get('SEARCH_API_URL', constants.DEFAULT_SEARCH_API_URL),
            search_api_host=env.get('SEARCH_API_HOST', constants.DEFAULT_SEARCH_API_HOST),
            llm_api_key=env.get('LLM_API_KEY') or env.get('GROQ_API_KEY') or None,
            llm_base_url=env.get('LLM_BASE_URL', constants.DEFAULT_LLM_BASE_URL),
            llm_model=env.get('LLM_MODEL', constants.DEFAULT_LLM_MODEL),
            timeout=float(env.get('MUSIC_QUERY_TIMEOUT', constants.DEFAULT_TIMEOUT_SECONDS)),
            min_info_fields=int(env.get('MUSIC_QUERY_MIN_INFO_FIELDS', 0)),
        )

        if not config.search_api_key:
            logger.warning("SEARCH_API_KEY not set. Song information lookups will return empty results.")
        if not config.llm_api_key:
            logger.warning("LLM_API_KEY not set. Story and lyrics generation will be disabled.")
        return config

    def to_dict(self) -> Dict:
        """Convert config to dictionary format with credentials masked."""
        return {
            'search_api_key': _mask(self.search_api_key),
            'search_api_url': self.search_api_url,
            'search_api_host': self.search_api_host,
            'llm_api_key': _mask(self.llm_api_key),
            'llm_base_url': self.llm_base_url,
            'llm_model': self.llm_model,
            'timeout': self.timeout,
            'min_info_fields': self.min_info_fields,
            'known_songs': list(self.known_songs),
            'trusted_domains': list(self.trusted_domains),
        }
