import asyncio

import pytest

from music_query import extraction, formatting
from music_query.config import ServiceConfig
from music_query.models import Language, ResultType
from music_query.prompts import STORY_PROMPTS
from music_query.service import MESSAGES, MusicQueryService, build_search_requests

from .conftest import FakeGenerationClient, FakeSearchClient

STORY_TEXT = (
    "यह प्रेम की एक कोमल कहानी है जो 1960 के दशक की भारतीय परंपरा में रची बसी है। "
    "नायक अपनी प्रेमिका से आखिरी बार मिलने का अनुरोध करता है।"
)
LYRICS_TEXT = (
    "In the quiet of the night\nyour heart still calls to mine\nevery star a borrowed light\nevery word a line\n\n"
    "Second verse begins\nand carries on\n\n"
    "Third verse\n\n"
    "Fourth verse is dropped"
)


def make_service(search_client=None, generation_client=None, **config):
    return MusicQueryService(
        ServiceConfig(**config),
        search_client=search_client or FakeSearchClient(),
        generation_client=generation_client or FakeGenerationClient(),
    )


def test_search_requests_fan_out():
    requests = build_search_requests("tum hi ho")

    assert len(requests) == 5
    assert all('"tum hi ho"' in r.query for r in requests)
    assert [r.limit for r in requests] == [10, 10, 10, 10, 8]
    assert requests[-1].related_keywords is False
    assert 'site:genius.com' in requests[-1].query


class TestRejectedQueries:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   "])
    async def test_empty_query(self, query):
        search, generation = FakeSearchClient(), FakeGenerationClient()
        response = await make_service(search, generation).handle_query(query)

        assert not response.success
        assert response.type == ResultType.INFO
        assert response.error == 'Please enter a song name or music query'
        assert search.calls == [] and generation.calls == []

    @pytest.mark.asyncio
    async def test_unknown_intent_makes_no_collaborator_calls(self):
        search, generation = FakeSearchClient(), FakeGenerationClient()
        response = await make_service(search, generation).handle_query("tell me something")

        assert not response.success
        assert response.type == ResultType.INFO
        assert response.error == MESSAGES['english']['unknown_error']
        assert response.formatted_response == MESSAGES['english']['unknown_display']
        assert search.calls == [] and generation.calls == []

    @pytest.mark.asyncio
    async def test_missing_song_name_answered_in_hindi(self):
        generation = FakeGenerationClient()
        response = await make_service(generation_client=generation).handle_query("कुछ बताओ")

        assert not response.success
        assert response.error == MESSAGES['hindi']['unknown_error']
        assert generation.calls == []


class TestInfoQueries:
    @pytest.mark.asyncio
    async def test_extracts_fields_from_search_results(self, search_client_with_results):
        service = make_service(search_client_with_results)
        response = await service.handle_query('find information about "tum hi ho"')

        assert response.success
        assert response.type == ResultType.INFO
        info = response.data
        assert info.title == "tum hi ho"
        assert info.language == Language.ENGLISH
        assert info.artist == "arijit singh"
        assert "2013" in info.year
        assert info.awards == ["released in 2013, the song won the filmfare award for best music"]
        assert info.popularity_rating == "Evergreen"
        assert info.legal_links == [
            "https://www.youtube.com/watch?v=Umqb9KENgmk",
            "https://genius.com/Arijit-singh-tum-hi-ho-lyrics",
        ]
        assert response.formatted_response == formatting.format_payload(info)
        assert len(search_client_with_results.calls[0]) == 5

    @pytest.mark.asyncio
    async def test_all_searches_failing_is_a_degraded_success(self, failing_search_client):
        response = await make_service(failing_search_client).handle_query('find information about "tum hi ho"')

        assert response.success
        info = response.data
        assert info.artist == info.composer == info.year == ""
        assert info.awards == [] and info.legal_links == []
        assert info.popularity_rating == "Well-known"
        assert info.description == extraction.DESCRIPTION_TEMPLATES['english'].format(song="tum hi ho")

    @pytest.mark.asyncio
    async def test_minimum_fact_policy_turns_empty_result_into_failure(self, failing_search_client):
        service = make_service(failing_search_client, min_info_fields=1)
        response = await service.handle_query('find information about "tum hi ho"')

        assert not response.success
        assert response.type == ResultType.INFO
        assert response.data is None
        assert response.error == 'Could not find information about "tum hi ho"'

    @pytest.mark.asyncio
    async def test_custom_allow_list_applies_to_links(self, search_client_with_results):
        service = make_service(search_client_with_results, trusted_domains=['genius.com'])
        response = await service.handle_query('find information about "tum hi ho"')

        assert response.data.legal_links == ["https://genius.com/Arijit-singh-tum-hi-ho-lyrics"]

    @pytest.mark.asyncio
    async def test_default_clients_without_credentials(self):
        response = await MusicQueryService(ServiceConfig()).handle_query('who sang "tum hi ho"')

        assert response.success
        assert response.data.artist == ""


class TestStoryQueries:
    @pytest.mark.asyncio
    async def test_hindi_story(self):
        generation = FakeGenerationClient(STORY_TEXT)
        response = await make_service(generation_client=generation).handle_query('"लग जा गले" की कहानी बताओ')

        assert response.success
        assert response.type == ResultType.STORY
        story = response.data
        assert story.title == "लग जा गले"
        assert story.language == Language.HINDI
        assert story.summary == STORY_TEXT
        assert story.themes == ['प्रेम']
        assert story.mood == 'रोमांटिक'
        assert 'नायक' in story.characters
        assert story.cultural_context == 'भारतीय सांस्कृतिक संदर्भ में निहित'
        assert story.historical_background == 'बॉलीवुड का स्वर्ण युग'

        call = generation.calls[0]
        assert (call['temperature'], call['max_tokens']) == (0.7, 1000)
        assert call['messages'][0]['content'] == STORY_PROMPTS['hindi']['system']
        assert '"लग जा गले"' in call['messages'][1]['content']

    @pytest.mark.asyncio
    async def test_generation_failure_is_typed(self):
        generation = FakeGenerationClient(error='HTTP 503: unavailable')
        response = await make_service(generation_client=generation).handle_query('"लग जा गले" की कहानी बताओ')

        assert not response.success
        assert response.type == ResultType.STORY
        assert response.error == MESSAGES['hindi']['story_error'].format(song="लग जा गले")

    @pytest.mark.asyncio
    async def test_no_generation_credentials(self):
        response = await MusicQueryService(ServiceConfig()).handle_query('what is the meaning of "tum hi ho"')

        assert not response.success
        assert response.type == ResultType.STORY
        assert response.error == 'Could not create story for "tum hi ho"'


class TestLyricsQueries:
    @pytest.mark.asyncio
    async def test_english_lyrics(self):
        generation = FakeGenerationClient(LYRICS_TEXT)
        response = await make_service(generation_client=generation).handle_query('write new lyrics like "tum hi ho"')

        assert response.success
        assert response.type == ResultType.LYRICS
        lyrics = response.data
        assert lyrics.original_song == "tum hi ho"
        assert len(lyrics.new_verses) == 3
        assert lyrics.new_verses[2] == "Third verse"
        assert lyrics.style == 'Traditional Bollywood'
        assert lyrics.theme == 'Love Song'
        assert lyrics.rhythm_pattern == 'Melodic Meter'
        assert lyrics.rhyme_scheme == 'ABAB Rhyme Scheme'

        call = generation.calls[0]
        assert (call['temperature'], call['max_tokens']) == (0.8, 800)

    @pytest.mark.asyncio
    async def test_style_override(self):
        generation = FakeGenerationClient(LYRICS_TEXT)
        service = make_service(generation_client=generation)
        response = await service.handle_query('write new lyrics like "tum hi ho"', style='Sufi')

        assert response.data.style == 'Sufi'


class TestUnexpectedErrors:
    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_generic_failure(self):
        class BrokenSearch:
            async def search_many(self, requests):
                raise RuntimeError("boom")

        response = await make_service(BrokenSearch()).handle_query('find information about "tum hi ho"')

        assert not response.success
        assert response.type == ResultType.INFO
        assert response.error == MESSAGES['english']['internal_error']

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        class CancelledSearch:
            async def search_many(self, requests):
                raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await make_service(CancelledSearch()).handle_query('find information about "tum hi ho"')
