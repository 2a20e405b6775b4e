import pytest

from music_query import extraction
from music_query.models import Script, Snippet


def snippet(description='', title='', url=''):
    return Snippet(title=title, description=description, url=url)


class TestExtractField:
    def test_keyword_colon_value(self):
        snippets = [snippet("Singer: Arijit Singh, music by Mithoon", title="Tum Hi Ho")]
        assert extraction.extract_field(snippets, ['singer']) == "arijit singh"

    def test_keyword_priority_within_a_snippet(self):
        snippets = [snippet("Singer: Arijit Singh, music by Mithoon")]
        assert extraction.extract_field(snippets, ['music director', 'composer', 'music by']) == "mithoon"

    def test_value_before_keyword(self):
        assert extraction.extract_field([snippet("Aashiqui 2 soundtrack")], ['soundtrack']) == "aashiqui 2"

    def test_snippet_order_wins_over_keyword_order(self):
        snippets = [snippet("Voice: Lata Mangeshkar"), snippet("Singer: Kishore Kumar")]
        assert extraction.extract_field(snippets, ['singer', 'voice']) == "lata mangeshkar"

    def test_value_is_cut_to_four_tokens(self):
        snippets = [snippet("Singer: one two three four five six")]
        assert extraction.extract_field(snippets, ['singer']) == "one two three four"

    def test_too_short_value_is_rejected(self):
        assert extraction.extract_field([snippet("singer: ab")], ['singer']) == ""

    def test_too_long_value_is_rejected(self):
        assert extraction.extract_field([snippet("singer: " + "a" * 60)], ['singer']) == ""

    def test_later_snippet_used_when_earlier_value_rejected(self):
        snippets = [snippet("singer: ab"), snippet("singer: Sonu Nigam")]
        assert extraction.extract_field(snippets, ['singer']) == "sonu nigam"

    def test_no_snippets(self):
        assert extraction.extract_field([], ['singer']) == ""

    @pytest.mark.parametrize("description", [
        "Singer: Arijit Singh",
        "singer - a",
        "Singer: " + "word " * 20,
        "a movie about nothing in particular at all, the movie",
        "Famous singer",
    ])
    def test_results_respect_length_and_token_bounds(self, description):
        value = extraction.extract_field([snippet(description)], ['singer', 'movie'])
        assert value == "" or (2 < len(value) < 50 and len(value.split()) <= 4)


class TestExtractYear:
    def test_first_year_token(self):
        snippets = [snippet("No date here"), snippet("A 1964 classic, remastered in 2004")]
        assert extraction.extract_year(snippets) == "1964"

    def test_year_inside_longer_number_is_ignored(self):
        assert extraction.extract_year([snippet("catalogue 12005")]) == ""

    def test_no_year(self):
        assert extraction.extract_year([snippet("timeless")]) == ""


class TestExtractAwards:
    def test_award_sentence(self):
        snippets = [snippet("Won the Filmfare Award for Best Playback Singer. It was a big hit.")]
        assert extraction.extract_awards(snippets) == ["won the filmfare award for best playback singer"]

    def test_deduplicated_across_snippets(self):
        snippets = [snippet("Won a national award."), snippet("Won a national award.")]
        assert extraction.extract_awards(snippets) == ["won a national award"]

    def test_capped_at_three(self):
        snippets = [snippet(f"Won award number {n}.") for n in range(5)]
        awards = extraction.extract_awards(snippets)

        assert len(awards) == 3
        assert awards[0] == "won award number 0"

    def test_none(self):
        assert extraction.extract_awards([snippet("A love song.")]) == []


class TestExtractPopularity:
    def test_first_indicator_in_table_order(self):
        assert extraction.extract_popularity([snippet("an evergreen classic")]) == "Classic"

    def test_default(self):
        assert extraction.extract_popularity([]) == "Well-known"
        assert extraction.extract_popularity([snippet("a song")]) == "Well-known"


class TestLegalLinks:
    def test_only_trusted_domains_in_order(self):
        snippets = [
            snippet(url="https://www.youtube.com/watch?v=abc"),
            snippet(url="https://en.wikipedia.org/wiki/Tum_Hi_Ho"),
            snippet(url="https://genius.com/tum-hi-ho-lyrics"),
        ]
        assert extraction.extract_legal_links(snippets) == [
            "https://www.youtube.com/watch?v=abc",
            "https://genius.com/tum-hi-ho-lyrics",
        ]

    def test_subdomains_are_trusted(self):
        assert extraction.extract_legal_links([snippet(url="https://music.apple.com/in/album/1")]) == [
            "https://music.apple.com/in/album/1",
        ]

    @pytest.mark.parametrize("url", [
        "https://evil.example/genius.com/tum-hi-ho",
        "https://notgenius.com/tum-hi-ho",
        "https://genius.com.evil.example/",
        "http://[bad",
        "not a url",
        "",
    ])
    def test_untrusted_or_malformed_urls_rejected(self, url):
        assert extraction.extract_legal_links([snippet(url=url)]) == []

    def test_deduplicated_and_capped(self):
        snippets = [snippet(url="https://www.youtube.com/watch?v=same")] * 2
        snippets += [snippet(url=f"https://gaana.com/song/{n}") for n in range(7)]
        links = extraction.extract_legal_links(snippets)

        assert len(links) == 5
        assert links.count("https://www.youtube.com/watch?v=same") == 1

    def test_custom_allow_list(self):
        snippets = [snippet(url="https://www.youtube.com/watch?v=abc"), snippet(url="https://example.org/song")]
        assert extraction.extract_legal_links(snippets, ['example.org']) == ["https://example.org/song"]


class TestDetailedInfo:
    def test_long_descriptions_from_top_results(self):
        long_text = "x" * 60
        snippets = [snippet(long_text), snippet("short"), snippet(long_text + "y"), snippet(long_text + "z")]
        assert extraction.extract_detailed_info(snippets) == f"{long_text} {long_text}y"

    def test_empty(self):
        assert extraction.extract_detailed_info([snippet("short")]) == ""


class TestDescribeSong:
    def test_english_template(self):
        description = extraction.describe_song("Tum Hi Ho", Script.ENGLISH, [])
        assert description == extraction.DESCRIPTION_TEMPLATES['english'].format(song="Tum Hi Ho")

    def test_hindi_template_with_extra_sentence(self):
        snippets = [snippet("y" * 150)]
        description = extraction.describe_song("लग जा गले", Script.HINDI, snippets)

        assert description.startswith('"लग जा गले"')
        assert description.endswith(extraction.DESCRIPTION_EXTRA_SENTENCE['hindi'])

    def test_mixed_template_uses_english_extra_sentence(self):
        description = extraction.describe_song("Tum Hi Ho", Script.MIXED, [snippet("y" * 150)])

        assert description.startswith(extraction.DESCRIPTION_TEMPLATES['mixed'].format(song="Tum Hi Ho"))
        assert description.endswith(extraction.DESCRIPTION_EXTRA_SENTENCE['english'])

    def test_short_context_adds_nothing(self):
        description = extraction.describe_song("Tum Hi Ho", Script.ENGLISH, [snippet("short")])
        assert description == extraction.DESCRIPTION_TEMPLATES['english'].format(song="Tum Hi Ho")


class TestExtractSongFields:
    def test_year_falls_back_to_first_year_token(self):
        fields = extraction.extract_song_fields([snippet("A 1964 classic from Woh Kaun Thi")])
        assert fields['year'] == "1964"

    def test_all_fields_present_and_empty_without_snippets(self):
        fields = extraction.extract_song_fields([])

        assert set(fields) == {
            'artist', 'playback_singer', 'composer', 'lyricist', 'director', 'movie',
            'year', 'genre', 'album', 'record_label', 'duration',
        }
        assert all(value == "" for value in fields.values())
