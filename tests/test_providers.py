# tests/test_providers.py
"""Test the LRCLIB and Genius providers against a fake HTTP session"""

import asyncio
import logging

import aiohttp
import pytest

from conftest import (
    GENIUS_URL,
    LRCLIB_URL,
    FakeResponse,
    genius_search_page,
    genius_song_page,
    html_reply,
    json_reply,
    not_found_reply,
)
from tube_lyrics.lyrics.classifier import UNSYNCED_MARKER
from tube_lyrics.lyrics.models import (
    Found,
    LyricsKind,
    LyricsSource,
    NotFound,
    QueryVariant,
    TransientError,
)
from tube_lyrics.lyrics.providers import GeniusProvider, LrclibProvider


QUERY = QueryVariant(title="Song", artist="Artist")


def raise_error(error):
    def responder(url, params):
        raise error
    return responder


class TestLrclibProvider:
    """Test structured search"""

    @pytest.mark.asyncio
    async def test_synced_hit(self, make_session):
        """Test a synced entry is found and classified"""
        session = make_session(lambda url, params: json_reply([{"syncedLyrics": "[00:12.00]Line"}]))
        outcome = await LrclibProvider(session, LRCLIB_URL).attempt(QUERY)

        assert isinstance(outcome, Found)
        assert outcome.result.kind is LyricsKind.SYNCED
        assert outcome.result.content == "[00:12.00]Line"
        assert outcome.result.source is LyricsSource.LRCLIB
        assert session.calls == [
            (f"{LRCLIB_URL}/api/search", {"track_name": "Song", "artist_name": "Artist"})
        ]

    @pytest.mark.asyncio
    async def test_synced_preferred_over_plain(self, make_session):
        """Test that an entry with both fields yields synced lyrics"""
        entry = {"syncedLyrics": "[00:01.00]A", "plainLyrics": "A"}
        session = make_session(lambda url, params: json_reply([entry]))
        outcome = await LrclibProvider(session, LRCLIB_URL).attempt(QUERY)

        assert outcome.result.kind is LyricsKind.SYNCED

    @pytest.mark.asyncio
    async def test_first_usable_entry(self, make_session):
        """Test that invalid entries are skipped"""
        data = ["junk", {"syncedLyrics": None, "plainLyrics": ""}, {"plainLyrics": "Words"}]
        session = make_session(lambda url, params: json_reply(data))
        outcome = await LrclibProvider(session, LRCLIB_URL).attempt(QUERY)

        assert outcome.result.kind is LyricsKind.PLAIN
        assert outcome.result.content == f"{UNSYNCED_MARKER}\n\nWords"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [
        not_found_reply(),
        FakeResponse(status=200, body="<html></html>", content_type="text/html"),
        FakeResponse(status=200, body="[]", content_type=""),
        FakeResponse(status=200, body="{not json", content_type="application/json"),
        json_reply({"error": "unexpected"}),
        json_reply([]),
        json_reply([{"trackName": "Song"}]),
    ])
    async def test_not_found(self, make_session, reply):
        """Test every kind of miss degrades to NotFound"""
        session = make_session(lambda url, params: reply)
        outcome = await LrclibProvider(session, LRCLIB_URL).attempt(QUERY)

        assert isinstance(outcome, NotFound)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
    ])
    async def test_network_failure_is_transient(self, make_session, error):
        """Test connection failures become TransientError"""
        session = make_session(raise_error(error))
        outcome = await LrclibProvider(session, LRCLIB_URL).attempt(QUERY)

        assert isinstance(outcome, TransientError)

    @pytest.mark.asyncio
    async def test_unexpected_exception_does_not_escape(self, make_session):
        """Test that a bug below the provider still yields an outcome"""
        session = make_session(raise_error(RuntimeError("boom")))
        outcome = await LrclibProvider(session, LRCLIB_URL).attempt(QUERY)

        assert isinstance(outcome, TransientError)
        assert "boom" in outcome.reason

    @pytest.mark.asyncio
    async def test_unexpected_exception_logged_once(self, make_session, caplog):
        """Test the traceback is logged at ERROR only for the first failure"""
        session = make_session(raise_error(RuntimeError("boom")))
        provider = LrclibProvider(session, LRCLIB_URL)

        with caplog.at_level(logging.DEBUG, logger="tube_lyrics.lyrics.providers.base"):
            outcomes = [await provider.attempt(QUERY) for _ in range(3)]

        assert all(isinstance(outcome, TransientError) for outcome in outcomes)
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].exc_info is not None
        assert len([r for r in caplog.records if "unexpected failure" in r.getMessage()]) == 3

    @pytest.mark.asyncio
    async def test_undecodable_body(self, make_session):
        """Test a body that cannot be decoded"""
        error = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        session = make_session(lambda url, params: FakeResponse(body=error, content_type="application/json"))
        outcome = await LrclibProvider(session, LRCLIB_URL).attempt(QUERY)

        assert isinstance(outcome, NotFound)

    @pytest.mark.asyncio
    async def test_rate_limited(self, make_session):
        """Test the throttled path still returns results"""
        session = make_session(lambda url, params: json_reply([{"plainLyrics": "Words"}]))
        provider = LrclibProvider(session, LRCLIB_URL + "/", rate_limit=100)

        outcomes = [await provider.attempt(QUERY) for _ in range(3)]

        assert all(isinstance(outcome, Found) for outcome in outcomes)
        assert provider.base_url == LRCLIB_URL


class TestGeniusProvider:
    """Test search page scraping"""

    @staticmethod
    def site(search_html, song_html, song_status=200):
        def responder(url, params):
            if url == f"{GENIUS_URL}/search":
                return html_reply(search_html)
            if url == f"{GENIUS_URL}/artist-song-lyrics":
                return html_reply(song_html, status=song_status)
            return not_found_reply()
        return responder

    @pytest.mark.asyncio
    async def test_synced_text_in_container(self, make_session):
        """Test a timestamped page is classified as synced"""
        session = make_session(self.site(genius_search_page(), genius_song_page("[00:01.00]Hello")))
        outcome = await GeniusProvider(session, GENIUS_URL).attempt(QUERY)

        assert isinstance(outcome, Found)
        assert outcome.result.kind is LyricsKind.SYNCED
        assert outcome.result.content == "[00:01.00]Hello"
        assert outcome.result.source is LyricsSource.GENIUS
        assert session.calls == [
            (f"{GENIUS_URL}/search", {"q": "Song Artist"}),
            (f"{GENIUS_URL}/artist-song-lyrics", {}),
        ]

    @pytest.mark.asyncio
    async def test_multiple_containers_joined(self, make_session):
        """Test current-layout pages with several lyrics blocks"""
        song_html = (
            "<html><body>"
            "<div data-lyrics-container=\"true\">Line one<br/>Line two</div>"
            "<div>Ad</div>"
            "<div data-lyrics-container=\"true\">Line three</div>"
            "</body></html>"
        )
        session = make_session(self.site(genius_search_page(), song_html))
        outcome = await GeniusProvider(session, GENIUS_URL).attempt(QUERY)

        assert outcome.result.kind is LyricsKind.PLAIN
        assert outcome.result.content == f"{UNSYNCED_MARKER}\n\nLine one\nLine two\nLine three"

    @pytest.mark.asyncio
    async def test_legacy_layout(self, make_session):
        """Test the old '.lyrics' container"""
        song_html = '<html><body><div class="lyrics"><p>Hello<br/>World</p></div></body></html>'
        session = make_session(self.site(genius_search_page(), song_html))
        outcome = await GeniusProvider(session, GENIUS_URL).attempt(QUERY)

        assert outcome.result.content == f"{UNSYNCED_MARKER}\n\nHello\nWorld"

    @pytest.mark.asyncio
    async def test_no_link(self, make_session):
        """Test a search page without a song link"""
        search_html = '<html><body><a href="/signup">Sign up</a><a href="https://other.test/x">x</a></body></html>'
        session = make_session(self.site(search_html, ""))
        outcome = await GeniusProvider(session, GENIUS_URL).attempt(QUERY)

        assert isinstance(outcome, NotFound)
        assert len(session.calls) == 1

    @pytest.mark.asyncio
    async def test_no_container(self, make_session):
        """Test a song page with unknown markup"""
        session = make_session(self.site(genius_search_page(), "<html><body><p>Moved</p></body></html>"))
        outcome = await GeniusProvider(session, GENIUS_URL).attempt(QUERY)

        assert isinstance(outcome, NotFound)

    @pytest.mark.asyncio
    async def test_song_page_error(self, make_session):
        """Test a failing song page"""
        session = make_session(self.site(genius_search_page(), "oops", song_status=500))
        outcome = await GeniusProvider(session, GENIUS_URL).attempt(QUERY)

        assert isinstance(outcome, NotFound)

    @pytest.mark.asyncio
    async def test_network_failure_is_not_found(self, make_session):
        """Test that scraping failures never surface as transient errors"""
        session = make_session(raise_error(aiohttp.ClientConnectionError("reset")))
        outcome = await GeniusProvider(session, GENIUS_URL).attempt(QUERY)

        assert isinstance(outcome, NotFound)

    def test_first_song_link(self, make_session):
        """Test that the first on-site link is chosen"""
        provider = GeniusProvider(make_session(None), GENIUS_URL)
        html = (
            '<a href="/relative">r</a>'
            f'<a href="{GENIUS_URL}/first-lyrics">1</a>'
            f'<a href="{GENIUS_URL}/second-lyrics">2</a>'
        )
        assert provider.first_song_link(html) == f"{GENIUS_URL}/first-lyrics"
        assert provider.first_song_link("<p>nothing</p>") is None
