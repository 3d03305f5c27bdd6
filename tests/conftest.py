"""Test configuration and fixtures"""

import json
import tempfile
from pathlib import Path

import pytest

from tube_lyrics.core.config import Config, LyricsConfig, NetworkConfig, OutputConfig


LRCLIB_URL = "https://lrclib.test"
GENIUS_URL = "https://genius.test"


class FakeResponse:
    """Stands in for aiohttp.ClientResponse inside 'async with session.get()'."""

    def __init__(self, status=200, body="", content_type="text/html; charset=utf-8"):
        self.status = status
        self.headers = {"Content-Type": content_type} if content_type else {}
        self._body = body

    async def text(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """
    Minimal aiohttp.ClientSession replacement.

    `responder(url, params)` returns a FakeResponse or raises to simulate a
    connection failure. Every request is recorded in `calls`.
    """

    def __init__(self, responder):
        self._responder = responder
        self.calls = []
        self.closed = False

    def get(self, url, params=None):
        self.calls.append((url, dict(params or {})))
        return self._responder(url, params or {})

    def calls_to(self, base_url):
        return [call for call in self.calls if call[0].startswith(base_url)]

    async def close(self):
        self.closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
        return False


def json_reply(data, status=200):
    return FakeResponse(status=status, body=json.dumps(data), content_type="application/json")


def html_reply(html, status=200):
    return FakeResponse(status=status, body=html, content_type="text/html; charset=utf-8")


def not_found_reply():
    return FakeResponse(status=404, body="Not Found", content_type="text/plain")


def genius_search_page(song_path="/artist-song-lyrics"):
    return (
        "<html><body>"
        '<a href="/signup">Sign up</a>'
        f'<a href="{GENIUS_URL}{song_path}">Song by Artist</a>'
        "</body></html>"
    )


def genius_song_page(lyrics_html):
    return f"<html><body><div data-lyrics-container=\"true\">{lyrics_html}</div></body></html>"


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def test_config(temp_dir):
    """Config pointing at fake service URLs, unpaced"""
    return Config(
        output=OutputConfig(directory=temp_dir / "lyrics"),
        network=NetworkConfig(user_agent="tube-lyrics-tests", request_timeout=None, rate_limit=None),
        lyrics=LyricsConfig(lrclib_url=LRCLIB_URL, genius_url=GENIUS_URL, probe_timeout=None),
    )


@pytest.fixture
def make_session():
    """Factory for FakeSession objects"""
    return FakeSession


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment overrides that would leak into config tests"""
    monkeypatch.delenv("TUBE_LYRICS_OUTPUT_DIR", raising=False)
    monkeypatch.delenv("TUBE_LYRICS_USER_AGENT", raising=False)
    monkeypatch.setattr("tube_lyrics.core.config.load_dotenv", lambda *args, **kwargs: False)
