"""
Genius HTML scraping provider.

Used only after LRCLIB had nothing for any query variant. Genius pages are
not a stable API, so everything here is best effort:

    1. GET /search?q=<title artist>
    2. Take the first link pointing at the Genius site itself
    3. GET that page
    4. Read the lyrics from '.lyrics' (legacy layout) or from every
       '[data-lyrics-container]' block (current layout)

Any failure along the way (network, markup, missing link) means "not
found". The first link is taken as is; on pages where that link is not the
song (navigation, sponsored entries) the lookup simply misses.
"""

from bs4 import BeautifulSoup

from tube_lyrics.core.exceptions import NetworkFailure, NoMatch, UnexpectedResponseShape
from tube_lyrics.lyrics.models import (
    LyricsSource,
    NotFound,
    ProviderOutcome,
    QueryVariant,
    ResolutionState,
)
from tube_lyrics.lyrics.providers.base import LyricsProvider


SEARCH_PATH = "/search"
LEGACY_LYRICS_SELECTOR = ".lyrics"
LYRICS_CONTAINER_SELECTOR = "[data-lyrics-container]"


class GeniusProvider(LyricsProvider):
    """Search-page scraping against genius.com."""

    source = LyricsSource.GENIUS
    phase = ResolutionState.PROBING_SCRAPING

    def _network_outcome(self, error: NetworkFailure) -> ProviderOutcome:
        return NotFound(error.message)

    async def _lookup(self, query: QueryVariant) -> str:
        search = await self._get(f"{self.base_url}{SEARCH_PATH}", params={"q": query.search_text})
        if not search.ok:
            raise NoMatch(f"search page answered {search.status}")

        song_url = self.first_song_link(search.body)
        if song_url is None:
            raise NoMatch("no song link on search page")

        page = await self._get(song_url)
        if not page.ok:
            raise NoMatch(f"song page answered {page.status}", details={"url": song_url})

        lyrics = self.extract_lyrics(page.body)
        if not lyrics:
            raise UnexpectedResponseShape("song page has no lyrics container", details={"url": song_url})
        return lyrics

    def first_song_link(self, html: str) -> str | None:
        """First anchor whose href stays on the Genius site, if any."""
        soup = BeautifulSoup(html, "html.parser")
        anchor = soup.select_one(f'a[href^="{self.base_url}"]')
        if anchor is None:
            return None
        return anchor.get("href") or None

    @staticmethod
    def extract_lyrics(html: str) -> str:
        """Lyrics text from a song page, or '' when no known container exists."""
        soup = BeautifulSoup(html, "html.parser")

        legacy = soup.select_one(LEGACY_LYRICS_SELECTOR)
        if legacy is not None:
            text = legacy.get_text("\n").strip()
            if text:
                return text

        containers = soup.select(LYRICS_CONTAINER_SELECTOR)
        return "\n".join(c.get_text("\n").strip() for c in containers).strip()
