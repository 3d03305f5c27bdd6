"""
LRCLIB structured search provider.

LRCLIB (https://lrclib.net) is a free lyrics database with a JSON API and
no key requirement. It is probed first because its answers are structured
and often time-synced.

    GET /api/search?track_name=<title>&artist_name=<artist>

returns a JSON array of records; the ones we care about look like

    {"trackName": "...", "artistName": "...",
     "syncedLyrics": "[00:12.00]...", "plainLyrics": "..."}

The service answers "nothing" with varying statuses and content types, so a
non-2xx reply or a non-JSON body is simply treated as "no lyrics here".
"""

import json

from tube_lyrics.core.exceptions import NoMatch, UnexpectedResponseShape
from tube_lyrics.lyrics.models import (
    LyricsSource,
    QueryVariant,
    ResolutionState,
    SearchHit,
)
from tube_lyrics.lyrics.providers.base import LyricsProvider


SEARCH_PATH = "/api/search"


class LrclibProvider(LyricsProvider):
    """Structured search against the LRCLIB JSON API."""

    source = LyricsSource.LRCLIB
    phase = ResolutionState.PROBING_STRUCTURED

    async def _lookup(self, query: QueryVariant) -> str:
        reply = await self._get(
            f"{self.base_url}{SEARCH_PATH}",
            params={"track_name": query.title, "artist_name": query.artist}
        )

        if not reply.ok or "application/json" not in reply.content_type.lower():
            raise NoMatch(
                f"skipped reply {reply.status} ({reply.content_type or 'no content type'})",
                details={"status": reply.status, "content_type": reply.content_type}
            )

        try:
            data = json.loads(reply.body)
        except ValueError as e:
            raise UnexpectedResponseShape(
                "search reply is not valid JSON",
                details={"original_error": str(e), "body": reply.body[:200]}
            ) from e

        if not isinstance(data, list):
            raise UnexpectedResponseShape(
                f"search reply is a {type(data).__name__}, expected a list",
                details={"body": reply.body[:200]}
            )

        for entry in data:
            hit = SearchHit.from_entry(entry)
            if hit is not None:
                return hit.best_text

        raise NoMatch(f"{len(data)} search results, none with lyrics")
