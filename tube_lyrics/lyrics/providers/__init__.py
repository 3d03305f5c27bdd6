"""
Lyrics providers, in probe priority order.

    LrclibProvider  - structured JSON search (probed first)
    GeniusProvider  - HTML scraping (probed only when LRCLIB has nothing)
"""

from tube_lyrics.lyrics.providers.base import HttpReply, LyricsProvider
from tube_lyrics.lyrics.providers.genius import GeniusProvider
from tube_lyrics.lyrics.providers.lrclib import LrclibProvider

__all__ = [
    "LyricsProvider",
    "HttpReply",
    "LrclibProvider",
    "GeniusProvider",
]
