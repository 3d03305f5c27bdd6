"""
Lyrics resolution for tube-lyrics.

Pipeline for one track:
    normalizer  -> title variants and artist tokens
    variants    -> ordered, deduplicated QueryVariants
    resolver    -> probes LRCLIB then Genius, first hit wins
    classifier  -> synced (LRC) or plain

Usage:
    from tube_lyrics.lyrics import resolve_lyrics, resolve_lyrics_sync

    result = resolve_lyrics_sync("Song (Official Video)", "Artist feat. Other")
    if result:
        print(result.kind, result.source, result.content)
"""

from tube_lyrics.lyrics.classifier import UNSYNCED_MARKER, classify, package
from tube_lyrics.lyrics.models import (
    Found,
    LyricsKind,
    LyricsResult,
    LyricsSource,
    NotFound,
    ProviderOutcome,
    QueryVariant,
    RawTrack,
    ResolutionState,
    SearchHit,
    TransientError,
)
from tube_lyrics.lyrics.normalizer import NormalizedArtist, normalize_artist, normalize_title
from tube_lyrics.lyrics.resolver import (
    LyricsResolver,
    Resolution,
    build_default_providers,
    resolve_lyrics,
    resolve_lyrics_sync,
)
from tube_lyrics.lyrics.variants import build_artist_variants, generate_variants

__all__ = [
    # Models
    "RawTrack",
    "QueryVariant",
    "LyricsResult",
    "LyricsKind",
    "LyricsSource",
    "ResolutionState",
    "SearchHit",
    "Found",
    "NotFound",
    "TransientError",
    "ProviderOutcome",
    # Query building
    "normalize_title",
    "normalize_artist",
    "NormalizedArtist",
    "build_artist_variants",
    "generate_variants",
    # Classification
    "classify",
    "package",
    "UNSYNCED_MARKER",
    # Resolution
    "LyricsResolver",
    "Resolution",
    "build_default_providers",
    "resolve_lyrics",
    "resolve_lyrics_sync",
]
