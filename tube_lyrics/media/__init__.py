"""
Media side of tube-lyrics: where track metadata comes from (yt-dlp) and
where the lyrics go (files in the output directory).
"""

from tube_lyrics.media.metadata import (
    describe_video,
    fetch_tracks,
    is_playlist_url,
    normalize_url,
)
from tube_lyrics.media.sink import (
    FAVOURITES_FILENAME,
    add_to_favourites,
    safe_filename,
    save_lyrics,
)

__all__ = [
    "fetch_tracks",
    "describe_video",
    "is_playlist_url",
    "normalize_url",
    "safe_filename",
    "save_lyrics",
    "add_to_favourites",
    "FAVOURITES_FILENAME",
]
