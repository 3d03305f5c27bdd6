"""
Where resolved lyrics and favourites end up on disk.

    <output_dir>/<title>.lrc     synced lyrics
    <output_dir>/<title>.txt     plain lyrics (with the unsynced marker)
    favourites.txt               "title | url" per line
"""

import re
from pathlib import Path

from tube_lyrics.core.logger import get_logger
from tube_lyrics.lyrics.models import LyricsResult
from tube_lyrics.utils import ensure_directory

logger = get_logger(__name__)


FAVOURITES_FILENAME = "favourites.txt"
FALLBACK_FILENAME = "untitled"

# Characters invalid in Windows filenames, plus ASCII control characters
_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def safe_filename(name: str) -> str:
    """
    Make a track title usable as a filename.

    Example:
        safe_filename('AC/DC: "Thunderstruck"')  # 'ACDC Thunderstruck'
        safe_filename("???")                      # 'untitled'
    """
    cleaned = _UNSAFE_CHARS.sub("", name or "").strip()
    return cleaned or FALLBACK_FILENAME


def save_lyrics(output_dir: Path, title: str, result: LyricsResult) -> Path:
    """
    Write lyrics next to the user's music as UTF-8.

    Args:
        output_dir: Target directory, created if missing.
        title: Track title used for the filename.
        result: Resolved lyrics; its kind picks the extension.

    Returns:
        Path of the written file. An existing file is overwritten.
    """
    ensure_directory(output_dir)
    path = output_dir / f"{safe_filename(title)}{result.file_extension}"
    path.write_text(result.content, encoding="utf-8")
    logger.debug(f"Saved {result.kind.value} lyrics to {path}")
    return path


def add_to_favourites(favourites_path: Path, title: str, url: str) -> None:
    """Append a 'title | url' line to the favourites file, creating it if needed."""
    ensure_directory(favourites_path.parent)
    with open(favourites_path, "a", encoding="utf-8") as f:
        f.write(f"{title} | {url}\n")
    logger.debug(f"Added '{title}' to {favourites_path}")
