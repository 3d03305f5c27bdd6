"""
Track metadata from YouTube / YouTube Music via yt-dlp.

Only metadata is extracted (download=False). A URL containing 'list=' is
treated as a playlist: it is extracted flat to list the entries, then each
entry is described on its own for its real title and artist. Any other URL
is described as a single video.

music.youtube.com URLs are rewritten to www.youtube.com before extraction,
but the per-entry watch URLs keep the domain the user gave.
"""

from typing import Any

from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError

from tube_lyrics.core.exceptions import MetadataError
from tube_lyrics.core.logger import get_logger
from tube_lyrics.lyrics.models import RawTrack

logger = get_logger(__name__)


MUSIC_DOMAIN = "music.youtube.com"
WWW_DOMAIN = "www.youtube.com"


class YtDlpQuietLogger:
    """
    Logger handed to yt-dlp so it does not print to the terminal.

    yt-dlp ignores quiet=True for some messages and writes straight to
    stderr; routing them here keeps the tqdm bar intact. Warnings and errors
    end up in the debug log.
    """

    def __init__(self) -> None:
        self.last_error: str | None = None

    def debug(self, msg: str) -> None:
        pass

    def info(self, msg: str) -> None:
        pass

    def warning(self, msg: str) -> None:
        logger.debug(f"yt-dlp: {msg}")

    def error(self, msg: str) -> None:
        self.last_error = msg
        logger.debug(f"yt-dlp: {msg}")


def is_playlist_url(url: str) -> bool:
    return "list=" in url


def normalize_url(url: str) -> str:
    """Rewrite music.youtube.com to www.youtube.com; other URLs unchanged."""
    return url.replace(MUSIC_DOMAIN, WWW_DOMAIN)


def fetch_tracks(url: str, detailed: bool = True) -> list[RawTrack]:
    """
    Tracks behind a YouTube URL.

    Args:
        url: Video or playlist URL (www or music subdomain).
        detailed: For playlists, extract each entry's full metadata so the
                  title and artist come from the video itself rather than
                  from the flat listing (which often has no uploader on
                  YouTube Music).

    Returns:
        One RawTrack for a video, one per entry for a playlist (in
        playlist order). Entries without an id or title are skipped.

    Raises:
        MetadataError: If yt-dlp cannot extract the URL. A playlist entry
                       whose full metadata cannot be read keeps its flat
                       title and uploader instead.
    """
    if not is_playlist_url(url):
        return [describe_video(url)]

    domain = MUSIC_DOMAIN if MUSIC_DOMAIN in url else WWW_DOMAIN
    info = _extract(normalize_url(url), flat=True)

    tracks = []
    for entry in info.get("entries") or []:
        if not entry or not entry.get("id") or not entry.get("title"):
            logger.debug(f"Skipping playlist entry without id/title: {entry!r}")
            continue
        track = RawTrack(
            title=entry["title"],
            artist=entry.get("uploader") or "",
            url=f"https://{domain}/watch?v={entry['id']}"
        )
        tracks.append(_describe_entry(track) if detailed else track)

    logger.info(f"Playlist '{info.get('title') or url}': {len(tracks)} tracks")
    return tracks


def _describe_entry(flat: RawTrack) -> RawTrack:
    """Full metadata for a flat playlist entry, keeping the entry URL."""
    try:
        full = describe_video(flat.url)
    except MetadataError as e:
        logger.debug(f"Using flat metadata for {flat.url}: {e}")
        return flat

    return RawTrack(
        title=full.title,
        artist=full.artist or flat.artist,
        url=flat.url
    )


def describe_video(url: str) -> RawTrack:
    """
    Title and artist of a single video.

    The artist is yt-dlp's 'artist' field (set for YouTube Music uploads)
    falling back to the uploader/channel name.

    Raises:
        MetadataError: If yt-dlp cannot extract the URL or returns no title.
    """
    info = _extract(normalize_url(url), flat=False)

    title = info.get("title")
    if not title:
        raise MetadataError(f"No title in metadata for {url}", details={"url": url})

    return RawTrack(
        title=title,
        artist=info.get("artist") or info.get("uploader") or "",
        url=url
    )


def _extract(url: str, flat: bool) -> dict[str, Any]:
    yt_logger = YtDlpQuietLogger()
    options: dict[str, Any] = {
        "quiet": True,
        "no_warnings": True,
        "skip_download": True,
        "noprogress": True,
        "logger": yt_logger,
    }
    if flat:
        options["extract_flat"] = "in_playlist"

    try:
        with YoutubeDL(options) as ydl:
            info = ydl.extract_info(url, download=False)
    except DownloadError as e:
        raise MetadataError(
            f"Could not read metadata for {url}",
            details={"url": url, "error": yt_logger.last_error or str(e)}
        ) from e

    if not isinstance(info, dict):
        raise MetadataError(f"yt-dlp returned no metadata for {url}", details={"url": url})
    return info
