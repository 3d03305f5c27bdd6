"""
tube-lyrics: Find lyrics for YouTube and YouTube Music tracks.

Video titles are noisy ("Song (Official Video) [HD]") and artist credits
come in many shapes ("A feat. B", "A & B"). tube-lyrics turns one raw
(title, artist) pair into an ordered list of normalized queries and probes
lyrics services with them until one answers:

    1. LRCLIB  - structured JSON search, often time-synced (LRC)
    2. Genius  - HTML scraping, plain text

Synced lyrics are saved as .lrc, plain lyrics as .txt with an
"[UNSYNCED LYRICS]" marker.

Modules:
    core/       - Configuration, logging, exceptions
    lyrics/     - Query normalization, providers and the resolver
    media/      - yt-dlp metadata source and the file sink
    utils/      - Filesystem helpers
    cli.py      - Command-line interface

Usage:
    Command Line:
        tubelyrics --url "https://music.youtube.com/watch?v=..."
        tubelyrics --url "https://www.youtube.com/playlist?list=..."
        tubelyrics --title "Song" --artist "Artist"

    Python API:
        from tube_lyrics.lyrics import resolve_lyrics_sync

        result = resolve_lyrics_sync("Song (Official Video)", "Artist")
        if result:
            print(result.content)

Configuration:
    Optional config.yaml in the current directory (see README.md).
"""

__version__ = "0.1.0"
