"""
Classification of lyrics text into synced (LRC) or plain.

The kind is read from the text itself, never from the provider that
returned it: LRCLIB can hand back plain lyrics and a scraped page can
contain LRC lines.
"""

import re

from tube_lyrics.lyrics.models import LyricsKind, LyricsResult, LyricsSource


# Prefix that keeps plain lyrics recognisable once they are written to disk
UNSYNCED_MARKER = "[UNSYNCED LYRICS]"

# LRC line timestamps: [mm:ss], [mm:ss.xx], [mm:ss:xx]
_TIMESTAMP = re.compile(r"\[\d{1,3}:\d{2}(?:[.:]\d{1,3})?\]")


def classify(raw_text: str) -> LyricsKind:
    """
    SYNCED if the text carries LRC timestamp markers, PLAIN otherwise.

    Example:
        classify("[00:01.00]Hello")  # LyricsKind.SYNCED
        classify("[Chorus]\\nHello")  # LyricsKind.PLAIN
    """
    if raw_text and _TIMESTAMP.search(raw_text):
        return LyricsKind.SYNCED
    return LyricsKind.PLAIN


def package(raw_text: str, source: LyricsSource) -> LyricsResult:
    """
    Classify raw lyrics and wrap them in a LyricsResult.

    Plain lyrics get the unsynced marker prepended (once), so the
    distinction survives after the text leaves the resolver.
    """
    text = raw_text.strip()
    kind = classify(text)

    if kind is LyricsKind.PLAIN and not text.startswith(UNSYNCED_MARKER):
        text = f"{UNSYNCED_MARKER}\n\n{text}"

    return LyricsResult(kind=kind, content=text, source=source)
