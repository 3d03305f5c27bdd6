"""
Title and artist normalization for lyrics lookups.

Video titles and uploader names are noisy: "(Official Video)", "[HD]",
quotes, "A ft. B & C". These pure functions turn such strings into the
candidate spellings a lyrics service is likely to know. They never raise
and never touch the network.

Artist credits are split on "," and "&" anywhere, but the separator words
(feat, ft, by, official, audio, video) only count as whole words. A plain
substring split would cut "Daft Punk" at "ft" and "Taylor Swift" at "ft";
here both stay one name.
"""

import re
from typing import NamedTuple


_PARENTHESIZED = re.compile(r"\(.*?\)")
_BRACKETED = re.compile(r"\[.*?\]")
_QUOTES = re.compile(r"[\"']")
_SEPARATORS = re.compile(r"\s*[:-]\s*")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9\s]")
_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")

# Word separators only match whole words, so "Swift" or "Bobby" survive.
_ARTIST_SEPARATORS = re.compile(
    r",|&|\b(?:feat|ft)\b\.?|\b(?:by|official|audio|video)\b",
    re.IGNORECASE,
)


class NormalizedArtist(NamedTuple):
    """Individual artist names plus the whole string cleaned into one."""
    tokens: list[str]
    cleaned: str


def clean_title(title: str) -> str:
    """
    Fully normalize a title.

    Example:
        clean_title('Song: "Part 2" (Official Video) [HD]')  # 'Song Part 2'
    """
    text = _PARENTHESIZED.sub("", title or "")
    text = _BRACKETED.sub("", text)
    text = _QUOTES.sub("", text)
    text = _SEPARATORS.sub(" ", text)
    text = _NON_ALNUM.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def normalize_title(title: str) -> list[str]:
    """
    Build the title variants, most normalized first.

    Order:
        1. clean_title()
        2. parentheticals removed
        3. quotes removed
        4. non-alphanumerics removed
        5. the original title

    Duplicates and empty strings are dropped. The original title is always
    last: it is the fallback when nothing cleaner matched.
    """
    original = (title or "").strip()
    candidates = [
        clean_title(original),
        _PARENTHESIZED.sub("", original).strip(),
        _QUOTES.sub("", original).strip(),
        _NON_ALNUM.sub("", original).strip(),
    ]

    variants: list[str] = []
    for candidate in candidates:
        if candidate and candidate != original and candidate not in variants:
            variants.append(candidate)
    if original:
        variants.append(original)
    return variants


def normalize_artist(artist: str | None) -> NormalizedArtist:
    """
    Split a multi-artist string into names.

    Separators: ',', '&', 'feat', 'feat.', 'ft', 'ft.', 'by', 'official',
    'audio', 'video' (any case).

    Example:
        normalize_artist("A ft. B & C")
        # NormalizedArtist(tokens=['A', 'B', 'C'], cleaned='A B C')

    An empty or missing artist gives no tokens and an empty cleaned string.
    """
    tokens = [token.strip() for token in _ARTIST_SEPARATORS.split(artist or "")]
    tokens = [token for token in tokens if token]

    cleaned = _PUNCTUATION.sub("", " ".join(tokens))
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()
    return NormalizedArtist(tokens=tokens, cleaned=cleaned)
