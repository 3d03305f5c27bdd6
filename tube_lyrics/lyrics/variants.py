"""
Query variant generation.

Turns one raw (title, artist) pair into the ordered, deduplicated list of
QueryVariants the resolver probes. The order is the probe priority: when
several variants would match, the first one in this list wins, so the
construction below must stay stable.
"""

from tube_lyrics.lyrics.models import QueryVariant
from tube_lyrics.lyrics.normalizer import normalize_artist, normalize_title


def _join_styles(tokens: list[str]) -> list[str]:
    """The four ways a multi-artist credit is commonly written."""
    return [
        ", ".join(tokens),
        "  ".join(tokens),
        " ".join(tokens),
        "".join(tokens),
    ]


def build_artist_variants(artist: str | None) -> list[str]:
    """
    Build the artist spellings to try, highest priority first.

    Order:
        - each individual artist
        - all artists joined by ", ", two spaces, one space, nothing
        - the same four joins in reverse artist order
        - the raw string with spaces turned into ", "
        - the raw words reversed and joined by ", "
        - the fully cleaned artist string

    Entries are deduplicated ignoring case, keeping the first spelling seen.
    Empty spellings are skipped; if nothing is left the result is [""] so
    that title-only queries can still run.

    Example:
        build_artist_variants("A, B")[:4]  # ['A', 'B', 'A, B', 'A  B']
    """
    raw = (artist or "").strip()
    normalized = normalize_artist(raw)
    tokens = normalized.tokens
    words = raw.split(" ") if raw else []

    candidates = [
        *tokens,
        *_join_styles(tokens),
        *_join_styles(tokens[::-1]),
        ", ".join(words),
        ", ".join(words[::-1]),
        normalized.cleaned,
    ]

    variants: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        folded = candidate.lower()
        if not candidate.strip() or folded in seen:
            continue
        seen.add(folded)
        variants.append(candidate)

    return variants or [""]


def generate_variants(title: str, artist: str | None) -> list[QueryVariant]:
    """
    Cross title variants with artist variants.

    Titles form the outer loop and artists the inner one, so every artist
    spelling is tried with the cleanest title before the title is relaxed.
    A pair is emitted once per call, compared case-insensitively.

    Returns:
        Ordered list of QueryVariant, never empty for a non-empty title.
    """
    titles = normalize_title(title)
    artists = build_artist_variants(artist)

    variants: list[QueryVariant] = []
    seen: set[str] = set()
    for title_variant in titles:
        for artist_variant in artists:
            variant = QueryVariant(title=title_variant, artist=artist_variant)
            if variant.key in seen:
                continue
            seen.add(variant.key)
            variants.append(variant)

    return variants
