"""
Data models for lyrics resolution.

Every object here lives for a single resolution call: it is created from
the raw (title, artist) pair, consumed by the resolver and discarded.

    RawTrack        what the video platform told us
    QueryVariant    one normalized (title, artist) lookup
    LyricsResult    the lyrics that were found
    ProviderOutcome what a provider says about one QueryVariant:
                    Found | NotFound | TransientError
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class LyricsKind(Enum):
    """Whether lyrics carry LRC timestamps."""
    SYNCED = "synced"
    PLAIN = "plain"


class LyricsSource(Enum):
    """Lyrics services, in the order they are probed."""
    LRCLIB = "lrclib"
    GENIUS = "genius"


class ResolutionState(Enum):
    """
    States of one resolution run.

    IDLE -> PROBING_STRUCTURED -> PROBING_SCRAPING -> SUCCEEDED | EXHAUSTED

    Either probing state may jump straight to SUCCEEDED on the first hit.
    """
    IDLE = "idle"
    PROBING_STRUCTURED = "probing_structured"
    PROBING_SCRAPING = "probing_scraping"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self in (ResolutionState.SUCCEEDED, ResolutionState.EXHAUSTED)


@dataclass(frozen=True)
class RawTrack:
    """
    Title and artist as extracted from a video platform.

    Attributes:
        title: Video title, often decorated ("Song (Official Video)").
        artist: Artist or uploader string. May be empty when the platform
                has no artist metadata; None is coerced to "".
        url: Where the metadata came from, if known (used in failure reports).
    """
    title: str
    artist: str = ""
    url: str | None = None

    def __post_init__(self) -> None:
        if self.artist is None:
            object.__setattr__(self, "artist", "")

    @property
    def has_artist(self) -> bool:
        return bool(self.artist.strip())


@dataclass(frozen=True)
class QueryVariant:
    """
    One normalized (title, artist) pair: the atomic unit of lookup.

    Two variants are considered the same lookup when their keys match,
    i.e. they are equal ignoring case.
    """
    title: str
    artist: str

    @property
    def key(self) -> str:
        return f"{self.title.lower()}|{self.artist.lower()}"

    @property
    def search_text(self) -> str:
        """Free-text form used by search pages: 'title artist'."""
        return f"{self.title} {self.artist}".strip()

    def __str__(self) -> str:
        return f'"{self.title}" by "{self.artist}"'


@dataclass(frozen=True)
class LyricsResult:
    """
    Lyrics returned by a resolution.

    Attributes:
        kind: SYNCED if the content has LRC timestamps, PLAIN otherwise.
        content: Lyrics text. Plain content starts with the unsynced marker.
        source: Service the lyrics came from.
    """
    kind: LyricsKind
    content: str
    source: LyricsSource

    @property
    def is_synced(self) -> bool:
        return self.kind is LyricsKind.SYNCED

    @property
    def file_extension(self) -> str:
        """'.lrc' for synced lyrics, '.txt' for plain lyrics."""
        return ".lrc" if self.is_synced else ".txt"


@dataclass(frozen=True)
class Found:
    """The provider returned lyrics for the query."""
    result: LyricsResult


@dataclass(frozen=True)
class NotFound:
    """The provider ran (or was skipped) and had nothing for the query."""
    reason: str = "no match"


@dataclass(frozen=True)
class TransientError:
    """
    The probe failed for a reason that may not repeat (network, timeout).

    Treated exactly like NotFound by the resolver; kept distinct for logging.
    """
    reason: str


ProviderOutcome = Union[Found, NotFound, TransientError]


@dataclass(frozen=True)
class SearchHit:
    """
    One validated entry of a structured lyrics search response.

    Either field may be missing; an entry with neither is not a hit.
    """
    synced_lyrics: str | None = None
    plain_lyrics: str | None = None

    @classmethod
    def from_entry(cls, entry: object) -> "SearchHit | None":
        """
        Validate a raw JSON entry.

        Returns:
            SearchHit if the entry is an object with at least one non-empty
            lyrics string, None otherwise. Never raises.
        """
        if not isinstance(entry, dict):
            return None

        synced = entry.get("syncedLyrics")
        plain = entry.get("plainLyrics")
        synced = synced if isinstance(synced, str) and synced.strip() else None
        plain = plain if isinstance(plain, str) and plain.strip() else None

        if synced is None and plain is None:
            return None

        return cls(synced_lyrics=synced, plain_lyrics=plain)

    @property
    def best_text(self) -> str:
        """Synced lyrics when present, plain lyrics otherwise."""
        return self.synced_lyrics or self.plain_lyrics or ""
