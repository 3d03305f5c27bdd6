"""
Lyrics resolution orchestrator.

Drives one RawTrack through the providers as an explicit state machine:

    IDLE -> PROBING_STRUCTURED -> PROBING_SCRAPING -> SUCCEEDED | EXHAUSTED

The full ordered list of query variants is generated once, then replayed
against each provider in priority order. The first Found ends the run;
NotFound and TransientError both move on to the next variant. Providers are
awaited strictly one at a time.

Usage:
    async with aiohttp.ClientSession() as session:
        result = await resolve_lyrics("Song (Official Video)", "Artist", session=session)

    # Synchronous callers (CLI)
    result = resolve_lyrics_sync("Song", "Artist")
"""

import asyncio
from dataclasses import dataclass, field
from typing import Sequence

import aiohttp

from tube_lyrics.core.config import Config, default_config
from tube_lyrics.core.logger import get_logger
from tube_lyrics.lyrics.models import (
    Found,
    LyricsResult,
    LyricsSource,
    ProviderOutcome,
    QueryVariant,
    RawTrack,
    ResolutionState,
    TransientError,
)
from tube_lyrics.lyrics.providers import GeniusProvider, LrclibProvider, LyricsProvider
from tube_lyrics.lyrics.variants import generate_variants

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProbeAttempt:
    """One (provider, variant) probe and what came of it."""
    source: LyricsSource
    variant: QueryVariant
    outcome: ProviderOutcome


@dataclass
class Resolution:
    """
    Record of a single resolution run.

    Owned by one call to LyricsResolver.run() and never shared, so the
    tried-set cannot leak between tracks.

    Attributes:
        track: The input track.
        variants: Ordered query variants generated for the track.
        state: Current (finally terminal) state.
        transitions: (from, to) pairs in the order they happened.
        attempts: Every probe made, in order.
        result: The lyrics, set only when state is SUCCEEDED.
    """
    track: RawTrack
    variants: list[QueryVariant] = field(default_factory=list)
    state: ResolutionState = ResolutionState.IDLE
    transitions: list[tuple[ResolutionState, ResolutionState]] = field(default_factory=list)
    attempts: list[ProbeAttempt] = field(default_factory=list)
    result: LyricsResult | None = None
    _tried: set[tuple[LyricsSource, str]] = field(default_factory=set, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.state is ResolutionState.SUCCEEDED

    def move_to(self, state: ResolutionState) -> None:
        if state is self.state:
            return
        if self.state.is_terminal:
            raise RuntimeError(f"resolution already {self.state.value}, cannot move to {state.value}")
        self.transitions.append((self.state, state))
        self.state = state

    def mark_tried(self, source: LyricsSource, variant: QueryVariant) -> bool:
        """Register a probe; False if this (source, variant) was already probed."""
        key = (source, variant.key)
        if key in self._tried:
            return False
        self._tried.add(key)
        return True


class LyricsResolver:
    """
    Runs the provider chain for one track at a time.

    Args:
        providers: Providers in probe priority order. Each provider's phase
                   is the state the run is in while it is probed.
        probe_timeout: Optional bound in seconds for each single attempt.
                       Expiry is reported as a TransientError.
    """

    def __init__(
        self,
        providers: Sequence[LyricsProvider],
        probe_timeout: float | None = None
    ) -> None:
        self._providers = list(providers)
        self._probe_timeout = probe_timeout

    @property
    def providers(self) -> list[LyricsProvider]:
        return list(self._providers)

    async def run(self, track: RawTrack) -> Resolution:
        """Resolve a track and return the full record of the run."""
        resolution = Resolution(track=track)

        if not track.has_artist:
            logger.warning(f"No artist for '{track.title}', searching by title only")

        resolution.variants = generate_variants(track.title, track.artist)
        logger.debug(f"{len(resolution.variants)} query variants for '{track.title}'")

        for provider in self._providers:
            resolution.move_to(provider.phase)

            for variant in resolution.variants:
                if not resolution.mark_tried(provider.source, variant):
                    continue

                outcome = await self._probe(provider, variant)
                resolution.attempts.append(ProbeAttempt(provider.source, variant, outcome))

                if isinstance(outcome, Found):
                    logger.info(
                        f"Lyrics found on {provider.name} for {variant} "
                        f"({outcome.result.kind.value})"
                    )
                    resolution.result = outcome.result
                    resolution.move_to(ResolutionState.SUCCEEDED)
                    return resolution

        resolution.move_to(ResolutionState.EXHAUSTED)
        logger.debug(
            f"No lyrics for '{track.title}' after {len(resolution.attempts)} attempts"
        )
        return resolution

    async def resolve(self, title: str, artist: str | None = "") -> LyricsResult | None:
        """Resolve a (title, artist) pair; None when nothing was found."""
        resolution = await self.run(RawTrack(title=title, artist=artist))
        return resolution.result

    async def _probe(self, provider: LyricsProvider, variant: QueryVariant) -> ProviderOutcome:
        logger.debug(f"Probing {provider.name}: {variant}")

        if self._probe_timeout is None:
            outcome = await provider.attempt(variant)
        else:
            try:
                outcome = await asyncio.wait_for(provider.attempt(variant), timeout=self._probe_timeout)
            except asyncio.TimeoutError:
                outcome = TransientError(f"timed out after {self._probe_timeout}s")

        if isinstance(outcome, TransientError):
            logger.debug(f"{provider.name}: transient failure for {variant}: {outcome.reason}")
        return outcome


def build_default_providers(
    session: aiohttp.ClientSession,
    config: Config
) -> list[LyricsProvider]:
    """LRCLIB then Genius, sharing one session and the configured rate limit."""
    rate_limit = config.network.rate_limit
    return [
        LrclibProvider(session, config.lyrics.lrclib_url, rate_limit=rate_limit),
        GeniusProvider(session, config.lyrics.genius_url, rate_limit=rate_limit),
    ]


def open_session(config: Config) -> aiohttp.ClientSession:
    """HTTP session carrying the configured User-Agent and request timeout."""
    return aiohttp.ClientSession(
        headers={"User-Agent": config.network.user_agent},
        timeout=aiohttp.ClientTimeout(total=config.network.request_timeout)
    )


async def resolve_lyrics(
    title: str,
    artist: str | None = "",
    config: Config | None = None,
    session: aiohttp.ClientSession | None = None
) -> LyricsResult | None:
    """
    Find lyrics for a track.

    Args:
        title: Track title, as raw as the platform gave it.
        artist: Artist name; may be empty.
        config: Configuration; defaults when None.
        session: Existing aiohttp session to reuse. When None a session is
                 opened for this call and closed afterwards.

    Returns:
        LyricsResult, or None when every provider missed every variant.
    """
    config = config or default_config()

    if session is not None:
        resolver = LyricsResolver(
            build_default_providers(session, config),
            probe_timeout=config.lyrics.probe_timeout
        )
        return await resolver.resolve(title, artist)

    async with open_session(config) as own_session:
        resolver = LyricsResolver(
            build_default_providers(own_session, config),
            probe_timeout=config.lyrics.probe_timeout
        )
        return await resolver.resolve(title, artist)


def resolve_lyrics_sync(
    title: str,
    artist: str | None = "",
    config: Config | None = None
) -> LyricsResult | None:
    """Blocking wrapper around resolve_lyrics() for code without an event loop."""
    return asyncio.run(resolve_lyrics(title, artist, config=config))
