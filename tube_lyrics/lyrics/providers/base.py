"""
Common interface for lyrics providers.

A provider answers one question: "do you have lyrics for this QueryVariant?"
through LyricsProvider.attempt(). The answer is always an outcome value
(Found, NotFound or TransientError); exceptions raised while talking to the
service are converted here and never reach the resolver.

Subclasses implement _lookup(), which returns the raw lyrics text or raises
one of the ProviderError subclasses:

    NoMatch                 -> NotFound
    UnexpectedResponseShape -> NotFound
    NetworkFailure          -> TransientError (scrapers may map it to NotFound)
"""

import asyncio
from abc import ABC, abstractmethod
from contextlib import nullcontext
from dataclasses import dataclass

import aiohttp
from asyncio_throttle import Throttler

from tube_lyrics.core.exceptions import (
    NetworkFailure,
    NoMatch,
    UnexpectedResponseShape,
)
from tube_lyrics.core.logger import get_logger
from tube_lyrics.lyrics.classifier import package
from tube_lyrics.lyrics.models import (
    Found,
    LyricsSource,
    NotFound,
    ProviderOutcome,
    QueryVariant,
    ResolutionState,
    TransientError,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class HttpReply:
    """Status, content type and decoded body of one GET request."""
    status: int
    content_type: str
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class LyricsProvider(ABC):
    """
    Base class for lyrics services.

    Attributes:
        source: Which service this is (reported in LyricsResult.source).
        phase: Resolver state during which this provider is probed.

    Args:
        session: Shared aiohttp.ClientSession (owned by the caller).
        base_url: Service root, without trailing slash.
        rate_limit: Maximum requests per second, or None for no pacing.
    """

    source: LyricsSource
    phase: ResolutionState

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        rate_limit: int | None = None
    ) -> None:
        self._session = session
        self.base_url = base_url.rstrip("/")
        self._throttler = Throttler(rate_limit=rate_limit, period=1.0) if rate_limit else None
        self._reported_unexpected = False

    @property
    def name(self) -> str:
        return self.source.value

    async def attempt(self, query: QueryVariant) -> ProviderOutcome:
        """
        Look up one query variant.

        Returns:
            Found with the packaged lyrics, NotFound, or TransientError.
            Never raises (task cancellation excepted).
        """
        try:
            text = await self._lookup(query)
        except (NoMatch, UnexpectedResponseShape) as e:
            logger.debug(f"{self.name}: {query} -> not found ({e.message})")
            return NotFound(e.message)
        except NetworkFailure as e:
            logger.debug(f"{self.name}: {query} -> network failure ({e.message})")
            return self._network_outcome(e)
        except Exception as e:
            # Traceback once per provider instance; later failures log at debug.
            if self._reported_unexpected:
                logger.debug(f"{self.name}: unexpected failure for {query}: {e!r}")
            else:
                self._reported_unexpected = True
                logger.error(f"{self.name}: unexpected failure for {query}: {e}", exc_info=True)
            return TransientError(f"unexpected error: {e}")

        return Found(package(text, self.source))

    def _network_outcome(self, error: NetworkFailure) -> ProviderOutcome:
        """Outcome reported when the service could not be reached."""
        return TransientError(error.message)

    @abstractmethod
    async def _lookup(self, query: QueryVariant) -> str:
        """
        Fetch raw lyrics text for the query.

        Raises:
            NoMatch, UnexpectedResponseShape, NetworkFailure
        """

    async def _get(self, url: str, params: dict[str, str] | None = None) -> HttpReply:
        """
        GET a URL through the shared session, honouring the rate limit.

        Raises:
            NetworkFailure: Connection errors and timeouts.
            UnexpectedResponseShape: Body could not be decoded as text.
        """
        async with self._throttler or nullcontext():
            try:
                async with self._session.get(url, params=params) as response:
                    body = await response.text()
                    return HttpReply(
                        status=response.status,
                        content_type=response.headers.get("Content-Type", ""),
                        body=body
                    )
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise NetworkFailure(
                    f"GET {url} failed: {str(e) or type(e).__name__}",
                    details={"url": url, "params": params, "original_error": repr(e)}
                ) from e
            except UnicodeDecodeError as e:
                raise UnexpectedResponseShape(
                    f"GET {url} returned an undecodable body",
                    details={"url": url, "original_error": str(e)}
                ) from e
