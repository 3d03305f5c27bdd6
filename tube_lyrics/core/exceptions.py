"""
Exception classes for tube-lyrics.

This module defines all custom exceptions used throughout the application.
Each exception carries a human-readable message plus an optional details
dictionary, so failures can be logged with context and still shown cleanly
to the user.

Exception Hierarchy:
    TubeLyricsError (base)
        ConfigError - Configuration file issues
        MetadataError - Video/playlist metadata extraction issues
        ProviderError - A single lyrics probe failed
            NetworkFailure - Request could not be completed
            UnexpectedResponseShape - Response was not what the provider expects
            NoMatch - Provider answered cleanly but had nothing

ProviderError and its subclasses never leave a provider: they are raised by
the provider's internal helpers and converted into outcome values at the
provider boundary (see tube_lyrics.lyrics.providers.base).
"""


class TubeLyricsError(Exception):
    """
    Base exception for all tube-lyrics errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., url, query).

    Example:
        try:
            # some operation
        except TubeLyricsError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': URL that caused the error
                     - 'query': lyrics query text involved
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(TubeLyricsError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that should stop program execution.

    Common causes:
        - config file has invalid YAML syntax
        - a section is not a dictionary
        - invalid field values (e.g., negative rate limit)

    Example:
        raise ConfigError(
            "'network.rate_limit' must be a positive integer or null",
            details={'field': 'network.rate_limit', 'value': -1}
        )
    """
    pass


class MetadataError(TubeLyricsError):
    """
    Raised when title/artist metadata cannot be extracted from a video URL.

    Common causes:
        - Video unavailable, private or region-locked
        - URL is not a video or playlist
        - yt-dlp extraction failure
    """
    pass


class ProviderError(TubeLyricsError):
    """
    Base class for failures of a single lyrics probe.

    These are NON-CRITICAL: the resolver moves on to the next query variant
    or provider. They are raised inside providers only.
    """
    pass


class NetworkFailure(ProviderError):
    """
    Raised when an HTTP request to a lyrics service could not complete.

    Common causes:
        - Connection refused or reset
        - DNS failure
        - Request timeout
    """
    pass


class UnexpectedResponseShape(ProviderError):
    """
    Raised when a lyrics service answered with something unusable.

    Examples:
        - Invalid JSON where a JSON array was expected
        - A JSON object instead of an array
        - HTML missing the expected lyrics container
    """
    pass


class NoMatch(ProviderError):
    """
    Raised when a lyrics service answered cleanly but had no lyrics.
    """
    pass
