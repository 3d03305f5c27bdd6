"""
Core module for tube-lyrics.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with multiple outputs

Usage:
    from tube_lyrics.core import (
        Config, load_config,
        setup_logging, get_logger,
        TubeLyricsError, ConfigError
    )
"""

from tube_lyrics.core.config import (
    Config,
    LyricsConfig,
    NetworkConfig,
    OutputConfig,
    default_config,
    load_config,
)
from tube_lyrics.core.exceptions import (
    ConfigError,
    MetadataError,
    NetworkFailure,
    NoMatch,
    ProviderError,
    TubeLyricsError,
    UnexpectedResponseShape,
)
from tube_lyrics.core.logger import (
    get_logger,
    log_lyrics_failure,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "OutputConfig",
    "NetworkConfig",
    "LyricsConfig",
    "default_config",
    "load_config",
    # Exceptions
    "TubeLyricsError",
    "ConfigError",
    "MetadataError",
    "ProviderError",
    "NetworkFailure",
    "UnexpectedResponseShape",
    "NoMatch",
    # Logger
    "setup_logging",
    "get_logger",
    "log_lyrics_failure",
    "shutdown_logging",
]
