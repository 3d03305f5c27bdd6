"""
Configuration management for tube-lyrics.

This module handles loading, validating, and providing access to the
application configuration stored in config.yaml.

The configuration file contains:
    - Output directory for saved lyrics files and logs
    - Network settings (User-Agent, request timeout, rate limit)
    - Lyrics service endpoints and the per-attempt timeout

Unlike credential-bearing tools, tube-lyrics needs no secrets, so the file
is optional: when it is missing every section falls back to its defaults.
A few values can also be overridden from the environment (or a .env file):

    TUBE_LYRICS_OUTPUT_DIR   -> output.directory
    TUBE_LYRICS_USER_AGENT   -> network.user_agent

Example config.yaml:
    output:
      directory: "~/Music/TubeLyrics"

    network:
      user_agent: "Mozilla/5.0 ..."
      request_timeout: null   # seconds, null = no limit
      rate_limit: 5           # requests per second per provider, null = unpaced

    lyrics:
      lrclib_url: "https://lrclib.net"
      genius_url: "https://genius.com"
      probe_timeout: null     # seconds per attempt, null = no limit
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from tube_lyrics.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_OUTPUT_DIRECTORY = "~/Music/TubeLyrics"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)
DEFAULT_RATE_LIMIT = 5
DEFAULT_LRCLIB_URL = "https://lrclib.net"
DEFAULT_GENIUS_URL = "https://genius.com"

ENV_OUTPUT_DIR = "TUBE_LYRICS_OUTPUT_DIR"
ENV_USER_AGENT = "TUBE_LYRICS_USER_AGENT"


@dataclass(frozen=True)
class OutputConfig:
    """
    Output directory configuration.

    Attributes:
        directory: Absolute path where lyrics files and logs are written.
                   Path expansion is performed (~ is expanded to home directory).
    """
    directory: Path


@dataclass(frozen=True)
class NetworkConfig:
    """
    HTTP behaviour shared by all lyrics providers.

    Attributes:
        user_agent: User-Agent header sent with every request. Genius in
                    particular rejects obvious non-browser agents.
        request_timeout: Total seconds allowed per HTTP request, or None
                         for no limit.
        rate_limit: Maximum requests per second per provider, or None to
                    send requests back to back.
    """
    user_agent: str
    request_timeout: float | None
    rate_limit: int | None


@dataclass(frozen=True)
class LyricsConfig:
    """
    Lyrics service configuration.

    Attributes:
        lrclib_url: Base URL of the LRCLIB structured search API.
        genius_url: Base URL of the Genius website (search page and songs).
        probe_timeout: Seconds allowed for a single provider attempt, or None.
                       An expired attempt counts as a transient failure.
    """
    lrclib_url: str
    genius_url: str
    probe_timeout: float | None


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Created by load_config() (or default_config()) and immutable.

    Example:
        config = load_config()
        print(f"Saving to: {config.output.directory}")
    """
    output: OutputConfig
    network: NetworkConfig
    lyrics: LyricsConfig


def default_config() -> Config:
    """Return the configuration used when no config file exists."""
    return _build_config({})


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory
                     and falls back to defaults if it is not there.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is missing, the YAML is invalid,
                     or a field has an invalid value.

    Behavior:
        1. Load .env into the environment (existing variables win)
        2. Locate config file (explicit path or CWD/config.yaml)
        3. Read and parse YAML content
        4. Validate each section and apply defaults
        5. Apply environment overrides
    """
    load_dotenv()

    explicit = config_path is not None
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME

    if not config_path.exists():
        if explicit:
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                details={"file_path": str(config_path)}
            )
        return _build_config({})

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file is a valid "all defaults" configuration
    if raw_config is None:
        raw_config = {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return _build_config(raw_config)


def _build_config(raw_config: dict[str, Any]) -> Config:
    """Validate sections and assemble the frozen Config."""
    for section in ("output", "network", "lyrics"):
        value = raw_config.get(section)
        if value is not None and not isinstance(value, dict):
            raise ConfigError(
                f"Section '{section}' must be a dictionary",
                details={"section": section}
            )

    return Config(
        output=_parse_output_config(raw_config.get("output") or {}),
        network=_parse_network_config(raw_config.get("network") or {}),
        lyrics=_parse_lyrics_config(raw_config.get("lyrics") or {}),
    )


def _parse_output_config(output_section: dict[str, Any]) -> OutputConfig:
    """
    Parse the output section, honouring TUBE_LYRICS_OUTPUT_DIR.

    Raises:
        ConfigError: If directory is not a non-empty string.
    """
    directory = os.getenv(ENV_OUTPUT_DIR) or output_section.get("directory", DEFAULT_OUTPUT_DIRECTORY)

    if not isinstance(directory, str) or not directory.strip():
        raise ConfigError(
            "'output.directory' must be a non-empty string",
            details={"field": "output.directory"}
        )

    return OutputConfig(directory=Path(directory.strip()).expanduser().resolve())


def _parse_network_config(network_section: dict[str, Any]) -> NetworkConfig:
    """
    Parse the network section, honouring TUBE_LYRICS_USER_AGENT.

    Raises:
        ConfigError: On an empty user agent, a non-positive timeout or
                     a non-positive rate limit.
    """
    user_agent = os.getenv(ENV_USER_AGENT) or network_section.get("user_agent", DEFAULT_USER_AGENT)
    if not isinstance(user_agent, str) or not user_agent.strip():
        raise ConfigError(
            "'network.user_agent' must be a non-empty string",
            details={"field": "network.user_agent"}
        )

    request_timeout = _parse_optional_seconds(
        network_section.get("request_timeout"), "network.request_timeout"
    )

    rate_limit = network_section.get("rate_limit", DEFAULT_RATE_LIMIT)
    if rate_limit is not None:
        if isinstance(rate_limit, bool) or not isinstance(rate_limit, int) or rate_limit < 1:
            raise ConfigError(
                "'network.rate_limit' must be a positive integer or null",
                details={"field": "network.rate_limit", "value": rate_limit}
            )

    return NetworkConfig(
        user_agent=user_agent.strip(),
        request_timeout=request_timeout,
        rate_limit=rate_limit
    )


def _parse_lyrics_config(lyrics_section: dict[str, Any]) -> LyricsConfig:
    """
    Parse the lyrics section.

    Raises:
        ConfigError: On a non-http(s) endpoint or a non-positive probe timeout.
    """
    urls = {}
    for field, default in (("lrclib_url", DEFAULT_LRCLIB_URL), ("genius_url", DEFAULT_GENIUS_URL)):
        value = lyrics_section.get(field, default)
        if not isinstance(value, str) or not value.startswith(("http://", "https://")):
            raise ConfigError(
                f"'lyrics.{field}' must be an http(s) URL",
                details={"field": f"lyrics.{field}", "value": value}
            )
        urls[field] = value.rstrip("/")

    probe_timeout = _parse_optional_seconds(
        lyrics_section.get("probe_timeout"), "lyrics.probe_timeout"
    )

    return LyricsConfig(
        lrclib_url=urls["lrclib_url"],
        genius_url=urls["genius_url"],
        probe_timeout=probe_timeout
    )


def _parse_optional_seconds(value: Any, field: str) -> float | None:
    """Validate an optional positive number of seconds."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(
            f"'{field}' must be a positive number or null",
            details={"field": field, "value": value}
        )
    return float(value)
