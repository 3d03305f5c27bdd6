"""
Logging configuration for tube-lyrics.

This module sets up the logging system with multiple outputs:
    - Console: Real-time progress with tqdm-compatible, colored formatting
    - log_full_<timestamp>.log: Complete log of all events (DEBUG and above)
    - log_errors_<timestamp>.log: Only ERROR and CRITICAL level messages
    - lyrics_failures_<timestamp>.log: Tracks where no lyrics were found

All log files are created in a 'logs' subdirectory of the output directory.

Usage:
    from tube_lyrics.core.logger import setup_logging, get_logger

    setup_logging(output_dir)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Resolving lyrics")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

import colorama
from colorama import Fore, Style
from tqdm import tqdm


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are far too chatty at DEBUG
NOISY_LOGGERS = ("aiohttp", "asyncio", "urllib3", "yt_dlp", "charset_normalizer")

# Enables ANSI sequences on Windows consoles; no-op elsewhere
colorama.just_fix_windows_console()


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that colors the level name for console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bright Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Fore.BLUE,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Style.BRIGHT + Fore.RED,
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Render as 'LEVEL: message', coloring the level if enabled."""
        levelname = record.levelname
        if self.use_colors:
            color = self.LEVEL_COLORS.get(record.levelno, Fore.WHITE)
            levelname = f"{color}{levelname}{Style.RESET_ALL}"
        return f"{levelname}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to console without breaking tqdm progress bars.

    Uses tqdm.write() so messages appear above any active progress bar
    (the CLI shows one while walking a playlist).
    """

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


class LyricsFailedTrackHandler(logging.Handler):
    """
    Handler that records lyrics misses in the lyrics failures report.

    Writes one entry per miss in a simple, human-readable format:

        Song Title - Artist Name
        https://www.youtube.com/watch?v=xxxxx

    Only records carrying a 'lyrics_failed_track_title' attribute are written;
    use log_lyrics_failure() to produce them.

    Attributes:
        report_path: Path to the lyrics_failures log file.
        report_file: Open file handle (set by open()).
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "lyrics_failed_track_title"):
            return

        if self.report_file is None:
            return

        try:
            title = getattr(record, "lyrics_failed_track_title", "Unknown")
            artist = getattr(record, "lyrics_failed_track_artist", "") or "Unknown artist"
            url = getattr(record, "lyrics_failed_track_url", None)

            self.report_file.write(f"{title} - {artist}\n")
            if url:
                self.report_file.write(f"{url}\n")
            self.report_file.write("\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """Filter that only allows ERROR and CRITICAL level records."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(output_dir: Path, verbose: bool = False, colored: bool = True) -> Path:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, after
    the configuration is loaded.

    Args:
        output_dir: Directory where log files will be created.
                    Logs are stored in a 'logs' subdirectory.
        verbose: Show DEBUG messages (every probe) on the console.
        colored: Color level names on the console.

    Returns:
        The logs directory that was created.

    Behavior:
        1. Create output_dir/logs if it doesn't exist
        2. Configure root logger level to DEBUG
        3. Console handler (TqdmLoggingHandler), INFO or DEBUG
        4. Full log file handler, DEBUG
        5. Error-only log file handler
        6. Lyrics failures report handler
        7. Quiet down noisy third-party loggers
    """
    logs_dir = output_dir / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    shutdown_logging()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(ColoredConsoleFormatter(use_colors=colored))
    root_logger.addHandler(console_handler)

    full_handler = logging.FileHandler(logs_dir / f"log_full_{timestamp}.log", mode="w", encoding="utf-8")
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_handler = logging.FileHandler(logs_dir / f"log_errors_{timestamp}.log", mode="w", encoding="utf-8")
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    lyrics_handler = LyricsFailedTrackHandler(logs_dir / f"lyrics_failures_{timestamp}.log")
    lyrics_handler.open()
    root_logger.addHandler(lyrics_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logs_dir


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Note:
        Loggers obtained before setup_logging() is called have no handlers
        of their own and rely on whatever the host application configured.
    """
    return logging.getLogger(name)


def log_lyrics_failure(
    logger: logging.Logger,
    title: str,
    artist: str,
    url: str | None = None
) -> None:
    """
    Log a track whose lyrics could not be found.

    Logs a WARNING and attaches the extra fields LyricsFailedTrackHandler
    uses to write the lyrics failures report.

    Example:
        log_lyrics_failure(logger, "Instrumental Track", "Artist Name",
                           "https://www.youtube.com/watch?v=xxx")
    """
    logger.warning(
        f"No lyrics found for: {title}" + (f" by {artist}" if artist else ""),
        extra={
            "lyrics_failed_track_title": title,
            "lyrics_failed_track_artist": artist,
            "lyrics_failed_track_url": url,
        }
    )


def shutdown_logging() -> None:
    """
    Flush, close and remove every handler on the root logger.

    Typically called in a finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except OSError:
            pass
        root_logger.removeHandler(handler)
