"""
Command-line interface for tube-lyrics.

This module implements the CLI using Click, with rich-click for the
help output colors.

Commands:
    tubelyrics --url <youtube_url>              Lyrics for a video or playlist
    tubelyrics --title <title> --artist <name>  Lyrics for one track
    tubelyrics --url <youtube_url> --favourite  Add to favourites.txt

Usage:
    # Single video (YouTube or YouTube Music)
    tubelyrics --url "https://music.youtube.com/watch?v=..."

    # Whole playlist, one track at a time
    tubelyrics --url "https://www.youtube.com/playlist?list=..."

    # No URL, just a title
    tubelyrics --title "Bohemian Rhapsody (Remastered 2011)" --artist "Queen"

Exit codes:
    0   finished (tracks without lyrics are reported, not fatal)
    1   configuration or unexpected error
    2   metadata could not be read from the URL
    130 interrupted
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import rich_click as click
from tqdm import tqdm

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = ""
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "cli": [
        {
            "name": "Input Sources",
            "options": ["--url", "--title", "--artist"],
        },
        {
            "name": "Output",
            "options": ["--output-dir", "--favourite"],
        },
        {
            "name": "Advanced Options",
            "options": ["--config", "--verbose"],
        },
        {
            "name": "Info",
            "options": ["--version", "--help"],
        },
    ],
}

from tube_lyrics import __version__
from tube_lyrics.core import (
    Config,
    ConfigError,
    MetadataError,
    TubeLyricsError,
    get_logger,
    load_config,
    log_lyrics_failure,
    setup_logging,
    shutdown_logging,
)
from tube_lyrics.lyrics import LyricsResolver, LyricsResult, RawTrack
from tube_lyrics.lyrics.resolver import build_default_providers, open_session
from tube_lyrics.media import (
    FAVOURITES_FILENAME,
    add_to_favourites,
    fetch_tracks,
    save_lyrics,
)
from tube_lyrics.utils import ensure_directory

logger = get_logger(__name__)


@click.command()
@click.option(
    "--url",
    type=str,
    default=None,
    metavar="<youtube-url>",
    help="YouTube / YouTube Music video or playlist URL"
)
@click.option(
    "--title",
    type=str,
    default=None,
    metavar="<title>",
    help="Track title (instead of --url)"
)
@click.option(
    "--artist",
    type=str,
    default="",
    metavar="<artist>",
    help="Track artist, used with --title"
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    metavar="<dir>",
    help="Where lyrics files are written (overrides config.yaml)"
)
@click.option(
    "--favourite",
    is_flag=True,
    help="Add the URL's tracks to favourites.txt instead of fetching lyrics"
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Configuration file (default: ./config.yaml if present)"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show every lookup attempt on the console"
)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit."
)
@click.pass_context
def cli(
    ctx: click.Context,
    url: Optional[str],
    title: Optional[str],
    artist: str,
    output_dir: Optional[Path],
    favourite: bool,
    config_path: Optional[Path],
    verbose: bool,
    version: bool
) -> None:
    """
    tube-lyrics: Find lyrics for YouTube and YouTube Music tracks.

    Cleans up the video title and artist credit, then searches LRCLIB
    (synced lyrics) and Genius (plain lyrics) until one of them answers.

    \b
    BASIC USAGE:
        tubelyrics --url "https://music.youtube.com/watch?v=..."
        tubelyrics --url "https://www.youtube.com/playlist?list=..."
        tubelyrics --title "Song" --artist "Artist"

    \b
    FAVOURITES:
        tubelyrics --url "https://..." --favourite
    """
    if version:
        click.echo(f"tube-lyrics {__version__}")
        ctx.exit(0)

    if not url and not title:
        click.echo(ctx.get_help())
        ctx.exit(0)

    if url and title:
        raise click.UsageError("Cannot use both --url and --title")

    if artist and not title:
        raise click.UsageError("--artist can only be used with --title")

    if favourite and not url:
        raise click.UsageError("--favourite requires --url")

    _run({
        "url": url,
        "title": title,
        "artist": artist,
        "output_dir": output_dir,
        "favourite": favourite,
        "config_path": config_path,
        "verbose": verbose,
    })


def _run(options: dict) -> None:
    """
    Execute the workflow for the parsed CLI options.

    1. Load configuration
    2. Set up logging in the output directory
    3. Collect tracks (from the URL or --title/--artist)
    4. Add them to favourites, or resolve and save their lyrics

    Raises:
        SystemExit: On fatal errors (with appropriate exit code).
    """
    try:
        config = load_config(options["config_path"])
        output_dir = options["output_dir"] or config.output.directory
        output_dir = ensure_directory(output_dir.expanduser())

        setup_logging(output_dir, verbose=options["verbose"])
        logger.info(f"tube-lyrics {__version__} starting")

        if options["url"]:
            tracks = fetch_tracks(options["url"])
        else:
            tracks = [RawTrack(title=options["title"], artist=options["artist"])]

        if not tracks:
            logger.warning("No tracks to process")
            return

        if options["favourite"]:
            _add_favourites(tracks, output_dir / FAVOURITES_FILENAME)
            return

        asyncio.run(_resolve_tracks(tracks, config, output_dir))

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(1)

    except MetadataError as e:
        click.echo(f"Metadata error: {e.message}", err=True)
        logger.error(f"Metadata error: {e}", exc_info=True)
        sys.exit(2)

    except TubeLyricsError as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        logger.info("Interrupted by user")
        sys.exit(130)

    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error")
        sys.exit(1)

    finally:
        shutdown_logging()


async def _resolve_tracks(
    tracks: list[RawTrack],
    config: Config,
    output_dir: Path
) -> None:
    """
    Resolve and save lyrics for each track, one after another.

    Each track's lyrics are written as soon as they are found, so an
    interrupted playlist keeps what was already resolved. All tracks share
    one HTTP session. A progress bar is shown for playlists only.
    """
    found = synced = 0

    async with open_session(config) as session:
        resolver = LyricsResolver(
            build_default_providers(session, config),
            probe_timeout=config.lyrics.probe_timeout
        )

        with tqdm(total=len(tracks), desc="Lyrics", unit="track", disable=len(tracks) < 2) as progress:
            for track in tracks:
                resolution = await resolver.run(track)
                result = resolution.result
                if _save_result(track, result, output_dir):
                    found += 1
                    if result.is_synced:
                        synced += 1
                progress.update(1)

    logger.info("-" * 60)
    logger.info(f"Lyrics found:      {found}/{len(tracks)} ({synced} synced)")
    logger.info(f"Output directory:  {output_dir}")


def _save_result(track: RawTrack, result: LyricsResult | None, output_dir: Path) -> bool:
    """Write found lyrics, or record the track in the failure report."""
    if result is None:
        log_lyrics_failure(logger, track.title, track.artist, track.url)
        return False

    path = save_lyrics(output_dir, track.title, result)
    logger.info(f"Saved lyrics for '{track.title}' ({result.source.value}) -> {path.name}")
    return True


def _add_favourites(tracks: list[RawTrack], favourites_path: Path) -> None:
    for track in tracks:
        add_to_favourites(favourites_path, track.title, track.url or "")
        logger.info(f"Added to favourites: {track.title}")


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `tubelyrics` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
