# src/main.py — v2
"""CLI entry point — restore and save commands.

Usage:
    dircache restore --path node_modules --key deps-abc [--restore-key deps-]
    dircache save --path node_modules --key deps-abc

Exit codes: 0 success (a cache miss included), 1 failure, 2 invalid input,
130 interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from dircache.version import __version__

if TYPE_CHECKING:
    from dircache.config.settings import Settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    from dircache.cache.validation import ValidationError
    from dircache.config.settings import ConfigurationError, load_settings

    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_FAILURE

    try:
        settings = load_settings()
    except (ConfigurationError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_FAILURE

    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except ValidationError as exc:
        logger.error("%s", exc)
        return EXIT_INVALID_INPUT
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return EXIT_FAILURE


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="dircache",
        description=f"dircache v{__version__} — key-addressed directory cache",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- restore ---
    p_restore = subparsers.add_parser(
        "restore", help="Restore a cached directory",
    )
    _add_common_arguments(p_restore)
    p_restore.add_argument(
        "--restore-key", dest="restore_keys", action="append", default=None,
        help="Fallback key, tried in the order given (repeatable)",
    )
    p_restore.add_argument(
        "--download-concurrency", type=int, default=None,
        help="Download concurrency hint (passed through)",
    )
    p_restore.add_argument(
        "--timeout-ms", type=int, default=None,
        help="Download timeout hint in milliseconds (passed through)",
    )
    p_restore.set_defaults(func=_cmd_restore)

    # --- save ---
    p_save = subparsers.add_parser(
        "save", help="Save a directory under a key",
    )
    _add_common_arguments(p_save)
    p_save.add_argument(
        "--upload-concurrency", type=int, default=None,
        help="Upload concurrency hint (passed through)",
    )
    p_save.add_argument(
        "--upload-chunk-size", type=int, default=None,
        help="Upload chunk size hint in bytes (passed through)",
    )
    p_save.set_defaults(func=_cmd_save)

    return parser


def _add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-p", "--path", dest="paths", action="append", required=True,
        help="Path to cache (repeatable; only the first is synchronized)",
    )
    p.add_argument("-k", "--key", required=True, help="Primary cache key")
    p.add_argument(
        "--state-file", type=Path, default=None,
        help="JSON file shared by restore and save to skip redundant saves",
    )
    p.add_argument(
        "--compression-level", type=int, default=None,
        help="Compression hint (passed through)",
    )


async def _cmd_restore(args: argparse.Namespace, settings: Settings) -> int:
    """Restore the cache and report whether the primary key hit."""
    from dircache.api.facade import restore_cache
    from dircache.api.state import RestoreState, write_state
    from dircache.cache.models import DownloadOptions

    options = DownloadOptions(
        download_concurrency=args.download_concurrency,
        timeout_in_ms=args.timeout_ms,
        compression_level=args.compression_level,
    )
    matched = await restore_cache(
        args.paths, args.key, args.restore_keys, options, settings=settings,
    )
    state = RestoreState(primary_key=args.key, matched_key=matched)
    if args.state_file:
        write_state(args.state_file, state)

    print(f"cache-hit={'true' if state.cache_hit else 'false'}")
    if matched is not None:
        print(f"cache-matched-key={matched}")
    return EXIT_OK


async def _cmd_save(args: argparse.Namespace, settings: Settings) -> int:
    """Save the cache unless the restore step already hit the same key."""
    from dircache.api.facade import save_cache
    from dircache.api.state import read_state
    from dircache.cache.models import UploadOptions

    if args.state_file:
        state = read_state(args.state_file)
        if state is not None and state.cache_hit and state.primary_key == args.key:
            logger.info(
                "Cache hit occurred on the primary key %s, not saving cache.",
                args.key,
            )
            return EXIT_OK

    options = UploadOptions(
        upload_concurrency=args.upload_concurrency,
        upload_chunk_size=args.upload_chunk_size,
        compression_level=args.compression_level,
    )
    cache_id = await save_cache(args.paths, args.key, options, settings=settings)
    print(f"cache-id={cache_id}")
    return EXIT_OK


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage from settings."""
    from dircache.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
