from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence, TextIO

from knot_downloader.config import YamlConfigLoader
from knot_downloader.config.models import AppConfig, ConfigLoadRequest
from knot_downloader.logging import init_logging
from knot_downloader.sync import HttpFetcher, OutcomeReporter, SyncScheduler

# Named explicitly: under `python -m` __name__ is "__main__", outside the filtered hierarchy.
logger = logging.getLogger("knot_downloader")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="knot-downloader",
        description="Periodically mirror remote files to local paths",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the YAML config (default: $CONFIG_PATH, else config.yml)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Command: run
    run_parser = subparsers.add_parser("run", help="Sync repeatedly until interrupted (default)")
    run_parser.add_argument(
        "--run-seconds",
        type=float,
        default=None,
        help="Stop after N seconds (useful for smoke testing).",
    )

    # Command: once
    subparsers.add_parser("once", help="Run a single sync cycle and exit")

    return parser


async def _load_config(args: argparse.Namespace) -> AppConfig:
    loader = YamlConfigLoader()
    request = ConfigLoadRequest(yaml_path=args.config)
    return await loader.load(request)


async def _run_sync(args: argparse.Namespace) -> None:
    config = await _load_config(args)
    init_logging(config.log_level, color=config.color)

    run_seconds = getattr(args, "run_seconds", None)
    max_cycles = 1 if args.command == "once" else None

    async with HttpFetcher(timeout=config.request_timeout) as fetcher:
        scheduler = SyncScheduler(
            config=config,
            fetcher=fetcher,
            on_outcome=OutcomeReporter(color=config.color),
        )
        scheduler.install_signal_handlers()
        stop_timer = None
        if run_seconds is not None:
            stop_timer = asyncio.get_running_loop().call_later(run_seconds, scheduler.request_stop)
        try:
            await scheduler.run(max_cycles=max_cycles)
        finally:
            if stop_timer is not None:
                stop_timer.cancel()
            scheduler.remove_signal_handlers()


def print_error_chain(err: BaseException, stream: TextIO) -> None:
    """Print an error followed by its chain of underlying causes, outermost first."""
    print(f"Error: {err}", file=stream)

    causes: list[BaseException] = []
    seen = {id(err)}
    current = err.__cause__ or err.__context__
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        causes.append(current)
        current = current.__cause__ or current.__context__

    if not causes:
        return
    print("\nCaused by:", file=stream)
    for cause in causes:
        text = str(cause) or type(cause).__name__
        for line in text.splitlines():
            print(f"  {line}", file=stream)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "run"

    try:
        asyncio.run(_run_sync(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
    except Exception as e:
        print_error_chain(e, sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
