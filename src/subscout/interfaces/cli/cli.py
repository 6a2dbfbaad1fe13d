from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

import structlog

from subscout.infrastructure.config import AppConfig, load_config
from subscout.infrastructure.logging.setup import configure_logging
from subscout.infrastructure.media.matcher import match_video_subtitle
from subscout.infrastructure.media.normalizer import normalize_filename
from subscout.interfaces.composition import build_services

log = structlog.get_logger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="subscout",
        description="Match local videos with subtitles and resolve their IMDb IDs.",
    )

    # Config wiring flags (no business logic)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    match = sub.add_parser("match", help="Check whether a video and a subtitle belong together.")
    match.add_argument("video", help="Video file name or path.")
    match.add_argument("subtitle", help="Subtitle file name or path.")

    identify = sub.add_parser("identify", help="Resolve the IMDb ID of a video file.")
    identify.add_argument("video", help="Path to the video file.")
    identify.add_argument("--subtitle", default=None, help="Path to a subtitle file.")

    scan = sub.add_parser("scan", help="Scan a directory and list upload jobs.")
    scan.add_argument("directory", help="Directory to scan recursively.")

    return parser.parse_args(argv)


def _emit(payload: Any, out: TextIO) -> None:
    out.write(json.dumps(payload, indent=2, ensure_ascii=False))
    out.write("\n")


def run_match(args: argparse.Namespace, out: TextIO) -> int:
    video_name = Path(args.video).name
    subtitle_name = Path(args.subtitle).name
    matched = match_video_subtitle(video_name, subtitle_name)
    _emit(
        {
            "match": matched,
            "video_key": normalize_filename(video_name),
            "subtitle_key": normalize_filename(subtitle_name),
        },
        out,
    )
    return 0 if matched else 1


async def run_identify(args: argparse.Namespace, config: AppConfig, out: TextIO) -> int:
    async with build_services(config) as services:
        video, subtitle = await asyncio.wait_for(
            services.resolver.resolve(args.video, args.subtitle),
            timeout=config.resolve_timeout_seconds,
        )
    _emit(
        {
            "video": video.to_dict() if video else None,
            "subtitle": subtitle.to_dict() if subtitle else None,
        },
        out,
    )
    return 0


async def run_scan(args: argparse.Namespace, config: AppConfig, out: TextIO) -> int:
    async with build_services(config) as services:
        jobs = await services.scanner.create_jobs(args.directory)
    _emit([job.to_dict() for job in jobs], out)
    return 0


def start(argv: Iterable[str] | None = None, *, out: TextIO | None = None) -> int:
    """Process entrypoint. Loads config once, configures logging, dispatches."""
    if argv is None:
        argv = sys.argv[1:]
    out = out if out is not None else sys.stdout

    args = _parse_args(argv)

    cli_overrides: dict[str, Any] = {}
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides=cli_overrides,
    )
    configure_logging(config)

    if args.command == "match":
        return run_match(args, out)

    try:
        if args.command == "identify":
            return asyncio.run(run_identify(args, config, out))
        return asyncio.run(run_scan(args, config, out))
    except (OSError, asyncio.TimeoutError) as exc:
        log.error("command_failed", command=args.command, error=str(exc) or type(exc).__name__)
        return 2


if __name__ == "__main__":
    raise SystemExit(start())
