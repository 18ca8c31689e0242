"""Refresh the site's social stats from Twitch and YouTube.

Usage:
    python -m linkhub.scripts.refresh_stats
    python -m linkhub.scripts.refresh_stats --data-dir public/data --env-file .env.production

Exits 0 when the run finished (including "nothing fetched, data kept") and
1 when the configuration is invalid or the run failed.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from linkhub.jobs.config import RefreshSettings
from linkhub.jobs.refresh import RefreshRunner
from linkhub.shared.logging import setup_logging

logger = logging.getLogger("linkhub.refresh")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Refresh social stats JSON files")
    parser.add_argument("--data-dir", type=Path, help="Directory holding the JSON artifacts")
    parser.add_argument("--env-file", type=Path, help="Load environment variables from this file")
    return parser.parse_args(argv)


async def run(settings: RefreshSettings) -> int:
    try:
        report = await RefreshRunner(settings).run()
    except Exception as e:
        logger.exception(f"Error updating stats: {e}")
        return 1
    logger.info(f"Refresh finished: {report.summary()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.env_file:
        if not args.env_file.exists():
            print(f"[ERROR] {args.env_file} not found")
            return 1
        load_dotenv(dotenv_path=args.env_file, encoding="utf-8", override=True)

    try:
        settings = RefreshSettings()
    except ValidationError as e:
        print(f"[ERROR] Invalid configuration:\n{e}")
        return 1
    if args.data_dir:
        settings.data_dir = args.data_dir

    setup_logging(settings.log_level)
    return asyncio.run(run(settings))


if __name__ == "__main__":
    sys.exit(main())
