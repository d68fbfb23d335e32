"""Command line entry point: `loj-migrate`."""

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from application.pipeline import MigrationReport, create_migration_pipeline
from domain.exceptions import OutputWriteError
from infrastructure.http_client import AsyncHTTPClient
from infrastructure.settings import MigrationSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Migrate LOJ problems into a local YAML archive with assets and test data."
    )
    parser.add_argument("--start", dest="start_id", type=int, help="First display id")
    parser.add_argument("--end", dest="end_id", type=int, help="Last display id (inclusive)")
    parser.add_argument("--output", dest="output_dir", type=Path, help="Output root directory")
    parser.add_argument("--api", dest="api_base_url", help="API base URL")
    parser.add_argument("--token", help="Bearer token (prefer LOJ_TOKEN)")
    parser.add_argument("--locale", help="Locale of contents and tags, e.g. zh_CN")
    parser.add_argument("--concurrency", type=int, help="Problems processed in parallel")
    parser.add_argument(
        "--archive",
        action="store_const",
        const=True,
        help="Zip the output tree into <output>.zip when done",
    )
    parser.add_argument("--env-file", help="Path to a .env file")
    parser.add_argument("--log-level", help="Console log level")
    parser.add_argument("--log-file", type=Path, help="Also write DEBUG logs to this file")
    return parser


def configure_logging(level: str, log_file: Path | None = None) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
    if log_file:
        logger.add(log_file, level="DEBUG", encoding="utf-8")


async def main(settings: MigrationSettings) -> MigrationReport:
    async with AsyncHTTPClient(
        timeout=settings.problem_timeout,
        download_timeout=settings.download_timeout,
    ) as http_client:
        pipeline = create_migration_pipeline(settings, http_client)
        return await pipeline.run()


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    overrides = {
        key: value
        for key, value in vars(args).items()
        if key not in ("env_file", "log_file")
    }

    try:
        settings = MigrationSettings.from_env(args.env_file, **overrides)
    except ValidationError as e:
        configure_logging("INFO")
        logger.error(f"Invalid configuration: {e}")
        return 2

    configure_logging(settings.log_level, args.log_file)
    if not settings.token:
        logger.warning("No API token configured, requests will be anonymous")

    try:
        report = asyncio.run(main(settings))
    except OutputWriteError as e:
        logger.error(f"Migration aborted: {e}")
        return 1

    if report.archive_path:
        logger.info(f"Archive: {report.archive_path}")
    logger.info(f"All done. YAML path: {report.yaml_path}")
    return 0


if __name__ == "__main__":
    sys.exit(run())
