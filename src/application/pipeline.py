"""Driver for the crawl, localize and serialize pipeline."""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger

from domain.exceptions import OutputWriteError, TransportError
from domain.models import OutputDocument, RemoteProblem
from domain.parsers.record_transformer import RecordTransformer
from domain.serializers import build_yaml
from infrastructure.archive import zip_folder
from infrastructure.http_client import AsyncHTTPClient
from infrastructure.interfaces import ProblemApiClientProtocol
from infrastructure.loj_client import LojApiClient
from infrastructure.settings import MigrationSettings
from services import AssetLocalizer, ProblemFileDownloader


@dataclass
class MigrationReport:
    """Outcome of one run."""

    yaml_path: Path
    processed: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    archive_path: Optional[Path] = None


class MigrationPipeline:
    """Fetches every problem in the configured range and writes the archive document."""

    def __init__(
        self,
        settings: MigrationSettings,
        *,
        api_client: ProblemApiClientProtocol,
        localizer: AssetLocalizer | None = None,
        file_downloader: ProblemFileDownloader | None = None,
        transformer: RecordTransformer | None = None,
    ):
        """
        Initialize pipeline with dependency injection.

        Args:
            settings: Run configuration
            api_client: Remote problem API client
            localizer: Image localizer (built from settings if omitted)
            file_downloader: Test data / additional file downloader (built from settings if omitted)
            transformer: Record transformer (built from settings if omitted)
        """
        self.settings = settings
        self.api_client = api_client
        self.localizer = localizer or AssetLocalizer(
            api_client, settings.assets_dir, settings.output_dir, settings.asset_base_url
        )
        self.file_downloader = file_downloader or ProblemFileDownloader(
            api_client, settings.output_dir
        )
        self.transformer = transformer or RecordTransformer(
            settings.section_titles, settings.difficulty
        )
        # display id -> reference -> local path; kept until the transform pass
        self.asset_maps: dict[int, dict[str, str]] = {}

    async def run(self) -> MigrationReport:
        """
        Run the whole migration.

        Raises:
            OutputWriteError: The output tree or the YAML document could not be written
        """
        settings = self.settings
        logger.info(f"Migrating problems {settings.start_id} to {settings.end_id}")
        self._prepare_output()

        problems = await self.collect()
        report = MigrationReport(yaml_path=settings.yaml_path)
        report.processed = [problem.display_id for problem in problems]
        fetched = {problem.display_id for problem in problems}
        report.skipped = [i for i in settings.display_ids if i not in fetched]

        document = self.transform_all(problems)
        self.write_document(document)

        if settings.archive:
            report.archive_path = self._archive()

        logger.info(
            f"Done: {len(report.processed)} problem(s) written, {len(report.skipped)} skipped. "
            f"YAML: {report.yaml_path}"
        )
        return report

    def _prepare_output(self) -> None:
        try:
            self.settings.output_dir.mkdir(parents=True, exist_ok=True)
            self.settings.assets_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create output directory {self.settings.output_dir}: {e}")
            raise OutputWriteError(f"Cannot create output directory: {e}") from e

    async def collect(self) -> list[RemoteProblem]:
        """
        Fetch, localize and download files for every id in the range.

        Returns:
            Successfully fetched problems in ascending display id order
        """
        semaphore = asyncio.Semaphore(self.settings.concurrency)

        async def bounded(display_id: int) -> Optional[RemoteProblem]:
            async with semaphore:
                return await self.process_problem(display_id)

        results = await asyncio.gather(*(bounded(i) for i in self.settings.display_ids))
        problems = [problem for problem in results if problem is not None]
        return sorted(problems, key=lambda problem: problem.display_id)

    async def process_problem(self, display_id: int) -> Optional[RemoteProblem]:
        """Handle one identifier. Returns None when the problem could not be fetched."""
        logger.info(f"--- Processing displayId={display_id} ---")

        try:
            problem = await self.api_client.fetch_problem(display_id)
        except TransportError as e:
            logger.error(f"[{display_id}] Failed to fetch problem: {e}")
            return None

        mapping = await self.localizer.collect_and_download(
            problem.display_id, problem.section_texts()
        )
        self.asset_maps[problem.display_id] = mapping

        tags = RecordTransformer.extract_tags(problem.tags, problem.display_id)
        logger.info(f"[{display_id}] Title: {problem.title}")
        logger.info(f"[{display_id}] Tags: {len(tags)}")

        downloaded, failed = await self.file_downloader.download_all(
            problem.id, problem.display_id
        )
        logger.info(
            f"[{display_id}] Finished ({downloaded} file(s) downloaded, {failed} failed)"
        )
        return problem

    def transform_all(self, problems: list[RemoteProblem]) -> OutputDocument:
        """Second pass: transform each problem with the asset mapping stored for it."""
        document = OutputDocument()
        for problem in problems:
            mapping = self.asset_maps.get(problem.display_id, {})
            document.problems.append(self.transformer.transform(problem, mapping))
        return document

    def write_document(self, document: OutputDocument) -> Path:
        path = self.settings.yaml_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(build_yaml(document), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save YAML to {path}: {e}")
            raise OutputWriteError(f"Failed to save YAML to {path}: {e}") from e

        logger.info(f"Saved {len(document.problems)} problem(s) to {path}")
        return path

    def _archive(self) -> Optional[Path]:
        zip_path = self.settings.archive_path
        logger.info(f"Archiving {self.settings.output_dir} -> {zip_path}")
        try:
            zip_folder(self.settings.output_dir, zip_path)
        except OSError as e:
            logger.error(f"Archiving failed: {e}")
            return None
        return zip_path


def create_migration_pipeline(
    settings: MigrationSettings, http_client: AsyncHTTPClient | None = None
) -> MigrationPipeline:
    """Factory function to create the pipeline with all dependencies."""
    http_client = http_client or AsyncHTTPClient(
        timeout=settings.problem_timeout,
        download_timeout=settings.download_timeout,
    )
    api_client = LojApiClient(
        http_client,
        base_url=settings.api_base_url,
        authorization=settings.authorization,
        locale=settings.locale,
        problem_timeout=settings.problem_timeout,
        download_timeout=settings.download_timeout,
    )
    return MigrationPipeline(settings, api_client=api_client)
