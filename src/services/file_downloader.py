"""Service for downloading per-problem test data and additional files."""

from pathlib import Path

from loguru import logger

from domain.exceptions import TransportError
from domain.models import FileKind
from infrastructure.interfaces import ProblemApiClientProtocol


def problem_group(display_id: int) -> str:
    """Folder name for one problem's files, e.g. `P05`."""
    return f"P{display_id:02d}"


class ProblemFileDownloader:
    """Downloads test data and additional files into `<output>/<kind>/P<NN>/`."""

    def __init__(
        self,
        api_client: ProblemApiClientProtocol,
        output_dir: Path,
        kinds: tuple[FileKind, ...] = (FileKind.TEST_DATA, FileKind.ADDITIONAL_FILE),
    ):
        self.api_client = api_client
        self.output_dir = Path(output_dir)
        self.kinds = kinds

    async def download_all(self, problem_id: int, display_id: int) -> tuple[int, int]:
        """
        Download every listed file of every kind. Failures are logged and skipped.

        Returns:
            (downloaded, failed) counts
        """
        downloaded = 0
        failed = 0
        group = problem_group(display_id)

        for kind in self.kinds:
            try:
                files = await self.api_client.fetch_file_manifest(problem_id, kind)
            except TransportError as e:
                logger.warning(f"[{display_id}] Failed to list {kind.value}: {e}")
                continue

            for info in files:
                destination = self.output_dir / kind.folder / group / info.filename
                logger.info(f"[{display_id}] Downloading {info.filename} -> {destination}")
                try:
                    await self.api_client.download_to(info.download_url, destination)
                    downloaded += 1
                except (TransportError, OSError, ValueError) as e:
                    failed += 1
                    logger.warning(f"[{display_id}] Download of {info.filename} failed: {e}")

        return downloaded, failed
