"""Service that downloads embedded images and maps their references to local paths."""

from collections.abc import Iterable, Mapping
from pathlib import Path
from urllib.parse import urljoin

from loguru import logger

from domain.exceptions import TransportError
from domain.parsers.asset_scanner import extract_references, local_filename, rewrite_references
from infrastructure.interfaces import ProblemApiClientProtocol


class AssetLocalizer:
    """Makes problem statements self-contained by localizing their images."""

    def __init__(
        self,
        api_client: ProblemApiClientProtocol,
        assets_dir: Path,
        output_dir: Path | None = None,
        asset_base_url: str | None = None,
    ):
        """
        Initialize localizer.

        Args:
            api_client: Client used for the raw downloads
            assets_dir: Images go to `<assets_dir>/<display id>/`
            output_dir: Root the returned local paths are relative to (default: parent of assets_dir)
            asset_base_url: Base for resolving relative image references
        """
        self.api_client = api_client
        self.assets_dir = Path(assets_dir)
        self.output_dir = Path(output_dir) if output_dir is not None else self.assets_dir.parent
        self.asset_base_url = asset_base_url
        self._relative_root = self.assets_dir.relative_to(self.output_dir).as_posix()

    def resolve_url(self, reference: str) -> str:
        if self.asset_base_url:
            return urljoin(self.asset_base_url, reference)
        return reference

    async def collect_and_download(self, display_id: int, texts: Iterable[str]) -> dict[str, str]:
        """
        Download every image referenced in texts for one problem.

        Returns:
            Mapping from the literal reference to `./assets/<display id>/<file>`.
            References whose download failed are absent.
        """
        references = set(extract_references("".join(texts)))
        if not references:
            return {}

        logger.info(f"[{display_id}] Found {len(references)} image(s), downloading")

        mapping: dict[str, str] = {}
        for reference in sorted(references):
            filename = local_filename(reference)
            destination = self.assets_dir / str(display_id) / filename
            url = self.resolve_url(reference)

            logger.info(f"[{display_id}] Image {url} -> {destination}")
            try:
                await self.api_client.download_to(url, destination)
            except (TransportError, OSError, ValueError) as e:
                logger.warning(f"[{display_id}] Image download failed ({reference}): {e}")
                continue

            mapping[reference] = f"./{self._relative_root}/{display_id}/{filename}"

        return mapping

    @staticmethod
    def rewrite(text: str, mapping: Mapping[str, str] | None) -> str:
        """Replace localized image tags in text by their local paths."""
        return rewrite_references(text, mapping)
