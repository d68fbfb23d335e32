"""Client for the LOJ problem API."""

from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from domain.exceptions import PayloadShapeError
from domain.models import DownloadFilesResponse, DownloadInfo, FileKind, RemoteProblem
from .interfaces import HTTPClientProtocol

API_SUCCESS_STATUS = 201


class LojApiClient:
    """Authenticated access to `getProblem` and `downloadProblemFiles`, plus plain downloads."""

    def __init__(
        self,
        http_client: HTTPClientProtocol,
        *,
        base_url: str,
        authorization: str,
        locale: str = "zh_CN",
        problem_timeout: float | None = None,
        download_timeout: float | None = None,
    ):
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.locale = locale
        self.problem_timeout = problem_timeout
        self.download_timeout = download_timeout
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": authorization,
        }

    async def _post(self, operation: str, payload: dict):
        return await self.http_client.post_json(
            f"{self.base_url}/problem/{operation}",
            payload,
            headers=self._headers,
            expected_status=API_SUCCESS_STATUS,
            timeout=self.problem_timeout,
        )

    async def fetch_problem(self, display_id: int) -> RemoteProblem:
        """
        Fetch one problem by display id with localized content, judge info, tags and samples.

        Raises:
            TransportError: Request failed, unexpected status or malformed body
        """
        payload = {
            "displayId": display_id,
            "localizedContentsOfLocale": self.locale,
            "judgeInfo": True,
            "judgeInfoToBePreprocessed": True,
            "tagsOfLocale": self.locale,
            "samples": True,
        }
        data = await self._post("getProblem", payload)

        try:
            problem = RemoteProblem.model_validate(data)
        except ValidationError as e:
            raise PayloadShapeError(f"Unexpected getProblem payload for {display_id}: {e}") from e

        logger.debug(f"Fetched problem {display_id} (internal id {problem.id})")
        return problem

    async def fetch_file_manifest(self, problem_id: int, kind: FileKind) -> list[DownloadInfo]:
        """
        List files of one kind with their one-time download URLs.

        Raises:
            TransportError: Request failed, unexpected status or malformed body
        """
        payload = {
            "problemId": problem_id,
            "type": kind.value,
            "filenameList": [],
        }
        data = await self._post("downloadProblemFiles", payload)

        try:
            response = DownloadFilesResponse.model_validate(data)
        except ValidationError as e:
            raise PayloadShapeError(f"Unexpected downloadProblemFiles payload: {e}") from e

        return response.download_info

    async def download_to(self, url: str, destination: Path) -> int:
        """Plain GET of url into destination."""
        return await self.http_client.download_to(url, destination, timeout=self.download_timeout)
