"""Protocol interfaces for infrastructure collaborators."""

from pathlib import Path
from typing import Any, Optional, Protocol

from domain.models import DownloadInfo, FileKind, RemoteProblem


class HTTPClientProtocol(Protocol):
    """Protocol for HTTP client."""

    async def post_json(
        self,
        url: str,
        payload: Any,
        *,
        headers: Optional[dict[str, str]] = None,
        expected_status: int = 200,
        timeout: Optional[float] = None,
    ) -> Any:
        """POST JSON and return the decoded response."""
        ...

    async def download_to(
        self, url: str, destination: Path, *, timeout: Optional[float] = None
    ) -> int:
        """Save the body of a GET request to destination."""
        ...


class ProblemApiClientProtocol(Protocol):
    """Protocol for the remote problem API."""

    async def fetch_problem(self, display_id: int) -> RemoteProblem:
        """Fetch one problem record."""
        ...

    async def fetch_file_manifest(self, problem_id: int, kind: FileKind) -> list[DownloadInfo]:
        """List downloadable files of one kind."""
        ...

    async def download_to(self, url: str, destination: Path) -> int:
        """Download url into destination."""
        ...
