"""Shared fixtures: an in-memory stand-in for the LOJ API."""

from pathlib import Path

import pytest

from domain.exceptions import ApiStatusError, TransportError
from domain.models import DownloadInfo, FileKind, RemoteProblem


class FakeLojApi:
    """Serves canned problems and writes `payload:<url>` for every successful download."""

    def __init__(self, problems=None, manifests=None, failing_urls=(), failing_kinds=()):
        self.problems = problems or {}
        self.manifests = manifests or {}
        self.failing_urls = set(failing_urls)
        self.failing_kinds = set(failing_kinds)
        self.fetched: list[int] = []
        self.downloads: list[tuple[str, Path]] = []

    async def fetch_problem(self, display_id: int) -> RemoteProblem:
        self.fetched.append(display_id)
        if display_id not in self.problems:
            raise ApiStatusError("https://api/problem/getProblem", 404, "NO_SUCH_PROBLEM")
        return RemoteProblem.model_validate(self.problems[display_id])

    async def fetch_file_manifest(self, problem_id: int, kind: FileKind) -> list[DownloadInfo]:
        if kind in self.failing_kinds:
            raise TransportError(f"manifest {kind.value} unavailable")
        entries = self.manifests.get((problem_id, kind), [])
        return [DownloadInfo(filename=name, download_url=url) for name, url in entries]

    async def download_to(self, url: str, destination: Path) -> int:
        self.downloads.append((url, destination))
        if url in self.failing_urls:
            raise ApiStatusError(url, 404)
        destination.parent.mkdir(parents=True, exist_ok=True)
        data = f"payload:{url}".encode()
        destination.write_bytes(data)
        return len(data)


def problem_payload(display_id: int, problem_id: int | None = None, sections=None, **extra) -> dict:
    payload = {
        "meta": {"id": problem_id if problem_id is not None else display_id + 1000, "displayId": display_id},
        "localizedContentsOfLocale": {
            "title": f"Problem {display_id}",
            "contentSections": sections if sections is not None else [],
        },
        "samples": [{"inputData": "1", "outputData": "2"}],
        "tagsOfLocale": [{"name": "tag"}],
    }
    payload.update(extra)
    return payload


@pytest.fixture
def fake_api():
    return FakeLojApi()


@pytest.fixture
def make_payload():
    return problem_payload
