"""Infrastructure: HTTP transport, LOJ API access, settings and packaging."""

from .archive import zip_folder
from .http_client import AsyncHTTPClient
from .interfaces import HTTPClientProtocol, ProblemApiClientProtocol
from .loj_client import LojApiClient
from .settings import MigrationSettings

__all__ = [
    "AsyncHTTPClient",
    "HTTPClientProtocol",
    "LojApiClient",
    "MigrationSettings",
    "ProblemApiClientProtocol",
    "zip_folder",
]
