"""Async HTTP client built on curl_cffi."""

from pathlib import Path
from typing import Any, Optional

from curl_cffi.requests import AsyncSession, RequestsError
from loguru import logger

from domain.exceptions import ApiStatusError, PayloadShapeError, TransportError

DEFAULT_TIMEOUT = 20.0
DEFAULT_DOWNLOAD_TIMEOUT = 30.0
CHUNK_SIZE = 64 * 1024


class AsyncHTTPClient:
    """Thin wrapper around a shared curl_cffi session."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
        impersonate: Optional[str] = "chrome",
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Timeout in seconds for JSON requests
            download_timeout: Timeout in seconds for file downloads
            impersonate: Browser fingerprint passed to curl_cffi
        """
        self.timeout = timeout
        self.download_timeout = download_timeout
        self.impersonate = impersonate
        self._session: Optional[AsyncSession] = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            self._session = AsyncSession(impersonate=self.impersonate)
        return self._session

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def post_json(
        self,
        url: str,
        payload: Any,
        *,
        headers: Optional[dict[str, str]] = None,
        expected_status: int = 200,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        POST a JSON body and decode the JSON response.

        Raises:
            TransportError: Network failure
            ApiStatusError: Status differs from expected_status
            PayloadShapeError: Body is not valid JSON
        """
        logger.debug(f"POST {url}")
        try:
            response = await self.session.post(
                url,
                json=payload,
                headers=headers,
                timeout=timeout or self.timeout,
            )
        except RequestsError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if response.status_code != expected_status:
            raise ApiStatusError(url, response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise PayloadShapeError(f"Invalid JSON from {url}: {e}") from e

    async def download_to(
        self, url: str, destination: Path, *, timeout: Optional[float] = None
    ) -> int:
        """
        Stream a GET response body into destination, creating parent folders.

        Returns:
            Number of bytes written

        Raises:
            TransportError: Network failure or status other than 200
            OSError: Destination could not be written
        """
        logger.debug(f"GET {url} -> {destination}")
        try:
            response = await self.session.get(
                url, timeout=timeout or self.download_timeout, stream=True
            )
        except RequestsError as e:
            raise TransportError(f"Download of {url} failed: {e}") from e

        try:
            if response.status_code != 200:
                raise ApiStatusError(url, response.status_code)

            destination.parent.mkdir(parents=True, exist_ok=True)
            written = 0
            try:
                with destination.open("wb") as fh:
                    async for chunk in response.aiter_content(chunk_size=CHUNK_SIZE):
                        fh.write(chunk)
                        written += len(chunk)
            except RequestsError as e:
                destination.unlink(missing_ok=True)
                raise TransportError(f"Download of {url} interrupted: {e}") from e
            return written
        finally:
            await response.aclose()
