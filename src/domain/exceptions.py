"""Exceptions raised while migrating problems."""


class MigrationError(Exception):
    """Base error for the migration pipeline."""

    pass


class TransportError(MigrationError):
    """Network failure, unexpected status or unreadable response body."""

    pass


class ApiStatusError(TransportError):
    """Remote endpoint answered with an unexpected status code."""

    def __init__(self, url: str, status_code: int, body: str = ""):
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"Unexpected status {status_code} from {url}: {body[:200]}")


class PayloadShapeError(TransportError):
    """Response body does not match the expected structure."""

    pass


class OutputWriteError(MigrationError):
    """Final document could not be written. The run cannot succeed."""

    pass
