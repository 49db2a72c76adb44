"""Exception hierarchy for the Gemina invoice client."""

from typing import Optional


class GeminaError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(GeminaError):
    """Required settings are missing or invalid."""


class TransportError(GeminaError):
    """The HTTP request could not be completed."""


class UnexpectedStatusError(GeminaError):
    """An endpoint answered with a status code outside its contract."""

    def __init__(self, status_code: int, endpoint: str, detail: str = ""):
        self.status_code = status_code
        self.endpoint = endpoint
        self.detail = detail
        message = f"Error! status: {status_code} ({endpoint})"
        if detail:
            message = f"{message}: {detail[:200]}"
        super().__init__(message)


class ResponseParseError(GeminaError):
    """A response body could not be decoded into the expected shape."""


class PollingTimeoutError(GeminaError):
    """Polling gave up before the prediction became ready."""

    def __init__(self, external_id: str, attempts: int, last_status: Optional[int] = None):
        self.external_id = external_id
        self.attempts = attempts
        self.last_status = last_status
        super().__init__(
            f"Prediction for {external_id} not ready after {attempts} attempt(s)"
            f" (last status: {last_status})"
        )


class PollingCancelledError(GeminaError):
    """Polling was stopped by the caller's cancellation signal."""

    def __init__(self, external_id: str, attempts: int):
        self.external_id = external_id
        self.attempts = attempts
        super().__init__(f"Polling for {external_id} cancelled after {attempts} attempt(s)")
