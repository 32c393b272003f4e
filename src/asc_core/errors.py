"""Errors raised by the App Store Connect core."""
from typing import Optional

API_ERROR_BANNER = "App Store Connect API error:"


class AppStoreConnectError(Exception):
    """Base class for all classified App Store Connect errors."""


class ConfigurationError(AppStoreConnectError):
    """Raised when required configuration values are missing."""

    def __init__(self, missing: list[str], required: list[str]):
        super().__init__(
            f"Missing required environment variables: {', '.join(missing)} "
            f"(required: {', '.join(required)})"
        )
        self.missing = missing
        self.required = required


class FileAccessError(AppStoreConnectError):
    """Raised when the private key file cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Unable to read private key file {path}: {reason}")
        self.path = path


class KeyFormatError(AppStoreConnectError):
    """Raised when the key file does not hold a usable EC private key."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid private key in {path}: {reason}")
        self.path = path


class ApiError(AppStoreConnectError):
    """Raised when App Store Connect answers with a non-success status.

    ``errors`` holds the structured error entries when the response body was
    a JSON:API error document, and is empty otherwise.
    """

    def __init__(self, status_code: int, detail: str, errors: Optional[list[dict]] = None):
        super().__init__(f"{API_ERROR_BANNER}\n{detail}")
        self.status_code = status_code
        self.detail = detail
        self.errors = errors or []
