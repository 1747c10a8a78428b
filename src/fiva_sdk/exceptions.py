"""Exception hierarchy for the FIVA SDK."""

from typing import Any


class FivaProtocolError(Exception):
    """Base exception for all FIVA protocol errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(FivaProtocolError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class UnresolvedAssetError(ValidationError):
    """Raised when an asset has no corresponding pool wallet."""

    def __init__(self, message: str, asset: Any | None = None, details: dict | None = None):
        super().__init__(message, field="asset", value=asset, details=details)
        self.asset = asset


class InvalidAssetPairError(ValidationError):
    """Raised for same-asset swaps and unsupported PT <-> YT swaps."""

    def __init__(
        self,
        message: str,
        from_asset: Any | None = None,
        to_asset: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, field="asset_pair", value=(from_asset, to_asset), details=details)
        self.from_asset = from_asset
        self.to_asset = to_asset


class NetworkError(FivaProtocolError):
    """Raised when network/connection issues occur."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class GetMethodError(NetworkError):
    """Raised when a contract get-method fails or returns an unusable stack."""

    def __init__(
        self,
        message: str,
        address: str | None = None,
        method: str | None = None,
        exit_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, endpoint=method, details=details)
        self.address = address
        self.method = method
        self.exit_code = exit_code


class SubmissionError(FivaProtocolError):
    """Raised when the wallet transport rejects or fails to submit a transaction."""

    def __init__(
        self,
        message: str,
        action: str | None = None,
        message_count: int = 0,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.action = action
        self.message_count = message_count
