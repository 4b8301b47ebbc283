"""
Exceptions raised by the API layer. The CLI maps these to exit codes.
"""

from data.models.agent import ErrorResponse

TOKEN_RESET_ERROR_CODE = 4113


class SpaceTradersError(Exception):
    """Base class for every error raised by this client."""


class NetworkError(SpaceTradersError):
    def __init__(self, cause: Exception):
        super().__init__(f"There was a networking error when trying to access the SpaceTraders API: {cause}")
        self.cause = cause


class MissingTokenError(SpaceTradersError):
    def __init__(self, message: str = "Cannot access the SpaceTraders API: missing auth token."):
        super().__init__(message)


class InvalidResponseError(SpaceTradersError):
    def __init__(self, status_code: int | None, body: str):
        status = f" ({status_code})" if status_code is not None else ""
        super().__init__(f"Unexpected response from the SpaceTraders API{status}: {body[:200]}")
        self.status_code = status_code
        self.body = body


class ApiRequestError(SpaceTradersError):
    """The API answered with an ``error`` object."""

    def __init__(self, error: ErrorResponse, status_code: int | None = None):
        super().__init__(f"The SpaceTraders API rejected the request ({error.code}): {error.message}")
        self.error = error
        self.status_code = status_code

    @property
    def code(self) -> int:
        return self.error.code


class TokenResetError(ApiRequestError):
    """The token predates the last server reset and must be replaced."""


class InvalidSymbolError(SpaceTradersError, ValueError):
    def __init__(self, symbol: str):
        super().__init__(f"Invalid waypoint symbol {symbol!r}: expected SECTOR-SYSTEM-WAYPOINT")
        self.symbol = symbol


class ConfigError(SpaceTradersError):
    def __init__(self, path, cause: Exception):
        super().__init__(f"Could not write config file {path}: {cause}")
        self.path = path
        self.cause = cause
