from typing import Any, Mapping, Optional


class StoreFailureError(Exception):
    """Raised when the underlying store fails unexpectedly.

    This is not part of the typed error taxonomy returned by the services:
    it aborts the current console action and is only caught by the session loop.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (table, key, operation)
        code: optional machine-readable error code
    """

    def __init__(self, message: str = "Unexpected store failure", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ConfigurationError(Exception):
    """Raised when the application cannot be configured (unknown backend, bad database URL)."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message
