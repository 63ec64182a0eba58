"""
BrainWave Error Taxonomy

Every failure the service reports carries an error code and the HTTP
status the API layer should answer with.
"""

from enum import Enum


class FocusErrorCode(Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    INVALID_INPUT = "INVALID_INPUT"
    STORE_ERROR = "STORE_ERROR"


class FocusError(Exception):
    """Base exception for focus profile and session failures."""

    def __init__(self, error_code: FocusErrorCode, message: str, http_code: int = 500):
        self.error_code = error_code
        self.message = message
        self.http_code = http_code
        super().__init__(f"{error_code.value}: {message}")

    def to_dict(self) -> dict:
        return {"code": self.error_code.value, "message": self.message}


class NotFoundError(FocusError):
    """Unknown user_id or session_id."""

    def __init__(self, message: str):
        super().__init__(FocusErrorCode.NOT_FOUND, message, http_code=404)


class InvalidStateError(FocusError):
    """Session transition attempted from a state that does not allow it."""

    def __init__(self, message: str):
        super().__init__(FocusErrorCode.INVALID_STATE, message, http_code=409)


class InvalidInputError(FocusError):
    """Missing or out-of-range lifestyle fields."""

    def __init__(self, message: str, details=None):
        super().__init__(FocusErrorCode.INVALID_INPUT, message, http_code=422)
        self.details = details or []

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.details:
            data["details"] = self.details
        return data


class RecordStoreError(FocusError):
    """The record store could not be read or written."""

    def __init__(self, message: str):
        super().__init__(FocusErrorCode.STORE_ERROR, message, http_code=500)
