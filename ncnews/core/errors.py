from __future__ import annotations


class ApiError(Exception):
    """Failure that maps directly onto an HTTP status and a ``{"msg": ...}`` body."""

    status_code: int = 500

    def __init__(self, msg: str, *, status_code: int | None = None) -> None:
        super().__init__(msg)
        self.msg = msg
        if status_code is not None:
            self.status_code = status_code

    def to_response(self) -> dict:
        return {"msg": self.msg}


class BadRequest(ApiError):
    status_code = 400


class NotFound(ApiError):
    status_code = 404


class MethodNotAllowed(ApiError):
    status_code = 405


INVALID_VALUE = "Bad Request - invalid value"
REQUIRED_INPUT = "Bad Request - Required input not provided"
DUPLICATE_INPUT = "Bad Request - duplicate input"
