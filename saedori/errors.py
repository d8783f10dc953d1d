"""Application error codes and the error type built from them."""

from __future__ import annotations

import logging
from enum import IntEnum

logger = logging.getLogger(__name__)


class ErrorCode(IntEnum):
    """Known application error codes."""

    INVALID_PARAMETER = 1000
    INTERNAL_SERVER_ERROR = 2000
    NOT_FOUND = 3000
    UNAUTHORIZED = 4000
    BAD_REQUEST = 5000
    CONFLICT = 6000


def _format_details(details: tuple) -> str:
    return "[" + " ".join(str(item) for item in details) + "]"


class AppError(Exception):
    """An application error with a message and extra details.

    A code of zero marks an error that carries its message; any other code
    is reported as unknown.
    """

    def __init__(self, message: str = "", *details: object, code: int = 0) -> None:
        super().__init__(message, *details)
        self.code = code
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.code == 0:
            return f"{self.message} : {_format_details(self.details)}"
        return f"unknown error code: {self.code}"


def make_error(code: int, *args: object) -> AppError:
    """Build an error for a code, logging it; unknown codes give an 'unknown error code' error."""
    try:
        known = ErrorCode(code)
    except ValueError:
        logger.info("unknown error code: %s", code)
        return AppError(code=int(code))
    logger.info("%s %s", known.name, _format_details(args))
    return AppError(known.name, *args)