"""Domain errors and their HTTP rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Unexpected error. Please try again later or contact support."


@dataclass(frozen=True)
class FieldError:
    """A single field-level violation."""

    path: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "message": self.message}


class AccountServiceError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


class AccountValidationError(AccountServiceError):
    """Candidate account data failed one or more field rules."""

    status_code = 400

    def __init__(
        self, errors: Sequence[FieldError], message: str = "Invalid account data."
    ) -> None:
        super().__init__(message)
        self.errors: List[FieldError] = list(errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "errors": [error.to_dict() for error in self.errors],
        }


class UsernameConflictError(AccountServiceError):
    status_code = 409

    def __init__(
        self,
        message: str = "Alphanumeric without spaces and must be unique (case insensitive)",
    ) -> None:
        super().__init__(message)


class AvatarRejectedError(AccountServiceError):
    status_code = 400


class AccountNotInitialized(AccountServiceError):
    status_code = 500

    def __init__(self, message: str = "Account store has not been initialized") -> None:
        super().__init__(message)


async def _service_error_handler(request: Request, exc: AccountServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": UNEXPECTED_ERROR_MESSAGE})


def register_error_handlers(app: FastAPI) -> None:
    """Render domain and HTTP errors as ``{"message": ...}`` bodies."""

    app.add_exception_handler(AccountServiceError, _service_error_handler)
    app.add_exception_handler(HTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)


__all__ = [
    "AccountNotInitialized",
    "AccountServiceError",
    "AccountValidationError",
    "AvatarRejectedError",
    "FieldError",
    "UNEXPECTED_ERROR_MESSAGE",
    "UsernameConflictError",
    "register_error_handlers",
]
