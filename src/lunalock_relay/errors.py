from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .log import get_logger

logger = get_logger(__name__)

UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"


class RelayError(Exception):
    """Base class for failures reported to the caller as a JSON envelope."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(RelayError):
    """
    A required request field is missing or empty.

    Not pydantic.ValidationError: that one never reaches callers, FastAPI
    turns it into RequestValidationError.
    """

    status_code = 400


class ProviderError(RelayError):
    """
    The Twilio call failed: invalid number, auth failure, rate limit,
    network fault, ...

    `code` is Twilio's error code (e.g. 21211) when Twilio returned one.
    """

    status_code = 500

    def __init__(self, message: str, code: int | str | None = None) -> None:
        super().__init__(message)
        self.code = code

    @property
    def envelope_code(self) -> int | str:
        return self.code if self.code is not None else UNKNOWN_ERROR_CODE


def add_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Unparseable JSON or wrong field types: same 400 envelope as a missing field.
        logger.warning("Rejected malformed body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Invalid request body"},
        )
