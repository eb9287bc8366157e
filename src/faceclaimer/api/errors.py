"""Translation of domain errors into HTTP responses."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import (
    AlreadyExistsError,
    ConfinementError,
    DecodeError,
    EncodeError,
    FaceclaimerError,
    FetchError,
    InvalidIdentifierError,
    InvalidURLError,
    IsDirectoryError,
    NotFoundError,
    StorageIOError,
)

_STATUS_BY_ERROR: dict[type[FaceclaimerError], int] = {
    InvalidURLError: status.HTTP_400_BAD_REQUEST,
    InvalidIdentifierError: status.HTTP_400_BAD_REQUEST,
    ConfinementError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_400_BAD_REQUEST,
    IsDirectoryError: status.HTTP_400_BAD_REQUEST,
    FetchError: status.HTTP_502_BAD_GATEWAY,
    DecodeError: 422,
    EncodeError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AlreadyExistsError: status.HTTP_409_CONFLICT,
    StorageIOError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(slots=True)
class ApiError(Exception):
    """Structured application-level error for HTTP handlers."""

    status_code: int
    message: str

    def to_response(self) -> JSONResponse:
        """Materialise the error into a ``JSONResponse`` instance."""

        return JSONResponse(status_code=self.status_code, content={"error": self.message})

    @classmethod
    def from_domain(cls, exc: FaceclaimerError) -> "ApiError":
        for kind in type(exc).__mro__:
            code = _STATUS_BY_ERROR.get(kind)  # type: ignore[arg-type]
            if code is not None:
                return cls(code, str(exc))
        return cls(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


async def api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    return exc.to_response()


async def domain_error_handler(_: Request, exc: FaceclaimerError) -> JSONResponse:
    return ApiError.from_domain(exc).to_response()


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'invalid')}"
        for error in exc.errors()
    ]
    return ApiError(status.HTTP_400_BAD_REQUEST, "; ".join(messages)).to_response()


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(FaceclaimerError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]


__all__ = [
    "ApiError",
    "api_error_handler",
    "domain_error_handler",
    "register_error_handlers",
    "validation_error_handler",
]
