from cassandra import DriverException, OperationTimedOut
from cassandra.cluster import NoHostAvailable
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

# Everything the driver can raise out of connect/prepare/execute
STORAGE_FAILURES = (DriverException, NoHostAvailable, OperationTimedOut)


class FilmReviewsError(Exception):
    """Base class for errors raised by the film reviews service."""


class InitializationError(FilmReviewsError):
    """The keyspace or table schema could not be ensured at startup."""


class ValidationError(FilmReviewsError):
    """A required field of a write operation is missing or empty."""


class StorageError(FilmReviewsError):
    """The storage engine failed while reading or writing."""


class OrphanReferenceError(FilmReviewsError):
    """A review references a movie that was never registered.

    Not raised: the ledger accepts reviews for unknown movie ids.
    """


def _describe(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "path"))
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg", "Invalid request"))
    return "; ".join(messages) or "Invalid request"


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": _describe(exc)})


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
