"""
Gradebook errors and their HTTP mapping.

Services raise these; the handler registered in ``app.main`` renders them as
``{"detail": message}`` with the status carried by the class.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GradebookError(Exception):
    """Base class for errors surfaced to the caller."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GradebookError):
    """Unknown assignment, course or grade id."""

    status_code = status.HTTP_404_NOT_FOUND


class BadRequestError(GradebookError):
    """Malformed reference, e.g. a missing grade id or a rejected course title."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(GradebookError):
    """Requester is not the course instructor."""

    status_code = status.HTTP_401_UNAUTHORIZED


class RegistrationError(GradebookError):
    """The registration service did not accept the final grades."""

    status_code = status.HTTP_502_BAD_GATEWAY


async def gradebook_error_handler(request: Request, exc: GradebookError) -> JSONResponse:
    logger.warning(
        "%s %s failed: %s (%s)",
        request.method,
        request.url.path,
        exc.message,
        type(exc).__name__,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GradebookError, gradebook_error_handler)
