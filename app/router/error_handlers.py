import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.models.transaction import TransactionResult

logger = logging.getLogger(__name__)

INVALID_PAYLOAD_REASON = "Invalid request payload"
INTERNAL_ERROR_REASON = "Internal server error"


def _failure_body(reason: str) -> dict:
    return TransactionResult.malformed(reason).model_dump(mode="json")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected payment instruction payload. path=%s errors=%d", request.url.path, len(exc.errors()))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_failure_body(INVALID_PAYLOAD_REASON))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Details stay in the log; the client only sees the generic SY03 body.
    logger.exception("Unhandled error while processing request. path=%s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_failure_body(INTERNAL_ERROR_REASON),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
