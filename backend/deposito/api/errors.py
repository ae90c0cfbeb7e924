from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from deposito.errors import DepositoError, ErrorKind

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_INPUT: 422,
    ErrorKind.INSUFFICIENT_FUNDS: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORE_FAILURE: 500,
}


def error_body(exc: DepositoError) -> dict:
    body: dict = {"detail": exc.message, "kind": exc.kind.value}
    if exc.details is not None:
        body["details"] = exc.details
    return body


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DepositoError)
    async def _deposito_error(request: Request, exc: DepositoError) -> JSONResponse:
        status = STATUS_BY_KIND[exc.kind]
        if status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status, content=error_body(exc))
