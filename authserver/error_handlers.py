# authserver/error_handlers.py

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from authserver.core.errors import AuthError
from authserver.core.logging import get_logger


logger = get_logger("authserver.errors")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Every error response has the same shape: {"message": ...}.
    Unexpected exceptions are logged in full and answered with a generic 500.
    """

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        logger.info("auth_error", error_type=type(exc).__name__, status_code=exc.status_code)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("invalid_request_body", errors=len(exc.errors()))
        return JSONResponse(status_code=400, content={"message": "invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled_exception", error_type=type(exc).__name__)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
