"""
Error handling middleware for the application.

Maps cart store exceptions onto HTTP responses so that callers only ever
see the standard error envelope, never a raw driver exception.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from cartstore.utils.api_response import error_response
from cartstore.exceptions import CartStoreError, StorageUnavailableError

# Configure logging
logger = logging.getLogger(__name__)


def add_error_handlers(app: FastAPI) -> None:
    """
    Add error handlers to the FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Handle request validation errors."""
        error_messages = []
        for error in exc.errors():
            loc = " -> ".join(str(loc_item) for loc_item in error["loc"])
            error_messages.append(f"{loc}: {error['msg']}")

        logger.warning(f"Validation error: {', '.join(error_messages)}")
        return JSONResponse(
            content=error_response(
                message="Validation error",
                code="validation_error",
                details={"errors": error_messages}
            ),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )

    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError) -> JSONResponse:
        """Handle cart storage failures."""
        logger.error(f"Cart storage unavailable: {exc}")
        return JSONResponse(
            content=error_response(
                message=str(exc) or "Cart storage unavailable",
                code=StorageUnavailableError.code
            ),
            status_code=status.HTTP_412_PRECONDITION_FAILED
        )

    @app.exception_handler(CartStoreError)
    async def cart_store_error_handler(request: Request, exc: CartStoreError) -> JSONResponse:
        """Handle other cart store errors."""
        logger.error(f"Cart store error: {exc}")
        return JSONResponse(
            content=error_response(
                message=str(exc) or "Cart store error",
                code="cart_store_error"
            ),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        """Handle invalid arguments rejected by the repository."""
        logger.warning(f"Invalid request: {exc}")
        return JSONResponse(
            content=error_response(
                message=str(exc),
                code="bad_request"
            ),
            status_code=status.HTTP_400_BAD_REQUEST
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle all other exceptions."""
        logger.error(f"Unexpected error: {type(exc).__name__}", exc_info=True)
        return JSONResponse(
            content=error_response(
                message="An unexpected error occurred",
                code="server_error",
                details={"type": type(exc).__name__}
            ),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
