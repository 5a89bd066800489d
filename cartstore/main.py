"""
Main application module.

This module builds the FastAPI application around a CartRepository. When no
repository is injected, one is created on startup: replicas are probed, the
fastest is selected, and startup fails if none is reachable.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from cartstore.adapters.database.factory import CartRepositoryFactory
from cartstore.middleware.error_handler import add_error_handlers
from cartstore.repositories.cart import CartRepository
from cartstore.routes.cart import router as cart_router
from cartstore.utils.config import Settings

logger = logging.getLogger(__name__)

def create_app(
    repository: Optional[CartRepository] = None,
    settings: Optional[Settings] = None
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        repository: Ready repository to serve; built on startup when omitted
        settings: Settings used to build the repository; environment by default

    Returns:
        FastAPI: The configured application
    """
    app = FastAPI(
        title="Cart Store",
        description="Shopping cart persistence on the lowest-latency replica",
        version="1.0.0"
    )
    app.state.cart_repository = repository

    add_error_handlers(app)
    app.include_router(cart_router)

    @app.on_event("startup")
    async def startup_event():
        """Build the cart repository unless one was injected."""
        if app.state.cart_repository is not None:
            return
        logger.info("Starting up application...")
        app.state.cart_repository = await CartRepositoryFactory.create(settings)
        logger.info("Application startup complete")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Dispose of the cart repository."""
        if app.state.cart_repository is not None:
            await app.state.cart_repository.close()
            logger.info("Application shutdown complete")

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint backed by a database ping."""
        cart_repository = request.app.state.cart_repository
        if cart_repository is not None and await cart_repository.ping():
            return {"status": "healthy"}
        return JSONResponse(
            content={"status": "unhealthy"},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )

    return app
