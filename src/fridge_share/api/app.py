"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fridge_share.api.claims import router as claims_router
from fridge_share.api.products import router as products_router
from fridge_share.app_logging import configure_logging
from fridge_share.containers import AppContainer
from fridge_share.domain.errors import (
    DuplicateClaimError,
    FridgeShareError,
    InvalidPayloadError,
    InvalidTransitionError,
    NotAvailableError,
    NotFoundError,
    NotOwnerError,
    SelfClaimError,
)

_STATUS_CODES: dict[type[FridgeShareError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    NotAvailableError: status.HTTP_409_CONFLICT,
    DuplicateClaimError: status.HTTP_409_CONFLICT,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    NotOwnerError: status.HTTP_403_FORBIDDEN,
    SelfClaimError: status.HTTP_400_BAD_REQUEST,
    InvalidPayloadError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Fridge Share")
    app.state.container = container

    app.include_router(products_router)
    app.include_router(claims_router)

    @app.exception_handler(FridgeShareError)
    async def handle_domain_error(
        request: Request, exc: FridgeShareError
    ) -> JSONResponse:
        status_code = _STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.info(
            "Request rejected: path=%s error=%s detail=%s",
            request.url.path,
            exc.code,
            exc,
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.code, "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
