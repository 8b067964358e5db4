"""DocChain FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from docchain import __version__
from docchain.api.middleware import request_logging_middleware
from docchain.config import get_config
from docchain.errors import LedgerError
from docchain.ledger import (
    RecordStore,
    VerificationCertificate,
    VerificationService,
    load_sample_documents,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle handler."""
    service: VerificationService = app.state.service
    logger.info("DocChain API starting - documents=%d", service.store.count_documents())
    yield
    logger.info(
        "DocChain API shutdown - documents=%d verifications=%d",
        service.store.count_documents(),
        service.store.count_verifications(),
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": jsonable_encoder(exc.errors())},
    )


async def _ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    # Routes translate the expected cases; anything reaching here is malformed input
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(service: VerificationService | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    Each application owns its own store unless *service* is supplied.
    """
    config = get_config()

    if service is None:
        service = VerificationService(RecordStore())
        if config.seed_sample_data:
            load_sample_documents(service.store)

    app = FastAPI(
        title="DocChain API",
        description="Document hash registry - register, verify and revoke content hashes",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.service = service
    app.state.certificates = VerificationCertificate(service, config.public_base_url)

    # CORS - restricted to configured origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Request logging and X-Request-ID middleware
    app.add_middleware(BaseHTTPMiddleware, dispatch=request_logging_middleware)

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(LedgerError, _ledger_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    # Import and include routers
    from docchain.api.routes.documents import router as documents_router
    from docchain.api.routes.verify import router as verify_router
    from docchain.api.routes.upload import router as upload_router
    from docchain.api.routes.stats import router as stats_router
    from docchain.api.routes.health import router as health_router

    app.include_router(documents_router)
    app.include_router(verify_router)
    app.include_router(upload_router)
    app.include_router(stats_router)
    app.include_router(health_router)

    return app


app = create_app()
