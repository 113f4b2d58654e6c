"""
Application factory and entry point.

`create_app` wires the shared collaborators onto `app.state`:

- `settings`: the immutable :class:`Settings` read once at startup.
- `executor`: the :class:`QueryExecutor` over the store's connection pool.
- `auth_client`: the :class:`AuthDelegateClient` for the auth service.
- `file_store`: the :class:`LocalFileStore` for uploads.
- `payment_gateway`: the iyzico :class:`PaymentGateway`.

Anything not passed in is built by the lifespan handler and closed on
shutdown.
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from mercass import __version__
from mercass.api.auth_client import AuthDelegateClient
from mercass.api.dependencies import LOGIN_PAGE
from mercass.api.envelope import Err
from mercass.api.routes import ROUTERS
from mercass.api.routes.auth import login_error_url
from mercass.database.config.config import Settings, get_settings
from mercass.database.core.executor import QueryExecutor, create_engine_from_settings
from mercass.exceptions import LoginRequired, StorefrontError
from mercass.logging_config import configure_logging
from mercass.payments.iyzico import PaymentGateway
from mercass.storage.file_store import LocalFileStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build missing collaborators on startup and release what was built here on shutdown."""
    settings: Settings = app.state.settings
    owned_http: Optional[httpx.AsyncClient] = None
    owned_executor: Optional[QueryExecutor] = None

    if app.state.executor is None:
        owned_executor = QueryExecutor(create_engine_from_settings(settings))
        app.state.executor = owned_executor
    if app.state.auth_client is None:
        owned_http = httpx.AsyncClient(timeout=settings.AUTH_TIMEOUT)
        app.state.auth_client = AuthDelegateClient(owned_http, settings.AUTHSERVER)
    logger.info("Storefront started on port %s", settings.PORT)
    yield
    if owned_http is not None:
        await owned_http.aclose()
    if owned_executor is not None:
        owned_executor.dispose()
    logger.info("Storefront stopped")


async def login_required_handler(request: Request, exc: LoginRequired):
    logger.info("Redirecting %s to login: %s", request.url.path, exc.message)
    return RedirectResponse(LOGIN_PAGE, status_code=303)


async def storefront_error_handler(request: Request, exc: StorefrontError):
    logger.error("%s failed: %s", request.url.path, exc.message, extra={"extra": {"kind": exc.kind}})
    if getattr(request.state, "is_page", False):
        return RedirectResponse(login_error_url(exc.kind), status_code=303)
    return Err.from_exception(exc).response()


async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
    return Err("validation", f"Geçersiz istek: {fields}", status=400).response()


def create_app(settings: Optional[Settings] = None, executor: Optional[QueryExecutor] = None,
               auth_client: Optional[AuthDelegateClient] = None,
               file_store: Optional[LocalFileStore] = None,
               payment_gateway: Optional[PaymentGateway] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_DIR, settings.LOG_LEVEL)

    app = FastAPI(title="Mercass", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.executor = executor
    app.state.auth_client = auth_client
    app.state.file_store = file_store or LocalFileStore(settings.UPLOAD_ROOT, settings.FE_CDN_LINK)
    app.state.payment_gateway = payment_gateway or PaymentGateway(settings)

    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = uuid.uuid4().hex[:12]
        start = time.time()
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code, extra={
            "request_id": request_id,
            "extra": {"duration_ms": round((time.time() - start) * 1000, 1)},
        })
        return response

    app.add_exception_handler(LoginRequired, login_required_handler)
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    for router in ROUTERS:
        app.include_router(router)
    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
