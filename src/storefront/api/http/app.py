"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.api.http.routers.auth import router as auth_router
from src.storefront.api.http.routers.health import router as health_router
from src.storefront.api.http.routers.products import router as products_router
from src.storefront.api.http.routers.seed import router as seed_router
from src.storefront.api.utils.app_startup import configure_logging
from src.storefront.core.errors import StorefrontError, StoreFaultError
from src.storefront.core.services import CatalogQueryService, DbManageService
from src.storefront.core.services.catalog import generate_seed_products, load_seed_file
from src.storefront.runtime.config.config_data import ConfigData
from src.storefront.runtime.context import get_config

SERVER_ERROR_MESSAGE = "Server error"


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


def _server_error(code: str, request_id: str | None = None) -> JSONResponse:
    headers = {"X-Request-ID": request_id} if request_id else None
    return JSONResponse(
        status_code=500,
        content={"message": SERVER_ERROR_MESSAGE, "error": code},
        headers=headers,
    )


# --- Exception handlers ---
async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.bind(error_type=type(exc).__name__).error(
            "request.fault: {}", exc.code
        )
        return _server_error(exc.code)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.opt(exception=exc).error("request.store_fault")
    return _server_error(StoreFaultError.code)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Only locations and messages; the offending input may be a password
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400, content={"message": "Invalid request", "errors": errors}
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    # Correlation id
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    # Query strings are not logged; search terms may be personal data
    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
                user_id=getattr(request.state, "user_id", None),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return _server_error("server_error", request_id)


# --- Lifecycle hooks ---
def seed_catalog_on_startup(deps: ApplicationDependencies, config: ConfigData) -> int:
    """Fill an empty catalog from the seed file or with generated products."""
    catalog_config = config.catalog
    if not catalog_config.seed_on_startup:
        return 0

    if catalog_config.seed_file:
        products = load_seed_file(catalog_config.seed_file)
        logger.info("Loaded {} seed products from {}", len(products), catalog_config.seed_file)
    else:
        products = generate_seed_products(catalog_config.seed_count)

    with deps.database_service.session_scope() as session:
        return CatalogQueryService(session).seed_if_empty(products)


async def startup(app: FastAPI) -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    deps = ApplicationDependencies.from_config(config)
    app.state.app_dependencies = deps

    DbManageService(deps.database_service).create_all()
    seeded = seed_catalog_on_startup(deps, config)
    if seeded:
        logger.info("Seeded empty catalog with {} products", seeded)


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the FastAPI application.

    Application dependencies are created by the lifespan startup hook; tests
    that skip the lifespan set ``app.state.app_dependencies`` themselves.
    """
    config = config or get_config()
    is_production = config.app.environment == "production"

    app = FastAPI(
        title="Storefront API",
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
    )

    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.add_middleware(SecurityHeadersMiddleware)

    cors = config.app.cors
    if is_production and "*" in cors.origins and cors.allow_credentials:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )

    app.middleware("http")(log_requests)

    app.include_router(auth_router, prefix="/api")
    app.include_router(products_router, prefix="/api")
    app.include_router(seed_router, prefix="/api")
    app.include_router(health_router, prefix="/api")

    return app


configure_logging()

app = create_app()

__all__ = ["app", "create_app", "startup", "shutdown"]


if __name__ == "__main__":
    import uvicorn

    main_config = get_config()
    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,
    )
