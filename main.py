from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Core
from core.config import settings, is_development
from core.config_validator import validate_config_on_startup
from core.errors import InvalidArgument
from core.logging_config import logger

# -------------------------------------------------
# Routers
# -------------------------------------------------
from routers.auth import router as auth_router
from routers.complaints import router as complaints_router
from routers.users import router as users_router
from routers.analytics import router as analytics_router
from routers.roles import router as roles_router
from routers.notifications import router as notifications_router
from routers.health import router as health_router
from routers.proxy import router as proxy_router


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="EEU complaint management API with region-scoped views over the spreadsheet backend",
    )

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Startup: config check + route log
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info("Starting EEU Complaint API")
        validate_config_on_startup()
        for route in app.routes:
            methods = ",".join(sorted(getattr(route, "methods", None) or []))
            logger.debug(f"{methods:10s} {getattr(route, 'path', '')}")

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403) or exc.status_code >= 500:
            logger.warning(
                f"HTTP {exc.status_code} at {request.url.path}: {exc.detail}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # Unknown role/resource/action reaching the engine is a bug, not bad input
    @app.exception_handler(InvalidArgument)
    async def handle_invalid_argument(request: Request, exc: InvalidArgument):
        logger.error(f"Access-control misuse at {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------
    app.include_router(auth_router)
    app.include_router(complaints_router)
    app.include_router(users_router)
    app.include_router(analytics_router)
    app.include_router(roles_router)
    app.include_router(notifications_router)
    app.include_router(health_router)

    # Raw spreadsheet pass-through (local development only)
    if settings.PROXY_ENABLED:
        if not is_development():
            logger.warning("PROXY_ENABLED outside development; /api is unauthenticated")
        app.include_router(proxy_router)

    return app


# Create the global FastAPI instance
app = create_app()
