# transport_admin/main.py
"""
FastAPI application entry point.
Includes security middleware, error mapping, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from transport_admin.routers import stations, drivers, vehicles, health
from transport_admin.database import SessionLocal, create_tables
from transport_admin.config import settings
from transport_admin.exceptions import DomainValidationError, NotFoundError
from transport_admin.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="City Transport Administration API",
    description="Stations, drivers and vehicles with soft delete.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (frontend dev server calls the API directly) ────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth for every endpoint except health and docs.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}

    def __init__(self, app, api_key: str):
        super().__init__(app)
        self.api_key = api_key

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.open_paths or not self.api_key:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != self.api_key:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware, api_key=settings.API_KEY)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


@app.exception_handler(DomainValidationError)
async def validation_handler(request: Request, exc: DomainValidationError):
    logger.warning(f"{request.method} {request.url.path}: [{exc.kind.value}] {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message, "kind": exc.kind.value},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(stations.router, prefix="/api/v1", tags=["Stations"])
app.include_router(drivers.router,  prefix="/api/v1", tags=["Drivers"])
app.include_router(vehicles.router, prefix="/api/v1", tags=["Vehicles"])
app.include_router(health.router,   prefix="/api/v1", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Transport admin backend starting up...")
    create_tables()
    logger.info("Database tables ready")

    if settings.SEED_ON_STARTUP:
        from transport_admin.gateway import SqlAlchemyGateway
        from transport_admin.seeds import seed_database

        db = SessionLocal()
        try:
            seeded = seed_database(SqlAlchemyGateway(db))
            logger.info(f"Seed summary: {seeded}")
        finally:
            db.close()

    logger.info(f"Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Transport admin backend shutting down...")
