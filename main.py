# type: ignore
# pyright: reportGeneralTypeIssues=false
"""
Physician DataBank Service
==========================
Stores physician records and serves them over a JSON API.

Record lifecycle:
    nonexistent ─► active   (create, version = 1)
    active      ─► active   (update, version + 1, only against the current version)
    active      ─► nonexistent (delete, final)

Port: 8080
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from databank import __version__
from databank.controllers import physician_controller, system_controller
from databank.core.config import settings
from databank.core.database import engine
from databank.core.dependencies import get_physician_repo, get_physician_service
from databank.core.exceptions import PersistenceError
from databank.core.logging import get_logger
from databank.core.schema import create_schema
from databank.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger("physician-databank")


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    if settings.AUTO_CREATE_SCHEMA:
        try:
            create_schema(engine, settings.DEFAULT_SPECIALTIES)
        except Exception:
            logger.exception("Schema bootstrap failed — DB may not be ready yet")
    try:
        get_physician_service().seed_gauges()
    except Exception:
        logger.warning("Could not seed gauges — DB may not be ready yet")
    yield
    get_physician_repo().dispose()
    logger.info("Shutting down — connection pool disposed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Physician DataBank Service",
    description="Create, list, edit and delete physician records with optimistic locking.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(PersistenceError)
async def persistence_exception_handler(request: Request, exc: PersistenceError):
    logger.error("Persistence failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": "database_error", "detail": "Database error"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return JSONResponse(status_code=500, content={"error": "internal_server_error", "detail": str(exc)})


app.include_router(system_controller.router)
app.include_router(physician_controller.router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, log_level="info")
