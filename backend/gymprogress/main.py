# gymprogress/main.py
import time
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from gymprogress.db import Store
from gymprogress.errors import CascadeError, NotFound, PersistenceError, ValidationFailed
from gymprogress.routers.exercises import router as exercises_router
from gymprogress.routers.machines import router as machines_router
from gymprogress.routers.sessions import router as sessions_router
from gymprogress.settings import get_settings

log = logging.getLogger("gymprogress")


def configure_logging(level: str) -> None:
    """Give the package logger its own stderr handler; INFO lines are dropped otherwise."""
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        log.addHandler(handler)
    log.setLevel(level.upper())


def create_app(store: Optional[Store] = None) -> FastAPI:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    if store is None:
        store = Store(settings.DATABASE_URL, timeout=settings.DB_TIMEOUT_SECONDS)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store.init_schema()
        yield
        app.state.store.dispose()

    app = FastAPI(
        title="Gym Progress API",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "machines", "description": "Gym machines; rename/delete cascade to exercises"},
            {"name": "sessions", "description": "Workout sessions and their exercises"},
            {"name": "exercises", "description": "Single logged exercise rows"},
        ],
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOW_ORIGINS.split(","),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id_and_log(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = req_id
        log.info("rid=%s %s %s -> %s in %.1fms",
                 req_id, request.method, request.url.path, response.status_code, duration_ms)
        return response

    @app.exception_handler(ValidationFailed)
    async def on_validation_failed(request: Request, exc: ValidationFailed):
        return JSONResponse(status_code=422, content={"detail": exc.message})

    @app.exception_handler(NotFound)
    async def on_not_found(request: Request, exc: NotFound):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": f"{exc.kind.capitalize()} not found"})

    @app.exception_handler(PersistenceError)
    async def on_persistence_error(request: Request, exc: PersistenceError):
        body = {"detail": "Storage unavailable, nothing was changed"}
        if isinstance(exc, CascadeError):
            body["operation"] = exc.operation
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)

    @app.get("/ping")
    def ping():
        return {"pong": True}

    @app.get("/healthz")
    def healthz():
        # Quick DB sanity check
        try:
            with app.state.store.session() as db:
                db.execute(text("SELECT 1"))
            return {"status": "ok"}
        except Exception as e:
            return {"status": "degraded", "error": str(e)}

    @app.get("/version")
    def version():
        return {"version": settings.API_VERSION}

    # Routers
    app.include_router(machines_router)
    app.include_router(sessions_router)
    app.include_router(exercises_router)
    return app


app = create_app()
