"""
FastAPI app assembly: settings, middleware, router wiring and static mounts.

`create_app` owns the database engine, session factory and asset store for one
application instance; they are stored on `app.state` and reach handlers via
the dependencies in `portal.api.deps`.
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.requests import Request

from portal import __version__
from portal.api.auth import router as auth_router
from portal.api.categories import router as categories_router
from portal.api.documents import router as documents_router
from portal.api.errors import register_exception_handlers
from portal.api.main_page_stats import router as main_page_stats_router
from portal.api.news import router as news_router
from portal.api.projects import router as projects_router
from portal.api.team_members import router as team_members_router
from portal.config import Settings, get_settings
from portal.db.database import build_engine, build_session_factory, init_schema
from portal.db.repositories import users as user_repo
from portal.services.asset_store import DOCUMENT_UPLOADS, IMAGE_UPLOADS, AssetStore

logger = logging.getLogger(__name__)


def bootstrap_admin(session_factory, settings: Settings) -> None:
    """Create the configured default admin if both credentials are set and the user is absent."""
    username, password = settings.default_admin_username, settings.default_admin_password
    if not username or not password:
        return
    db = session_factory()
    try:
        if user_repo.get_user_by_username(db, username) is None:
            user_repo.register_user(db, username, password)
            logger.info("default_admin_created: username=%s", username)
    finally:
        db.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=log_level)
    logger.setLevel(log_level)
    logger.info("app_startup: log_level=%s", settings.log_level)

    engine = build_engine(settings.database_url)
    session_factory = build_session_factory(engine)
    asset_store = AssetStore(settings.media_root)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.auto_create_schema:
            init_schema(engine)
        bootstrap_admin(session_factory, settings)
        yield
        engine.dispose()
        logger.info("app_shutdown: engine disposed")

    app = FastAPI(
        title="Portal Admin Service",
        description="Content administration API for the organization portal: "
        "categories, documents, news, projects, team members and homepage statistics.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.asset_store = asset_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Middleware: one log line per request
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request: method=%s path=%s client=%s status=%s duration_ms=%.1f",
            request.method,
            request.url.path,
            request.client.host if request.client else "-",
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(categories_router)
    app.include_router(documents_router)
    app.include_router(news_router)
    app.include_router(projects_router)
    app.include_router(team_members_router)
    app.include_router(main_page_stats_router)

    @app.get("/health", tags=["ops"])
    def health():
        return {"ok": True}

    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/docs")

    # Static mounts go last so API routes under the same prefixes win
    app.mount("/documents", StaticFiles(directory=asset_store.directory(DOCUMENT_UPLOADS)), name="documents")
    app.mount("/images", StaticFiles(directory=asset_store.directory(IMAGE_UPLOADS)), name="images")

    return app
