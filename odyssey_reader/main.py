import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from odyssey_reader.core.config import Settings, get_settings
from odyssey_reader.core.errors import ReaderError
from odyssey_reader.core.logging import setup_logging
from odyssey_reader.db.database import init_db, make_engine, make_session_factory
from odyssey_reader.models.errors import ErrorResponse
from odyssey_reader.routers import analysis, reader, selection, settings as settings_router, system
from odyssey_reader.services.preferences import PreferenceStore
from odyssey_reader.services.session import ReaderSession
from odyssey_reader.services.source import load_segments

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, http_client: Optional[httpx.Client] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    # Stockage + session de lecture (source indisponible -> échec au démarrage)
    engine = make_engine(settings.DATABASE_URL)
    init_db(engine)
    store = PreferenceStore(make_session_factory(engine))
    segments = load_segments(settings.SOURCE_PATH or None)
    reader_session = ReaderSession(settings, store, segments, http_client=http_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        reader_session.close()
        engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="API backend du lecteur Odyssey (pagination, sélection, commentaires IA)",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.reader = reader_session

    # Middleware CORS
    origins = [o.strip() for o in (settings.CORS_ORIGINS or "").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],  # fallback si mal configuré
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Erreurs métier -> affichées en ligne par le client, jamais fatales
    @app.exception_handler(ReaderError)
    async def reader_error_handler(request: Request, exc: ReaderError):
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message)
        return JSONResponse(status_code=exc.status_code, content=ErrorResponse.from_exc(exc).model_dump())

    # Routers
    app.include_router(system.router)
    app.include_router(reader.router)
    app.include_router(selection.router)
    app.include_router(analysis.router)
    app.include_router(settings_router.router)

    # Redirect root → docs
    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    return app


def run() -> None:
    import uvicorn

    uvicorn.run("odyssey_reader.main:create_app", factory=True, host="127.0.0.1", port=8000)
