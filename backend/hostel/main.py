# hostel/main.py
from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import FastAPI, Request  # type: ignore
from fastapi.middleware.cors import CORSMiddleware  # type: ignore
from fastapi.responses import RedirectResponse  # type: ignore

from . import guard
from .config import Settings, settings as default_settings
from .clients import ClientRegistry
from .repositories import Backend

logger = logging.getLogger(__name__)


def _default_backend_factory(cfg: Settings) -> Callable[[], Backend]:
    if cfg.BACKEND == "remote":
        from .remote.backend import build_remote_backend

        def remote() -> Backend:
            return build_remote_backend(
                cfg.REMOTE_URL,
                cfg.REMOTE_ANON_KEY,
                service_key=cfg.REMOTE_SERVICE_KEY,
                timeout=cfg.REMOTE_TIMEOUT,
            )
        return remote

    from .crud.backend import build_sql_backend
    from .database import init_db, make_engine, make_session_factory

    factories = []

    # the engine is built on first use, so importing the app does not touch the database
    def sql() -> Backend:
        if not factories:
            engine = make_engine(cfg.DATABASE_URL)
            init_db(engine)
            factories.append(make_session_factory(engine))
        return build_sql_backend(factories[0], expire_minutes=cfg.ACCESS_TOKEN_EXPIRE_MINUTES)
    return sql


def create_app(
    settings: Optional[Settings] = None,
    backend_factory: Optional[Callable[[], Backend]] = None,
) -> FastAPI:
    cfg = settings or default_settings

    # 1) App
    app = FastAPI(
        title=cfg.PROJECT_NAME,
        docs_url="/docs",
        redoc_url="/redoc",
        version="1.0.0",
    )
    app.state.settings = cfg
    app.state.registry = ClientRegistry(
        backend_factory or _default_backend_factory(cfg),
        secret_key=cfg.SECRET_KEY,
        toast_duration_ms=cfg.TOAST_DURATION_MS,
        idle_timeout_s=cfg.CLIENT_IDLE_MINUTES * 60,
    )

    # 2) CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 3) Route guard: attach the client state, redirect by session
    @app.middleware("http")
    async def route_guard(request: Request, call_next):
        path = request.url.path
        if guard.is_public(path) or request.method == "OPTIONS":
            return await call_next(request)

        registry: ClientRegistry = app.state.registry
        client = registry.lookup(request.cookies.get(cfg.SESSION_COOKIE_NAME))
        created = False
        # only signing in or up registers a new client state
        if client is None and request.method == "POST" and guard.normalize(path) in guard.AUTH_ROUTES:
            client = registry.get_or_create(None)
            created = True
        if client is not None:
            request.state.client = client

        target = guard.resolve(path, client.auth.session if client else None)
        if target is not None:
            logger.debug(f"[guard] {request.method} {path} -> {target}")
            response = RedirectResponse(url=target, status_code=303)
        else:
            response = await call_next(request)

        if created:
            response.set_cookie(
                cfg.SESSION_COOKIE_NAME,
                registry.sign(client.client_id),
                httponly=True,
                samesite="lax",
            )
        return response

    # 4) Routers
    from .routers.account_router import router as account_router                # noqa: E402
    from .routers.dashboard_router import router as dashboard_router            # noqa: E402
    from .routers.students_router import router as students_router              # noqa: E402
    from .routers.rooms_router import router as rooms_router                    # noqa: E402
    from .routers.fees_router import router as fees_router                      # noqa: E402
    from .routers.visitors_router import router as visitors_router              # noqa: E402
    from .routers.complaints_router import router as complaints_router          # noqa: E402
    from .routers.announcements_router import router as announcements_router    # noqa: E402
    from .routers.settings_router import router as settings_router              # noqa: E402

    app.include_router(account_router)
    app.include_router(dashboard_router)
    app.include_router(students_router)
    app.include_router(rooms_router)
    app.include_router(fees_router)
    app.include_router(visitors_router)
    app.include_router(complaints_router)
    app.include_router(announcements_router)
    app.include_router(settings_router)

    # 5) Shutdown: drop every client's backend handle
    @app.on_event("shutdown")
    def on_shutdown() -> None:
        app.state.registry.close()

    # 6) Health
    @app.get("/healthz", include_in_schema=False)
    def healthz():
        return {"ok": True, "backend": cfg.BACKEND}

    return app


def configure_logging(level: str = default_settings.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging()
app = create_app()
