# core/app.py: App factory with dynamic module discovery
#
# Creates and configures the FastAPI application. Discovers all modules under
# backend/modules/ and calls each module's register(app) function.
#
# main.py: app = create_app(settings)

import hmac
import importlib
import logging
import pathlib
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings
from core.db import Storage, init_db, make_engine
from core.errors import register_error_handlers

log = logging.getLogger("shipmaint.api")

__version__ = "1.0.0"

# Reachable without an API key
_PUBLIC_PATHS = ("/health", "/api/health", "/api/auth/login", "/api/docs", "/api/redoc", "/openapi.json")


# ---------------------------------------------------------------------------
# Module discovery
# ---------------------------------------------------------------------------

def _discover_modules() -> List[str]:
    """Return a list of module package names found under backend/modules/.

    A valid module directory contains an __init__.py with a MODULE_ID attribute.
    """
    modules_dir = pathlib.Path(__file__).parent.parent / "modules"
    found = []
    for entry in sorted(modules_dir.iterdir()):
        if not entry.is_dir() or not (entry / "__init__.py").exists():
            continue
        pkg_name = f"modules.{entry.name}"
        mod = importlib.import_module(pkg_name)
        if hasattr(mod, "MODULE_ID"):
            found.append(pkg_name)
    return found


# ---------------------------------------------------------------------------
# Startup seeding
# ---------------------------------------------------------------------------

def _seed(storage: Storage, settings: Settings) -> None:
    from modules.components.seeder import seed_demo_data
    from modules.users.services import UserService

    if settings.seed_default_users:
        UserService(storage).seed_defaults()
    if settings.seed_demo_data:
        seed_demo_data(storage)


# ---------------------------------------------------------------------------
# Middleware setup
# ---------------------------------------------------------------------------

def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Attach CORS and the API-key check."""
    _cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    if _cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=_cors_origins,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "X-API-Key", "Accept"],
        )

    @app.middleware("http")
    async def authenticate_request(request: Request, call_next):
        """Require X-API-Key on every route except health, login and docs."""
        if not settings.api_key or request.method == "OPTIONS" or request.url.path in _PUBLIC_PATHS:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key")
        if not api_key or not hmac.compare_digest(api_key, settings.api_key):
            return JSONResponse(
                status_code=401,
                content={"success": False, "message": "Invalid or missing API key", "error": "unauthorized"},
            )
        return await call_next(request)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """Create and fully configure the API application.

    1. Build the Storage client (unless one is injected, e.g. by tests).
    2. Discover all modules under backend/modules/ and call register(app).
    3. On startup create the tables and run the seeders enabled in settings.

    Returns the fully configured app object. Uvicorn finds it via main:app.
    """
    if settings is None:
        from core.config import settings
    if storage is None:
        storage = Storage(make_engine(settings.database_url, echo=settings.debug))

    pkg_names = _discover_modules()
    log.info(f"Modules: {[p.split('.')[-1] for p in pkg_names]}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(storage.engine)
        _seed(storage, settings)

        if not settings.api_key:
            log.warning("API_KEY is not set, all requests are accepted without an API key")
        yield
        storage.engine.dispose()

    app = FastAPI(
        title="Ship Maintenance",
        description="Planned maintenance, component registry and ship stores",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.settings = settings
    app.state.storage = storage

    register_error_handlers(app)
    _setup_middleware(app, settings)

    # -----------------------------------------------------------------------
    # Health endpoint (registered before module routes to ensure priority)
    # -----------------------------------------------------------------------
    @app.get("/health", tags=["System"], include_in_schema=False)
    async def health_root():
        """Root-level health check: delegates to system module health_check."""
        from modules.system import routes as system
        return await system.health_check()

    for pkg in pkg_names:
        mod = importlib.import_module(pkg)
        mod.register(app)
        log.debug(f"Registered module: {pkg}")

    return app
