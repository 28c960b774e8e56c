from contextlib import asynccontextmanager
from datetime import timedelta
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, settings as default_settings
from app.database import Database
from app.routers import admin, auth, health, mentor, users
from app.services.errors import ServiceError
from app.services.sessions import SessionStore
from app.services.users import AccountStore

LOGGER = logging.getLogger(__name__)


def _seed_admin(settings: Settings, accounts: AccountStore) -> None:
    if not settings.seed_admin_email:
        return
    if not settings.seed_admin_password:
        LOGGER.warning("SEED_ADMIN_EMAIL is set without SEED_ADMIN_PASSWORD; skipping seed")
        return
    accounts.ensure_admin(
        settings.seed_admin_email,
        settings.seed_admin_password,
        settings.seed_admin_name or "Admin User",
    )


def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings.database_url)
        database.init_db()
        accounts = AccountStore(database, bcrypt_rounds=settings.bcrypt_rounds)
        app.state.database = database
        app.state.account_store = accounts
        app.state.session_store = SessionStore(
            database, ttl=timedelta(days=settings.session_ttl_days)
        )
        _seed_admin(settings, accounts)
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(title="E-Learning Platform API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(health.router, prefix="/api")
    app.include_router(auth.router, prefix="/api")
    app.include_router(users.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")
    app.include_router(mentor.router, prefix="/api")

    @app.get("/")
    def root():
        return {"status": "Backend running"}

    return app


app = create_app()
