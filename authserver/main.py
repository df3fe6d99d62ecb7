# authserver/main.py

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from authserver.api import auth
from authserver.core.config import Settings, get_settings
from authserver.core.logging import RequestLoggingMiddleware, configure_logging, get_logger
from authserver.core.security import PasswordHasher, TokenIssuer
from authserver.database import create_db_engine, create_session_factory, init_db
from authserver.error_handlers import register_exception_handlers


logger = get_logger("authserver.main")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the application with its own engine, hasher and token issuer.
    The schema is created on startup and the engine disposed on shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_db_engine(settings.database_url)
        init_db(engine)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        logger.info("server_started", database=engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            engine.dispose()
            logger.info("server_stopped")

    app = FastAPI(title="Auth API", lifespan=lifespan)
    app.state.settings = settings
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.issuer = TokenIssuer(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.access_token_expire_minutes,
    )

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)
    app.include_router(auth.router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
