import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from ari.core.config import settings
from ari.core.database import engine, Base
from ari.core.db_errors import store_exception_handler
from ari.core.logging import setup_logging
from ari.api.routes import auth, bases, clients, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: create tables for all models that inherit from Base.
    There are no migrations; existing tables are left as they are.
    """
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.API_TITLE} API started")
    yield
    logger.info(f"{settings.API_TITLE} API stopped")


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title=f"{settings.API_TITLE} API",
        description=f"The {settings.API_TITLE} API description",
        version=settings.API_VERSION,
        lifespan=lifespan,
    )

    # CORS middleware - allows browser frontends to call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Single place where store errors not handled by a service are translated
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(clients.router)
    app.include_router(bases.router)

    @app.get("/")
    async def root():
        """Root endpoint - API information"""
        return {"message": f"{settings.API_TITLE} API", "version": settings.API_VERSION}

    @app.get("/status")
    async def get_status():
        logger.info("get_status() called")
        return {"status": f"{settings.API_TITLE} is running!"}

    @app.get("/health")
    async def health():
        """Health check endpoint - used by monitoring/deployment tools"""
        return {"status": "healthy"}

    return app


app = create_app()
