import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storagehub import __version__
from storagehub.config import Settings
from storagehub.context import AppContext
from storagehub.errors import install_error_handlers
from storagehub.routers import auth, files, folders, share, upload

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings = None, context: AppContext = None) -> FastAPI:
    if context is None:
        context = AppContext.from_settings(settings or Settings.from_env())
    settings = context.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        context.close()

    app = FastAPI(title="storagehub", version=__version__, lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials="*" not in settings.allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    install_error_handlers(app)

    for module in (auth, folders, files, upload, share):
        app.include_router(module.router)

    @app.get("/ping")
    def ping():
        return {"status": "backend ok"}

    logger.info("storagehub %s ready (drive %s)", __version__,
                "configured" if context.drive else "not configured")
    return app


def run():
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run("storagehub.main:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
