from contextlib import asynccontextmanager

from fastapi import FastAPI

from answers import router as answers_router
from core import config
from core.cors import ALLOWED_HEADERS, ALLOWED_METHODS, CORSMiddleware
from core.errors import register_error_handlers
from core.logging import configure_logging
from core.moderation import ModerationClient
from questions import router as questions_router
from storage import build_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Build the store once per process; a broken backend aborts startup.
    app.state.store = await build_store()
    app.state.moderation = ModerationClient.from_env()
    try:
        yield
    finally:
        await app.state.store.close()


def create_app() -> FastAPI:
    configure_logging(config.log_level())

    app = FastAPI(title="qa-service", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
    )

    register_error_handlers(app)

    app.include_router(questions_router.router, tags=["questions"])
    app.include_router(answers_router.router, tags=["answers"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "store": config.store_backend()}

    return app


app = create_app()
