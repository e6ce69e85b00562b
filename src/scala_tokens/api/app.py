from __future__ import annotations

from fastapi import FastAPI

from scala_tokens import __version__
from scala_tokens.api.routes.health import router as health_router
from scala_tokens.api.routes.root import router as root_router
from scala_tokens.api.routes.tokens import router as tokens_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Scala Tokens API",
        description="Semantic highlighting tokens for Scala sources.",
        version=__version__,
    )

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(tokens_router)

    return app
