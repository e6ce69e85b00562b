from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from scala_tokens import __version__

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root discovery endpoint."""
    return {
        "meta": {
            "title": "Scala Tokens API",
            "description": "Semantic highlighting tokens for Scala sources.",
            "version": __version__,
        },
        "links": {
            "self": "/",
            "legend": "/legend",
            "tokens": "/tokens",
            "encoded": "/tokens/encoded",
            "openapi": "/openapi.json",
            "docs": "/docs",
        },
    }
