from __future__ import annotations

from pydantic import BaseModel

from scala_tokens.models import SemanticToken


class TokensRequest(BaseModel):
    """POST /tokens — highlight a snippet or a server-side file."""

    code: str | None = None
    path: str | None = None
    language: str | None = None
    sort: bool | None = None


class TokensResponse(BaseModel):
    language: str
    tokens: list[SemanticToken]


class HealthResponse(BaseModel):
    status: str = "ok"
