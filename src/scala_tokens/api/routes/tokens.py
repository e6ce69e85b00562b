from fastapi import APIRouter, HTTPException

from scala_tokens.api.schemas import TokensRequest, TokensResponse
from scala_tokens.config import get_default_sort
from scala_tokens.core.encoding import LEGEND, encode_tokens
from scala_tokens.core.highlight import run_highlight
from scala_tokens.core.parser import ParseError
from scala_tokens.models import EncodedTokens, SemanticToken, TokenLegend

router = APIRouter(tags=["tokens"])


def _highlight(body: TokensRequest) -> tuple[str, list[SemanticToken], str]:
    if body.path is None and body.code is None:
        raise HTTPException(status_code=422, detail="Either 'path' or 'code' must be provided.")
    sort = get_default_sort() if body.sort is None else body.sort
    try:
        return run_highlight(path=body.path, code=body.code, language=body.language, sort=sort)
    except ParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/legend", response_model=TokenLegend)
async def legend() -> TokenLegend:
    return LEGEND


@router.post("/tokens", response_model=TokensResponse)
def tokens(body: TokensRequest) -> TokensResponse:
    """Classify a Scala document into semantic tokens, in traversal order unless sorted."""
    _, token_list, language = _highlight(body)
    return TokensResponse(language=language, tokens=token_list)


@router.post("/tokens/encoded", response_model=EncodedTokens)
def encoded_tokens(body: TokensRequest) -> EncodedTokens:
    """Classify a Scala document and return the relative integer encoding in UTF-16 columns."""
    text, token_list, _ = _highlight(body)
    return encode_tokens(token_list, text)
