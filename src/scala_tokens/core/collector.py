from scala_tokens.models import SemanticToken


class TokenCollector:
    """Accumulates tokens in the order they are emitted; no sorting or deduplication."""

    def __init__(self) -> None:
        self._tokens: list[SemanticToken] = []

    def __len__(self) -> int:
        return len(self._tokens)

    def append(self, token: SemanticToken) -> None:
        self._tokens.append(token)

    def finish(self) -> list[SemanticToken]:
        return list(self._tokens)
