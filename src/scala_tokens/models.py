from pydantic import BaseModel, ConfigDict, Field, field_serializer

from scala_tokens.core.legend import TokenCategory, TokenModifier, modifier_sort_key


class SemanticToken(BaseModel):
    """One highlighted span: zero-based position, literal text length, category and modifiers."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    column: int = Field(ge=0)
    length: int = Field(gt=0)
    category: TokenCategory
    modifiers: frozenset[TokenModifier] = frozenset()

    @field_serializer("modifiers")
    def _serialize_modifiers(self, modifiers: frozenset[TokenModifier]) -> list[str]:
        return sorted(modifiers, key=modifier_sort_key)


class TokenLegend(BaseModel):
    token_types: list[str]
    token_modifiers: list[str]


class EncodedTokens(BaseModel):
    """Relative five-integer-per-token encoding understood by LSP semantic token clients."""

    data: list[int]
