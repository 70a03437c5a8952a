# =============================================================================
# vocab_mcp/schemas.py  —  Tool argument schemas (pydantic)
# =============================================================================
#
# The arguments a host sends are validated HERE, before any pipeline runs.
# A failure becomes ArgumentValidationError, which the handlers turn into the
# tool's error envelope.
# =============================================================================

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vocab.errors import ArgumentValidationError
from vocab.extraction import DEFAULT_MAX_ITEMS, MAX_ITEMS, MIN_ITEMS
from vocab.models import PARTS_OF_SPEECH, LexicalItemInput, ProficiencyLevel, normalize_lemma


class LexicalItemArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    lemma: str = Field(description="Base form of the word or phrase (required)")
    pos: Optional[str] = Field(default=None, description="Part of speech (optional)")
    level: Optional[ProficiencyLevel] = Field(
        default=None, description="CEFR level: A1, A2, B1, B2, C1 or C2 (optional)"
    )
    context: Optional[str] = Field(
        default=None, description="Sentence from the source text (optional)"
    )

    @field_validator("lemma")
    @classmethod
    def _normalize_lemma(cls, value: str) -> str:
        lemma = normalize_lemma(value)
        if not lemma:
            raise ValueError("lemma is required")
        return lemma

    def to_item(self) -> LexicalItemInput:
        return LexicalItemInput(lemma=self.lemma, pos=self.pos, level=self.level, context=self.context)


class ExpandVocabArgs(BaseModel):
    items: list[LexicalItemArgs] = Field(min_length=1, description="Vocabulary items to expand")

    def to_items(self) -> list[LexicalItemInput]:
        return [item.to_item() for item in self.items]


class ExtractVocabFromTextArgs(BaseModel):
    text: str = Field(min_length=1, description="Source text to extract vocabulary from")
    level: ProficiencyLevel = Field(description="Target CEFR level; only this level is extracted")
    max_items: int = Field(default=DEFAULT_MAX_ITEMS, ge=MIN_ITEMS, le=MAX_ITEMS)


def format_validation_error(exc: ValidationError) -> str:
    """One line per problem: ``items.0.lemma: lemma is required``."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        # pydantic prefixes custom validator messages with "Value error, ".
        message = message.removeprefix("Value error, ")
        problems.append(f"{location}: {message}" if location else message)
    return "; ".join(problems)


def validate_arguments(schema: type[BaseModel], arguments: Mapping[str, Any]) -> Any:
    """Validate ``arguments`` against ``schema``.

    Raises:
        ArgumentValidationError: with a readable summary of every problem.
    """
    try:
        return schema.model_validate(dict(arguments))
    except ValidationError as exc:
        raise ArgumentValidationError(format_validation_error(exc)) from exc


# =============================================================================
# Published input schemas
# =============================================================================
# The tool functions accept any JSON so that every argument problem reaches
# validate_arguments and comes back as the error envelope.  These fragments
# are what the host sees in each tool's inputSchema.  Enums are inlined so
# no $ref needs resolving.
# =============================================================================
LEVEL_JSON_SCHEMA: dict[str, Any] = {
    "type": "string",
    "enum": ProficiencyLevel.values(),
}

LEXICAL_ITEM_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "lemma": {"type": "string", "minLength": 1, "description": "Base form of the word or phrase"},
        "pos": {
            "type": "string",
            "description": "Part of speech, e.g. " + ", ".join(PARTS_OF_SPEECH),
            "examples": list(PARTS_OF_SPEECH),
        },
        "level": {**LEVEL_JSON_SCHEMA, "description": "CEFR level"},
        "context": {"type": "string", "description": "Sentence from the source text"},
    },
    "required": ["lemma"],
}

ITEMS_JSON_SCHEMA: dict[str, Any] = {
    "type": "array",
    "minItems": 1,
    "items": LEXICAL_ITEM_JSON_SCHEMA,
}

TEXT_JSON_SCHEMA: dict[str, Any] = {"type": "string", "minLength": 1}

MAX_ITEMS_JSON_SCHEMA: dict[str, Any] = {
    "type": "integer",
    "minimum": MIN_ITEMS,
    "maximum": MAX_ITEMS,
}


def provided(**arguments: Any) -> dict[str, Any]:
    """Drop arguments the host left out (None) so validation reports them as missing."""
    return {name: value for name, value in arguments.items() if value is not None}
