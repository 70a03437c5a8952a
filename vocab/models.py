# =============================================================================
# vocab/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These types define the shape of every piece of information that flows
# through the two tools:
#
#   LexicalItemInput     →  what a caller (or the extractor) hands us
#   LexicalItemExpanded  →  what the expansion pipeline hands back
#   BatchOutcome         →  results + per-item failures for one batch
#   ExtractionOutcome    →  candidates pulled out of one source text
#
# CLOSED ENUMERATIONS:
#   Topic and ProficiencyLevel are str-valued Enums.  Their order is the
#   order they are embedded into prompts, and "value not in the enum" is the
#   only filtering rule the parser applies to model output.
#
# WIRE NAMES:
#   Field names match the JSON the tools return (definition_en,
#   translation_zh, examples_en, ielts_topics).  to_dict() omits optional
#   fields that are absent instead of emitting nulls.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# -----------------------------------------------------------------------------
# ProficiencyLevel — CEFR scale, A1 (lowest) to C2 (highest)
# -----------------------------------------------------------------------------
class ProficiencyLevel(str, Enum):
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"

    @classmethod
    def values(cls) -> list[str]:
        return [level.value for level in cls]

    @classmethod
    def parse(cls, raw: object) -> Optional["ProficiencyLevel"]:
        """Return the level named by ``raw`` (case-insensitive), or None."""
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None


# -----------------------------------------------------------------------------
# Topic — fixed 21-label IELTS topic taxonomy
# -----------------------------------------------------------------------------
class Topic(str, Enum):
    EDUCATION = "Education"
    TECHNOLOGY = "Technology"
    ENVIRONMENT = "Environment"
    HEALTH = "Health"
    WORK_CAREER = "Work & Career"
    SOCIETY = "Society"
    CULTURE = "Culture"
    TRAVEL_TOURISM = "Travel & Tourism"
    MEDIA_COMMUNICATION = "Media & Communication"
    CRIME_LAW = "Crime & Law"
    GOVERNMENT_POLITICS = "Government & Politics"
    ECONOMY_BUSINESS = "Economy & Business"
    SCIENCE_RESEARCH = "Science & Research"
    HOUSING_URBAN_LIFE = "Housing & Urban Life"
    TRANSPORTATION = "Transportation"
    FAMILY_RELATIONSHIPS = "Family & Relationships"
    FOOD_DIET = "Food & Diet"
    SPORTS_FITNESS = "Sports & Fitness"
    ARTS_ENTERTAINMENT = "Arts & Entertainment"
    ANIMALS_WILDLIFE = "Animals & Wildlife"
    CLIMATE_ENERGY = "Climate & Energy"

    @classmethod
    def values(cls) -> list[str]:
        return [topic.value for topic in cls]


# Exact-match lookup; "Politics" is NOT "Government & Politics".
_TOPICS_BY_LABEL: dict[str, Topic] = {topic.value: topic for topic in Topic}


def lookup_topic(label: object) -> Optional[Topic]:
    """Return the Topic whose label is exactly ``label``, or None."""
    if not isinstance(label, str):
        return None
    return _TOPICS_BY_LABEL.get(label)


# Suggested part-of-speech labels.  ``pos`` itself stays a free string.
PARTS_OF_SPEECH: tuple[str, ...] = (
    "noun",
    "verb",
    "adjective",
    "adverb",
    "preposition",
    "conjunction",
    "pronoun",
    "interjection",
    "phrase",
)

# The subset the extraction prompt offers the model.
EXTRACTION_PARTS_OF_SPEECH: tuple[str, ...] = ("noun", "verb", "adjective", "adverb", "phrase")


def normalize_lemma(lemma: str) -> str:
    """Trim and lowercase a lemma.  Idempotent."""
    return lemma.strip().lower()


# -----------------------------------------------------------------------------
# LexicalItemInput — one word or phrase to expand
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class LexicalItemInput:
    """A lemma plus whatever optional hints the caller knows about it."""

    lemma: str                                   # "take into account"
    pos: Optional[str] = None                    # "phrase"
    level: Optional[ProficiencyLevel] = None     # ProficiencyLevel.B2
    context: Optional[str] = None                # Sentence the lemma came from

    def to_dict(self) -> dict:
        data: dict = {"lemma": self.lemma}
        if self.pos is not None:
            data["pos"] = self.pos
        if self.level is not None:
            data["level"] = self.level.value
        if self.context is not None:
            data["context"] = self.context
        return data


# -----------------------------------------------------------------------------
# LexicalItemExpanded — the expansion pipeline's per-item output
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class LexicalItemExpanded:
    """Learning material generated for one lemma.

    ``ielts_topics`` only ever holds members of the Topic enum (0..3 of them)
    and ``examples_en`` holds at most three sentences.
    """

    lemma: str
    definition_en: str
    translation_zh: str
    examples_en: tuple[str, ...] = ()
    synonyms: tuple[str, ...] = ()
    ielts_topics: tuple[Topic, ...] = ()

    def to_dict(self) -> dict:
        return {
            "lemma": self.lemma,
            "definition_en": self.definition_en,
            "translation_zh": self.translation_zh,
            "examples_en": list(self.examples_en),
            "synonyms": list(self.synonyms),
            "ielts_topics": [topic.value for topic in self.ielts_topics],
        }


@dataclass(frozen=True)
class ItemFailure:
    """An input item that could not be expanded, and why."""

    item: LexicalItemInput
    error: str

    def message(self) -> str:
        return f'Failed to expand "{self.item.lemma}": {self.error}'


# -----------------------------------------------------------------------------
# BatchOutcome — results and failures of one expand_vocab call
# -----------------------------------------------------------------------------
@dataclass
class BatchOutcome:
    """Expansion results for one batch.  Lives only for one tool call."""

    total: int
    results: list[LexicalItemExpanded] = field(default_factory=list)
    failures: list[ItemFailure] = field(default_factory=list)

    @property
    def success(self) -> int:
        return len(self.results)

    def error_messages(self) -> list[str]:
        return [failure.message() for failure in self.failures]


# -----------------------------------------------------------------------------
# ExtractionOutcome — candidates extracted from one text
# -----------------------------------------------------------------------------
@dataclass
class ExtractionOutcome:
    """Vocabulary candidates plus the untruncated length of the source."""

    items: list[LexicalItemInput]
    source_length: int

    @property
    def total(self) -> int:
        return len(self.items)
