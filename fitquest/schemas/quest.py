"""
Quest contract: the shapes that cross a boundary (HTTP body, provider output)
and the rules that make them valid.

Wire names are camelCase; Python attributes are snake_case.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Generic, List, Literal, Optional, Type, TypeVar, get_args
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator
from pydantic.alias_generators import to_camel

FitnessLevel = Literal["beginner", "intermediate", "advanced"]
QuestStyle = Literal["fun_exploratory", "challenge_based", "performance_oriented"]
Metric = Literal["steps", "minutes", "distance", "photo", "checkin"]

FITNESS_LEVELS: tuple[str, ...] = get_args(FitnessLevel)
QUEST_STYLES: tuple[str, ...] = get_args(QuestStyle)
METRICS: tuple[str, ...] = get_args(Metric)

MIN_DURATION_MINUTES = 15
MAX_DURATION_MINUTES = 60

_UUID_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\Z")
_ISO_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:\d{2})\Z")


class _Contract(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Location(_Contract):
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    landmark: Optional[str] = None


class Objective(_Contract):
    model_config = ConfigDict(frozen=True)

    description: str = Field(..., min_length=1, description="Clear action to complete")
    metric: Metric = Field(..., description="Type of measurement for this objective")
    target: float = Field(..., gt=0, strict=True, description="Numeric goal for this objective")
    xp_reward: float = Field(..., gt=0, strict=True, description="XP earned on completing this objective")


class GenerationRequest(_Contract):
    user_id: str = Field(..., min_length=1)
    fitness_level: FitnessLevel
    interests: List[str] = Field(..., min_length=1)
    location: Optional[Location] = None
    quest_style: QuestStyle
    duration: float = Field(..., ge=MIN_DURATION_MINUTES, le=MAX_DURATION_MINUTES, strict=True)


class QuestGenerationOutput(_Contract):
    """What the provider produces. questId/generatedAt/location are added server-side."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, description="Catchy 3-6 word title for the quest")
    narrative: str = Field(..., min_length=1, description="2-3 engaging sentences setting up the quest story")
    objectives: List[Objective] = Field(..., min_length=1, description="List of measurable objectives for the quest")
    total_xp: float = Field(..., alias="totalXP", gt=0, strict=True,
                            description="Total XP reward (sum of all objective XP rewards)")
    coin_reward: float = Field(..., ge=0, strict=True, description="Coin reward (approximately 10% of totalXP)")
    difficulty: FitnessLevel = Field(..., description="Difficulty level matching user fitness level")
    estimated_duration: float = Field(..., gt=0, strict=True, description="Estimated completion time in minutes")
    tags: List[str] = Field(..., description="Relevant searchable tags for the quest")


class Quest(QuestGenerationOutput):
    quest_id: UUID
    generated_at: datetime
    location: Optional[Location] = None

    @field_validator("quest_id", mode="before")
    @classmethod
    def _canonical_uuid(cls, value: Any) -> Any:
        # hyphen-less and braced forms would otherwise parse
        if isinstance(value, str) and not _UUID_RE.match(value):
            raise ValueError("questId must be a UUID in 8-4-4-4-12 form")
        return value

    @field_validator("generated_at", mode="before")
    @classmethod
    def _iso_string_only(cls, value: Any) -> Any:
        # bare numbers, numeric strings and plain dates would otherwise parse
        if isinstance(value, datetime):
            return value
        if isinstance(value, str) and _ISO_DATETIME_RE.match(value):
            return value
        raise ValueError("generatedAt must be an ISO-8601 datetime string")

    @field_serializer("generated_at")
    def _iso_utc(self, value: datetime) -> str:
        return to_iso_utc(value)


def to_iso_utc(value: datetime) -> str:
    """Render like 2025-12-10T15:45:00.000Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ==========================================
# SAFE VALIDATION
# ==========================================

T = TypeVar("T", bound=BaseModel)


class ValidationIssue(BaseModel):
    path: str
    message: str


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.value is not None

    def describe(self) -> str:
        return "; ".join(f"{i.path or '<root>'}: {i.message}" for i in self.issues)


def issues_from_error(exc: Any, skip_prefix: tuple = ()) -> List[ValidationIssue]:
    """Flatten pydantic (or FastAPI request) validation errors into path/message pairs."""
    issues = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        if skip_prefix and tuple(loc[: len(skip_prefix)]) == skip_prefix:
            loc = loc[len(skip_prefix):]
        issues.append(ValidationIssue(path=".".join(str(p) for p in loc), message=err.get("msg", "Invalid value")))
    return issues


def validate(candidate: Any, schema: Type[T]) -> ValidationResult[T]:
    """Validate without raising; failures come back as itemized issues."""
    try:
        return ValidationResult(value=schema.model_validate(candidate))
    except ValidationError as exc:
        return ValidationResult(issues=issues_from_error(exc))
