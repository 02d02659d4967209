"""
FitQuest schema package.
"""

from fitquest.schemas.quest import (
    FITNESS_LEVELS,
    METRICS,
    QUEST_STYLES,
    GenerationRequest,
    Location,
    Objective,
    Quest,
    QuestGenerationOutput,
    ValidationIssue,
    ValidationResult,
    validate,
)
from fitquest.schemas.response import DemoResponse, ErrorResponse, HealthResponse, QuestResponse
