"""
Response envelopes for the FitQuest API.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel

from fitquest.schemas.quest import Quest, QuestStyle, ValidationIssue


class QuestResponse(BaseModel):
    success: Literal[True] = True
    quest: Quest


class DemoMetadata(BaseModel):
    total: int
    styles: List[QuestStyle]


class DemoResponse(BaseModel):
    success: Literal[True] = True
    quests: List[Quest]
    metadata: DemoMetadata


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
    details: Optional[List[ValidationIssue]] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    service: str
