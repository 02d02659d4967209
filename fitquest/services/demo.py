"""
Hardcoded demo quests, one per style. No provider call; only generatedAt moves.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from fitquest.schemas.quest import QUEST_STYLES, Quest
from fitquest.services.quest_generator import utcnow

_DEMO_LOCATION = {"neighborhood": "Williamsburg", "city": "Brooklyn", "state": "NY"}

DEMO_QUESTS: List[Dict[str, Any]] = [
    {
        "questId": "6f1c2d3e-4a5b-4c6d-8e7f-0a1b2c3d4e51",
        "title": "The Waterfront Wanderer",
        "narrative": (
            "A trail of hidden murals winds along the East River. Follow the colors, "
            "snap proof of each find, and claim the skyline view as your prize."
        ),
        "objectives": [
            {"description": "Walk 4,000 steps along the waterfront", "metric": "steps", "target": 4000, "xpReward": 200},
            {"description": "Photograph two street murals", "metric": "photo", "target": 2, "xpReward": 100},
            {"description": "Check in at Domino Park", "metric": "checkin", "target": 1, "xpReward": 50},
        ],
        "totalXP": 350,
        "coinReward": 35,
        "difficulty": "intermediate",
        "estimatedDuration": 30,
        "tags": ["walking", "exploration", "waterfront"],
        "location": {**_DEMO_LOCATION, "landmark": "Domino Park"},
    },
    {
        "questId": "7a2b3c4d-5e6f-4a7b-9c8d-1e2f3a4b5c62",
        "title": "Steady Stride Challenge",
        "narrative": (
            "Consistency beats intensity. Today you build the habit: a brisk loop, "
            "a short stretch, and a finish you can be proud of."
        ),
        "objectives": [
            {"description": "Walk briskly without stopping", "metric": "minutes", "target": 20, "xpReward": 120},
            {"description": "Cover one and a half miles", "metric": "distance", "target": 1.5, "xpReward": 80},
        ],
        "totalXP": 200,
        "coinReward": 20,
        "difficulty": "beginner",
        "estimatedDuration": 25,
        "tags": ["walking", "habit"],
        "location": dict(_DEMO_LOCATION),
    },
    {
        "questId": "8b3c4d5e-6f7a-4b8c-ad9e-2f3a4b5c6d73",
        "title": "Bridge Sprint Gauntlet",
        "narrative": (
            "No shortcuts. Attack the Williamsburg Bridge climb, hold your pace on the descent, "
            "and log every interval. The clock is your only opponent."
        ),
        "objectives": [
            {"description": "Run 5 kilometers including the bridge climb", "metric": "distance", "target": 5, "xpReward": 450},
            {"description": "Hold race pace for 25 minutes", "metric": "minutes", "target": 25, "xpReward": 300},
        ],
        "totalXP": 750,
        "coinReward": 75,
        "difficulty": "advanced",
        "estimatedDuration": 45,
        "tags": ["running", "intervals", "bridge"],
        "location": {**_DEMO_LOCATION, "landmark": "Williamsburg Bridge"},
    },
]


def demo_quests(now: Optional[datetime] = None) -> List[Quest]:
    stamp = now or utcnow()
    return [Quest.model_validate({**raw, "generatedAt": stamp}) for raw in DEMO_QUESTS]


def demo_styles() -> List[str]:
    return list(QUEST_STYLES)
