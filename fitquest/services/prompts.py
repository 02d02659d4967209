from typing import Dict, Optional, Tuple

from fitquest.schemas.quest import GenerationRequest, Location

STYLE_PROMPTS: Dict[str, str] = {
    "fun_exploratory": (
        "You are a friendly, enthusiastic fitness quest designer who creates fun, "
        "adventure-style challenges. Your tone is playful and exploratory, like a treasure hunt. "
        "Use vivid imagery and make users feel like they're on an exciting journey of discovery. "
        "Think \"neighborhood explorer\" meets \"casual adventurer.\""
    ),
    "challenge_based": (
        "You are a supportive personal coach who creates achievement-focused fitness quests. "
        "Your tone is warm but motivating, like an encouraging older sibling. Celebrate progress and "
        "consistency. Make fitness feel accessible and rewarding. Use \"you\" and \"your\" to be personal."
    ),
    "performance_oriented": (
        "You are a no-nonsense fitness coach who creates intense, goal-driven challenges. "
        "Your tone is direct, competitive, and achievement-focused. Push users to their limits while "
        "respecting their abilities. Think \"elite trainer\" meets \"competitive athlete.\""
    ),
}

# guidance only, never enforced on the output
XP_RANGES: Dict[str, Tuple[int, int]] = {
    "beginner": (100, 300),
    "intermediate": (300, 600),
    "advanced": (600, 1000),
}


def location_context(location: Optional[Location]) -> str:
    if location is None:
        return "Location: Not specified (create a generic quest)"
    parts = [p for p in (location.neighborhood, location.city, location.state) if p]
    line = f"Location: {', '.join(parts)}"
    if location.landmark:
        line += f" (near {location.landmark})"
    return line


def build_system_prompt(request: GenerationRequest) -> str:
    xp_min, xp_max = XP_RANGES[request.fitness_level]
    return (
        f"{STYLE_PROMPTS[request.quest_style]}\n\n"
        "You are designing fitness quests for FitQuest, a social fitness app that gamifies exercise "
        "the way language apps gamify vocabulary drills.\n\n"
        "Quest Design Principles:\n"
        "1. Narrative Hook: Start with an engaging 2-3 sentence story that makes the user feel motivated\n"
        "2. Clear Objectives: Define measurable goals (steps, duration, checkpoints)\n"
        "3. Appropriate Difficulty: Match the user's fitness level - never demotivate beginners "
        "or bore advanced users\n"
        "4. Local Flavor: Reference specific neighborhoods, landmarks, or cultural elements "
        "when location is provided\n"
        f"5. Reward Psychology: XP should feel earned ({xp_min}-{xp_max} XP range for "
        f"{request.fitness_level} level)\n\n"
        "Coin rewards should be approximately 10% of total XP."
    )


def build_user_prompt(request: GenerationRequest, closing: str) -> str:
    duration = f"{request.duration:g}"
    return (
        "Generate a fitness quest with these parameters:\n\n"
        f"- Fitness Level: {request.fitness_level}\n"
        f"- Interests: {', '.join(request.interests)}\n"
        f"- {location_context(request.location)}\n"
        f"- Quest Style: {request.quest_style.replace('_', ' ', 1)}\n"
        f"- Target Duration: {duration} minutes\n\n"
        f"Create an engaging quest that fits these criteria. {closing}"
    )
