"""
Quest generation: one validated request in, one fully-formed Quest out.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import UUID, uuid4

from fitquest.schemas.quest import GenerationRequest, Quest, QuestGenerationOutput
from fitquest.services.prompts import build_system_prompt, build_user_prompt
from fitquest.services.strategies import GenerationStrategy

logger = logging.getLogger("fitquest")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def assemble_quest(
    output: QuestGenerationOutput,
    request: GenerationRequest,
    *,
    quest_id: Optional[UUID] = None,
    generated_at: Optional[datetime] = None,
) -> Quest:
    """Attach the server-assigned fields. Location comes from the request, never the model."""
    return Quest(
        quest_id=quest_id or uuid4(),
        generated_at=generated_at or utcnow(),
        location=request.location,
        **output.model_dump(),
    )


class QuestGenerator:
    """
    Stateless wrapper around a generation strategy.
    Every call is an independent provider call: no caching, no dedup, no retry.
    """

    def __init__(self, strategy: GenerationStrategy, clock: Callable[[], datetime] = utcnow):
        self.strategy = strategy
        self.clock = clock

    async def generate(self, request: GenerationRequest) -> Quest:
        system_prompt = build_system_prompt(request)
        user_prompt = build_user_prompt(request, self.strategy.closing_instruction)

        output = await self.strategy.generate(system_prompt, user_prompt)
        self._check_rewards(output)

        quest = assemble_quest(output, request, generated_at=self.clock())
        logger.info(
            "quest_generated",
            extra={
                "quest_id": str(quest.quest_id),
                "quest_style": request.quest_style,
                "fitness_level": request.fitness_level,
                "strategy": self.strategy.name,
                "objectives": len(quest.objectives),
            },
        )
        return quest

    def _check_rewards(self, output: QuestGenerationOutput) -> None:
        # totalXP == sum of objective rewards is a prompt-level rule only
        objective_xp = sum(o.xp_reward for o in output.objectives)
        if abs(objective_xp - output.total_xp) > 1e-6:
            logger.warning(
                "reward_mismatch",
                extra={"total_xp": output.total_xp, "objective_xp": objective_xp},
            )
