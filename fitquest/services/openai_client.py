import logging
from typing import Optional

from openai import AsyncOpenAI

from fitquest.config import Settings
from fitquest.services.quest_generator import QuestGenerator
from fitquest.services.strategies import build_strategy

logger = logging.getLogger("fitquest")


def build_openai_client(settings: Settings) -> Optional[AsyncOpenAI]:
    """One client per process; None when no key is configured."""
    if not settings.openai_api_key:
        logger.warning("openai_api_key_missing")
        return None
    return AsyncOpenAI(api_key=settings.openai_api_key)


def build_generator(settings: Settings, client: Optional[AsyncOpenAI]) -> Optional[QuestGenerator]:
    if client is None:
        return None
    strategy = build_strategy(
        settings.generation_strategy,
        client,
        model=settings.openai_model,
        max_tokens=settings.openai_max_tokens,
    )
    logger.info("generator_ready", extra={"strategy": strategy.name, "model": strategy.model})
    return QuestGenerator(strategy)
