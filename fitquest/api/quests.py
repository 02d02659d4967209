import logging

from fastapi import APIRouter, Depends, Request

from fitquest.errors import ProviderUnavailableError, QuestGenerationError
from fitquest.schemas.quest import GenerationRequest
from fitquest.schemas.response import DemoMetadata, DemoResponse, QuestResponse
from fitquest.services.demo import demo_quests, demo_styles
from fitquest.services.quest_generator import QuestGenerator

router = APIRouter(prefix="/quests", tags=["quests"])
logger = logging.getLogger("fitquest")


def get_generator(request: Request) -> QuestGenerator:
    generator = getattr(request.app.state, "generator", None)
    if generator is None:
        raise ProviderUnavailableError("AI provider is not configured on the server")
    return generator


@router.post("/generate", response_model=QuestResponse, response_model_exclude_none=True)
async def generate_quest(
    body: GenerationRequest,
    generator: QuestGenerator = Depends(get_generator),
):
    try:
        quest = await generator.generate(body)
    except QuestGenerationError:
        raise
    except Exception as e:
        logger.exception("quest_generation_crashed")
        raise QuestGenerationError(str(e) or "AI generation failed. Please try again.") from e
    return QuestResponse(quest=quest)


@router.get("/demo", response_model=DemoResponse, response_model_exclude_none=True)
async def demo():
    """Fixed sample quests; generatedAt is the only field that changes between calls."""
    quests = demo_quests()
    return DemoResponse(quests=quests, metadata=DemoMetadata(total=len(quests), styles=demo_styles()))
