"""
Generation strategies: the two ways of getting a structured quest out of the provider.

Both take a system prompt and a user prompt and return a validated
QuestGenerationOutput, or raise QuestGenerationError. One strategy is picked
at process start (settings.generation_strategy) and reused for every request.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Type

from langsmith import traceable
from openai import AsyncOpenAI, OpenAIError

from fitquest.errors import QuestGenerationError
from fitquest.schemas.quest import QuestGenerationOutput, validate

logger = logging.getLogger("fitquest")

PRINT_QUEST_TOOL_NAME = "print_quest"

QUEST_OUTPUT_JSON_SCHEMA: Dict[str, Any] = QuestGenerationOutput.model_json_schema(by_alias=True)

PRINT_QUEST_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": PRINT_QUEST_TOOL_NAME,
        "description": "Output the generated fitness quest in the required JSON format",
        "parameters": QUEST_OUTPUT_JSON_SCHEMA,
    },
}

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if the model added one."""
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    return match.group(1).strip() if match else stripped


class GenerationStrategy(ABC):
    name: str = ""
    closing_instruction: str = ""

    def __init__(self, client: AsyncOpenAI, model: str, max_tokens: int = 1024):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    @abstractmethod
    async def generate(self, system_prompt: str, user_prompt: str) -> QuestGenerationOutput:
        ...

    async def _complete(self, system_prompt: str, user_prompt: str, **kwargs: Any):
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                max_completion_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **kwargs,
            )
        except OpenAIError as exc:
            raise QuestGenerationError(f"AI provider request failed: {exc}") from exc
        if not completion.choices:
            raise QuestGenerationError("AI provider returned no choices")
        return completion.choices[0].message

    def _validated(self, payload: Any) -> QuestGenerationOutput:
        result = validate(payload, QuestGenerationOutput)
        if not result.success:
            logger.error("quest_output_invalid", extra={"strategy": self.name, "issues": result.describe()})
            raise QuestGenerationError(f"Generated quest failed validation: {result.describe()}")
        return result.value


class ToolCallStrategy(GenerationStrategy):
    """Force the provider to call the print_quest function with the quest as arguments."""

    name = "tool_call"
    closing_instruction = f"Use the {PRINT_QUEST_TOOL_NAME} tool to output your quest."

    @traceable(run_type="llm", name="generate_quest_tool_call")
    async def generate(self, system_prompt: str, user_prompt: str) -> QuestGenerationOutput:
        message = await self._complete(
            system_prompt,
            user_prompt,
            tools=[PRINT_QUEST_TOOL],
            tool_choice={"type": "function", "function": {"name": PRINT_QUEST_TOOL_NAME}},
        )
        tool_call = next(
            (
                call for call in (message.tool_calls or [])
                if call.type == "function" and call.function.name == PRINT_QUEST_TOOL_NAME
            ),
            None,
        )
        if tool_call is None:
            raise QuestGenerationError("AI failed to generate quest using the expected tool format")

        try:
            payload = json.loads(tool_call.function.arguments)
        except json.JSONDecodeError as exc:
            raise QuestGenerationError(f"AI returned malformed tool arguments: {exc}") from exc
        return self._validated(payload)


class JsonPromptStrategy(GenerationStrategy):
    """Ask for raw JSON in the reply text and parse it."""

    name = "json_prompt"
    closing_instruction = (
        "Respond with ONLY a single JSON object matching this JSON schema. "
        "No explanations, no markdown.\n"
        + json.dumps(QUEST_OUTPUT_JSON_SCHEMA)
    )

    @traceable(run_type="llm", name="generate_quest_json_prompt")
    async def generate(self, system_prompt: str, user_prompt: str) -> QuestGenerationOutput:
        message = await self._complete(system_prompt, user_prompt)
        text = strip_code_fences(message.content or "")
        if not text:
            raise QuestGenerationError("AI returned an empty response instead of quest JSON")
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise QuestGenerationError(f"Failed to parse AI response as JSON: {exc}") from exc
        return self._validated(payload)


STRATEGIES: Dict[str, Type[GenerationStrategy]] = {
    ToolCallStrategy.name: ToolCallStrategy,
    JsonPromptStrategy.name: JsonPromptStrategy,
}


def build_strategy(name: str, client: AsyncOpenAI, model: str, max_tokens: int = 1024) -> GenerationStrategy:
    try:
        strategy_cls = STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown generation strategy '{name}' (expected one of {sorted(STRATEGIES)})")
    return strategy_cls(client, model=model, max_tokens=max_tokens)
