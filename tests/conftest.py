import json
import os
from types import SimpleNamespace
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("LANGSMITH_TRACING", "false")

from fitquest.main import app
from fitquest.schemas.quest import GenerationRequest, Quest, QuestGenerationOutput
from fitquest.services.quest_generator import assemble_quest


def make_output(**overrides) -> dict:
    output = {
        "title": "The Waterfront Wanderer",
        "narrative": "Explore the beautiful waterfront.",
        "objectives": [
            {"description": "Walk 4,000 steps", "metric": "steps", "target": 4000, "xpReward": 300},
        ],
        "totalXP": 300,
        "coinReward": 30,
        "difficulty": "intermediate",
        "estimatedDuration": 30,
        "tags": ["walking", "waterfront"],
    }
    output.update(overrides)
    return output


def make_request(**overrides) -> dict:
    request = {
        "userId": "u1",
        "fitnessLevel": "intermediate",
        "interests": ["walking"],
        "questStyle": "fun_exploratory",
        "duration": 30,
    }
    request.update(overrides)
    return request


def make_completion(tool_args: Any = None, content: Optional[str] = None, tool_name: str = "print_quest"):
    """Shape-compatible stand-in for an OpenAI ChatCompletion."""
    tool_calls = None
    if tool_args is not None:
        arguments = tool_args if isinstance(tool_args, str) else json.dumps(tool_args)
        tool_calls = [
            SimpleNamespace(type="function", function=SimpleNamespace(name=tool_name, arguments=arguments))
        ]
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, completion=None, error: Optional[Exception] = None):
        self.completion = completion
        self.error = error
        self.calls = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.completion


class FakeGenerator:
    """Stands in for QuestGenerator behind the API."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.requests = []

    async def generate(self, request: GenerationRequest) -> Quest:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        output = QuestGenerationOutput.model_validate(make_output(title=f"Quest {request.quest_style}"))
        return assemble_quest(output, request)


@pytest.fixture
def output() -> dict:
    return make_output()


@pytest.fixture
def request_body() -> dict:
    return make_request()


@pytest.fixture
def generator():
    fake = FakeGenerator()
    app.state.generator = fake
    yield fake
    app.state.generator = None


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)
