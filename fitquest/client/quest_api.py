"""
Quest API client - async HTTP client for the FitQuest API.

Usage:
    from fitquest.client import QuestApiClient, QuestApiError

    async with QuestApiClient() as api:
        quests = await api.generate_all_styles({
            "userId": "u1",
            "fitnessLevel": "intermediate",
            "interests": ["walking"],
            "duration": 30,
        })
"""

import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import httpx

from fitquest.config import settings
from fitquest.schemas.quest import QUEST_STYLES, GenerationRequest, Quest

logger = logging.getLogger("fitquest")

STATUS_MESSAGES: Dict[int, str] = {
    400: "Invalid request. Please check your input and try again.",
    429: "Too many requests. Please wait a moment before generating more quests.",
    500: "The AI provider failed to generate a quest. Please try again.",
    503: "The AI provider is currently unavailable. Please try again later.",
}

NETWORK_ERROR_MESSAGE = (
    "Unable to reach the quest server. Please check that the backend is running."
)


class QuestApiError(Exception):
    """
    One error type for every client-side failure.

    is_network_error separates "could not reach the server" from
    "server answered with an error status".
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        is_network_error: bool = False,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.is_network_error = is_network_error
        self.detail = detail

    @property
    def title(self) -> str:
        if self.is_network_error:
            return "Connection Error"
        if self.status_code == 400:
            return "Invalid Request"
        return "Generation Failed"

    @classmethod
    def from_response(cls, response: httpx.Response) -> "QuestApiError":
        status = response.status_code
        detail = None
        try:
            body = response.json()
            if isinstance(body, dict) and isinstance(body.get("error"), str):
                detail = body["error"]
        except ValueError:
            pass
        message = STATUS_MESSAGES.get(status, f"Request failed with status {status}. Please try again.")
        return cls(message, status_code=status, detail=detail)


class QuestApiClient:
    """Thin wrapper over the /api/quests endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.client_timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "QuestApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            # timeouts land here too
            logger.warning("quest_api_unreachable", extra={"error": str(e)})
            raise QuestApiError(NETWORK_ERROR_MESSAGE, is_network_error=True) from e

        if response.is_error:
            raise QuestApiError.from_response(response)
        return response

    async def generate_quest(self, request: GenerationRequest | Dict[str, Any]) -> Quest:
        payload = _as_payload(request)
        response = await self._request("POST", "/quests/generate", json=payload)
        with _unreadable_body(response):
            return Quest.model_validate(response.json()["quest"])

    async def fetch_demo_quests(self) -> List[Quest]:
        response = await self._request("GET", "/quests/demo")
        with _unreadable_body(response):
            return [Quest.model_validate(q) for q in response.json()["quests"]]

    async def generate_all_styles(self, base_request: Dict[str, Any]) -> List[Quest]:
        """
        Generate one quest per style concurrently.

        All-or-nothing: the first failure cancels the calls still in flight and
        is raised on its own. Partial results are never returned.
        """
        tasks = [
            asyncio.create_task(self.generate_quest({**base_request, "questStyle": style}))
            for style in QUEST_STYLES
        ]
        try:
            done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
            for task in done:
                if task.exception() is not None:
                    raise task.exception()
            return [task.result() for task in tasks]
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)


def _as_payload(request: GenerationRequest | Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(request, GenerationRequest):
        return request.model_dump(by_alias=True, exclude_none=True)
    return dict(request)


@contextmanager
def _unreadable_body(response: httpx.Response):
    """A 2xx whose body is not the expected envelope still surfaces as QuestApiError."""
    try:
        yield
    except (ValueError, KeyError, TypeError) as e:
        # pydantic's ValidationError is a ValueError
        logger.warning("quest_api_unreadable_body", extra={"status_code": response.status_code, "error": str(e)})
        raise QuestApiError("The quest server sent an unreadable response.",
                            status_code=response.status_code) from e
