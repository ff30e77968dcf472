"""
OpenRouter chat-completion client.

Outbound requests and inbound responses are both validated against
pydantic models, so a malformed call fails before it is sent and a
malformed answer fails before it reaches the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional, Union

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mymovies.core.errors import UpstreamError

logger = logging.getLogger(__name__)

PROVIDER = "openrouter"


class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="forbid")

    role: Literal["system", "user", "assistant"]
    content: str


class JsonSchemaFormat(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    strict: Optional[bool] = None
    schema_definition: Dict[str, Any] = Field(alias="schema")


class ResponseFormat(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["json_schema"]
    json_schema: JsonSchemaFormat


class ChatCompletionRequest(BaseModel):
    """Request body for ``POST /chat/completions``."""

    model_config = ConfigDict(extra="forbid")

    model: str = Field(..., min_length=1)
    messages: List[ChatMessage] = Field(..., min_length=1)
    response_format: Optional[ResponseFormat] = None
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, gt=0)


class ChoiceMessage(BaseModel):
    role: str
    content: str


class Choice(BaseModel):
    message: ChoiceMessage


class ChatCompletionResponse(BaseModel):
    """The subset of the provider's response this service relies on."""

    id: str
    choices: List[Choice] = Field(..., min_length=1)

    @property
    def content(self) -> str:
        return self.choices[0].message.content


class OpenRouterClient:
    """
    Client for the OpenRouter chat-completions endpoint.

    Args:
        api_key: OpenRouter API key, sent as a bearer token
        timeout: Seconds before an outbound request is abandoned
        session: Optional requests session (injected in tests)
    """

    API_URL = "https://openrouter.ai/api/v1/chat/completions"

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise ValueError("OpenRouter API key is required.")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def complete(
        self, request: Union[ChatCompletionRequest, Dict[str, Any]]
    ) -> ChatCompletionResponse:
        """
        Send a chat-completion request.

        Raises:
            ValueError: If the request does not match the expected shape
            UpstreamError: On connection failure, non-2xx status, or a
                response that does not match the expected shape
        """
        try:
            payload = ChatCompletionRequest.model_validate(request)
        except ValidationError as e:
            raise ValueError(f"Invalid request payload: {e}") from e

        try:
            resp = self.session.post(
                self.API_URL,
                headers=self._headers(),
                json=payload.model_dump(by_alias=True, exclude_none=True),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(PROVIDER, "chat completion", f"failed to connect: {e}") from e

        if not resp.ok:
            raise UpstreamError(
                PROVIDER,
                "chat completion",
                f"API error: {resp.status_code} {resp.reason} - {resp.text}",
                status_code=resp.status_code,
            )

        try:
            return ChatCompletionResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise UpstreamError(PROVIDER, "chat completion", f"invalid response: {e}") from e
