from typing import List, Optional, Sequence

import openai
import structlog
from openai import AsyncOpenAI
from pydantic import ValidationError

from src.config.config import config
from src.exceptions.completion import CompletionError, MalformedResponseError
from src.exceptions.configuration import ConfigurationError
from src.models.completion.completion import ChatCompletionResponse, ChatMessage, ToolDefinition
from src.utils.singleton import Singleton

logger = structlog.get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful weather assistant. Use the available tools to provide accurate weather "
    "information. If a city is mentioned explicitly, try to use the weather tool. Otherwise, "
    "answer generalized questions about weather."
)


class CompletionService(Singleton):
    """
    Client for an OpenAI-compatible chat completions endpoint.

    Every call sends the fixed system prompt, the supplied history and the
    current user message, in that order, with tool_choice set to "auto".
    """

    def __init__(self):
        """Initialize the completion service."""
        super().__init__()

        if hasattr(self, "_completion_initialized"):
            return

        self.api_key = config.openai_api_key
        self.base_url = config.openai_base_url
        self.model = config.openai_model
        self._client: Optional[AsyncOpenAI] = None

        self._completion_initialized = True

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def ensure_configured(self):
        """
        Raises:
            ConfigurationError: If no OpenAI API key is configured
        """
        if not self.api_key:
            raise ConfigurationError("OpenAI API key is not configured. Please check your .env file.")

    def _get_client(self) -> AsyncOpenAI:
        self.ensure_configured()
        if self._client is None:
            # Retries are off: a failed completion is reported, not repeated
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url, max_retries=0)
        return self._client

    @staticmethod
    def build_messages(user_message: str, history: Sequence[ChatMessage] = ()) -> List[ChatMessage]:
        """Assemble the transcript: system prompt, history, then the user message."""
        return [
            ChatMessage.system(SYSTEM_PROMPT),
            *history,
            ChatMessage.user(user_message),
        ]

    async def complete(
            self,
            user_message: str,
            tools: Sequence[ToolDefinition],
            history: Optional[Sequence[ChatMessage]] = None
    ) -> ChatCompletionResponse:
        """
        Run one chat completion round.

        Args:
            user_message: The current user message, always sent last
            tools: Tools the model may request
            history: Earlier transcript entries, replayed after the system prompt

        Returns:
            Validated completion response

        Raises:
            ConfigurationError: If no OpenAI API key is configured
            CompletionError: If the provider fails or rejects the request
            MalformedResponseError: If the response lacks choices or messages
        """
        client = self._get_client()
        messages = self.build_messages(user_message, history or ())

        logger.info(
            "Requesting chat completion",
            model=self.model,
            message_count=len(messages),
            tool_count=len(tools),
        )

        try:
            completion = await client.chat.completions.create(
                model=self.model,
                messages=[message.to_payload() for message in messages],
                tools=[tool.to_payload() for tool in tools],
                tool_choice="auto",
            )

        except openai.APIStatusError as e:
            logger.error("Completion API returned an error", status_code=e.status_code, error=str(e))
            raise CompletionError(f"OpenAI API error: {self._provider_message(e)}")

        except openai.APIConnectionError as e:
            logger.error("Completion API request failed", error=str(e))
            raise CompletionError(f"OpenAI API error: {str(e)}")

        try:
            response = ChatCompletionResponse.model_validate(completion.model_dump())
        except ValidationError as e:
            logger.error("Failed to parse completion response", error=str(e))
            raise MalformedResponseError(f"Invalid completion received: {str(e)}")

        logger.info(
            "Chat completion received",
            completion_id=response.id,
            finish_reason=response.choices[0].finish_reason,
            tool_calls=len(response.message.tool_calls or []),
        )
        return response

    @staticmethod
    def _provider_message(error: openai.APIStatusError) -> str:
        """Extract the provider's own error message, falling back to the status line."""
        body = error.body
        if isinstance(body, dict):
            # The SDK passes either the whole body or its "error" object
            detail = body.get("error", body)
            if isinstance(detail, dict) and detail.get("message"):
                return str(detail["message"])
        if error.response is not None and error.response.reason_phrase:
            return error.response.reason_phrase
        return error.message

    async def aclose(self):
        """Release the underlying HTTP client."""
        if self._client is not None:
            await self._client.close()
            self._client = None


completion_service = CompletionService()
