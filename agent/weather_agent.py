from datetime import datetime
from enum import Enum
from typing import Optional

import structlog

from src.exceptions import QueryValidationError, WeatherAssistantError
from src.models.completion.completion import ChatMessage, ToolCall
from src.models.orchestrator.orchestration_result import OrchestrationResult
from src.models.weather.weather import WeatherRecord
from src.services.completion_service import completion_service
from src.services.weather_service import weather_service
from src.tools.weather_tool import WEATHER_TOOL, WEATHER_TOOL_NAME, parse_weather_tool_arguments
from src.utils.singleton import Singleton

logger = structlog.get_logger(__name__)

EMPTY_QUERY_MESSAGE = "Please enter a question or city name."
UNKNOWN_TOOL_MESSAGE = "OpenAI tried to call an unknown tool."
UNEXPECTED_ERROR_MESSAGE = "Failed to get a response from AI."


class AgentState(str, Enum):
    IDLE = "idle"
    AWAITING_FIRST_COMPLETION = "awaiting_first_completion"
    DONE = "done"


class WeatherAgent(Singleton):
    """
    Tool-call orchestrator for weather questions.

    One run asks the model once with the get_current_weather tool declared.
    If the model requests the tool, the weather is looked up and the model is
    asked a second time with the tool result in the transcript. At most one
    tool call per run is executed.
    """

    def __init__(self):
        """Initialize the weather agent."""
        super().__init__()

        if hasattr(self, "_weather_agent_initialized"):
            return

        self.completion_service = completion_service
        self.weather_service = weather_service
        self.tools = [WEATHER_TOOL]

        self._weather_agent_initialized = True
        logger.info("Weather Agent has been initialized", tools=[tool.function.name for tool in self.tools])

    @staticmethod
    def _validate_query(query: str) -> str:
        cleaned = (query or "").strip()
        if not cleaned:
            raise QueryValidationError(EMPTY_QUERY_MESSAGE)
        return cleaned

    async def _answer_with_tool(self, query: str, assistant_message: ChatMessage, tool_call: ToolCall):
        """
        Execute the weather tool and ask the model for the final answer.

        Returns:
            Tuple of (weather record, final answer)
        """
        arguments = parse_weather_tool_arguments(tool_call.function.arguments)
        weather_record = await self.weather_service.get_current_weather(arguments.city)

        # Replay only the honored call so every tool_call_id has a matching result
        honored_message = assistant_message.model_copy(update={"tool_calls": [tool_call]})
        history = [
            ChatMessage.user(query),
            honored_message,
            ChatMessage.tool_result(tool_call, weather_record.to_tool_content()),
        ]

        final_response = await self.completion_service.complete(query, self.tools, history)
        return weather_record, final_response.message.content or ""

    async def run(self, query: str) -> OrchestrationResult:
        """
        Execute one orchestration run, raising on any failure.

        Args:
            query: User's natural language question

        Returns:
            OrchestrationResult with the answer and, if the tool ran, the weather record

        Raises:
            WeatherAssistantError: Any validation, configuration or provider failure
        """
        cleaned = self._validate_query(query)
        self.completion_service.ensure_configured()

        logger.debug("Agent state changed", state=AgentState.AWAITING_FIRST_COMPLETION.value)
        first_response = await self.completion_service.complete(cleaned, self.tools)
        message = first_response.message

        weather_record: Optional[WeatherRecord] = None
        ignored_tool_calls = 0

        if not message.tool_calls:
            ai_response = message.content or ""
        else:
            tool_call = message.tool_calls[0]
            ignored_tool_calls = len(message.tool_calls) - 1
            if ignored_tool_calls:
                logger.warning(
                    "Model requested several tool calls, only the first is executed",
                    requested=len(message.tool_calls),
                    executed_tool_call_id=tool_call.id,
                )

            if tool_call.function.name != WEATHER_TOOL_NAME:
                logger.warning("Model requested an unknown tool", tool_name=tool_call.function.name)
                ai_response = UNKNOWN_TOOL_MESSAGE
            else:
                weather_record, ai_response = await self._answer_with_tool(cleaned, message, tool_call)

        logger.debug("Agent state changed", state=AgentState.DONE.value)
        return OrchestrationResult(
            query=cleaned,
            ai_response=ai_response,
            weather=weather_record,
            ignored_tool_calls=ignored_tool_calls,
        )

    async def process_query(self, query: str) -> OrchestrationResult:
        """
        Process a natural language weather query and never raise.

        Args:
            query: The natural language query from the user.

        Returns:
            OrchestrationResult carrying either the answer or a user-visible error.
        """
        start_time = datetime.now()
        logger.info("Processing weather agent query", query=query, query_length=len(query or ""))

        try:
            result = await self.run(query)

        except WeatherAssistantError as e:
            logger.warning(
                "Weather agent query failed",
                query=query,
                error_type=type(e).__name__,
                error=str(e),
            )
            result = OrchestrationResult(query=query or "", error=str(e))

        except Exception as e:
            logger.error("Error processing agent query", query=query, error=str(e), exc_info=True)
            result = OrchestrationResult(query=query or "", error=UNEXPECTED_ERROR_MESSAGE)

        processing_time = (datetime.now() - start_time).total_seconds()
        result = result.model_copy(update={"processing_time": processing_time})

        logger.info(
            "Agent query processed",
            query=query,
            succeeded=result.succeeded,
            used_weather_tool=result.weather is not None,
            processing_time=processing_time,
        )
        return result


weather_agent = WeatherAgent()
