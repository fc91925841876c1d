import asyncio
from collections import OrderedDict
from typing import Optional

import structlog

from agent.weather_agent import WeatherAgent, weather_agent
from src.config.config import config
from src.models.orchestrator.orchestration_result import OrchestrationResult

logger = structlog.get_logger(__name__)

SUPERSEDED_MESSAGE = "Query was superseded by a newer submission."


class QuerySession:
    """
    Result slot for one client.

    Each submission gets a new generation number. Starting a submission
    cancels the session's in-flight run, and only the run holding the current
    generation may store its result in `latest`.
    """

    def __init__(self, session_id: str, agent: WeatherAgent):
        self.session_id = session_id
        self._agent = agent
        self._generation = 0
        self._in_flight: Optional[asyncio.Task] = None
        self.latest: Optional[OrchestrationResult] = None

    @property
    def generation(self) -> int:
        return self._generation

    def _superseded(self, query: str, generation: int) -> OrchestrationResult:
        return OrchestrationResult(
            query=query,
            error=SUPERSEDED_MESSAGE,
            generation=generation,
            superseded=True,
        )

    async def submit(self, query: str) -> OrchestrationResult:
        """
        Run the agent for a query, replacing any earlier submission of this session.

        Args:
            query: User's natural language question

        Returns:
            The run's result, or a superseded result if a newer submission
            started before this one finished.
        """
        self._generation += 1
        generation = self._generation
        self.latest = None

        previous = self._in_flight
        if previous is not None and not previous.done():
            logger.info(
                "Cancelling superseded query",
                session_id=self.session_id,
                generation=generation - 1,
            )
            previous.cancel()

        task = asyncio.ensure_future(self._agent.process_query(query))
        self._in_flight = task

        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                return self._superseded(query, generation)
            raise
        finally:
            if self._in_flight is task:
                self._in_flight = None

        if generation != self._generation:
            return self._superseded(query, generation)

        result = result.model_copy(update={"generation": generation})
        self.latest = result
        return result


class SessionRegistry:
    """Bounded mapping of session ids to QuerySession, evicting the least recently used."""

    def __init__(self, agent: WeatherAgent, max_sessions: int):
        self._agent = agent
        self._max_sessions = max_sessions
        self._sessions: "OrderedDict[str, QuerySession]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str) -> QuerySession:
        session = self._sessions.get(session_id)
        if session is None:
            session = QuerySession(session_id, self._agent)
            self._sessions[session_id] = session
            while len(self._sessions) > self._max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.debug("Evicted query session", session_id=evicted_id)
        else:
            self._sessions.move_to_end(session_id)
        return session


session_registry = SessionRegistry(weather_agent, config.max_sessions)
