import structlog
from fastapi import APIRouter, Depends

from agent.query_session import session_registry
from agent.weather_agent import weather_agent
from src.api.auth import verify_token
from src.models.orchestrator import OrchestratorQueryRequest, OrchestratorQueryResponse

logger = structlog.get_logger(__name__)


# Create router
router = APIRouter(prefix="/orchestrator", tags=["Orchestrator"])


@router.post("/query", summary="Ask the Weather Assistant", response_model=OrchestratorQueryResponse)
async def query_orchestrator(
    request: OrchestratorQueryRequest,
    authenticated: bool = Depends(verify_token)
) -> OrchestratorQueryResponse:
    """Answer a natural-language weather question.

    The model decides whether to call the weather tool. When it does, the
    response carries both the AI answer and the weather record, plus a
    display-ready weather panel. Failures are reported in the `error` field
    rather than as an HTTP error, so clients can show them as a banner.

    When `session_id` is given, a newer query in the same session supersedes
    one still in flight; the older request then returns `superseded: true`.

    Args:
        request: The request payload containing the user's query string.

    Returns:
        OrchestratorQueryResponse for the query.
    """
    logger.info(
        "Processing request query",
        query=request.query,
        session_id=request.session_id,
        authenticated=authenticated
    )

    if request.session_id:
        session = session_registry.get(request.session_id)
        result = await session.submit(request.query)
    else:
        result = await weather_agent.process_query(request.query)

    return OrchestratorQueryResponse.from_result(result)
