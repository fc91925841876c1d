from typing import Optional

from pydantic import BaseModel, Field


class OrchestratorQueryRequest(BaseModel):
    query: str = Field(..., description="Natural language weather query")
    session_id: Optional[str] = Field(
        default=None,
        max_length=128,
        description="Client session; a newer query in the same session supersedes an in-flight one",
    )
