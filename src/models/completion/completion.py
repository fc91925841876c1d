from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class FunctionCall(BaseModel):
    """Function name and JSON-encoded arguments requested by the model."""

    name: str = Field(..., description="Name of the function to call")
    arguments: str = Field(default="{}", description="JSON-encoded function arguments")


class ToolCall(BaseModel):
    """A single tool call request emitted by the completion model."""

    id: str = Field(..., description="Tool call identifier")
    type: Literal["function"] = Field(default="function", description="Tool call type")
    function: FunctionCall = Field(..., description="Requested function call")


class ChatMessage(BaseModel):
    """Role-tagged transcript entry sent to or received from the completion API."""

    role: Literal["system", "user", "assistant", "tool"] = Field(..., description="Message role")
    content: Optional[str] = Field(default=None, description="Message text")
    tool_calls: Optional[List[ToolCall]] = Field(default=None, description="Tool calls requested by the assistant")
    tool_call_id: Optional[str] = Field(default=None, description="Tool call this tool message answers")
    name: Optional[str] = Field(default=None, description="Function name of a tool result")

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role="user", content=content)

    @classmethod
    def tool_result(cls, tool_call: ToolCall, content: str) -> "ChatMessage":
        return cls(
            role="tool",
            tool_call_id=tool_call.id,
            name=tool_call.function.name,
            content=content,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Dictionary form accepted by the chat completions endpoint."""
        return self.model_dump(exclude_none=True)


class ChatCompletionChoice(BaseModel):
    index: int = Field(default=0, description="Choice index")
    message: ChatMessage = Field(..., description="Assistant message")
    finish_reason: Optional[str] = Field(default=None, description="Why the model stopped")


class ChatCompletionResponse(BaseModel):
    """Subset of a chat completion response consumed by the orchestrator."""

    id: Optional[str] = Field(default=None, description="Completion ID")
    model: Optional[str] = Field(default=None, description="Model that produced the completion")
    choices: List[ChatCompletionChoice] = Field(..., min_length=1, description="Completion choices")

    @property
    def message(self) -> ChatMessage:
        """The first choice's message, the only one the assistant reads."""
        return self.choices[0].message


class FunctionDefinition(BaseModel):
    name: str = Field(..., description="Function name the model may call")
    description: str = Field(..., description="What the function does")
    parameters: Dict[str, Any] = Field(..., description="JSON schema of the function arguments")


class ToolDefinition(BaseModel):
    """Declaration of a callable tool offered to the model."""

    model_config = ConfigDict(frozen=True)

    type: Literal["function"] = Field(default="function", description="Tool type")
    function: FunctionDefinition = Field(..., description="Function declaration")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()
