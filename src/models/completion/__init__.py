from src.models.completion.completion import (
    ChatCompletionChoice,
    ChatCompletionResponse,
    ChatMessage,
    FunctionCall,
    FunctionDefinition,
    ToolCall,
    ToolDefinition,
)

__all__ = [
    "ChatCompletionChoice",
    "ChatCompletionResponse",
    "ChatMessage",
    "FunctionCall",
    "FunctionDefinition",
    "ToolCall",
    "ToolDefinition",
]
