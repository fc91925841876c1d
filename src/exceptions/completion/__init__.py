from src.exceptions.completion.completion_error import CompletionError
from src.exceptions.completion.malformed_response_error import MalformedResponseError

__all__ = ["CompletionError", "MalformedResponseError"]
