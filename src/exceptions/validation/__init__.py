from src.exceptions.validation.query_validation_error import QueryValidationError

__all__ = ["QueryValidationError"]
