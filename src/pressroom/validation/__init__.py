from pressroom.validation.validator import ValidationError, summarize, validate, validate_or_raise

__all__ = ["validate", "validate_or_raise", "summarize", "ValidationError"]
