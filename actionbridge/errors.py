"""Errors raised while resolving and validating inbound function calls.

Every error carries a stable ``code`` so callers (typically a chat loop) can
decide whether to report the failure back to the model or abort.
Handler failures and schema conversion failures are never wrapped.
"""

from typing import Any, Dict, List, Optional


class FunctionCallError(ValueError):
    """Base class for all function call resolution failures."""

    code = "function_call_error"

    def __init__(self, message: str, action_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.action_name = action_name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {
            "error": self.code,
            "message": self.message,
        }
        if self.action_name is not None:
            result["action"] = self.action_name
        return result


class MissingNameError(FunctionCallError):
    """The function call record has no name."""

    code = "missing_name"

    def __init__(self):
        super().__init__("Missing function name.")


class UnknownActionError(FunctionCallError):
    """The function call names an action that is not registered."""

    code = "unknown_action"

    def __init__(self, action_name: str):
        super().__init__(f'Unknown function "{action_name}".', action_name)


class MissingArgumentsError(FunctionCallError):
    """A unary action was called without an arguments string."""

    code = "missing_arguments"

    def __init__(self, action_name: str):
        super().__init__(
            f'Missing arguments for function "{action_name}".', action_name
        )


class MalformedArgumentsError(FunctionCallError):
    """The arguments string is not valid JSON."""

    code = "malformed_arguments"

    def __init__(self, action_name: str, detail: str):
        super().__init__(
            f'Invalid JSON arguments for function "{action_name}": {detail}',
            action_name,
        )
        self.detail = detail

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["detail"] = self.detail
        return result


class InputValidationError(FunctionCallError):
    """Decoded arguments were rejected by the action's input validator.

    Attributes:
        errors: Raw error list from the validator
        missing_fields: Dotted paths of required fields that were absent
        invalid_fields: Dotted paths mapped to the validator's message
    """

    code = "invalid_input"

    def __init__(
        self,
        action_name: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        missing_fields: Optional[List[str]] = None,
        invalid_fields: Optional[Dict[str, str]] = None,
    ):
        self.errors = errors or []
        self.missing_fields = missing_fields or []
        self.invalid_fields = invalid_fields or {}
        super().__init__(
            f'Invalid arguments for function "{action_name}". '
            f"{self.get_error_message()}",
            action_name,
        )

    def get_error_message(self) -> str:
        """Generate a human-readable summary of the failed fields."""
        parts = []

        if self.missing_fields:
            fields_str = ", ".join(f"`{f}`" for f in self.missing_fields)
            parts.append(f"Missing required fields: {fields_str}")

        if self.invalid_fields:
            invalid_parts = [
                f"`{field}`: {error}"
                for field, error in self.invalid_fields.items()
            ]
            parts.append("Invalid fields: " + "; ".join(invalid_parts))

        return ". ".join(parts) if parts else "Validation failed"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["missing_fields"] = self.missing_fields
        result["invalid_fields"] = self.invalid_fields
        return result
