"""Actions that can be exposed to LLM function calling.

Provides:
- Action and ActionArity for defining actions
- ActionRegistry and the action decorator for collecting them
- InputValidator for pydantic-backed input validation
"""

from .registry import (
    Action,
    ActionArity,
    ActionRegistry,
    Actions,
    action,
)
from .validation import (
    InputValidator,
    as_input_validator,
    pydantic_json_schema,
    split_validation_errors,
)

__all__ = [
    # Registry
    "Action",
    "ActionArity",
    "ActionRegistry",
    "Actions",
    "action",
    # Validation
    "InputValidator",
    "as_input_validator",
    "pydantic_json_schema",
    "split_validation_errors",
]
