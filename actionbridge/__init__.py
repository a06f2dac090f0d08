"""actionbridge - expose validated actions to LLM function calling.

A small adapter layer for:
- Exporting actions as OpenAI function / tool definitions
- Parsing model function calls into validated workflow steps
- Running model function calls directly against the actions

Usage:
    from actionbridge import ActionRegistry, call_function, function_definitions
"""

__version__ = "0.1.0"

from .actions import Action, ActionArity, ActionRegistry, Actions, InputValidator, action
from .adapters.openai import (
    FunctionCall,
    FunctionCallResult,
    FunctionDefinition,
    call_function,
    export_function_definitions,
    function_call_to_workflow,
    function_definitions,
    tool_definitions,
)
from .config import Settings, get_settings, reload_settings
from .errors import (
    FunctionCallError,
    InputValidationError,
    MalformedArgumentsError,
    MissingArgumentsError,
    MissingNameError,
    UnknownActionError,
)
from .workflow import NO_INPUT, Workflow, WorkflowStep

__all__ = [
    "Action",
    "ActionArity",
    "ActionRegistry",
    "Actions",
    "InputValidator",
    "action",
    "FunctionCall",
    "FunctionCallResult",
    "FunctionDefinition",
    "call_function",
    "export_function_definitions",
    "function_call_to_workflow",
    "function_definitions",
    "tool_definitions",
    "Settings",
    "get_settings",
    "reload_settings",
    "FunctionCallError",
    "InputValidationError",
    "MalformedArgumentsError",
    "MissingArgumentsError",
    "MissingNameError",
    "UnknownActionError",
    "NO_INPUT",
    "Workflow",
    "WorkflowStep",
]
