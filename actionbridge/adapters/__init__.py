"""LLM function calling adapters.

Supports:
- OpenAI functions / tools (``actionbridge.adapters.openai``)
"""

from .openai import (
    FunctionCall,
    FunctionCallResult,
    FunctionDefinition,
    call_function,
    export_function_definitions,
    function_call_to_workflow,
    function_definitions,
    tool_definitions,
)

__all__ = [
    "FunctionCall",
    "FunctionCallResult",
    "FunctionDefinition",
    "call_function",
    "export_function_definitions",
    "function_call_to_workflow",
    "function_definitions",
    "tool_definitions",
]
