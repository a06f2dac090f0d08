"""OpenAI function calling adapter.

Converts an actions registry into the ``functions`` (or ``tools``) parameter
of an OpenAI chat completion request, and turns the function calls the model
returns back into validated workflow steps or direct action results.

Example:

    functions = function_definitions(actions)
    completion = await client.chat.completions.create(
        model="gpt-4o-mini",
        messages=messages,
        functions=functions,
    )
    call = completion.choices[0].message.function_call
    outcome = await call_function(call, actions)

Calling through ``call_function`` skips any authorization or confirmation
step the embedding application may have; use ``function_call_to_workflow``
and run the workflow through that application instead when it matters.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from ..actions.registry import Action, Actions
from ..actions.validation import (
    InputValidator,
    pydantic_json_schema,
    split_validation_errors,
)
from ..config import Settings, get_settings
from ..errors import (
    InputValidationError,
    MalformedArgumentsError,
    MissingArgumentsError,
    MissingNameError,
    UnknownActionError,
)
from ..logging_config import get_logger, log_invocation
from ..workflow import NO_INPUT, Workflow, WorkflowStep

logger = get_logger(__name__)

SchemaConverter = Callable[[InputValidator], Dict[str, Any]]


def empty_parameters() -> Dict[str, Any]:
    """Parameters schema for actions that take no input."""
    return {"type": "object", "properties": {}, "required": []}


class FunctionDefinition(BaseModel):
    """OpenAI-compatible function definition.

    Follows the OpenAI function calling format:
    https://platform.openai.com/docs/guides/function-calling
    """
    name: str = Field(
        ...,
        description="Function name: a-z, A-Z, 0-9, underscores and dashes, max 64 chars",
    )
    description: Optional[str] = Field(
        default=None,
        description="What the function does",
    )
    parameters: Dict[str, Any] = Field(
        default_factory=empty_parameters,
        description="JSON Schema for the function's parameters",
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the ``functions`` request format."""
        result: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            result["description"] = self.description
        result["parameters"] = self.parameters
        return result

    def to_tool_dict(self) -> Dict[str, Any]:
        """Convert to the ``tools`` request format."""
        return {
            "type": "function",
            "function": self.to_dict(),
        }


class FunctionCall(BaseModel):
    """A function call returned by the model.

    Note that the model does not always generate valid JSON in
    ``arguments`` and may hallucinate parameters; arguments are validated
    against the action's input schema before use.
    """
    name: Optional[str] = Field(default=None, description="Name of the function to call")
    arguments: Optional[str] = Field(
        default=None,
        description="Arguments as generated by the model, JSON encoded",
    )

    @classmethod
    def from_any(cls, value: Any) -> "FunctionCall":
        """Build a FunctionCall from the shapes client libraries return.

        Accepts a FunctionCall, a dict, an object with ``name`` and
        ``arguments`` attributes, or a tool call whose ``function`` member
        holds one of those.

        Field types are not checked here; resolution reports a wrong typed
        name or arguments value in the same order as any other failure.
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, Mapping):
            if "function" in value and "name" not in value:
                return cls.from_any(value["function"])
            return cls.model_construct(
                name=value.get("name"), arguments=value.get("arguments")
            )

        if not hasattr(value, "name") and hasattr(value, "function"):
            return cls.from_any(value.function)

        return cls.model_construct(
            name=getattr(value, "name", None),
            arguments=getattr(value, "arguments", None),
        )


@dataclass(frozen=True)
class FunctionCallResult:
    """Outcome of running a function call against the actions."""
    action: str
    result: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"action": self.action, "result": self.result}

    def to_message(self) -> Dict[str, Any]:
        """Convert to a ``function`` role chat message for the model."""
        return {
            "role": "function",
            "name": self.action,
            "content": _to_content(self.result),
        }


def _to_content(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return json.dumps(value, default=str)


def export_function_definitions(
    actions: Actions,
    schema_converter: Optional[SchemaConverter] = None,
    settings: Optional[Settings] = None,
) -> List[FunctionDefinition]:
    """Convert actions into function definitions, in registry order.

    Args:
        actions: Mapping of registry key to action
        schema_converter: Validator to JSON Schema converter
            (defaults to pydantic's generator)
        settings: Optional settings override

    Returns:
        One FunctionDefinition per action
    """
    settings = settings or get_settings()
    converter = schema_converter or pydantic_json_schema
    strip_keys = set(settings.strip_schema_keys)

    definitions = []
    for key, definition in actions.items():
        if definition.is_unary:
            schema = converter(definition.input_validator)
            parameters = {k: v for k, v in schema.items() if k not in strip_keys}
        else:
            parameters = empty_parameters()

        definitions.append(FunctionDefinition(
            name=definition.name if definition.name is not None else key,
            description=definition.description,
            parameters=parameters,
        ))

    logger.debug(
        "Exported function definitions",
        extra={"count": len(definitions)}
    )
    return definitions


def function_definitions(
    actions: Actions,
    schema_converter: Optional[SchemaConverter] = None,
    settings: Optional[Settings] = None,
) -> List[Dict[str, Any]]:
    """Get the ``functions`` parameter for a chat completion request."""
    return [
        definition.to_dict()
        for definition in export_function_definitions(actions, schema_converter, settings)
    ]


def tool_definitions(
    actions: Actions,
    schema_converter: Optional[SchemaConverter] = None,
    settings: Optional[Settings] = None,
) -> List[Dict[str, Any]]:
    """Get the ``tools`` parameter for a chat completion request."""
    return [
        definition.to_tool_dict()
        for definition in export_function_definitions(actions, schema_converter, settings)
    ]


def _reject_constant(token: str) -> None:
    raise ValueError(f"{token} is not valid JSON")


def _resolve_function_call(
    function_call: Any,
    actions: Actions,
    settings: Settings,
) -> Tuple[str, Action, Any]:
    """Resolve the action for a call and validate its arguments.

    Checks run in order: name present, name registered, arguments decode,
    arguments validate. The first failure is raised.

    Returns:
        Tuple of (requested name, action, validated input or NO_INPUT)
    """
    call = FunctionCall.from_any(function_call)
    if call.name is None or call.name == "":
        raise MissingNameError()

    if not isinstance(call.name, str):
        raise UnknownActionError(str(call.name))

    name = call.name
    definition = actions.get(name)
    if definition is None:
        raise UnknownActionError(name)

    if not definition.is_unary:
        return name, definition, NO_INPUT

    raw_arguments = call.arguments
    if raw_arguments is None:
        if settings.require_arguments:
            raise MissingArgumentsError(name)
        raw_arguments = "{}"

    if not isinstance(raw_arguments, str):
        raise MalformedArgumentsError(
            name, f"expected a JSON string, got {type(raw_arguments).__name__}"
        )

    try:
        json.loads(raw_arguments, parse_constant=_reject_constant)
    except ValueError as e:
        raise MalformedArgumentsError(name, str(e)) from e

    try:
        value = definition.parse_json_input(
            raw_arguments, strict=settings.strict_validation
        )
    except ValidationError as e:
        missing_fields, invalid_fields = split_validation_errors(e)
        raise InputValidationError(
            name,
            errors=e.errors(include_url=False, include_context=False),
            missing_fields=missing_fields,
            invalid_fields=invalid_fields,
        ) from e

    logger.debug(
        f"Resolved function call: {name}",
        extra={"action": name}
    )
    return name, definition, value


def function_call_to_workflow(
    function_call: Any,
    actions: Actions,
    settings: Optional[Settings] = None,
) -> Workflow:
    """Convert a function call into a single-step workflow.

    The input is parsed and validated, but the action is not run.

    Args:
        function_call: Function call from the model (see FunctionCall.from_any)
        actions: Mapping of registry key to action
        settings: Optional settings override

    Returns:
        A workflow with exactly one step

    Raises:
        MissingNameError: If the call has no name
        UnknownActionError: If no action is registered under the name
        MissingArgumentsError: If arguments are required but absent
        MalformedArgumentsError: If the arguments are not valid JSON
        InputValidationError: If the arguments fail input validation
    """
    name, _, value = _resolve_function_call(
        function_call, actions, settings or get_settings()
    )
    return [WorkflowStep(action=name, input=value)]


async def call_function(
    function_call: Any,
    actions: Actions,
    settings: Optional[Settings] = None,
) -> FunctionCallResult:
    """Run a function call directly against the actions.

    Resolution and validation are identical to ``function_call_to_workflow``
    and raise the same errors. Handler exceptions propagate unchanged.

    Args:
        function_call: Function call from the model (see FunctionCall.from_any)
        actions: Mapping of registry key to action
        settings: Optional settings override

    Returns:
        FunctionCallResult with the requested name and the handler's result
    """
    name, definition, value = _resolve_function_call(
        function_call, actions, settings or get_settings()
    )

    with log_invocation(logger, name, arity=definition.arity.value) as outcome:
        result = await definition.invoke(value)
        outcome["return_type"] = type(result).__name__

    return FunctionCallResult(action=name, result=result)
