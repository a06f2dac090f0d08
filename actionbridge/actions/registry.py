"""Action definitions and registry.

An action is a named unit of behavior with an optional validated input and
a handler. Actions are collected in a registry (any mapping from name to
``Action``) which the function calling adapters read from.
"""

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
)

from ..logging_config import get_logger
from ..workflow import NO_INPUT
from .validation import InputValidator, as_input_validator

logger = get_logger(__name__)


class ActionArity(str, Enum):
    """Whether an action accepts an input value."""
    NULLARY = "nullary"
    UNARY = "unary"


@dataclass(frozen=True)
class Action:
    """Definition of an invocable action.

    Attributes:
        handler: Function run with the validated input (unary) or with no
            arguments (nullary). May be sync or async.
        arity: Whether the action takes an input value
        input_validator: Validator for the input, required iff arity is UNARY.
            A plain type is accepted and wrapped in an InputValidator.
        name: Optional override for the externally visible name
        description: What the action does
        tags: Optional tags for categorization
    """
    handler: Callable[..., Any]
    arity: ActionArity = ActionArity.NULLARY
    input_validator: Optional[InputValidator] = None
    name: Optional[str] = None
    description: Optional[str] = None
    tags: Tuple[str, ...] = ()

    def __post_init__(self):
        arity = ActionArity(self.arity)
        object.__setattr__(self, "arity", arity)

        if arity is ActionArity.UNARY:
            if self.input_validator is None:
                raise ValueError("Unary actions require an input validator")
            object.__setattr__(
                self, "input_validator", as_input_validator(self.input_validator)
            )
        elif self.input_validator is not None:
            raise ValueError("Nullary actions cannot have an input validator")

        object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def is_unary(self) -> bool:
        return self.arity is ActionArity.UNARY

    def parse_input(self, value: Any, strict: bool = False) -> Any:
        """Validate a decoded input value for this action.

        Raises:
            TypeError: If the action takes no input
            pydantic.ValidationError: If the value is rejected
        """
        if self.input_validator is None:
            raise TypeError("This action takes no input")
        return self.input_validator.parse(value, strict=strict)

    def parse_json_input(self, raw: str, strict: bool = False) -> Any:
        """Validate a JSON encoded input value for this action."""
        if self.input_validator is None:
            raise TypeError("This action takes no input")
        return self.input_validator.parse_json(raw, strict=strict)

    async def invoke(self, value: Any = NO_INPUT) -> Any:
        """Run the handler with an already validated input.

        Awaits the handler's return value if it is awaitable.
        """
        if value is NO_INPUT:
            result = self.handler()
        else:
            result = self.handler(value)

        if inspect.isawaitable(result):
            result = await result
        return result

    async def call(self, value: Any = NO_INPUT, strict: bool = False) -> Any:
        """Validate an input value and run the handler.

        Args:
            value: Raw input for unary actions; omit for nullary actions
            strict: Disable type coercion during validation

        Returns:
            The handler's result
        """
        if self.is_unary:
            if value is NO_INPUT:
                raise TypeError("This action requires an input value")
            return await self.invoke(self.parse_input(value, strict=strict))

        if value is not NO_INPUT:
            raise TypeError("This action takes no input")
        return await self.invoke()


# Anything mapping a registry key to an action can be exported or called
Actions = Mapping[str, Action]


def action(
    description: Optional[str] = None,
    input_schema: Any = None,
    name: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> Callable[[Callable[..., Any]], Action]:
    """Decorator to turn a function into an action.

    Args:
        description: Action description (defaults to the function docstring)
        input_schema: Pydantic model or other type for the single input value.
            If omitted the action takes no input.
        name: Optional externally visible name override
        tags: Optional tags

    Returns:
        Decorator producing an Action

    Example:
        @action(description="Get the current weather", input_schema=Location)
        async def get_weather(location: Location) -> dict:
            ...
    """
    def decorator(func: Callable[..., Any]) -> Action:
        return Action(
            handler=func,
            arity=ActionArity.UNARY if input_schema is not None else ActionArity.NULLARY,
            input_validator=input_schema,
            name=name,
            description=description if description is not None else inspect.getdoc(func),
            tags=tuple(tags or ()),
        )
    return decorator


class ActionRegistry(Mapping[str, Action]):
    """Registry of actions keyed by name.

    Behaves as a read-only mapping for the adapters; iteration follows
    registration order, which is also the export order.
    """

    def __init__(self, actions: Optional[Mapping[str, Action]] = None):
        """Initialize the action registry.

        Args:
            actions: Optional initial actions, registered in order
        """
        self._actions: Dict[str, Action] = {}
        for key, definition in (actions or {}).items():
            self.register(key, definition)

    def register(self, key: str, definition: Action) -> None:
        """Register a new action.

        Args:
            key: Unique registry key
            definition: Action to register

        Raises:
            ValueError: If an action with the same key already exists
        """
        if key in self._actions:
            raise ValueError(f"Action '{key}' is already registered")

        self._actions[key] = definition
        logger.debug(
            f"Registered action: {key}",
            extra={"action": key, "arity": definition.arity.value}
        )

    def action(
        self,
        key: Optional[str] = None,
        description: Optional[str] = None,
        input_schema: Any = None,
        name: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Callable[[Callable[..., Any]], Action]:
        """Decorator to build an action and register it.

        The registry key defaults to the function name.
        """
        def decorator(func: Callable[..., Any]) -> Action:
            definition = action(
                description=description,
                input_schema=input_schema,
                name=name,
                tags=tags,
            )(func)
            self.register(key or func.__name__, definition)
            return definition
        return decorator

    def list_actions(self) -> List[Action]:
        """Get all registered actions in registration order."""
        return list(self._actions.values())

    def __getitem__(self, key: str) -> Action:
        return self._actions[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)
