"""Workflow steps produced from inbound function calls.

A workflow is an ordered, not-yet-executed plan of resolved action
invocations. Function call parsing only ever produces single-step
workflows; composing longer ones is left to the embedding application.
"""

from dataclasses import dataclass
from typing import Any, Dict, List


class _NoInput:
    """Marker for a step whose action takes no input."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_INPUT"

    def __bool__(self) -> bool:
        return False


NO_INPUT: Any = _NoInput()


@dataclass(frozen=True)
class WorkflowStep:
    """A single resolved, validated action invocation.

    Attributes:
        action: Registry key of the action to run
        input: Validated input value, or NO_INPUT for actions without input
    """
    action: str
    input: Any = NO_INPUT

    @property
    def has_input(self) -> bool:
        """Whether this step carries an input value."""
        return self.input is not NO_INPUT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, omitting input when there is none."""
        result: Dict[str, Any] = {"action": self.action}
        if self.has_input:
            result["input"] = self.input
        return result


Workflow = List[WorkflowStep]
