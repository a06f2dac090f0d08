"""Input validation for actions.

Provides utilities to:
- Wrap any pydantic-compatible type as an action input validator
- Convert a validator to a JSON Schema for function definitions
- Split pydantic validation errors into missing and invalid fields
"""

from typing import Any, Dict, List, Tuple

from pydantic import TypeAdapter, ValidationError


class InputValidator:
    """Validator for the single input value of a unary action.

    Wraps a pydantic ``TypeAdapter`` so that models, dataclasses, typed
    dicts and plain annotations can all serve as input shapes.

    Attributes:
        input_type: The type the input is parsed into
    """

    def __init__(self, input_type: Any):
        self.input_type = input_type
        self._adapter = TypeAdapter(input_type)

    def json_schema(self) -> Dict[str, Any]:
        """Get the JSON Schema describing accepted input."""
        return self._adapter.json_schema()

    def parse(self, value: Any, strict: bool = False) -> Any:
        """Validate and coerce a decoded JSON value.

        Args:
            value: Decoded JSON value
            strict: Disable type coercion

        Returns:
            The parsed value (e.g. a model instance)

        Raises:
            pydantic.ValidationError: If the value does not match
        """
        return self._adapter.validate_python(value, strict=strict)

    def parse_json(self, raw: str, strict: bool = False) -> Any:
        """Validate JSON text directly.

        Strict mode here follows pydantic's JSON rules, so string encoded
        values such as dates, UUIDs and enums are still accepted.

        Raises:
            pydantic.ValidationError: If the value does not match
        """
        return self._adapter.validate_json(raw, strict=strict)

    def __repr__(self) -> str:
        name = getattr(self.input_type, "__name__", repr(self.input_type))
        return f"InputValidator({name})"


def as_input_validator(value: Any) -> InputValidator:
    """Coerce a type or an existing validator into an InputValidator."""
    if isinstance(value, InputValidator):
        return value
    return InputValidator(value)


def pydantic_json_schema(validator: InputValidator) -> Dict[str, Any]:
    """Default schema converter: pydantic's JSON Schema generator."""
    return validator.json_schema()


def split_validation_errors(
    error: ValidationError,
) -> Tuple[List[str], Dict[str, str]]:
    """Split pydantic errors into missing and invalid fields.

    Args:
        error: Validation error raised by the validator

    Returns:
        Tuple of (missing field paths, invalid field path -> message)
    """
    missing_fields: List[str] = []
    invalid_fields: Dict[str, str] = {}

    for detail in error.errors():
        field_path = ".".join(str(loc) for loc in detail["loc"]) or "__root__"
        error_type = detail["type"]
        error_msg = detail.get("msg", str(error_type))

        if error_type == "missing":
            missing_fields.append(field_path)
        else:
            invalid_fields[field_path] = error_msg

    return missing_fields, invalid_fields
