"""
Per-instance field state and input validation.

FieldState keeps raw strings so partial entries such as "-" or "3." can be
held while the user types. validate() turns a FieldState into the numeric
mapping a formula consumes, all-or-nothing: either every input resolves to
a finite float, or ValidationFailure reports one reason per failing field.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Mapping

from engine.errors import InvariantViolation, UnknownInput, ValidationFailure
from engine.tools import InputSpec, ToolDescriptor

logger = logging.getLogger(__name__)


class ErrorReason(str, Enum):
    REQUIRED = 'required'
    INVALID_NUMBER = 'invalid_number'

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorReason.REQUIRED: 'Value required',
    ErrorReason.INVALID_NUMBER: 'Invalid number',
}


@dataclass(frozen=True)
class FieldState:
    """Entered raw values and field-level errors for one tool instance.

    Transitions return new states; a FieldState is never mutated in place.
    """
    tool_id: str
    raw: Mapping[str, str] = field(default_factory=dict)
    errors: Mapping[str, ErrorReason] = field(default_factory=dict)

    @classmethod
    def initial(cls, tool: ToolDescriptor) -> 'FieldState':
        """Option inputs seeded with their first option, free-entry with the default."""
        return cls(
            tool_id=tool.id,
            raw={spec.name: spec.initial_raw() for spec in tool.inputs},
        )

    def with_value(self, name: str, raw: str) -> 'FieldState':
        """Set a raw value and drop any stale error for that field."""
        if name not in self.raw:
            raise UnknownInput(self.tool_id, name)
        raw_values = dict(self.raw)
        raw_values[name] = raw
        errors = {k: v for k, v in self.errors.items() if k != name}
        return replace(self, raw=raw_values, errors=errors)

    def with_errors(self, errors: Mapping[str, ErrorReason]) -> 'FieldState':
        return replace(self, errors=dict(errors))


def parse_number(raw: str) -> float:
    """Parse a raw entry as a finite float; ValueError otherwise."""
    number = float(raw)
    if not math.isfinite(number):
        raise ValueError(f"Non-finite number: {raw!r}")
    return number


def _validate_option(tool: ToolDescriptor, spec: InputSpec, raw: str) -> float:
    try:
        return parse_number(raw)
    except (TypeError, ValueError):
        logger.error(
            "Option input '%s' of tool '%s' holds unparseable value %r",
            spec.name, tool.id, raw,
        )
        raise InvariantViolation(
            f"Option input '{spec.name}' of tool '{tool.id}' holds non-numeric value {raw!r}"
        ) from None


def validate(tool: ToolDescriptor, state: FieldState) -> Dict[str, float]:
    """
    Resolve every input of a tool to a number.

    Args:
        tool: The tool whose inputs are validated, in declaration order
        state: Current raw values

    Returns:
        Mapping of every input name to its float value.

    Raises:
        ValidationFailure: if any free-entry field is empty (and required)
            or not a finite number. Carries one ErrorReason per failing field.
        InvariantViolation: if an option field does not parse.
    """
    values: Dict[str, float] = {}
    errors: Dict[str, ErrorReason] = {}

    for spec in tool.inputs:
        raw = state.raw.get(spec.name, '')

        if spec.has_options:
            values[spec.name] = _validate_option(tool, spec, raw)
            continue

        if raw is None or raw.strip() == '':
            if spec.required:
                errors[spec.name] = ErrorReason.REQUIRED
            else:
                values[spec.name] = 0.0
            continue

        try:
            values[spec.name] = parse_number(raw.strip())
        except ValueError:
            errors[spec.name] = ErrorReason.INVALID_NUMBER

    if errors:
        raise ValidationFailure(errors)
    return values
