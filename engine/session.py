"""
Calculation sessions: one per open tool instance.

A session owns the FieldState of its instance and the last successful
result. Sessions share nothing with each other.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from engine.errors import InvalidOption, UnknownInput, ValidationFailure
from engine.results import CalculationResult
from engine.tools import ToolDescriptor, get_tool
from engine.validation import ErrorReason, FieldState, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationOutcome:
    """Either a result (ok) or per-field validation errors."""
    ok: bool
    result: Optional[CalculationResult] = None
    errors: Dict[str, ErrorReason] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        if self.ok:
            return {'ok': True, 'result': self.result.to_dict()}
        return {'ok': False, 'errors': {name: reason.value for name, reason in self.errors.items()}}


class CalculationSession:
    """Drives one tool instance: edit fields, then run."""

    def __init__(self, tool: ToolDescriptor):
        self.tool = tool
        self.state = FieldState.initial(tool)
        self._result: Optional[CalculationResult] = None

    @property
    def result(self) -> Optional[CalculationResult]:
        return self._result

    @property
    def errors(self) -> Dict[str, ErrorReason]:
        return dict(self.state.errors)

    @property
    def fields(self) -> Dict[str, str]:
        return dict(self.state.raw)

    def set_field(self, name: str, raw: str) -> None:
        """Record an edit. Does not touch the stored result."""
        spec = self.tool.input(name)
        if spec is None:
            raise UnknownInput(self.tool.id, name)
        if spec.has_options and not spec.accepts_option(raw):
            raise InvalidOption(self.tool.id, name, raw)
        self.state = self.state.with_value(name, raw)

    def run(self) -> CalculationOutcome:
        """Validate the current fields and, if they all resolve, compute."""
        try:
            values = validate(self.tool, self.state)
        except ValidationFailure as failure:
            logger.debug("Validation failed for %s: %s", self.tool.id, failure.errors)
            self.state = self.state.with_errors(failure.errors)
            self._result = None
            return CalculationOutcome(ok=False, errors=dict(failure.errors))

        self.state = self.state.with_errors({})
        self._result = self.tool.compute(values)
        logger.debug("Computed %s: %s %s", self.tool.id, self._result.result, self._result.unit)
        return CalculationOutcome(ok=True, result=self._result)

    def reset(self) -> None:
        """Discard entered values, errors and the stored result."""
        self.state = FieldState.initial(self.tool)
        self._result = None


def create_instance(tool_id: str) -> CalculationSession:
    """Open a new tool instance seeded with default field values."""
    return CalculationSession(get_tool(tool_id))
