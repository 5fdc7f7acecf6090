"""
Exception taxonomy for the calculation engine.

User-correctable input problems never raise out of a calculation run: they
are collected per field and reported through ValidationFailure. Everything
else here signals a caller or tool-definition defect.
"""

from typing import Dict


class EngineError(Exception):
    """Base class for all calculation engine errors."""


class ToolNotFound(EngineError, KeyError):
    """Raised when a tool id is not present in the registry."""

    def __init__(self, tool_id: str):
        self.tool_id = tool_id
        super().__init__(f"Unknown tool '{tool_id}'")

    def __str__(self) -> str:
        return self.args[0]


class UnknownInput(EngineError, KeyError):
    """Raised when a field name is not declared by the tool."""

    def __init__(self, tool_id: str, name: str):
        self.tool_id = tool_id
        self.name = name
        super().__init__(f"Tool '{tool_id}' has no input named '{name}'")

    def __str__(self) -> str:
        return self.args[0]


class InvalidOption(EngineError, ValueError):
    """Raised when an option input is set to a value outside its option list."""

    def __init__(self, tool_id: str, name: str, raw: str):
        self.tool_id = tool_id
        self.name = name
        self.raw = raw
        super().__init__(f"'{raw}' is not a listed option for '{name}' on tool '{tool_id}'")


class InvariantViolation(EngineError, RuntimeError):
    """An option-backed field held a value that does not parse as a number.

    Entry for option inputs is constrained to the listed values, so this means
    the tool definition or the field state is broken. It is not retried.
    """


class ValidationFailure(EngineError):
    """One or more free-entry fields failed validation.

    ``errors`` maps each failing input name to its ErrorReason.
    """

    def __init__(self, errors: Dict):
        self.errors = dict(errors)
        names = ', '.join(self.errors)
        super().__init__(f"Validation failed for: {names}")
