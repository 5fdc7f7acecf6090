"""
ElectroMind Calculation Engine

Catalog of closed-form electrical-engineering calculators: Ohm's law family,
AC impedance/admittance and resonance, transformer loading, core loss and
efficiency, arc-flash hazard and metric prefix conversion.

All math is deterministic and total: formulas never raise for finite input
and never return NaN or infinity.
"""

from engine.errors import (
    EngineError,
    InvalidOption,
    InvariantViolation,
    ToolNotFound,
    UnknownInput,
    ValidationFailure,
)
from engine.results import CalculationResult
from engine.tools import InputOption, InputSpec, ToolCategory, ToolDescriptor, get_tool, list_tools, tool_metadata
from engine.validation import ErrorReason, FieldState, validate
from engine.session import CalculationOutcome, CalculationSession, create_instance
from engine.arc_flash import classify_ppe

__version__ = "0.1.0"
