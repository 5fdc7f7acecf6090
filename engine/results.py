"""
Calculation results and the numeric-safety policy shared by every formula.

Formulas never raise and never hand NaN or infinity to a caller. Division
by an exactly-zero divisor resolves to 0, and any quantity that still ends
up non-finite (e.g. overflow on huge inputs) is clamped to 0 before it is
written into the derivation steps, so steps and values always agree.
make_result applies the same clamp as a final pass.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict

from engine.units import engineering_notation

logger = logging.getLogger(__name__)


def safe_div(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is exactly zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def finite_or_zero(value: float) -> float:
    """Coerce to a plain float, mapping NaN and ±inf to 0.0."""
    value = float(value)
    if math.isfinite(value):
        return value
    logger.warning("Non-finite value %r clamped to 0", value)
    return 0.0


def fmt(value: float, digits: int = 6) -> str:
    """Compact numeric formatting used in derivation steps."""
    return f"{float(value):.{digits}g}"


@dataclass(frozen=True)
class CalculationResult:
    """A computed value, its unit and the derivation that produced it."""
    result: float
    unit: str
    steps: str
    values: Dict[str, float] = field(default_factory=dict)

    def summary(self) -> str:
        """Result in engineering notation, e.g. '2.617kΩ'."""
        return engineering_notation(self.result, self.unit)

    def to_dict(self) -> Dict:
        return {
            'result': self.result,
            'unit': self.unit,
            'steps': self.steps,
            'values': dict(self.values),
        }


def make_result(result: float, unit: str, steps: str, **values: float) -> CalculationResult:
    """Build a CalculationResult with every number passed through finite_or_zero."""
    return CalculationResult(
        result=finite_or_zero(result),
        unit=unit,
        steps=steps,
        values={k: finite_or_zero(v) for k, v in values.items()},
    )
