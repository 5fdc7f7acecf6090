"""
Metric prefixes, prefix conversion and engineering notation.

The prefix table doubles as the option list of the metric converter tool,
so its order is part of the tool's public contract.
"""

import math
from typing import List, Tuple

# (label, factor) from pico through giga
METRIC_PREFIXES: List[Tuple[str, float]] = [
    ('Pico (p)', 1e-12),
    ('Nano (n)', 1e-9),
    ('Micro (µ)', 1e-6),
    ('Milli (m)', 1e-3),
    ('Base Unit', 1.0),
    ('Kilo (k)', 1e3),
    ('Mega (M)', 1e6),
    ('Giga (G)', 1e9),
]

# SI prefix symbols used for display formatting
_SI_PREFIXES = [
    (1e-15, 'f'),
    (1e-12, 'p'),
    (1e-9,  'n'),
    (1e-6,  'µ'),
    (1e-3,  'm'),
    (1e0,   ''),
    (1e3,   'k'),
    (1e6,   'M'),
    (1e9,   'G'),
]


def convert_prefix(value: float, from_factor: float, to_factor: float) -> Tuple[float, float]:
    """
    Convert a value between two metric prefixes.

    Args:
        value: Magnitude expressed in the source prefix
        from_factor: Multiplier of the source prefix (e.g. 1e-3 for milli)
        to_factor: Multiplier of the target prefix

    Returns:
        Tuple of (converted_value, multiplier). A zero target factor yields
        (0.0, 0.0) rather than infinity.
    """
    multiplier = from_factor / to_factor if to_factor != 0 else 0.0
    return value * multiplier, multiplier


def engineering_notation(value: float, unit: str = '', precision: int = 4) -> str:
    """
    Format a value in engineering notation with SI prefix.

    Examples:
        engineering_notation(1000, 'Ω')     → '1kΩ'
        engineering_notation(0.0001, 'F')    → '100µF'
        engineering_notation(2616.79, 'Ω')   → '2.617kΩ'
        engineering_notation(-0.047, 'H')    → '-47mH'
    """
    if value == 0 or not math.isfinite(value):
        return f"0{unit}"

    abs_value = abs(value)
    sign = '-' if value < 0 else ''

    for scale, prefix in reversed(_SI_PREFIXES):
        if abs_value >= scale:
            scaled = abs_value / scale
            if scaled == int(scaled):
                return f"{sign}{int(scaled)}{prefix}{unit}"
            return f"{sign}{scaled:.{precision}g}{prefix}{unit}"

    # Below femto
    return f"{value:.{precision}g}{unit}"
