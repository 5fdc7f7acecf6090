"""
Arc-flash hazard estimation (Ralph Lee theoretical maximum power model).

    E  = 512000 · V · I · t / D²          incident energy (cal/cm²)
    Db = √(512000 · V · I · t / 1.2)      arc-flash boundary (mm)

V in kV, I (bolted fault current) in kA, t (arc duration) in s and D
(working distance) in mm. Db is the distance at which E falls to the
1.2 cal/cm² onset of a second-degree burn.
"""

from typing import Optional, Tuple

import numpy as np

from engine.results import CalculationResult, finite_or_zero, fmt, make_result, safe_div

LEE_CONSTANT = 512000.0
BURN_THRESHOLD_CAL_CM2 = 1.2
DEFAULT_WORKING_DISTANCE_MM = 455.0  # 18 in

# Evaluated top-down, first strict '>' match wins.
PPE_THRESHOLDS = [
    (40.0, None, 'Dangerous, no safe PPE'),
    (25.0, 4, 'Category 4'),
    (8.0, 3, 'Category 3'),
    (4.0, 2, 'Category 2'),
    (1.2, 1, 'Category 1'),
]
PPE_NO_HAZARD = (0, 'Category 0 / no hazard')


def classify_ppe(energy: float) -> Tuple[Optional[int], str]:
    """
    Map incident energy (cal/cm²) to a PPE category.

    Thresholds are exclusive: exactly 8.0 cal/cm² is Category 2.

    Returns:
        (level, label); level is None for the no-safe-PPE band.
    """
    for threshold, level, label in PPE_THRESHOLDS:
        if energy > threshold:
            return level, label
    return PPE_NO_HAZARD


def arc_flash(v: float, i: float, t: float, d: float = 0.0) -> CalculationResult:
    """
    Incident energy, arc-flash boundary and PPE category.

    A zero working distance falls back to DEFAULT_WORKING_DISTANCE_MM. The
    boundary is only computed when E > 0. Non-finite E or Db reads 0, and
    the PPE category is taken from that same E.

    Returns:
        CalculationResult with E in cal/cm²; values carry boundary_mm,
        working_distance_mm and ppe_level (-1 for the no-safe-PPE band).
    """
    distance = d if d != 0 else DEFAULT_WORKING_DISTANCE_MM
    with np.errstate(all='ignore'):
        numerator = LEE_CONSTANT * v * i * t
        energy = finite_or_zero(safe_div(numerator, distance * distance))
        boundary = finite_or_zero(np.sqrt(numerator / BURN_THRESHOLD_CAL_CM2)) if energy > 0 else 0.0

    level, label = classify_ppe(energy)

    steps = (
        f"D = {fmt(distance)} mm\n"
        f"E = 512000 × V × I × t / D² = 512000 × {fmt(v)} × {fmt(i)} × {fmt(t)} / {fmt(distance)}²\n"
        f"E = {fmt(energy)} cal/cm²\n"
        f"Arc-flash boundary: Db = √(512000 × V × I × t / 1.2) = {fmt(boundary)} mm\n"
        f"PPE: {label}"
    )
    return make_result(
        energy, 'cal/cm²', steps,
        boundary_mm=boundary,
        working_distance_mm=distance,
        ppe_level=-1 if level is None else level,
    )
