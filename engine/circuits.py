"""
DC and AC circuit calculations.

Ohm's law family, two-resistor parallel network, capacitor energy,
frequency/period, capacitive reactance and RLC impedance analysis.

AC sign conventions:
    Series:   X = XL − XC,  φ = atan2(X, R)       (φ > 0 ⇒ inductive / lagging)
    Parallel: B = BC − BL,  φz = −atan2(B, G)     (impedance angle is the
              conjugate of the admittance angle)

Divisions by an exactly-zero divisor resolve to 0 (see engine.results).
"""

import numpy as np

from engine.results import CalculationResult, finite_or_zero, fmt, make_result, safe_div


def ohms_law_voltage(i: float, r: float) -> CalculationResult:
    """V = I·R"""
    v = finite_or_zero(i * r)
    return make_result(v, 'V', f"V = I × R = {fmt(i)} × {fmt(r)} = {fmt(v)} V")


def dc_power(v: float, i: float) -> CalculationResult:
    """P = V·I"""
    p = finite_or_zero(v * i)
    return make_result(p, 'W', f"P = V × I = {fmt(v)} × {fmt(i)} = {fmt(p)} W")


def parallel_resistance(r1: float, r2: float) -> CalculationResult:
    """Req = R1·R2 / (R1 + R2), 0 when R1 + R2 = 0."""
    product = finite_or_zero(r1 * r2)
    denom = finite_or_zero(r1 + r2)
    req = finite_or_zero(safe_div(product, denom))
    steps = (
        f"Req = (R1 × R2) / (R1 + R2) = ({fmt(r1)} × {fmt(r2)}) / ({fmt(r1)} + {fmt(r2)})\n"
        f"Req = {fmt(product)} / {fmt(denom)} = {fmt(req)} Ω"
    )
    return make_result(req, 'Ω', steps)


def capacitor_energy(c: float, v: float) -> CalculationResult:
    """E = ½·C·V²"""
    energy = finite_or_zero(0.5 * c * v * v)
    steps = f"E = ½ × C × V² = 0.5 × {fmt(c)} × {fmt(v)}² = {fmt(energy)} J"
    return make_result(energy, 'J', steps)


def frequency_from_period(t: float) -> CalculationResult:
    """f = 1/T, 0 when T = 0."""
    f = finite_or_zero(safe_div(1.0, t))
    return make_result(f, 'Hz', f"f = 1 / T = 1 / {fmt(t)} = {fmt(f)} Hz")


def _capacitive_reactance(f: float, c: float) -> float:
    return safe_div(1.0, 2 * np.pi * f * c)


def _resonant_frequency(l: float, c: float) -> float:
    if l <= 0 or c <= 0:
        return 0.0
    return 1.0 / (2 * np.pi * np.sqrt(l * c))


def capacitive_reactance(f: float, c: float) -> CalculationResult:
    """Xc = 1 / (2πfC), 0 when 2πfC = 0."""
    denom = finite_or_zero(2 * np.pi * f * c)
    xc = finite_or_zero(_capacitive_reactance(f, c))
    steps = (
        f"Xc = 1 / (2πfC) = 1 / (2π × {fmt(f)} × {fmt(c)})\n"
        f"Xc = 1 / {fmt(denom)} = {fmt(xc)} Ω"
    )
    return make_result(xc, 'Ω', steps)


def rlc_series(r: float, l: float, c: float, f: float) -> CalculationResult:
    """
    Series RLC impedance, phase angle and resonant frequency.

    Args:
        r: Resistance (Ω)
        l: Inductance (H)
        c: Capacitance (F)
        f: Frequency (Hz)

    Returns:
        CalculationResult with |Z| in Ω; values carry xl, xc, x,
        phase_deg and resonant_freq.
    """
    with np.errstate(all='ignore'):
        xl = 2 * np.pi * f * l
        xc = _capacitive_reactance(f, c)
        x = xl - xc
        z = np.sqrt(r * r + x * x)
        fr = _resonant_frequency(l, c)
        phase = np.degrees(np.arctan2(x, r))
    xl, xc, x, z, fr, phase = (finite_or_zero(q) for q in (xl, xc, x, z, fr, phase))

    character = 'inductive (lagging)' if phase > 0 else 'capacitive (leading)' if phase < 0 else 'resistive'
    steps = (
        f"XL = 2πfL = 2π × {fmt(f)} × {fmt(l)} = {xl:.2f} Ω\n"
        f"XC = 1 / (2πfC) = {xc:.2f} Ω\n"
        f"X = XL − XC = {x:.2f} Ω\n"
        f"Z = √(R² + X²) = √({fmt(r)}² + {x:.2f}²) = {fmt(z)} Ω\n"
        f"Phase angle: φ = atan2(X, R) = {phase:.2f}° ({character})\n"
        f"Resonance: fr = 1 / (2π√(LC)) = {fr:.2f} Hz"
    )
    return make_result(
        z, 'Ω', steps,
        xl=xl, xc=xc, x=x, phase_deg=phase, resonant_freq=fr,
    )


def rlc_parallel(r: float, l: float, c: float, f: float) -> CalculationResult:
    """
    Parallel RLC impedance via admittance.

    R ≤ 0 is read as "resistor absent" (G = 0), not a short circuit.
    Each susceptance is 0 when its reactance is exactly 0.

    Returns:
        CalculationResult with |Z| in Ω; values carry xl, xc, g, bl, bc, b,
        y, phase_deg (impedance angle) and resonant_freq.
    """
    with np.errstate(all='ignore'):
        xl = 2 * np.pi * f * l
        xc = _capacitive_reactance(f, c)
        g = 1.0 / r if r > 0 else 0.0
        bl = safe_div(1.0, xl)
        bc = safe_div(1.0, xc)
        b = bc - bl
        y = np.sqrt(g * g + b * b)
        z = safe_div(1.0, y)
        fr = _resonant_frequency(l, c)
        phase = -np.degrees(np.arctan2(b, g))
    xl, xc, g, bl, bc, b, y, z, fr, phase = (
        finite_or_zero(q) for q in (xl, xc, g, bl, bc, b, y, z, fr, phase)
    )

    steps = (
        f"XL = {xl:.2f} Ω, XC = {xc:.2f} Ω\n"
        f"G = 1/R = {fmt(g)} S, BL = 1/XL = {fmt(bl)} S, BC = 1/XC = {fmt(bc)} S\n"
        f"B = BC − BL = {fmt(b)} S\n"
        f"Admittance Y = √(G² + B²) = {y:.6f} S\n"
        f"Z = 1/Y = {fmt(z)} Ω\n"
        f"Phase (Z): φ = −atan2(B, G) = {phase:.2f}°\n"
        f"Resonance: fr = {fr:.2f} Hz"
    )
    return make_result(
        z, 'Ω', steps,
        xl=xl, xc=xc, g=g, bl=bl, bc=bc, b=b, y=y, phase_deg=phase, resonant_freq=fr,
    )
