"""
Power-system calculations: DC motors and transformers.

Transformer loading uses the apparent-power relation
    S = k · V · I / 1000  (kVA),   k = √3 for three-phase, 1 for single-phase
and core loss follows the Steinmetz equation:
    Ph = Kh · f · |B|^n · m     (hysteresis)
    Pe = Ke · f² · B² · m       (eddy current)

Efficiency at load fraction x:
    η(x) = x·S·PF / (x·S·PF + Wi + x²·Wc)
"""

from typing import Dict

import numpy as np

from engine.results import CalculationResult, finite_or_zero, fmt, make_result, safe_div

RAD_PER_SEC_TO_RPM = 60.0 / (2 * np.pi)

# Core-loss fallbacks applied when an input is left at zero/unset.
# Flux density and mass stay at 0: no core loss without flux/mass data.
CORE_LOSS_DEFAULTS = {
    'f': 50.0,      # Hz
    'b': 0.0,       # T
    'mass': 0.0,    # kg
    'kh': 0.01,     # hysteresis coefficient
    'ke': 0.001,    # eddy-current coefficient
    'n': 1.6,       # Steinmetz exponent
}

EFFICIENCY_LOAD_FRACTIONS = (1.0, 0.5)


def dc_motor(v: float, i: float, kt: float) -> CalculationResult:
    """
    Ideal DC motor speed, torque and power.

    Assumes back-EMF equals the supply voltage, so ω = V / Kt. A
    non-positive Kt gives ω = 0.

    Returns:
        CalculationResult with speed in RPM; values carry omega (rad/s),
        torque (N·m) and power (W).
    """
    omega = finite_or_zero(v / kt) if kt > 0 else 0.0
    rpm = finite_or_zero(omega * RAD_PER_SEC_TO_RPM)
    torque = finite_or_zero(kt * i)
    power = finite_or_zero(v * i)
    steps = (
        f"ω = V / Kt = {fmt(v)} / {fmt(kt)} = {fmt(omega)} rad/s\n"
        f"Speed: {fmt(omega)} × 60/(2π) = {rpm:.1f} RPM\n"
        f"Torque: Kt × I = {fmt(kt)} × {fmt(i)} = {torque:.4f} N·m\n"
        f"Power: V × I = {fmt(v)} × {fmt(i)} = {power:.2f} W"
    )
    return make_result(rpm, 'RPM', steps, omega=omega, torque=torque, power=power)


def ideal_transformer(vp: float, ip: float, n: float) -> CalculationResult:
    """Vs = Vp / N (0 when N = 0) and Is = Ip · N."""
    vs = finite_or_zero(safe_div(vp, n))
    i_s = finite_or_zero(ip * n)
    steps = (
        f"Secondary Voltage (Vs) = Vp / N = {fmt(vp)} / {fmt(n)} = {vs:.2f} V\n"
        f"Secondary Current (Is) = Ip × N = {fmt(ip)} × {fmt(n)} = {i_s:.2f} A"
    )
    return make_result(vs, 'V', steps, **{'is': i_s})


def core_loss(f: float = 0.0, b: float = 0.0, mass: float = 0.0,
              kh: float = 0.0, ke: float = 0.0, n: float = 0.0) -> Dict[str, float]:
    """
    Steinmetz core loss in watts.

    Zero arguments fall back to CORE_LOSS_DEFAULTS. The hysteresis term uses
    the flux magnitude and is 0 at B = 0 whatever the exponent.

    Returns:
        Dict with the effective inputs plus hysteresis_w, eddy_w and total_w.
    """
    f = f or CORE_LOSS_DEFAULTS['f']
    b = b or CORE_LOSS_DEFAULTS['b']
    mass = mass or CORE_LOSS_DEFAULTS['mass']
    kh = kh or CORE_LOSS_DEFAULTS['kh']
    ke = ke or CORE_LOSS_DEFAULTS['ke']
    n = n or CORE_LOSS_DEFAULTS['n']

    with np.errstate(all='ignore'):
        flux_term = np.power(abs(b), n) if b != 0 else 0.0
        hysteresis = finite_or_zero(kh * f * flux_term * mass)
        eddy = finite_or_zero(ke * f * f * b * b * mass)

    return {
        'f': f, 'b': b, 'mass': mass, 'kh': kh, 'ke': ke, 'n': n,
        'hysteresis_w': hysteresis,
        'eddy_w': eddy,
        'total_w': finite_or_zero(hysteresis + eddy),
    }


def transformer_load(phases: float, v: float, i: float, pf: float,
                     f: float = 0.0, b: float = 0.0, mass: float = 0.0,
                     kh: float = 0.0, ke: float = 0.0, n: float = 0.0) -> CalculationResult:
    """
    Transformer loading (S, P, Q) with Steinmetz core loss.

    Args:
        phases: Phase-count selector; 3 selects the √3 factor, anything else 1
        v: Line voltage (V)
        i: Line current (A)
        pf: Power factor; clamped above at 1 for the reactive term
        f, b, mass, kh, ke, n: Core-loss inputs, see core_loss()

    Returns:
        CalculationResult with S in kVA; values carry p_kw, q_kvar,
        hysteresis_w, eddy_w and core_loss_w.
    """
    three_phase = phases == 3
    k = np.sqrt(3) if three_phase else 1.0
    with np.errstate(all='ignore'):
        s = k * v * i / 1000.0
        p = s * pf
        pf_c = min(pf, 1.0)
        q = s * np.sqrt(max(0.0, 1.0 - pf_c * pf_c))
    s, p, q = (finite_or_zero(x) for x in (s, p, q))

    loss = core_loss(f=f, b=b, mass=mass, kh=kh, ke=ke, n=n)

    factor = '√3 × ' if three_phase else ''
    steps = (
        f"S = {factor}V × I / 1000 = {factor}{fmt(v)} × {fmt(i)} / 1000 = {fmt(s)} kVA\n"
        f"P = S × PF = {fmt(s)} × {fmt(pf)} = {fmt(p)} kW\n"
        f"Q = S × √(1 − PF²) = {fmt(q)} kVAR\n"
        f"Core loss (f = {fmt(loss['f'])} Hz, B = {fmt(loss['b'])} T, m = {fmt(loss['mass'])} kg, "
        f"Kh = {fmt(loss['kh'])}, Ke = {fmt(loss['ke'])}, n = {fmt(loss['n'])}):\n"
        f"  Ph = Kh × f × B^n × m = {fmt(loss['hysteresis_w'])} W\n"
        f"  Pe = Ke × f² × B² × m = {fmt(loss['eddy_w'])} W\n"
        f"  Total = {fmt(loss['total_w'])} W"
    )
    return make_result(
        s, 'kVA', steps,
        p_kw=p, q_kvar=q,
        hysteresis_w=loss['hysteresis_w'],
        eddy_w=loss['eddy_w'],
        core_loss_w=loss['total_w'],
    )


def _efficiency_at(x: float, kva: float, wi: float, wc: float, pf: float) -> Dict[str, float]:
    output = finite_or_zero(x * kva * 1000.0 * pf)
    loss = finite_or_zero(wi + x * x * wc)
    eff = finite_or_zero(safe_div(output, output + loss) * 100.0)
    return {'output_w': output, 'loss_w': loss, 'efficiency_pct': eff}


def transformer_efficiency(kva: float, wi: float, wc: float, pf: float) -> CalculationResult:
    """
    Transformer efficiency at full and half load.

    Args:
        kva: Rating (kVA)
        wi: Iron (no-load) loss (W)
        wc: Full-load copper loss (W)
        pf: Load power factor

    Returns:
        CalculationResult with full-load efficiency in %; values carry
        output/loss/efficiency for both load points.
    """
    full = _efficiency_at(1.0, kva, wi, wc, pf)
    half = _efficiency_at(0.5, kva, wi, wc, pf)

    lines = []
    for x, point in zip(EFFICIENCY_LOAD_FRACTIONS, (full, half)):
        label = 'Full load' if x == 1.0 else 'Half load'
        lines.append(
            f"{label} (x = {fmt(x)}):\n"
            f"  Output = x × kVA × 1000 × PF = {fmt(point['output_w'])} W\n"
            f"  Losses = Wi + x² × Wc = {fmt(wi)} + {fmt(x * x)} × {fmt(wc)} = {fmt(point['loss_w'])} W\n"
            f"  η = Output / (Output + Losses) × 100 = {point['efficiency_pct']:.2f} %"
        )

    return make_result(
        full['efficiency_pct'], '%', '\n'.join(lines),
        full_output_w=full['output_w'],
        full_loss_w=full['loss_w'],
        full_efficiency_pct=full['efficiency_pct'],
        half_output_w=half['output_w'],
        half_loss_w=half['loss_w'],
        half_efficiency_pct=half['efficiency_pct'],
    )
