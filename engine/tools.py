"""
Calculator tool definitions and the static tool registry.

Each tool binds a formula to a display name, a category and an ordered list
of inputs. Inputs are either free-entry numbers or a closed set of numeric
options (metric prefixes, phase count). The registry is built once at import
and never changes at runtime.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from engine import arc_flash, circuits, power
from engine.errors import ToolNotFound
from engine.units import METRIC_PREFIXES, convert_prefix
from engine.results import CalculationResult, finite_or_zero, fmt, make_result


class ToolCategory(str, Enum):
    BASIC = 'Basic'
    POWER = 'Power'
    COMPONENTS = 'Components'


@dataclass(frozen=True)
class InputOption:
    """One selectable value of an option input."""
    label: str
    value: float


@dataclass(frozen=True)
class InputSpec:
    """A named numeric input of a tool."""
    name: str          # key in the values mapping passed to compute
    label: str         # e.g. 'Primary Voltage'
    unit: str = ''     # e.g. 'V', 'Ω'
    options: Optional[Sequence[InputOption]] = None
    required: bool = True   # free-entry only; optional inputs validate empty as 0
    default: str = ''       # free-entry seed value

    def __post_init__(self):
        if self.options is not None:
            if len(self.options) == 0:
                raise ValueError(f"Input '{self.name}' has an empty option list")
            object.__setattr__(self, 'options', tuple(self.options))

    @property
    def has_options(self) -> bool:
        return self.options is not None

    def initial_raw(self) -> str:
        """Raw seed value: first option for option inputs, else the default."""
        if self.has_options:
            return repr(float(self.options[0].value))
        return self.default

    def accepts_option(self, raw: str) -> bool:
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return False
        return any(opt.value == value for opt in self.options)


Compute = Callable[[Mapping[str, float]], CalculationResult]


@dataclass(frozen=True)
class ToolDescriptor:
    """Complete definition of a calculator tool."""
    id: str
    name: str
    description: str
    category: ToolCategory
    inputs: List[InputSpec]
    compute: Compute = field(repr=False, compare=False)

    def __post_init__(self):
        names = [spec.name for spec in self.inputs]
        if len(set(names)) != len(names):
            raise ValueError(f"Tool '{self.id}' declares duplicate input names: {names}")

    def input(self, name: str) -> Optional[InputSpec]:
        for spec in self.inputs:
            if spec.name == name:
                return spec
        return None

    @property
    def input_names(self) -> List[str]:
        return [spec.name for spec in self.inputs]


def _prefix_options() -> List[InputOption]:
    return [InputOption(label, value) for label, value in METRIC_PREFIXES]


def _convert_units(v: Mapping[str, float]) -> CalculationResult:
    result, multiplier = convert_prefix(v['val'], v['from'], v['to'])
    result = finite_or_zero(result)
    steps = (
        f"Result = {fmt(v['val'])} × ({v['from']:e} / {v['to']:e})\n"
        f"Multiplier: {multiplier:e}\n"
        f"Result = {fmt(result)}"
    )
    return make_result(result, 'units', steps, multiplier=multiplier)


def _tool(id, name, description, category, inputs, compute) -> ToolDescriptor:
    return ToolDescriptor(id=id, name=name, description=description,
                          category=category, inputs=inputs, compute=compute)


_TOOLS: List[ToolDescriptor] = [
    _tool(
        'ohm', "Ohm's Law (Find V)",
        'Calculate Voltage given Current and Resistance.',
        ToolCategory.BASIC,
        [InputSpec('i', 'Current', 'A'), InputSpec('r', 'Resistance', 'Ω')],
        lambda v: circuits.ohms_law_voltage(v['i'], v['r']),
    ),
    _tool(
        'power_dc', 'DC Power Calculator',
        'Calculate Power given Voltage and Current.',
        ToolCategory.POWER,
        [InputSpec('v', 'Voltage', 'V'), InputSpec('i', 'Current', 'A')],
        lambda v: circuits.dc_power(v['v'], v['i']),
    ),
    _tool(
        'dc_motor', 'DC Motor Calculator',
        'Calculate Speed, Torque & Power (Ideal).',
        ToolCategory.POWER,
        [
            InputSpec('v', 'Voltage', 'V'),
            InputSpec('i', 'Current', 'A'),
            InputSpec('kt', 'Motor Constant (Kt)', 'Nm/A'),
        ],
        lambda v: power.dc_motor(v['v'], v['i'], v['kt']),
    ),
    _tool(
        'transformer_ideal', 'Ideal Transformer',
        'Calculate Secondary Voltage & Current from Ratio.',
        ToolCategory.POWER,
        [
            InputSpec('vp', 'Primary Voltage', 'V'),
            InputSpec('ip', 'Primary Current', 'A'),
            InputSpec('n', 'Turns Ratio (Np/Ns)'),
        ],
        lambda v: power.ideal_transformer(v['vp'], v['ip'], v['n']),
    ),
    _tool(
        'transformer_load', 'Transformer Load & Core Loss',
        'Apparent, real and reactive power plus Steinmetz core loss.',
        ToolCategory.POWER,
        [
            InputSpec('phases', 'System', options=[
                InputOption('1-Phase', 1.0),
                InputOption('3-Phase', 3.0),
            ]),
            InputSpec('v', 'Voltage', 'V'),
            InputSpec('i', 'Current', 'A'),
            InputSpec('pf', 'Power Factor'),
            InputSpec('f', 'Frequency', 'Hz', required=False),
            InputSpec('b', 'Peak Flux Density', 'T', required=False),
            InputSpec('mass', 'Core Mass', 'kg', required=False),
            InputSpec('kh', 'Hysteresis Coefficient (Kh)', required=False),
            InputSpec('ke', 'Eddy Current Coefficient (Ke)', required=False),
            InputSpec('n', 'Steinmetz Exponent (n)', required=False),
        ],
        lambda v: power.transformer_load(
            v['phases'], v['v'], v['i'], v['pf'],
            f=v['f'], b=v['b'], mass=v['mass'], kh=v['kh'], ke=v['ke'], n=v['n'],
        ),
    ),
    _tool(
        'transformer_efficiency', 'Transformer Efficiency',
        'Efficiency at full and half load from iron and copper losses.',
        ToolCategory.POWER,
        [
            InputSpec('kva', 'Rating', 'kVA'),
            InputSpec('wi', 'Iron Loss (Wi)', 'W'),
            InputSpec('wc', 'Full-Load Copper Loss (Wc)', 'W'),
            InputSpec('pf', 'Power Factor'),
        ],
        lambda v: power.transformer_efficiency(v['kva'], v['wi'], v['wc'], v['pf']),
    ),
    _tool(
        'arc_flash', 'Arc Flash Hazard (Lee Method)',
        'Incident energy, arc-flash boundary and PPE category.',
        ToolCategory.POWER,
        [
            InputSpec('v', 'System Voltage', 'kV'),
            InputSpec('i', 'Bolted Fault Current', 'kA'),
            InputSpec('t', 'Arc Duration', 's'),
            InputSpec('d', 'Working Distance', 'mm', required=False),
        ],
        lambda v: arc_flash.arc_flash(v['v'], v['i'], v['t'], v['d']),
    ),
    _tool(
        'res_parallel', 'Parallel Resistors (2)',
        'Calculate equivalent resistance of two parallel resistors.',
        ToolCategory.BASIC,
        [InputSpec('r1', 'R1', 'Ω'), InputSpec('r2', 'R2', 'Ω')],
        lambda v: circuits.parallel_resistance(v['r1'], v['r2']),
    ),
    _tool(
        'cap_energy', 'Capacitor Energy',
        'Energy stored in a capacitor.',
        ToolCategory.COMPONENTS,
        [InputSpec('c', 'Capacitance', 'F'), InputSpec('v', 'Voltage', 'V')],
        lambda v: circuits.capacitor_energy(v['c'], v['v']),
    ),
    _tool(
        'freq_period', 'Frequency ↔ Period',
        'Calculate Frequency from Period.',
        ToolCategory.BASIC,
        [InputSpec('t', 'Period', 's')],
        lambda v: circuits.frequency_from_period(v['t']),
    ),
    _tool(
        'reactance_c', 'Capacitive Reactance',
        'Opposition to current flow in a capacitor.',
        ToolCategory.COMPONENTS,
        [InputSpec('f', 'Frequency', 'Hz'), InputSpec('c', 'Capacitance', 'F')],
        lambda v: circuits.capacitive_reactance(v['f'], v['c']),
    ),
    _tool(
        'rlc_series', 'RLC Series Circuit',
        'Calculate Impedance, Phase & Resonance (Series).',
        ToolCategory.COMPONENTS,
        [
            InputSpec('r', 'Resistance', 'Ω'),
            InputSpec('l', 'Inductance', 'H'),
            InputSpec('c', 'Capacitance', 'F'),
            InputSpec('f', 'Frequency', 'Hz'),
        ],
        lambda v: circuits.rlc_series(v['r'], v['l'], v['c'], v['f']),
    ),
    _tool(
        'rlc_parallel', 'RLC Parallel Circuit',
        'Calculate Impedance, Phase & Resonance (Parallel).',
        ToolCategory.COMPONENTS,
        [
            InputSpec('r', 'Resistance', 'Ω'),
            InputSpec('l', 'Inductance', 'H'),
            InputSpec('c', 'Capacitance', 'F'),
            InputSpec('f', 'Frequency', 'Hz'),
        ],
        lambda v: circuits.rlc_parallel(v['r'], v['l'], v['c'], v['f']),
    ),
    _tool(
        'unit_converter', 'Metric Unit Converter',
        'Convert between metric prefixes (e.g. mV to V, mA to A).',
        ToolCategory.BASIC,
        [
            InputSpec('val', 'Value'),
            InputSpec('from', 'From Prefix', options=_prefix_options()),
            InputSpec('to', 'To Prefix', options=_prefix_options()),
        ],
        _convert_units,
    ),
]

TOOLS: Dict[str, ToolDescriptor] = {}
for _descriptor in _TOOLS:
    if _descriptor.id in TOOLS:
        raise ValueError(f"Duplicate tool id '{_descriptor.id}'")
    TOOLS[_descriptor.id] = _descriptor
del _descriptor


def get_tool(tool_id: str) -> ToolDescriptor:
    """Get a tool descriptor by id."""
    if tool_id not in TOOLS:
        raise ToolNotFound(tool_id)
    return TOOLS[tool_id]


def list_tools(category: Optional[str] = None) -> List[ToolDescriptor]:
    """All tools in registry order, optionally filtered by category."""
    return [
        tool for tool in TOOLS.values()
        if category is None or tool.category == category
    ]


def tool_metadata(tool: ToolDescriptor) -> Dict:
    """Serializable description of a tool (no compute reference)."""
    return {
        'id': tool.id,
        'name': tool.name,
        'description': tool.description,
        'category': tool.category.value,
        'inputs': [
            {
                'name': spec.name,
                'label': spec.label,
                'unit': spec.unit,
                'required': spec.required,
                'options': (
                    [{'label': opt.label, 'value': opt.value} for opt in spec.options]
                    if spec.has_options else None
                ),
            }
            for spec in tool.inputs
        ],
    }
