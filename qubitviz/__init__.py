"""Python API for qubitviz."""

from .complex_number import Complex
from .controls import Controls, ContradictoryControlsError
from .matrix import Matrix
from .circuit import (
    Operational,
    Control,
    Display,
    Swap,
    Gate,
    materialize,
    GateColumn,
    ColumnPartition,
    CircuitDefinition,
    PlacementError,
    PlacementResult,
)
from .circuit_stats import CircuitStats, BlochVector
from .simulation_engine import (
    InitialState,
    SimulationEngine,
    SimulationResult,
    SwapColumnError,
    column_operator,
    initial_state_vector,
    simulate,
)
from .gates import GATES, gate_by_id
from .editing import place, try_place, remove, set_qubit_count, trim
from .presets import deutsch_circuit, bell_circuit, ghz_circuit

__all__ = [
    "Complex",
    "Controls",
    "ContradictoryControlsError",
    "Matrix",
    "Operational",
    "Control",
    "Display",
    "Swap",
    "Gate",
    "materialize",
    "GateColumn",
    "ColumnPartition",
    "CircuitDefinition",
    "PlacementError",
    "PlacementResult",
    "CircuitStats",
    "BlochVector",
    "InitialState",
    "SimulationEngine",
    "SimulationResult",
    "SwapColumnError",
    "column_operator",
    "initial_state_vector",
    "simulate",
    "GATES",
    "gate_by_id",
    "place",
    "try_place",
    "remove",
    "set_qubit_count",
    "trim",
    "deutsch_circuit",
    "bell_circuit",
    "ghz_circuit",
]
