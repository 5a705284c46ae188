from __future__ import annotations

"""State-vector simulation of a :class:`~qubitviz.circuit.CircuitDefinition`.

The engine builds one system-wide operator per column and applies the columns
in order to the initial product state.  Every call is an independent
recomputation: time-dependent gates are materialized for the requested ``t``
without touching the gate definitions, so concurrent runs at different times
are safe.
"""

from dataclasses import dataclass
from enum import Enum
import logging
import math
from typing import List, Sequence, Tuple, Union

from . import config
from .circuit import CircuitDefinition, GateColumn, materialize
from .circuit_stats import CircuitStats
from .matrix import Matrix

LOGGER = logging.getLogger(__name__)


class SwapColumnError(ValueError):
    """Raised in strict mode when a column holds one or more than two SWAP markers."""


_HALF = 1 / math.sqrt(2)


class InitialState(Enum):
    """Single-qubit states selectable for each wire before the first column."""

    ZERO = "0"
    ONE = "1"
    PLUS = "+"
    MINUS = "-"
    PLUS_I = "i"
    MINUS_I = "-i"

    @classmethod
    def parse(cls, value: Union["InitialState", str]) -> "InitialState":
        if isinstance(value, InitialState):
            return value
        try:
            return cls(str(value))
        except ValueError:
            raise ValueError(
                f"Unknown initial state {value!r}; expected one of "
                f"{[s.value for s in cls]}"
            ) from None

    @property
    def vector(self) -> Matrix:
        """Return the 2-entry column vector for this state."""
        return _STATE_VECTORS[self]

    @property
    def label(self) -> str:
        return f"|{self.value}⟩"


_STATE_VECTORS = {
    InitialState.ZERO: Matrix.col(1, 0),
    InitialState.ONE: Matrix.col(0, 1),
    InitialState.PLUS: Matrix.col(_HALF, _HALF),
    InitialState.MINUS: Matrix.col(_HALF, -_HALF),
    InitialState.PLUS_I: Matrix.col(_HALF, complex(0, _HALF)),
    InitialState.MINUS_I: Matrix.col(_HALF, complex(0, -_HALF)),
}


StateSpec = Union[InitialState, str]


def initial_state_vector(states: Sequence[StateSpec]) -> Matrix:
    """Return the product state of ``states`` listed from the top wire down.

    Wire ``0`` seeds the tensor product, so it ends up as the most significant
    bit of the basis index.
    """

    if not states:
        return Matrix.col(1)
    parsed = [InitialState.parse(s) for s in states]
    vector = parsed[0].vector
    for state in parsed[1:]:
        vector = vector.tensor_product(state.vector)
    return vector


def column_operator(
    column: GateColumn,
    num_qubits: int,
    t: float = 0.0,
    *,
    strict_swap_columns: bool = False,
) -> Matrix:
    """Return the ``2**n x 2**n`` operator applied by ``column`` at time ``t``.

    A column with exactly two SWAP markers exchanges those wires and ignores
    its other slots.  Otherwise every operational gate is extended to the
    register, conditioned on all control markers of the column when any are
    present, and the results are composed in slot order.

    Raises
    ------
    SwapColumnError
        If ``strict_swap_columns`` is set and the column has one or more than
        two SWAP markers.
    """

    part = column.partition()
    if part.is_swap_column:
        a, b = part.swaps
        return Matrix.swap_operator(num_qubits - 1 - a, num_qubits - 1 - b, num_qubits)
    if part.is_degenerate_swap:
        if strict_swap_columns:
            raise SwapColumnError(
                f"Column has {len(part.swaps)} SWAP markers on wires "
                f"{list(part.swaps)}; exactly two are required"
            )
        LOGGER.debug(
            "Ignoring %d unpaired SWAP marker(s) on wires %s",
            len(part.swaps),
            list(part.swaps),
        )

    controls = [num_qubits - 1 - w for w in part.controls]
    anti_controls = [num_qubits - 1 - w for w in part.anti_controls]
    result = Matrix.identity(1 << num_qubits)
    for wire, gate in part.operations:
        matrix = materialize(gate, t)
        span = gate.height
        lsb = num_qubits - 1 - (wire + span - 1)
        if part.is_controlled:
            op = Matrix.controlled_gate_operator(
                matrix, lsb, controls, anti_controls, num_qubits, span
            )
        else:
            op = Matrix.gate_operator(matrix, lsb, num_qubits, span)
        LOGGER.debug(
            "Column gate %s at wire %d -> lsb=%d span=%d controls=%s anti=%s",
            gate.id,
            wire,
            lsb,
            span,
            controls,
            anti_controls,
        )
        result = op.times(result)
    return result


@dataclass
class SimulationResult:
    """Container bundling the outcome of :meth:`SimulationEngine.simulate`.

    Attributes
    ----------
    state:
        Final ``2**n x 1`` state vector.
    stats:
        Statistics derived from ``state``.
    t:
        Time parameter used for time-dependent gates.
    initial_states:
        Per-wire initial states used for the run.
    """

    state: Matrix
    stats: CircuitStats
    t: float = 0.0
    initial_states: Tuple[InitialState, ...] = ()


class SimulationEngine:
    """Simulate circuits column by column.

    Parameters
    ----------
    strict_swap_columns:
        Reject columns with an unpaired SWAP marker instead of ignoring the
        markers.  Defaults to ``config.DEFAULT.strict_swap_columns``.
    """

    def __init__(self, *, strict_swap_columns: bool | None = None) -> None:
        if strict_swap_columns is None:
            strict_swap_columns = config.DEFAULT.strict_swap_columns
        self.strict_swap_columns = strict_swap_columns

    def _resolve_states(
        self, circuit: CircuitDefinition, states: Sequence[StateSpec] | None
    ) -> List[InitialState]:
        if states is None:
            return [InitialState.ZERO] * circuit.num_qubits
        if len(states) != circuit.num_qubits:
            raise ValueError(
                f"Expected {circuit.num_qubits} initial states, got {len(states)}"
            )
        return [InitialState.parse(s) for s in states]

    def simulate(
        self,
        circuit: CircuitDefinition,
        initial_states: Sequence[StateSpec] | None = None,
        t: float = 0.0,
    ) -> SimulationResult:
        """Simulate ``circuit`` and return the final state with its statistics.

        Parameters
        ----------
        circuit:
            Circuit to simulate.
        initial_states:
            One state per wire, top wire first.  ``None`` starts every wire in
            ``|0⟩``.
        t:
            Time parameter in ``[0, 1]`` passed to time-dependent gates.
        """

        if not 0.0 <= t <= 1.0:
            raise ValueError(f"Time parameter must lie in [0, 1], got {t}")
        states = self._resolve_states(circuit, initial_states)
        n = circuit.num_qubits
        state = initial_state_vector(states)
        for col_index, column in enumerate(circuit.columns):
            op = column_operator(
                column, n, t, strict_swap_columns=self.strict_swap_columns
            )
            state = op.times(state)
            self._log_column(col_index, column, state)
        return SimulationResult(
            state=state,
            stats=CircuitStats(circuit, state),
            t=t,
            initial_states=tuple(states),
        )

    def _log_column(self, index: int, column: GateColumn, state: Matrix) -> None:
        """Emit per-column diagnostics when verbose simulation logging is enabled."""

        if not config.DEFAULT.verbose_simulation:
            return
        probs = [f"{abs(a) ** 2:.4f}" for a in state.to_numpy()[:, 0]]
        LOGGER.info("[simulation] column=%d gates=%r probs=%s", index, column, probs)


def simulate(
    circuit: CircuitDefinition,
    initial_states: Sequence[StateSpec] | None = None,
    t: float = 0.0,
) -> Tuple[Matrix, CircuitStats]:
    """Simulate ``circuit`` with default settings and return ``(state, stats)``."""

    result = SimulationEngine().simulate(circuit, initial_states, t)
    return result.state, result.stats


__all__ = [
    "InitialState",
    "SwapColumnError",
    "initial_state_vector",
    "column_operator",
    "SimulationEngine",
    "SimulationResult",
    "simulate",
]
