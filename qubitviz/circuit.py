"""Circuit representation for qubitviz.

A circuit is a grid: each :class:`GateColumn` is one simultaneous time step and
holds one anchor slot per wire.  Wires are numbered from the top (wire ``0``)
while the simulator addresses qubits by engine index, related through
``engine = num_qubits - 1 - wire``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

from qiskit import QuantumCircuit
from qiskit.circuit.library import UnitaryGate

from . import config
from .config import MAX_QUBITS, MIN_QUBITS
from .matrix import Matrix


# ----------------------------------------------------------------------
# Gate kinds
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Operational:
    """A gate that changes the state.

    Exactly one of ``matrix`` or ``generator`` is set.  A generator maps the
    time parameter ``t`` to the gate matrix.
    """

    matrix: Optional[Matrix] = None
    generator: Optional[Callable[[float], Matrix]] = None

    def __post_init__(self) -> None:
        if (self.matrix is None) == (self.generator is None):
            raise ValueError("Operational gates need exactly one of matrix or generator")

    @property
    def time_dependent(self) -> bool:
        return self.generator is not None


@dataclass(frozen=True)
class Control:
    """Control marker.  ``polarity`` True conditions on |1⟩, False on |0⟩."""

    polarity: bool = True


DISPLAY_KINDS = ("amplitude", "probability", "bloch")


@dataclass(frozen=True)
class Display:
    """Visualisation marker that leaves the state untouched."""

    kind: str

    def __post_init__(self) -> None:
        if self.kind not in DISPLAY_KINDS:
            raise ValueError(f"Unknown display kind '{self.kind}'")


@dataclass(frozen=True)
class Swap:
    """SWAP marker; two of them in one column exchange their wires."""


GateKind = Union[Operational, Control, Display, Swap]


@dataclass(frozen=True, eq=False)
class Gate:
    """Immutable gate description placed on the circuit grid.

    ``height`` is the number of wires spanned and ``width`` the number of
    columns.  Static operational matrices must be ``2**height`` square.
    """

    symbol: str
    name: str
    kind: GateKind
    blurb: str = ""
    width: int = 1
    height: int = 1
    id: str = ""
    param: object = None

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("Gate width and height must be at least 1")
        if not isinstance(self.kind, (Operational, Control, Display, Swap)):
            raise TypeError(f"Unknown gate kind {self.kind!r}")
        if isinstance(self.kind, Operational) and self.kind.matrix is not None:
            dim = 1 << self.height
            m = self.kind.matrix
            if m.width != dim or m.height != dim:
                raise ValueError(
                    f"Gate '{self.symbol}' matrix is {m.width}x{m.height}, "
                    f"expected {dim}x{dim} for height {self.height}"
                )
        if not self.id:
            object.__setattr__(self, "id", self.symbol)

    @property
    def is_control_gate(self) -> bool:
        return isinstance(self.kind, Control)

    @property
    def is_display_gate(self) -> bool:
        return isinstance(self.kind, Display)

    @property
    def is_swap(self) -> bool:
        return isinstance(self.kind, Swap)

    @property
    def is_time_dependent(self) -> bool:
        return isinstance(self.kind, Operational) and self.kind.time_dependent

    @property
    def matrix(self) -> Optional[Matrix]:
        """Static matrix, or the generator evaluated at ``t=0``."""
        return materialize(self, 0.0)

    def copy(self) -> "Gate":
        return replace(self)


def materialize(gate: Gate, t: float) -> Optional[Matrix]:
    """Return the matrix ``gate`` applies at time ``t``.

    Non-operational gates return ``None``.  The gate itself is never modified,
    so the same definition can be simulated at different times concurrently.

    Raises
    ------
    ValueError
        If a generator produces a matrix that does not match ``gate.height``.
    """

    kind = gate.kind
    if isinstance(kind, Operational):
        if kind.generator is None:
            return kind.matrix
        m = kind.generator(t)
        dim = 1 << gate.height
        if m.width != dim or m.height != dim:
            raise ValueError(
                f"Generator of gate '{gate.symbol}' returned {m.width}x{m.height}, "
                f"expected {dim}x{dim}"
            )
        return m
    if isinstance(kind, (Control, Display, Swap)):
        return None
    raise TypeError(f"Unknown gate kind {kind!r}")


# ----------------------------------------------------------------------
# Columns
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class ColumnPartition:
    """Classification of a column's slots by role, in slot order."""

    swaps: Tuple[int, ...] = ()
    controls: Tuple[int, ...] = ()
    anti_controls: Tuple[int, ...] = ()
    operations: Tuple[Tuple[int, Gate], ...] = ()
    displays: Tuple[int, ...] = ()

    @property
    def is_swap_column(self) -> bool:
        return len(self.swaps) == 2

    @property
    def is_degenerate_swap(self) -> bool:
        return len(self.swaps) == 1 or len(self.swaps) > 2

    @property
    def is_controlled(self) -> bool:
        return bool(self.controls or self.anti_controls)


class GateColumn:
    """Fixed-width array of anchor slots for one time step."""

    __slots__ = ("gates",)

    def __init__(self, gates: Sequence[Optional[Gate]] = ()):
        self.gates: Tuple[Optional[Gate], ...] = tuple(gates)

    @classmethod
    def empty(cls, num_qubits: int) -> "GateColumn":
        return cls([None] * num_qubits)

    def __len__(self) -> int:
        return len(self.gates)

    def is_empty(self) -> bool:
        return all(g is None for g in self.gates)

    def is_equal_to(self, other: object) -> bool:
        """Compare slot by slot using gate ids only (parameters are ignored)."""

        if not isinstance(other, GateColumn):
            return False
        if len(self.gates) != len(other.gates):
            return False
        for g1, g2 in zip(self.gates, other.gates):
            if g1 is None and g2 is None:
                continue
            if g1 is None or g2 is None:
                return False
            if g1.id != g2.id:
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GateColumn):
            return NotImplemented
        return self.is_equal_to(other)

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "GateColumn":
        return GateColumn([g.copy() if g is not None else None for g in self.gates])

    def anchors(self) -> Iterator[Tuple[int, Gate]]:
        """Yield ``(wire, gate)`` for every occupied anchor slot."""

        for wire, gate in enumerate(self.gates):
            if gate is not None:
                yield wire, gate

    def occupant(self, wire: int) -> Optional[Tuple[int, Gate]]:
        """Return ``(anchor_wire, gate)`` for the gate covering ``wire``."""

        for anchor, gate in self.anchors():
            if anchor <= wire < anchor + gate.height:
                return anchor, gate
        return None

    def minimum_required_wire_count(self) -> int:
        return max((wire + gate.height for wire, gate in self.anchors()), default=0)

    def with_slot(self, wire: int, gate: Optional[Gate]) -> "GateColumn":
        gates = list(self.gates)
        gates[wire] = gate
        return GateColumn(gates)

    def partition(self) -> ColumnPartition:
        """Split the column's slots into SWAP, control, operation and display roles."""

        swaps: List[int] = []
        controls: List[int] = []
        anti_controls: List[int] = []
        operations: List[Tuple[int, Gate]] = []
        displays: List[int] = []
        for wire, gate in self.anchors():
            kind = gate.kind
            if isinstance(kind, Swap):
                swaps.append(wire)
            elif isinstance(kind, Control):
                (controls if kind.polarity else anti_controls).append(wire)
            elif isinstance(kind, Display):
                displays.append(wire)
            elif isinstance(kind, Operational):
                operations.append((wire, gate))
            else:
                raise TypeError(f"Unknown gate kind {kind!r}")
        return ColumnPartition(
            swaps=tuple(swaps),
            controls=tuple(controls),
            anti_controls=tuple(anti_controls),
            operations=tuple(operations),
            displays=tuple(displays),
        )

    def __repr__(self) -> str:
        slots = ", ".join(g.id if g is not None else "-" for g in self.gates)
        return f"GateColumn([{slots}])"


# ----------------------------------------------------------------------
# Placement results
# ----------------------------------------------------------------------
class PlacementError(ValueError):
    """Raised when a gate cannot be placed at the requested grid position."""


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of :meth:`CircuitDefinition.try_gate_placed`.

    ``circuit`` is the edited circuit on success and the unchanged original
    when ``error`` is set.
    """

    circuit: "CircuitDefinition"
    error: Optional[PlacementError] = field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None


# ----------------------------------------------------------------------
# Circuit definition
# ----------------------------------------------------------------------
class CircuitDefinition:
    """Immutable grid of gate columns over ``num_qubits`` wires.

    Parameters
    ----------
    num_qubits:
        Number of wires, between :data:`~qubitviz.config.MIN_QUBITS` and
        :data:`~qubitviz.config.MAX_QUBITS`.
    columns:
        Columns of the circuit.  Each column is padded or truncated to
        ``num_qubits`` slots.

    Every ``with_*`` method returns a new definition and leaves ``self``
    untouched.
    """

    __slots__ = ("num_qubits", "columns")

    def __init__(self, num_qubits: int, columns: Sequence[GateColumn] = ()):
        if num_qubits < MIN_QUBITS or num_qubits > MAX_QUBITS:
            raise ValueError(
                f"Number of qubits must be between {MIN_QUBITS} and {MAX_QUBITS}, "
                f"got {num_qubits}"
            )
        self.num_qubits = int(num_qubits)
        normalised = []
        for col in columns:
            gates = list(col.gates[:num_qubits]) if col is not None else []
            gates.extend([None] * (num_qubits - len(gates)))
            for wire, gate in enumerate(gates):
                if gate is not None and wire + gate.height > num_qubits:
                    raise PlacementError(
                        f"Gate '{gate.id}' of height {gate.height} at wire {wire} "
                        f"does not fit on a {num_qubits}-qubit circuit"
                    )
            normalised.append(GateColumn(gates))
        self.columns: Tuple[GateColumn, ...] = tuple(normalised)

    @classmethod
    def empty(cls, num_qubits: int | None = None) -> "CircuitDefinition":
        if num_qubits is None:
            num_qubits = config.DEFAULT.default_num_qubits
        return cls(num_qubits, [])

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def num_columns(self) -> int:
        return len(self.columns)

    def _in_range(self, col: int, wire: int) -> bool:
        return 0 <= col < len(self.columns) and 0 <= wire < self.num_qubits

    def gate_at(self, col: int, wire: int) -> Optional[Gate]:
        """Return the gate anchored at ``(col, wire)`` or ``None``."""

        if not self._in_range(col, wire):
            return None
        return self.columns[col].gates[wire]

    def occupant_at(self, col: int, wire: int) -> Optional[Tuple[int, int, Gate]]:
        """Return ``(anchor_col, anchor_wire, gate)`` for the gate covering a cell.

        Multi-wire and multi-column gates cover every cell of their bounding
        box, not only their anchor.
        """

        if not self._in_range(col, wire):
            return None
        for c in range(col, -1, -1):
            for anchor, gate in self.columns[c].anchors():
                if c + gate.width > col and anchor <= wire < anchor + gate.height:
                    return c, anchor, gate
        return None

    def gates(self) -> Iterator[Tuple[int, int, Gate]]:
        """Yield ``(col, wire, gate)`` for every placed gate."""

        for c, column in enumerate(self.columns):
            for wire, gate in column.anchors():
                yield c, wire, gate

    def time_dependent_gates(self) -> List[Tuple[int, int, Gate]]:
        return [entry for entry in self.gates() if entry[2].is_time_dependent]

    def is_empty(self) -> bool:
        return all(col.is_empty() for col in self.columns)

    def is_equal_to(self, other: object) -> bool:
        if not isinstance(other, CircuitDefinition):
            return False
        if self.num_qubits != other.num_qubits:
            return False
        if len(self.columns) != len(other.columns):
            return False
        return all(a.is_equal_to(b) for a, b in zip(self.columns, other.columns))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CircuitDefinition):
            return NotImplemented
        return self.is_equal_to(other)

    __hash__ = None  # type: ignore[assignment]

    def minimum_required_wire_count(self) -> int:
        needed = max(
            (col.minimum_required_wire_count() for col in self.columns), default=0
        )
        return max(self.num_qubits, needed)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def _evict(
        self, columns: List[GateColumn], col: int, wire: int, width: int, height: int
    ) -> None:
        """Clear every gate whose bounding box intersects the given box."""

        for c in range(len(columns)):
            if c >= col + width:
                break
            for anchor, gate in list(columns[c].anchors()):
                overlaps_cols = c < col + width and c + gate.width > col
                overlaps_wires = anchor < wire + height and anchor + gate.height > wire
                if overlaps_cols and overlaps_wires:
                    columns[c] = columns[c].with_slot(anchor, None)

    def with_gate_placed(self, gate: Gate, col: int, wire: int) -> "CircuitDefinition":
        """Return a circuit with ``gate`` anchored at ``(col, wire)``.

        Gates overlapping the new gate's bounding box are removed whole.

        Raises
        ------
        PlacementError
            If the position is negative or the gate does not fit on the wires.
        """

        if col < 0 or wire < 0:
            raise PlacementError(f"Negative placement ({col}, {wire})")
        if wire + gate.height > self.num_qubits:
            raise PlacementError(
                f"Gate '{gate.id}' of height {gate.height} does not fit at wire "
                f"{wire} on a {self.num_qubits}-qubit circuit"
            )
        columns = list(self.columns)
        while len(columns) < col + gate.width:
            columns.append(GateColumn.empty(self.num_qubits))
        self._evict(columns, col, wire, gate.width, gate.height)
        columns[col] = columns[col].with_slot(wire, gate)
        return CircuitDefinition(self.num_qubits, columns)

    def try_gate_placed(self, gate: Gate, col: int, wire: int) -> PlacementResult:
        """Like :meth:`with_gate_placed` but report failure as a result value."""

        try:
            return PlacementResult(self.with_gate_placed(gate, col, wire))
        except PlacementError as exc:
            return PlacementResult(self, exc)

    def with_gate_removed(self, col: int, wire: int) -> "CircuitDefinition":
        """Return a circuit without the gate covering ``(col, wire)``.

        The whole gate is removed even when ``(col, wire)`` is not its anchor.
        Trailing empty columns left behind by the removal are dropped.  Empty
        or out-of-range cells return ``self``.
        """

        found = self.occupant_at(col, wire)
        if found is None:
            return self
        anchor_col, anchor_wire, _ = found
        columns = list(self.columns)
        columns[anchor_col] = columns[anchor_col].with_slot(anchor_wire, None)
        result = CircuitDefinition(self.num_qubits, columns)
        if all(c.is_empty() for c in columns[anchor_col:]):
            return result.trimmed()
        return result

    def with_num_qubits(self, num_qubits: int) -> "CircuitDefinition":
        """Return a circuit resized to ``num_qubits`` wires (clamped to [1, 4]).

        Gates that would extend past the last wire are discarded; the others
        keep their wire.
        """

        num_qubits = max(MIN_QUBITS, min(MAX_QUBITS, num_qubits))
        if num_qubits == self.num_qubits:
            return self
        columns = []
        for column in self.columns:
            gates: List[Optional[Gate]] = [None] * num_qubits
            for wire, gate in column.anchors():
                if wire + gate.height <= num_qubits:
                    gates[wire] = gate
            columns.append(GateColumn(gates))
        return CircuitDefinition(num_qubits, columns)

    def with_column_at(
        self, col: int, column: Optional[GateColumn]
    ) -> "CircuitDefinition":
        """Replace, append or (when ``column`` is ``None``) delete a column."""

        columns = list(self.columns)
        if column is None:
            if 0 <= col < len(columns):
                del columns[col]
            else:
                return self
        else:
            if col < 0:
                raise IndexError(f"Negative column index {col}")
            while col >= len(columns):
                columns.append(GateColumn.empty(self.num_qubits))
            columns[col] = column
        return CircuitDefinition(self.num_qubits, columns)

    def trimmed(self) -> "CircuitDefinition":
        """Return a circuit without trailing empty columns."""

        columns = list(self.columns)
        while columns and columns[-1].is_empty():
            columns.pop()
        if len(columns) == len(self.columns):
            return self
        return CircuitDefinition(self.num_qubits, columns)

    # ------------------------------------------------------------------
    # Interop
    # ------------------------------------------------------------------
    def engine_index(self, wire: int) -> int:
        """Translate a top-down wire index into the basis-state bit position."""
        return self.num_qubits - 1 - wire

    def to_qiskit(self, t: float = 0.0) -> QuantumCircuit:
        """Export the circuit to a Qiskit ``QuantumCircuit``.

        Qiskit qubit ``k`` is engine index ``k``, so statevectors produced by
        Qiskit use the same basis ordering as the simulator.  Column semantics
        match :func:`~qubitviz.simulation_engine.column_operator`.  Display
        markers and degenerate SWAP columns contribute nothing.
        """

        n = self.num_qubits
        qc = QuantumCircuit(n)
        for column in self.columns:
            part = column.partition()
            if part.is_swap_column:
                a, b = part.swaps
                qc.swap(self.engine_index(a), self.engine_index(b))
                continue
            ctrl_qubits = [self.engine_index(w) for w in part.controls]
            anti_qubits = [self.engine_index(w) for w in part.anti_controls]
            for wire, gate in part.operations:
                matrix = materialize(gate, t)
                lsb = n - 1 - (wire + gate.height - 1)
                targets = list(range(lsb, lsb + gate.height))
                unitary = UnitaryGate(matrix.to_numpy(), label=gate.symbol)
                if not part.is_controlled:
                    qc.append(unitary, targets)
                    continue
                qargs = ctrl_qubits + anti_qubits
                ctrl_state = (1 << len(ctrl_qubits)) - 1
                controlled = unitary.control(len(qargs), ctrl_state=ctrl_state)
                qc.append(controlled, qargs + targets)
        return qc

    def __repr__(self) -> str:
        return f"CircuitDefinition({self.num_qubits}, {list(self.columns)!r})"


__all__ = [
    "Operational",
    "Control",
    "Display",
    "Swap",
    "GateKind",
    "DISPLAY_KINDS",
    "Gate",
    "materialize",
    "ColumnPartition",
    "GateColumn",
    "PlacementError",
    "PlacementResult",
    "CircuitDefinition",
]
