"""Pure editing commands issued by circuit editors.

Each command takes the current :class:`~qubitviz.circuit.CircuitDefinition`
and returns the edited value; the input is never modified.
"""

from __future__ import annotations

from .circuit import CircuitDefinition, Gate, PlacementResult


def place(circuit: CircuitDefinition, gate: Gate, col: int, wire: int) -> CircuitDefinition:
    """Place ``gate`` with its top-left corner at ``(col, wire)``.

    Raises :class:`~qubitviz.circuit.PlacementError` when the gate does not fit.
    """

    return circuit.with_gate_placed(gate, col, wire)


def try_place(circuit: CircuitDefinition, gate: Gate, col: int, wire: int) -> PlacementResult:
    """Place ``gate`` and report a failed placement through the result."""

    return circuit.try_gate_placed(gate, col, wire)


def remove(circuit: CircuitDefinition, col: int, wire: int) -> CircuitDefinition:
    return circuit.with_gate_removed(col, wire)


def set_qubit_count(circuit: CircuitDefinition, num_qubits: int) -> CircuitDefinition:
    return circuit.with_num_qubits(num_qubits)


def trim(circuit: CircuitDefinition) -> CircuitDefinition:
    return circuit.trimmed()


__all__ = ["place", "try_place", "remove", "set_qubit_count", "trim"]
