"""Ready-made example circuits."""

from __future__ import annotations

from typing import List, Tuple

from .circuit import CircuitDefinition
from .gates import (
    ANTI_CONTROL_GATE,
    CONTROL_GATE,
    HADAMARD_GATE,
    IDENTITY_GATE,
    PAULI_X_GATE,
)
from .simulation_engine import InitialState

DEUTSCH_ORACLES = ("constant_zero", "constant_one", "identity", "not")


def deutsch_circuit(oracle: str) -> Tuple[CircuitDefinition, List[InitialState]]:
    """Return Deutsch's algorithm for a one-bit function and its initial states.

    Wire ``0`` is the query qubit and wire ``1`` the ancilla, prepared in
    ``|0⟩`` and ``|1⟩``.  After the final Hadamard, wire ``0`` reads ``|0⟩``
    for a constant function and ``|1⟩`` for a balanced one.

    Parameters
    ----------
    oracle:
        ``"constant_zero"`` (f(x)=0), ``"constant_one"`` (f(x)=1),
        ``"identity"`` (f(x)=x) or ``"not"`` (f(x)=¬x).
    """

    if oracle not in DEUTSCH_ORACLES:
        raise ValueError(
            f"Unknown Deutsch oracle '{oracle}'; expected one of {DEUTSCH_ORACLES}"
        )
    circuit = CircuitDefinition.empty(2)
    circuit = circuit.with_gate_placed(HADAMARD_GATE, 0, 0)
    circuit = circuit.with_gate_placed(HADAMARD_GATE, 0, 1)
    if oracle == "constant_zero":
        circuit = circuit.with_gate_placed(IDENTITY_GATE, 1, 0)
        circuit = circuit.with_gate_placed(IDENTITY_GATE, 1, 1)
    elif oracle == "constant_one":
        circuit = circuit.with_gate_placed(IDENTITY_GATE, 1, 0)
        circuit = circuit.with_gate_placed(PAULI_X_GATE, 1, 1)
    elif oracle == "identity":
        circuit = circuit.with_gate_placed(CONTROL_GATE, 1, 0)
        circuit = circuit.with_gate_placed(PAULI_X_GATE, 1, 1)
    else:
        circuit = circuit.with_gate_placed(ANTI_CONTROL_GATE, 1, 0)
        circuit = circuit.with_gate_placed(PAULI_X_GATE, 1, 1)
    circuit = circuit.with_gate_placed(HADAMARD_GATE, 2, 0)
    circuit = circuit.with_gate_placed(IDENTITY_GATE, 2, 1)
    return circuit, [InitialState.ZERO, InitialState.ONE]


def bell_circuit() -> CircuitDefinition:
    """Prepare ``(|00⟩ + |11⟩)/√2`` from ``|00⟩``."""

    circuit = CircuitDefinition.empty(2).with_gate_placed(HADAMARD_GATE, 0, 0)
    circuit = circuit.with_gate_placed(CONTROL_GATE, 1, 0)
    return circuit.with_gate_placed(PAULI_X_GATE, 1, 1)


def ghz_circuit(num_qubits: int) -> CircuitDefinition:
    """Create a ``num_qubits`` GHZ state preparation circuit."""

    circuit = CircuitDefinition.empty(num_qubits).with_gate_placed(HADAMARD_GATE, 0, 0)
    for wire in range(1, num_qubits):
        circuit = circuit.with_gate_placed(CONTROL_GATE, wire, wire - 1)
        circuit = circuit.with_gate_placed(PAULI_X_GATE, wire, wire)
    return circuit


__all__ = ["DEUTSCH_ORACLES", "deutsch_circuit", "bell_circuit", "ghz_circuit"]
