from qubitviz import CircuitDefinition, place, remove, set_qubit_count, trim, try_place
from qubitviz.gates import HADAMARD_GATE, PAULI_X_GATE, SWAP_GATE


def test_editing_commands_are_pure():
    circuit = CircuitDefinition.empty(2)
    edited = place(circuit, HADAMARD_GATE, 0, 0)
    edited = place(edited, PAULI_X_GATE, 2, 1)
    assert circuit.is_empty()
    assert edited.num_columns == 3

    removed = remove(edited, 2, 1)
    assert removed.num_columns == 1
    assert trim(removed) is removed
    assert remove(removed, 0, 0) == circuit

    grown = set_qubit_count(edited, 3)
    assert grown.num_qubits == 3
    assert edited.num_qubits == 2


def test_try_place_result():
    circuit = CircuitDefinition.empty(1)
    assert not try_place(circuit, HADAMARD_GATE, 0, 1).ok
    result = try_place(circuit, SWAP_GATE, 0, 0)
    assert result.ok
    assert result.circuit.gate_at(0, 0) is SWAP_GATE
