import logging
import math

import numpy as np
import pytest

from qubitviz import (
    CircuitDefinition,
    GateColumn,
    InitialState,
    Matrix,
    SimulationEngine,
    SwapColumnError,
    column_operator,
    deutsch_circuit,
    initial_state_vector,
    simulate,
)
from qubitviz import config
from qubitviz.gates import (
    ANTI_CONTROL_GATE,
    BLOCH_DISPLAY,
    CONTROL_GATE,
    HADAMARD_GATE,
    IDENTITY_GATE,
    PAULI_X_GATE,
    PAULI_Z_GATE,
    SWAP_GATE,
    X_RAISING_GATE,
)

H = 1 / math.sqrt(2)


def _amps(state: Matrix) -> np.ndarray:
    return state.to_numpy()[:, 0]


def test_hadamard_on_zero():
    circuit = CircuitDefinition.empty(1).with_gate_placed(HADAMARD_GATE, 0, 0)
    state, stats = simulate(circuit)
    np.testing.assert_allclose(_amps(state), [H, H])
    assert stats.probabilities() == pytest.approx([0.5, 0.5])


def test_double_hadamard_is_identity():
    circuit = CircuitDefinition.empty(1).with_gate_placed(HADAMARD_GATE, 0, 0)
    circuit = circuit.with_gate_placed(HADAMARD_GATE, 1, 0)
    for label in ("0", "1", "+", "-i"):
        state, _ = simulate(circuit, [label])
        assert state.is_approximately_equal_to(initial_state_vector([label]), 1e-12)


def test_pauli_x_flips_zero():
    circuit = CircuitDefinition.empty(1).with_gate_placed(PAULI_X_GATE, 0, 0)
    state, _ = simulate(circuit)
    np.testing.assert_allclose(_amps(state), [0, 1])


def test_empty_circuit_returns_initial_state():
    state, stats = simulate(CircuitDefinition.empty(3), ["1", "0", "+"])
    assert state == initial_state_vector(["1", "0", "+"])
    assert stats.probabilities() == pytest.approx([0, 0, 0, 0, 0.5, 0.5, 0, 0])


def test_initial_state_vector_puts_wire_zero_in_the_high_bit():
    vec = initial_state_vector([InitialState.ONE, InitialState.ZERO])
    np.testing.assert_allclose(_amps(vec), [0, 0, 1, 0])
    assert initial_state_vector([]) == Matrix.col(1)


def test_initial_state_vectors():
    np.testing.assert_allclose(_amps(InitialState.PLUS_I.vector), [H, 1j * H])
    np.testing.assert_allclose(_amps(InitialState.MINUS.vector), [H, -H])
    assert InitialState.parse("-i") is InitialState.MINUS_I
    assert InitialState.MINUS_I.label == "|-i⟩"
    with pytest.raises(ValueError):
        InitialState.parse("2")


def test_controlled_not_with_satisfied_control():
    circuit = CircuitDefinition.empty(2).with_gate_placed(CONTROL_GATE, 0, 0)
    circuit = circuit.with_gate_placed(PAULI_X_GATE, 0, 1)
    state, _ = simulate(circuit, ["1", "0"])
    np.testing.assert_allclose(_amps(state), [0, 0, 0, 1])


def test_controlled_not_with_unsatisfied_control():
    circuit = CircuitDefinition.empty(2).with_gate_placed(CONTROL_GATE, 0, 0)
    circuit = circuit.with_gate_placed(PAULI_X_GATE, 0, 1)
    state, _ = simulate(circuit, ["0", "0"])
    np.testing.assert_allclose(_amps(state), [1, 0, 0, 0])


def test_anti_control_fires_on_zero():
    circuit = CircuitDefinition.empty(2).with_gate_placed(ANTI_CONTROL_GATE, 0, 1)
    circuit = circuit.with_gate_placed(PAULI_X_GATE, 0, 0)
    state, _ = simulate(circuit)
    np.testing.assert_allclose(_amps(state), [0, 0, 1, 0])
    state, _ = simulate(circuit, ["0", "1"])
    np.testing.assert_allclose(_amps(state), [0, 1, 0, 0])


def test_controls_apply_to_every_operation_in_column():
    circuit = CircuitDefinition.empty(3).with_gate_placed(CONTROL_GATE, 0, 0)
    circuit = circuit.with_gate_placed(PAULI_X_GATE, 0, 1)
    circuit = circuit.with_gate_placed(PAULI_X_GATE, 0, 2)
    state, _ = simulate(circuit, ["1", "0", "0"])
    np.testing.assert_allclose(_amps(state), np.eye(8)[7])
    state, _ = simulate(circuit, ["0", "0", "0"])
    np.testing.assert_allclose(_amps(state), np.eye(8)[0])


def test_bell_state_from_presets_layout():
    circuit = CircuitDefinition.empty(2).with_gate_placed(HADAMARD_GATE, 0, 0)
    circuit = circuit.with_gate_placed(CONTROL_GATE, 1, 0)
    circuit = circuit.with_gate_placed(PAULI_X_GATE, 1, 1)
    state, _ = simulate(circuit)
    np.testing.assert_allclose(_amps(state), [H, 0, 0, H], atol=1e-12)


@pytest.mark.parametrize(
    "oracle, balanced",
    [("constant_zero", False), ("constant_one", False), ("identity", True), ("not", True)],
)
def test_deutsch_algorithm(oracle, balanced):
    circuit, states = deutsch_circuit(oracle)
    _, stats = simulate(circuit, states)
    p0, p1 = stats.marginal_probabilities_per_wire()[0]
    assert p1 == pytest.approx(1.0 if balanced else 0.0, abs=1e-9)
    assert p0 + p1 == pytest.approx(1.0)


def test_swap_column_exchanges_wires():
    circuit = CircuitDefinition.empty(3).with_gate_placed(SWAP_GATE, 0, 0)
    circuit = circuit.with_gate_placed(SWAP_GATE, 0, 2)
    state, _ = simulate(circuit, ["1", "0", "0"])
    assert state == initial_state_vector(["0", "0", "1"])


def test_swap_column_ignores_other_slots():
    circuit = CircuitDefinition.empty(3).with_gate_placed(SWAP_GATE, 0, 0)
    circuit = circuit.with_gate_placed(SWAP_GATE, 0, 1)
    circuit = circuit.with_gate_placed(PAULI_X_GATE, 0, 2)
    state, _ = simulate(circuit, ["1", "0", "0"])
    assert state == initial_state_vector(["0", "1", "0"])


def test_degenerate_swap_column_is_inert(caplog):
    circuit = CircuitDefinition.empty(2).with_gate_placed(SWAP_GATE, 0, 0)
    circuit = circuit.with_gate_placed(PAULI_X_GATE, 0, 1)
    with caplog.at_level(logging.DEBUG, logger="qubitviz.simulation_engine"):
        state, _ = simulate(circuit)
    assert state == initial_state_vector(["0", "1"])
    assert "unpaired SWAP" in caplog.text


def test_degenerate_swap_column_strict_mode():
    circuit = CircuitDefinition.empty(3)
    for wire in range(3):
        circuit = circuit.with_gate_placed(SWAP_GATE, 0, wire)
    with pytest.raises(SwapColumnError):
        SimulationEngine(strict_swap_columns=True).simulate(circuit)
    result = SimulationEngine(strict_swap_columns=False).simulate(circuit)
    assert result.state == initial_state_vector(["0", "0", "0"])


def test_strict_mode_defaults_to_config(monkeypatch):
    monkeypatch.setattr(config.DEFAULT, "strict_swap_columns", True)
    circuit = CircuitDefinition.empty(2).with_gate_placed(SWAP_GATE, 0, 0)
    with pytest.raises(SwapColumnError):
        simulate(circuit)


def test_display_gates_do_not_change_state():
    circuit = CircuitDefinition.empty(2).with_gate_placed(BLOCH_DISPLAY, 0, 0)
    circuit = circuit.with_gate_placed(IDENTITY_GATE, 0, 1)
    state, _ = simulate(circuit, ["+", "1"])
    assert state.is_approximately_equal_to(initial_state_vector(["+", "1"]), 1e-12)


def test_columns_apply_in_order():
    circuit = CircuitDefinition.empty(1).with_gate_placed(HADAMARD_GATE, 0, 0)
    circuit = circuit.with_gate_placed(PAULI_Z_GATE, 1, 0)
    state, _ = simulate(circuit)
    np.testing.assert_allclose(_amps(state), [H, -H])


def test_time_dependent_gate_follows_t():
    circuit = CircuitDefinition.empty(1).with_gate_placed(X_RAISING_GATE, 0, 0)
    engine = SimulationEngine()
    assert engine.simulate(circuit, t=0.0).stats.probabilities() == pytest.approx([1, 0])
    half = engine.simulate(circuit, t=0.5)
    assert half.t == 0.5
    assert half.stats.probabilities() == pytest.approx([0, 1], abs=1e-12)
    quarter = engine.simulate(circuit, t=0.25)
    assert quarter.stats.probabilities() == pytest.approx([0.5, 0.5])
    assert engine.simulate(circuit, t=1.0).stats.probabilities() == pytest.approx(
        [1, 0], abs=1e-12
    )


def test_column_operator_is_unitary():
    column = GateColumn([CONTROL_GATE, HADAMARD_GATE, X_RAISING_GATE])
    op = column_operator(column, 3, t=0.3)
    assert (op.adjoint() @ op).is_approximately_equal_to(Matrix.identity(8), 1e-12)


def test_simulation_result_fields():
    circuit = CircuitDefinition.empty(2)
    result = SimulationEngine().simulate(circuit, ["+", InitialState.ONE])
    assert result.initial_states == (InitialState.PLUS, InitialState.ONE)
    assert result.stats.num_qubits == 2
    assert result.t == 0.0


@pytest.mark.parametrize("t", [-0.1, 1.5])
def test_time_out_of_range(t):
    with pytest.raises(ValueError):
        simulate(CircuitDefinition.empty(1), t=t)


def test_initial_state_count_and_labels_are_validated():
    circuit = CircuitDefinition.empty(2)
    with pytest.raises(ValueError):
        simulate(circuit, ["0"])
    with pytest.raises(ValueError):
        simulate(circuit, ["0", "x"])


def test_verbose_simulation_logs_each_column(monkeypatch, caplog):
    circuit = CircuitDefinition.empty(1).with_gate_placed(HADAMARD_GATE, 0, 0)
    circuit = circuit.with_gate_placed(HADAMARD_GATE, 1, 0)
    with caplog.at_level(logging.INFO, logger="qubitviz.simulation_engine"):
        simulate(circuit)
    assert "[simulation]" not in caplog.text

    monkeypatch.setattr(config.DEFAULT, "verbose_simulation", True)
    with caplog.at_level(logging.INFO, logger="qubitviz.simulation_engine"):
        simulate(circuit)
    lines = [r for r in caplog.records if "[simulation]" in r.getMessage()]
    assert len(lines) == 2
    assert "column=1" in lines[1].getMessage()
