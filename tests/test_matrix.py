import math

import numpy as np
import pytest

from qubitviz import Complex, ContradictoryControlsError, Matrix
from qubitviz.matrix import HADAMARD, IDENTITY_2, PAULI_X, PAULI_Z, SWAP_2_QUBIT


def test_buffer_layout_is_row_major_interleaved():
    m = Matrix.square(1, Complex(2, 3), 4, 5)
    assert m.width == 2 and m.height == 2
    assert len(m.buffer) == 8
    assert list(m.buffer[2:4]) == [2.0, 3.0]
    assert m.cell(1, 0) == Complex(2, 3)
    assert m.cell(0, 1) == Complex(4, 0)


def test_buffer_length_is_validated():
    with pytest.raises(ValueError):
        Matrix(2, 2, [0.0] * 6)


def test_matrix_is_read_only_and_copy_is_independent():
    m = Matrix.identity(2)
    with pytest.raises(ValueError):
        m.buffer[0] = 5.0
    c = m.copy()
    assert c == m
    assert c.buffer is not m.buffer


def test_cell_out_of_range():
    m = Matrix.identity(2)
    with pytest.raises(IndexError):
        m.cell(2, 0)
    with pytest.raises(IndexError):
        m.cell(0, -1)


def test_times_scalar_and_product():
    assert PAULI_X.times(PAULI_X) == Matrix.identity(2)
    assert (HADAMARD @ HADAMARD).is_approximately_equal_to(Matrix.identity(2), 1e-12)
    scaled = Matrix.identity(2).times(Complex.I)
    assert scaled.cell(1, 1) == Complex.I
    assert Matrix.identity(2).times(2.0).cell(0, 0) == Complex(2, 0)


def test_times_dimension_mismatch():
    with pytest.raises(ValueError):
        Matrix.identity(2).times(Matrix.col(1, 0, 0))
    with pytest.raises(TypeError):
        Matrix.identity(2).times("x")


def test_adjoint_swaps_dimensions_and_conjugates():
    m = Matrix.from_array([[1, 2j, 3]])
    adj = m.adjoint()
    assert (adj.width, adj.height) == (1, 3)
    assert adj.cell(0, 1) == Complex(0, -2)


def test_tensor_product_layout_and_order():
    a = Matrix.square(1, 2, 3, 4)
    b = Matrix.square(0, 5, 6, 7)
    ab = a.tensor_product(b)
    assert (ab.width, ab.height) == (4, 4)
    for r1 in range(2):
        for c1 in range(2):
            for r2 in range(2):
                for c2 in range(2):
                    expected = a.cell(c1, r1).times(b.cell(c2, r2))
                    assert ab.cell(c1 * 2 + c2, r1 * 2 + r2) == expected
    assert not ab.is_equal_to(b.tensor_product(a))


def test_square_requires_perfect_square():
    with pytest.raises(ValueError):
        Matrix.square(1, 2, 3)


def test_identity_zero_and_col():
    assert Matrix.identity(0).width == 0
    v = Matrix.col(1, 0, Complex.I)
    assert (v.width, v.height) == (1, 3)
    assert v.cell(0, 2) == Complex.I


def test_norm2():
    assert HADAMARD.norm2() == pytest.approx(2.0)


@pytest.mark.parametrize("n", [1, 2, 3, 4])
def test_swap_operator_with_equal_qubits_is_identity(n):
    for i in range(n):
        assert Matrix.swap_operator(i, i, n) == Matrix.identity(1 << n)


def test_swap_operator_matches_two_qubit_swap():
    assert Matrix.swap_operator(0, 1, 2) == SWAP_2_QUBIT
    op = Matrix.swap_operator(0, 2, 3)
    # |001> (index 1) <-> |100> (index 4); |010> stays
    assert op.cell(1, 4) == Complex.ONE
    assert op.cell(4, 1) == Complex.ONE
    assert op.cell(2, 2) == Complex.ONE


def test_gate_operator_places_gate_by_engine_index():
    assert Matrix.gate_operator(PAULI_X, 0, 2) == IDENTITY_2.tensor_product(PAULI_X)
    assert Matrix.gate_operator(PAULI_X, 1, 2) == PAULI_X.tensor_product(IDENTITY_2)
    op = Matrix.gate_operator(SWAP_2_QUBIT, 1, 3, span=2)
    assert op == SWAP_2_QUBIT.tensor_product(IDENTITY_2)


def test_gate_operator_validation():
    with pytest.raises(ValueError):
        Matrix.gate_operator(PAULI_X, 0, 2, span=2)
    with pytest.raises(ValueError):
        Matrix.gate_operator(SWAP_2_QUBIT, 1, 2, span=2)
    with pytest.raises(ValueError):
        Matrix.gate_operator(PAULI_X, -1, 2)


def test_controlled_gate_operator_is_cnot():
    cnot = Matrix.controlled_gate_operator(PAULI_X, 0, [1], [], 2)
    expected = Matrix.square(1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 1, 0, 0, 1, 0)
    assert cnot == expected


def test_anti_controlled_gate_operator():
    op = Matrix.controlled_gate_operator(PAULI_Z, 0, [], [1], 2)
    np.testing.assert_allclose(np.diag(op.to_numpy()), [1, -1, 1, 1])


def test_controlled_gate_operator_rejects_contradiction():
    with pytest.raises(ContradictoryControlsError):
        Matrix.controlled_gate_operator(PAULI_X, 0, [1], [1], 2)


def test_hadamard_entries():
    h = 1 / math.sqrt(2)
    np.testing.assert_allclose(HADAMARD.to_numpy(), [[h, h], [h, -h]])
