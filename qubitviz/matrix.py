from __future__ import annotations

"""Dense complex matrices and the system-wide operator builders.

A :class:`Matrix` stores its entries in a flat, read-only ``float64`` buffer of
interleaved ``(real, imag)`` pairs in row-major order, so cell ``(col, row)``
lives at offset ``(row * width + col) * 2``.  Arithmetic is delegated to numpy
by viewing the buffer as a ``complex128`` array.

Basis-state labels follow the little-endian convention: bit ``k`` of an
integer label is engine qubit ``k``.  Editors that number wires from the top
must translate with ``engine = num_qubits - 1 - wire`` before calling the
operator builders.
"""

import math
import numbers
from typing import Any, Iterable, Sequence

import numpy as np

from .complex_number import Complex
from .controls import Controls


def _as_complex(value: Any) -> complex:
    if isinstance(value, Complex):
        return complex(value)
    return complex(Complex.from_value(value))


def _is_scalar(value: Any) -> bool:
    return isinstance(value, Complex) or (
        isinstance(value, numbers.Number) and not isinstance(value, bool)
    )


class Matrix:
    """Immutable dense complex matrix.

    Parameters
    ----------
    width, height:
        Number of columns and rows.
    buffer:
        Flat sequence of ``2 * width * height`` reals holding interleaved
        real and imaginary parts.
    """

    __slots__ = ("width", "height", "buffer")

    def __init__(self, width: int, height: int, buffer: Sequence[float] | np.ndarray):
        data = np.array(buffer, dtype=np.float64).reshape(-1)
        if width < 0 or height < 0 or data.size != width * height * 2:
            raise ValueError(
                f"Matrix buffer length ({data.size}) does not match dimensions "
                f"W:{width} H:{height} (*2={width * height * 2})"
            )
        data.flags.writeable = False
        self.width = int(width)
        self.height = int(height)
        self.buffer = data

    # ------------------------------------------------------------------
    # numpy bridges
    # ------------------------------------------------------------------
    @classmethod
    def from_array(cls, values: Any) -> "Matrix":
        """Create a matrix from a 2-D array-like of complex entries."""

        arr = np.asarray(values, dtype=np.complex128)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got shape {arr.shape}")
        height, width = arr.shape
        buffer = np.empty(width * height * 2, dtype=np.float64)
        flat = arr.reshape(-1)
        buffer[0::2] = flat.real
        buffer[1::2] = flat.imag
        return cls(width, height, buffer)

    def to_numpy(self) -> np.ndarray:
        """Return a writable ``complex128`` array of shape ``(height, width)``."""

        values = self.buffer[0::2] + 1j * self.buffer[1::2]
        return values.reshape(self.height, self.width)

    # ------------------------------------------------------------------
    def cell(self, col: int, row: int) -> Complex:
        if col < 0 or row < 0 or col >= self.width or row >= self.height:
            raise IndexError(
                f"Matrix cell ({col}, {row}) out of range for "
                f"{self.width}x{self.height} matrix"
            )
        i = (row * self.width + col) * 2
        return Complex(float(self.buffer[i]), float(self.buffer[i + 1]))

    def copy(self) -> "Matrix":
        return Matrix(self.width, self.height, self.buffer.copy())

    def is_equal_to(self, other: Any) -> bool:
        return self.is_approximately_equal_to(other, 1e-9)

    def is_approximately_equal_to(self, other: Any, epsilon: float) -> bool:
        if not isinstance(other, Matrix):
            return False
        if self.width != other.width or self.height != other.height:
            return False
        return bool(np.all(np.abs(self.buffer - other.buffer) <= epsilon))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.is_equal_to(other)

    __hash__ = None  # type: ignore[assignment]

    def times(self, other: Any) -> "Matrix":
        """Return the scalar multiple or matrix product ``self · other``."""

        if _is_scalar(other):
            return Matrix.from_array(self.to_numpy() * _as_complex(other))
        if not isinstance(other, Matrix):
            raise TypeError(f"Invalid argument for Matrix.times: {type(other)!r}")
        if self.width != other.height:
            raise ValueError(
                "Matrix dimensions incompatible for multiplication: "
                f"{self.width}x{self.height} and {other.width}x{other.height}"
            )
        return Matrix.from_array(self.to_numpy() @ other.to_numpy())

    def __matmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.times(other)

    def adjoint(self) -> "Matrix":
        return Matrix.from_array(self.to_numpy().conj().T)

    def norm2(self) -> float:
        return float(np.dot(self.buffer, self.buffer))

    def tensor_product(self, other: "Matrix") -> "Matrix":
        """Return the Kronecker product ``self ⊗ other``.

        The entry at row ``r1 * other.height + r2`` and column
        ``c1 * other.width + c2`` equals ``self(c1, r1) * other(c2, r2)``.
        """

        return Matrix.from_array(np.kron(self.to_numpy(), other.to_numpy()))

    def __repr__(self) -> str:
        rows = []
        for r in range(self.height):
            rows.append(
                "[" + ", ".join(str(self.cell(c, r)) for c in range(self.width)) + "]"
            )
        return f"Matrix({self.width}x{self.height}, [{', '.join(rows)}])"

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------
    @staticmethod
    def identity(size: int) -> "Matrix":
        if size == 0:
            return Matrix(0, 0, [])
        return Matrix.from_array(np.eye(size, dtype=np.complex128))

    @staticmethod
    def square(*entries: Any) -> "Matrix":
        """Build an ``n x n`` matrix from ``n**2`` entries in row-major order."""

        n = math.isqrt(len(entries))
        if n * n != len(entries):
            raise ValueError("Need a square number of components for Matrix.square")
        values = [_as_complex(v) for v in entries]
        return Matrix.from_array(np.array(values, dtype=np.complex128).reshape(n, n))

    @staticmethod
    def col(*entries: Any) -> "Matrix":
        """Build a column vector from ``entries``."""

        values = [_as_complex(v) for v in entries]
        return Matrix.from_array(np.array(values, dtype=np.complex128).reshape(-1, 1))

    @staticmethod
    def swap_operator(q1: int, q2: int, num_qubits: int) -> "Matrix":
        """Return the permutation exchanging bits ``q1`` and ``q2`` of the basis index."""

        size = 1 << num_qubits
        if q1 == q2:
            return Matrix.identity(size)
        for q in (q1, q2):
            if not 0 <= q < num_qubits:
                raise ValueError(
                    f"Swap qubit {q} out of range for {num_qubits} qubits"
                )
        values = np.zeros((size, size), dtype=np.complex128)
        for i in range(size):
            j = i
            if ((i >> q1) & 1) != ((i >> q2) & 1):
                j ^= (1 << q1) | (1 << q2)
            values[j, i] = 1.0
        return Matrix.from_array(values)

    @staticmethod
    def gate_operator(
        gate_matrix: "Matrix",
        target_lsb: int,
        num_qubits: int,
        span: int = 1,
    ) -> "Matrix":
        """Extend ``gate_matrix`` to the full ``num_qubits`` register.

        Parameters
        ----------
        gate_matrix:
            ``2**span x 2**span`` block acting on qubits
            ``target_lsb .. target_lsb + span - 1``.
        target_lsb:
            Engine index of the least significant qubit the gate acts on.
        num_qubits:
            Size of the register.
        span:
            Number of qubits covered by ``gate_matrix``.

        Raises
        ------
        ValueError
            If the gate dimensions do not match ``span`` or the span does not
            fit inside the register.
        """

        dim = 1 << span
        if gate_matrix.width != dim or gate_matrix.height != dim:
            raise ValueError(
                f"Gate matrix dimensions ({gate_matrix.width}x{gate_matrix.height}) "
                f"do not match span (2^{span} = {dim})"
            )
        if target_lsb < 0 or target_lsb + span > num_qubits:
            raise ValueError(
                f"Target qubit {target_lsb} with span {span} out of bounds for "
                f"{num_qubits} qubits"
            )
        if num_qubits == 0:
            if span == 0:
                return gate_matrix
            return Matrix.identity(1)

        top = target_lsb + span - 1
        result: Matrix | None = None
        k = num_qubits - 1
        while k >= 0:
            if k == top:
                factor = gate_matrix
                k -= span
            else:
                factor = IDENTITY_2
                k -= 1
            result = factor if result is None else result.tensor_product(factor)
        assert result is not None
        return result

    @staticmethod
    def controlled_gate_operator(
        gate_matrix: "Matrix",
        target_lsb: int,
        control_indices: Iterable[int],
        anti_control_indices: Iterable[int],
        num_qubits: int,
        span: int = 1,
    ) -> "Matrix":
        """Return the operator applying ``gate_matrix`` only when controls hold.

        Column ``i`` of the result is taken from the uncontrolled system
        operator when basis state ``i`` has every control qubit at ``1`` and
        every anti-control qubit at ``0``, and from the identity otherwise.

        Raises
        ------
        ContradictoryControlsError
            If a qubit appears both as control and anti-control.
        """

        controls = Controls.from_indices(control_indices, anti_control_indices)
        for q in controls.qubits():
            if q >= num_qubits:
                raise ValueError(
                    f"Control qubit {q} out of range for {num_qubits} qubits"
                )
        size = 1 << num_qubits
        gate_op = Matrix.gate_operator(gate_matrix, target_lsb, num_qubits, span)
        satisfied = np.array(
            [controls.is_satisfied_by(i) for i in range(size)], dtype=bool
        )
        values = np.where(
            satisfied[np.newaxis, :],
            gate_op.to_numpy(),
            np.eye(size, dtype=np.complex128),
        )
        return Matrix.from_array(values)


IDENTITY_2 = Matrix.identity(2)
PAULI_X = Matrix.square(0, 1, 1, 0)
PAULI_Y = Matrix.square(0, Complex.I.times(-1), Complex.I, 0)
PAULI_Z = Matrix.square(1, 0, 0, -1)
HADAMARD = Matrix.square(1, 1, 1, -1).times(1 / math.sqrt(2))
SWAP_2_QUBIT = Matrix.square(1, 0, 0, 0, 0, 0, 1, 0, 0, 1, 0, 0, 0, 0, 0, 1)


__all__ = [
    "Matrix",
    "IDENTITY_2",
    "PAULI_X",
    "PAULI_Y",
    "PAULI_Z",
    "HADAMARD",
    "SWAP_2_QUBIT",
]
