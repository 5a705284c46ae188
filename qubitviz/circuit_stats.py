"""Measurement statistics derived from a final state vector."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterator, List

import numpy as np

from . import config
from .circuit import CircuitDefinition
from .complex_number import Complex
from .matrix import Matrix

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlochVector:
    """Cartesian Bloch-sphere coordinates of a single qubit."""

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    @property
    def length(self) -> float:
        """Distance from the origin; ``1`` for pure states, less when mixed."""
        return float(np.sqrt(self.x**2 + self.y**2 + self.z**2))


def _default_state(num_qubits: int) -> Matrix:
    values = np.zeros((1 << num_qubits, 1), dtype=np.complex128)
    values[0, 0] = 1.0
    return Matrix.from_array(values)


class CircuitStats:
    """Probabilities, marginals, reduced density matrices and Bloch vectors.

    Parameters
    ----------
    circuit:
        Circuit the state belongs to.  Only ``num_qubits`` is used.
    final_state:
        Column vector with ``2**num_qubits`` amplitudes.  A missing or
        malformed vector is replaced by ``|0…0⟩`` and a warning is logged.

    Qubit indices are engine indices: qubit ``k`` is bit ``k`` of the basis
    label, which is wire ``num_qubits - 1 - k``.
    """

    def __init__(self, circuit: CircuitDefinition, final_state: Matrix | None):
        self.circuit = circuit
        n = circuit.num_qubits
        expected = 1 << n
        if (
            not isinstance(final_state, Matrix)
            or final_state.width != 1
            or final_state.height != expected
        ):
            LOGGER.warning(
                "CircuitStats: final state %s is invalid for %d qubits; "
                "defaulting to |0...0>",
                None
                if not isinstance(final_state, Matrix)
                else f"{final_state.width}x{final_state.height}",
                n,
            )
            final_state = _default_state(n)
        self.final_state = final_state
        self._amps = final_state.to_numpy()[:, 0]
        total = float(np.sum(np.abs(self._amps) ** 2))
        if abs(total - 1.0) > config.DEFAULT.probability_tolerance:
            LOGGER.warning(
                "CircuitStats: probabilities sum to %.6f, expected 1", total
            )

    @classmethod
    def for_empty_circuit(cls, circuit: CircuitDefinition) -> "CircuitStats":
        """Return statistics of the untouched ``|0…0⟩`` register."""
        return cls(circuit, _default_state(circuit.num_qubits))

    @property
    def num_qubits(self) -> int:
        return self.circuit.num_qubits

    # ------------------------------------------------------------------
    def amplitudes(self) -> List[Complex]:
        return [Complex(float(a.real), float(a.imag)) for a in self._amps]

    def probabilities(self) -> List[float]:
        """Return ``|amplitude|**2`` for every basis state."""

        if self.num_qubits == 0:
            return [1.0]
        return [float(p) for p in np.abs(self._amps) ** 2]

    def marginal_probabilities_per_qubit(self) -> List[List[float]]:
        """Return ``[P(q=0), P(q=1)]`` for each engine qubit ``q``."""

        probs = np.asarray(self.probabilities())
        indices = np.arange(len(probs))
        marginals = []
        for q in range(self.num_qubits):
            bit = (indices >> q) & 1
            marginals.append([float(probs[bit == 0].sum()), float(probs[bit == 1].sum())])
        return marginals

    def marginal_probabilities_per_wire(self) -> List[List[float]]:
        """Return the marginals ordered by wire, top wire first."""
        return list(reversed(self.marginal_probabilities_per_qubit()))

    def density_matrix(self, qubit_index: int) -> Matrix:
        """Return the reduced 2x2 density matrix of engine qubit ``qubit_index``.

        All other qubits are traced out.

        Raises
        ------
        IndexError
            If ``qubit_index`` is not a qubit of the circuit.
        """

        n = self.num_qubits
        if n == 0:
            return Matrix.square(1, 0, 0, 0)
        if not 0 <= qubit_index < n:
            raise IndexError(
                f"Qubit index {qubit_index} out of range for {n} qubits"
            )
        amps = self._amps
        indices = np.arange(len(amps))
        zero = indices[((indices >> qubit_index) & 1) == 0]
        one = zero | (1 << qubit_index)
        rho00 = float(np.sum(np.abs(amps[zero]) ** 2))
        rho11 = float(np.sum(np.abs(amps[one]) ** 2))
        rho01 = complex(np.sum(amps[zero] * np.conj(amps[one])))
        return Matrix.square(rho00, rho01, rho01.conjugate(), rho11)

    def bloch_vector(self, qubit_index: int) -> BlochVector:
        """Return the Bloch vector of engine qubit ``qubit_index``.

        ``x = Re(ρ01 + ρ10)``, ``y = Re(i(ρ01 − ρ10))`` and ``z = ρ00 − ρ11``,
        which maps ``|+i⟩`` to ``(0, 1, 0)``.
        """

        rho = self.density_matrix(qubit_index)
        rho00 = rho.cell(0, 0).real
        rho11 = rho.cell(1, 1).real
        rho01 = rho.cell(1, 0)
        rho10 = rho.cell(0, 1)
        x = rho01.plus(rho10).real
        y = rho01.minus(rho10).times(Complex.I).real
        return BlochVector(x=x, y=y, z=rho00 - rho11)

    def ket_notation(
        self, digits: int | None = None, threshold: float | None = None
    ) -> str:
        """Return the state as a sum of kets, e.g. ``0.71|00⟩ 0.71|11⟩``.

        Basis labels list wire ``0`` first.  Amplitudes whose squared
        magnitude does not exceed ``threshold`` are omitted.
        """

        if digits is None:
            digits = config.DEFAULT.ket_digits
        if threshold is None:
            threshold = config.DEFAULT.ket_threshold
        n = self.num_qubits
        terms = []
        for i, amp in enumerate(self.amplitudes()):
            if amp.norm2() > threshold:
                label = format(i, "b").zfill(n) if n else ""
                terms.append(f"{amp.format(digits)}|{label}⟩")
        if not terms:
            return f"|{'0' * n}⟩"
        return " ".join(terms)


__all__ = ["BlochVector", "CircuitStats"]
