"""Fixed catalog of gates available to circuit editors.

The time-dependent ``X^t``, ``Y^t`` and ``Z^t`` gates rotate the qubit
clockwise about their axis by ``2πt``, i.e. they apply ``R(-2πt)``, so a full
animation cycle ``t: 0 → 1`` traces one complete turn.
"""

from __future__ import annotations

import math
from typing import Dict

from .circuit import Control, Display, Gate, Operational, Swap
from .complex_number import Complex
from .matrix import HADAMARD, IDENTITY_2, PAULI_X, PAULI_Y, PAULI_Z, Matrix


def rx_raising_matrix(t: float) -> Matrix:
    r"""Return :math:`R_x(-2\pi t)`."""

    angle = math.pi * t
    c, s = math.cos(angle), math.sin(angle)
    return Matrix.square(c, Complex(0.0, s), Complex(0.0, s), c)


def ry_raising_matrix(t: float) -> Matrix:
    r"""Return :math:`R_y(-2\pi t)`."""

    angle = math.pi * t
    c, s = math.cos(angle), math.sin(angle)
    return Matrix.square(c, -s, s, c)


def rz_raising_matrix(t: float) -> Matrix:
    r"""Return :math:`R_z(-2\pi t)`."""

    angle = math.pi * t
    c, s = math.cos(angle), math.sin(angle)
    return Matrix.square(Complex(c, s), 0, 0, Complex(c, -s))


S_MATRIX = Matrix.square(1, 0, 0, Complex.I)
T_MATRIX = Matrix.square(1, 0, 0, Complex(math.sqrt(0.5), math.sqrt(0.5)))


def _operational(symbol: str, name: str, blurb: str, matrix: Matrix, **kwargs) -> Gate:
    return Gate(symbol=symbol, name=name, blurb=blurb, kind=Operational(matrix=matrix), **kwargs)


def _time_dependent(symbol: str, name: str, blurb: str, generator) -> Gate:
    return Gate(symbol=symbol, name=name, blurb=blurb, kind=Operational(generator=generator))


HADAMARD_GATE = _operational("H", "Hadamard", "Creates superposition", HADAMARD)
PAULI_X_GATE = _operational("+", "Pauli X", "Bit flip gate (NOT gate)", PAULI_X, id="X")
PAULI_Y_GATE = _operational("Y", "Pauli Y", "Bit and phase flip gate", PAULI_Y)
PAULI_Z_GATE = _operational("Z", "Pauli Z", "Phase flip gate", PAULI_Z)
IDENTITY_GATE = _operational("I", "Identity", "Leaves the qubit unchanged", IDENTITY_2)
S_GATE = _operational("S", "S Gate (Phase Gate)", "Rotates |1⟩ by π/2 around Z", S_MATRIX)
S_DAGGER_GATE = _operational(
    "S†", "S† Gate (Adjoint Phase Gate)", "Rotates |1⟩ by -π/2 around Z", S_MATRIX.adjoint()
)
T_GATE = _operational("T", "T Gate (π/8 Gate)", "Rotates |1⟩ by π/4 around Z", T_MATRIX)
T_DAGGER_GATE = _operational(
    "T†", "T† Gate (Adjoint π/8 Gate)", "Rotates |1⟩ by -π/4 around Z", T_MATRIX.adjoint()
)

X_RAISING_GATE = _time_dependent(
    "X^t", "X-Raising Gate", "Rotates clockwise about X as t goes from 0 to 1", rx_raising_matrix
)
Y_RAISING_GATE = _time_dependent(
    "Y^t", "Y-Raising Gate", "Rotates clockwise about Y as t goes from 0 to 1", ry_raising_matrix
)
Z_RAISING_GATE = _time_dependent(
    "Z^t", "Z-Raising Gate", "Rotates clockwise about Z as t goes from 0 to 1", rz_raising_matrix
)

CONTROL_GATE = Gate(
    symbol="●", name="Control", blurb="Conditions on this qubit being |1⟩",
    kind=Control(True), id="Control",
)
ANTI_CONTROL_GATE = Gate(
    symbol="○", name="Anti-Control", blurb="Conditions on this qubit being |0⟩",
    kind=Control(False), id="AntiControl",
)
SWAP_GATE = Gate(
    symbol="SWAP", name="SWAP Gate",
    blurb="Swaps two qubits. Requires two SWAP gates in the same column.",
    kind=Swap(),
)

AMPLITUDE_DISPLAY = Gate(
    symbol="Amps", name="Amplitude Display", blurb="Shows state amplitudes",
    kind=Display("amplitude"),
)
PROBABILITY_DISPLAY = Gate(
    symbol="Prob", name="Probability Display", blurb="Shows measurement probabilities",
    kind=Display("probability"),
)
BLOCH_DISPLAY = Gate(
    symbol="Bloch", name="Bloch Sphere", blurb="Displays single qubit state on Bloch sphere",
    kind=Display("bloch"),
)


GATES: Dict[str, Gate] = {
    gate.id: gate
    for gate in (
        HADAMARD_GATE,
        PAULI_X_GATE,
        PAULI_Y_GATE,
        PAULI_Z_GATE,
        IDENTITY_GATE,
        S_GATE,
        S_DAGGER_GATE,
        T_GATE,
        T_DAGGER_GATE,
        X_RAISING_GATE,
        Y_RAISING_GATE,
        Z_RAISING_GATE,
        CONTROL_GATE,
        ANTI_CONTROL_GATE,
        SWAP_GATE,
        AMPLITUDE_DISPLAY,
        PROBABILITY_DISPLAY,
        BLOCH_DISPLAY,
    )
}


def gate_by_id(gate_id: str) -> Gate:
    """Return the catalog gate registered under ``gate_id``.

    Raises
    ------
    KeyError
        If no gate uses ``gate_id``.
    """

    try:
        return GATES[gate_id]
    except KeyError:
        raise KeyError(f"Unknown gate id '{gate_id}'") from None


__all__ = [
    "GATES",
    "gate_by_id",
    "rx_raising_matrix",
    "ry_raising_matrix",
    "rz_raising_matrix",
    "HADAMARD_GATE",
    "PAULI_X_GATE",
    "PAULI_Y_GATE",
    "PAULI_Z_GATE",
    "IDENTITY_GATE",
    "S_GATE",
    "S_DAGGER_GATE",
    "T_GATE",
    "T_DAGGER_GATE",
    "X_RAISING_GATE",
    "Y_RAISING_GATE",
    "Z_RAISING_GATE",
    "CONTROL_GATE",
    "ANTI_CONTROL_GATE",
    "SWAP_GATE",
    "AMPLITUDE_DISPLAY",
    "PROBABILITY_DISPLAY",
    "BLOCH_DISPLAY",
]
