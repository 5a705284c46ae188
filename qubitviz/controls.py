"""Control predicates over computational basis states."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable, List

from .config import MAX_QUBITS


class ContradictoryControlsError(ValueError):
    """Raised when two control sets require different values of one qubit."""


@dataclass(frozen=True)
class Controls:
    """Bounded bitset describing which qubits condition an operation.

    Bit ``k`` of ``inclusion_mask`` marks engine qubit ``k`` as a control and
    the same bit of ``desired_value_mask`` gives the value it must hold.  The
    masks are limited to :attr:`MAX_WIDTH` bits, the largest register the
    simulator supports.
    """

    inclusion_mask: int = 0
    desired_value_mask: int = 0

    MAX_WIDTH: ClassVar[int] = MAX_QUBITS
    NONE: ClassVar["Controls"]

    def __post_init__(self) -> None:
        limit = 1 << self.MAX_WIDTH
        for name in ("inclusion_mask", "desired_value_mask"):
            value = getattr(self, name)
            if not 0 <= value < limit:
                raise ValueError(
                    f"{name}={value:#x} exceeds the {self.MAX_WIDTH}-qubit control width"
                )
        if self.desired_value_mask & ~self.inclusion_mask:
            raise ValueError("desired_value_mask sets bits outside inclusion_mask")

    @classmethod
    def on(cls, qubit_index: int, desired_value: bool = True) -> "Controls":
        """Return controls conditioning on a single engine qubit."""

        if qubit_index < 0:
            raise ValueError("Qubit index cannot be negative")
        if qubit_index >= cls.MAX_WIDTH:
            raise ValueError(
                f"Qubit index {qubit_index} exceeds the {cls.MAX_WIDTH}-qubit control width"
            )
        inclusion = 1 << qubit_index
        return cls(inclusion, inclusion if desired_value else 0)

    @classmethod
    def from_indices(
        cls, controls: Iterable[int] = (), anti_controls: Iterable[int] = ()
    ) -> "Controls":
        """Combine ``controls`` (|1⟩) and ``anti_controls`` (|0⟩) into one predicate."""

        result = cls.NONE
        for q in controls:
            result = result.and_(cls.on(q, True))
        for q in anti_controls:
            result = result.and_(cls.on(q, False))
        return result

    def is_satisfied_by(self, basis_state: int) -> bool:
        return (basis_state & self.inclusion_mask) == self.desired_value_mask

    def and_(self, other: "Controls") -> "Controls":
        """Return the conjunction of ``self`` and ``other``.

        Raises
        ------
        ContradictoryControlsError
            If both sets include a qubit but disagree on its value.
        """

        common = self.inclusion_mask & other.inclusion_mask
        if (self.desired_value_mask & common) != (other.desired_value_mask & common):
            raise ContradictoryControlsError(
                f"Contradictory controls: {self} and {other}"
            )
        return Controls(
            self.inclusion_mask | other.inclusion_mask,
            self.desired_value_mask | other.desired_value_mask,
        )

    __and__ = and_

    def is_none(self) -> bool:
        return self.inclusion_mask == 0

    def qubits(self) -> List[int]:
        """Return the engine indices included in the predicate."""
        return [k for k in range(self.MAX_WIDTH) if (self.inclusion_mask >> k) & 1]

    def copy(self) -> "Controls":
        return Controls(self.inclusion_mask, self.desired_value_mask)

    def __str__(self) -> str:
        if self.is_none():
            return "Controls.NONE"
        parts = [f"q{k}={(self.desired_value_mask >> k) & 1}" for k in self.qubits()]
        return f"Controls({', '.join(parts)})"


Controls.NONE = Controls(0, 0)


__all__ = ["Controls", "ContradictoryControlsError"]
