"""Immutable complex number value type used by :mod:`qubitviz.matrix`."""

from __future__ import annotations

from dataclasses import dataclass
import math
import numbers
from typing import Any, ClassVar


@dataclass(frozen=True)
class Complex:
    """A complex number ``real + imag·i``.

    Arithmetic methods accept another :class:`Complex`, a real number or a
    builtin ``complex`` and always return a new instance.
    """

    real: float
    imag: float = 0.0

    ZERO: ClassVar["Complex"]
    ONE: ClassVar["Complex"]
    I: ClassVar["Complex"]

    @classmethod
    def from_value(cls, value: Any) -> "Complex":
        """Coerce ``value`` into a :class:`Complex`.

        Raises
        ------
        TypeError
            If ``value`` is not numeric.
        """

        if isinstance(value, Complex):
            return value
        if isinstance(value, bool):
            raise TypeError(f"Cannot convert {value!r} to Complex")
        if isinstance(value, numbers.Real):
            return cls(float(value), 0.0)
        if isinstance(value, numbers.Complex):
            return cls(float(value.real), float(value.imag))
        raise TypeError(f"Cannot convert {value!r} to Complex")

    # ------------------------------------------------------------------
    def is_equal_to(self, other: Any) -> bool:
        if isinstance(other, Complex):
            return self.real == other.real and self.imag == other.imag
        if isinstance(other, numbers.Number) and not isinstance(other, bool):
            c = complex(other)
            return self.real == c.real and self.imag == c.imag
        return False

    def is_approximately_equal_to(self, other: Any, epsilon: float) -> bool:
        c = Complex.from_value(other)
        return (
            abs(self.real - c.real) <= epsilon
            and abs(self.imag - c.imag) <= epsilon
        )

    def abs(self) -> float:
        return math.hypot(self.real, self.imag)

    def norm2(self) -> float:
        """Return the squared magnitude."""
        return self.real * self.real + self.imag * self.imag

    def conjugate(self) -> "Complex":
        return Complex(self.real, -self.imag)

    def plus(self, value: Any) -> "Complex":
        c = Complex.from_value(value)
        return Complex(self.real + c.real, self.imag + c.imag)

    def minus(self, value: Any) -> "Complex":
        c = Complex.from_value(value)
        return Complex(self.real - c.real, self.imag - c.imag)

    def times(self, value: Any) -> "Complex":
        c = Complex.from_value(value)
        return Complex(
            self.real * c.real - self.imag * c.imag,
            self.real * c.imag + self.imag * c.real,
        )

    def divided_by(self, value: Any) -> "Complex":
        c = Complex.from_value(value)
        d = c.norm2()
        if d == 0:
            raise ZeroDivisionError("Complex division by zero")
        n = self.times(c.conjugate())
        return Complex(n.real / d, n.imag / d)

    # ------------------------------------------------------------------
    # Python numeric protocol
    # ------------------------------------------------------------------
    def __add__(self, other: Any) -> "Complex":
        return self.plus(other)

    __radd__ = __add__

    def __sub__(self, other: Any) -> "Complex":
        return self.minus(other)

    def __rsub__(self, other: Any) -> "Complex":
        return Complex.from_value(other).minus(self)

    def __mul__(self, other: Any) -> "Complex":
        return self.times(other)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> "Complex":
        return self.divided_by(other)

    def __rtruediv__(self, other: Any) -> "Complex":
        return Complex.from_value(other).divided_by(self)

    def __neg__(self) -> "Complex":
        return Complex(-self.real, -self.imag)

    def __abs__(self) -> float:
        return self.abs()

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)

    def format(self, digits: int = 2, *, plus_for_positive_imag: bool = True) -> str:
        """Return a fixed-point representation such as ``0.50+0.50i``."""

        r = f"{self.real:.{digits}f}"
        i = f"{self.imag:.{digits}f}"
        if self.imag == 0:
            return r
        if self.real == 0:
            return f"{i}i"
        if self.imag < 0 or not plus_for_positive_imag:
            return f"{r}{i}i"
        return f"{r}+{i}i"

    def __str__(self) -> str:
        return self.format()


Complex.ZERO = Complex(0.0, 0.0)
Complex.ONE = Complex(1.0, 0.0)
Complex.I = Complex(0.0, 1.0)


__all__ = ["Complex"]
