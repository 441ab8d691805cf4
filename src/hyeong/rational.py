"""Exact rational runtime value with a poison (NaN) state."""

from __future__ import annotations

import math
from fractions import Fraction

TOO_BIG = "너무 커엇..."
_SCALAR_LIMIT = 0x110000


class HyeongRational:
    """An exact fraction, or NaN.

    NaN propagates through ``+``, ``*`` and negation, and is never equal to or
    ordered against anything, itself included.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Fraction | int | None = None) -> None:
        self._value = None if value is None else Fraction(value)

    @classmethod
    def from_int(cls, value: int) -> "HyeongRational":
        return cls(Fraction(value))

    @classmethod
    def new(cls, numerator: int, denominator: int) -> "HyeongRational":
        if denominator == 0:
            return NAN
        return cls(Fraction(numerator, denominator))

    @classmethod
    def zero(cls) -> "HyeongRational":
        return cls(Fraction(0))

    @classmethod
    def one(cls) -> "HyeongRational":
        return cls(Fraction(1))

    @property
    def is_nan(self) -> bool:
        return self._value is None

    @property
    def fraction(self) -> Fraction:
        if self._value is None:
            raise ValueError("the value is NaN")
        return self._value

    def reciprocal(self) -> "HyeongRational":
        if self._value is None or self._value == 0:
            return NAN
        return HyeongRational(1 / self._value)

    def floor(self) -> int:
        return math.floor(self.fraction)

    def __add__(self, other: "HyeongRational") -> "HyeongRational":
        if not isinstance(other, HyeongRational):
            return NotImplemented
        if self._value is None or other._value is None:
            return NAN
        return HyeongRational(self._value + other._value)

    def __mul__(self, other: "HyeongRational") -> "HyeongRational":
        if not isinstance(other, HyeongRational):
            return NotImplemented
        if self._value is None or other._value is None:
            return NAN
        return HyeongRational(self._value * other._value)

    def __neg__(self) -> "HyeongRational":
        if self._value is None:
            return NAN
        return HyeongRational(-self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HyeongRational):
            return NotImplemented
        if self._value is None or other._value is None:
            return False
        return self._value == other._value

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, other: "HyeongRational") -> bool:
        if not isinstance(other, HyeongRational):
            return NotImplemented
        if self._value is None or other._value is None:
            return False
        return self._value < other._value

    def __gt__(self, other: "HyeongRational") -> bool:
        if not isinstance(other, HyeongRational):
            return NotImplemented
        if self._value is None or other._value is None:
            return False
        return self._value > other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        if self._value is None:
            return TOO_BIG
        floor = math.floor(self._value)
        if floor < 0:
            return str(-floor)
        if floor >= _SCALAR_LIMIT:
            return TOO_BIG
        return chr(floor)

    def __repr__(self) -> str:
        if self._value is None:
            return "HyeongRational(NaN)"
        return f"HyeongRational({self._value})"


NAN = HyeongRational()
