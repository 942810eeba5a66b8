"""
Ratio Module - Exact rational number used for every cell value.
"""

import math
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Union


@total_ordering
@dataclass(frozen=True)
class Ratio:
    """
    Exact rational number kept in lowest terms.

    The denominator is always positive and never zero. Zero is stored as 0/1.
    Construct through ``Ratio(numer, denom)``, ``Ratio.new`` or
    ``Ratio.from_int``; all of them reduce.

    Attributes:
        numer: Numerator (carries the sign)
        denom: Denominator (always > 0)
    """
    numer: int
    denom: int = 1

    def __post_init__(self):
        if self.denom == 0:
            raise ZeroDivisionError(f"Ratio denominator must be non-zero: {self.numer}/0")

        gcd = math.gcd(self.numer, self.denom)
        numer = self.numer // gcd
        denom = self.denom // gcd
        if denom < 0:
            numer, denom = -numer, -denom

        # Frozen dataclass: write the reduced form through object.__setattr__
        object.__setattr__(self, "numer", numer)
        object.__setattr__(self, "denom", denom)

    @classmethod
    def new(cls, numer: int, denom: int) -> 'Ratio':
        """
        Create a reduced Ratio.

        Args:
            numer: Numerator
            denom: Denominator (must be non-zero)

        Returns:
            Ratio in lowest terms

        Raises:
            ZeroDivisionError: If denom is zero
        """
        return cls(numer, denom)

    @classmethod
    def from_int(cls, value: int) -> 'Ratio':
        """Create a unit-denominator Ratio."""
        return cls(value, 1)

    @property
    def is_integer(self) -> bool:
        return self.denom == 1

    @property
    def is_zero(self) -> bool:
        return self.numer == 0

    def add(self, other: 'Ratio') -> 'Ratio':
        lcm = self.denom * other.denom // math.gcd(self.denom, other.denom)
        return Ratio(
            self.numer * (lcm // self.denom) + other.numer * (lcm // other.denom),
            lcm,
        )

    def sub(self, other: 'Ratio') -> 'Ratio':
        return self.add(other.mul(-1))

    def mul(self, other: Union['Ratio', int]) -> 'Ratio':
        """
        Multiply by another Ratio or by an integer scalar.

        Args:
            other: Ratio or int

        Returns:
            Product in lowest terms
        """
        if isinstance(other, Ratio):
            return Ratio(self.numer * other.numer, self.denom * other.denom)
        return Ratio(self.numer * other, self.denom)

    def div(self, other: 'Ratio') -> Optional['Ratio']:
        """
        Divide by another Ratio.

        Args:
            other: Divisor

        Returns:
            Quotient, or None when the divisor is zero
        """
        if other.numer == 0:
            return None
        return Ratio(self.numer * other.denom, self.denom * other.numer)

    def __add__(self, other):
        if isinstance(other, int):
            other = Ratio.from_int(other)
        if not isinstance(other, Ratio):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        # int + Ratio, and sum() starting from 0
        if not isinstance(other, int):
            return NotImplemented
        return Ratio.from_int(other).add(self)

    def __sub__(self, other):
        if isinstance(other, int):
            other = Ratio.from_int(other)
        if not isinstance(other, Ratio):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        if not isinstance(other, int):
            return NotImplemented
        return Ratio.from_int(other).sub(self)

    def __mul__(self, other):
        if not isinstance(other, (Ratio, int)):
            return NotImplemented
        return self.mul(other)

    def __rmul__(self, other):
        if not isinstance(other, int):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other):
        if isinstance(other, int):
            other = Ratio.from_int(other)
        if not isinstance(other, Ratio):
            return NotImplemented
        result = self.div(other)
        if result is None:
            raise ZeroDivisionError(f"Cannot divide {self} by zero")
        return result

    def __neg__(self) -> 'Ratio':
        return Ratio(-self.numer, self.denom)

    def __lt__(self, other):
        if isinstance(other, int):
            other = Ratio.from_int(other)
        if not isinstance(other, Ratio):
            return NotImplemented
        # Denominators are positive so cross multiplication keeps the order
        return self.numer * other.denom < other.numer * self.denom

    def __str__(self) -> str:
        if self.denom == 1:
            return f"{self.numer}"
        return f"{self.numer}/{self.denom}"
