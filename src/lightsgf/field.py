from __future__ import annotations

from typing import Protocol, TypeVar

from .errors import FieldElementError

E = TypeVar("E")


class Field(Protocol[E]):
    """Arithmetic over the elements of a field.

    Elements are plain values; they are never asked to implement their own
    arithmetic or equality. Every algorithm in the package goes through one of
    these objects, so a different field can be swapped in without touching
    Matrix or the reducer.
    """

    def zero(self) -> E: ...

    def one(self) -> E: ...

    def equals(self, x: E, y: E) -> bool: ...

    def negate(self, x: E) -> E: ...

    def add(self, x: E, y: E) -> E: ...

    def multiply(self, x: E, y: E) -> E: ...

    def reciprocal(self, x: E) -> E:
        """Multiplicative inverse; raises ZeroDivisionError for zero()."""
        ...

    def validate(self, x) -> E:
        """Return x as an element of this field; raise FieldElementError if
        it is not one."""
        return x

    def subtract(self, x: E, y: E) -> E:
        return self.add(x, self.negate(y))

    def divide(self, x: E, y: E) -> E:
        return self.multiply(x, self.reciprocal(y))


class GF2(Field[int]):
    """The two-element field {0, 1}: addition is XOR, multiplication is AND."""

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def validate(self, x) -> int:
        if x == 0 or x == 1:
            return int(x)
        raise FieldElementError(f"{x!r} is not an element of GF(2)")

    def equals(self, x: int, y: int) -> bool:
        return self.validate(x) == self.validate(y)

    def negate(self, x: int) -> int:
        return self.validate(x)

    def add(self, x: int, y: int) -> int:
        return self.validate(x) ^ self.validate(y)

    def subtract(self, x: int, y: int) -> int:
        return self.add(x, y)

    def multiply(self, x: int, y: int) -> int:
        return self.validate(x) & self.validate(y)

    def reciprocal(self, x: int) -> int:
        if self.validate(x) == 0:
            raise ZeroDivisionError("reciprocal of zero in GF(2)")
        return 1

    def __eq__(self, other) -> bool:
        return isinstance(other, GF2)

    def __hash__(self) -> int:
        return hash(GF2)

    def __repr__(self):
        return "GF2()"


class BinaryField(Field[int]):
    """GF(2^k) with elements encoded as bitmasks of polynomial coefficients.

    The modulus is a polynomial over GF(2) in the same encoding, e.g.
    x^8 + x^4 + x^3 + x + 1 is 0b100011011 (0x11B). It must have degree at
    least 1. Irreducibility is not checked up front; a reducible modulus is
    only detected when an inverse turns out not to exist.
    """

    def __init__(self, modulus: int):
        modulus = int(modulus)
        if modulus < 2:
            raise ValueError("modulus must have degree at least 1")
        self.modulus = modulus
        self.degree = modulus.bit_length() - 1
        self._top = 1 << self.degree

    def validate(self, x) -> int:
        if 0 <= x < self._top:
            return int(x)
        raise FieldElementError(f"{x!r} is not an element of GF(2^{self.degree})")

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def equals(self, x: int, y: int) -> bool:
        return self.validate(x) == self.validate(y)

    def negate(self, x: int) -> int:
        return self.validate(x)

    def add(self, x: int, y: int) -> int:
        return self.validate(x) ^ self.validate(y)

    def subtract(self, x: int, y: int) -> int:
        return self.add(x, y)

    def multiply(self, x: int, y: int) -> int:
        x = self.validate(x)
        y = self.validate(y)
        result = 0
        while y:
            if y & 1:
                result ^= x
            y >>= 1
            x <<= 1
            if x & self._top:
                x ^= self.modulus
        return result

    def reciprocal(self, w: int) -> int:
        # extended Euclid over GF(2)[x], tracking the cofactor of w mod modulus
        y = self.validate(w)
        if y == 0:
            raise ZeroDivisionError(f"reciprocal of zero in GF(2^{self.degree})")
        if y == 1:
            return 1
        x = self.modulus
        a, b = 0, 1
        while y != 0:
            q, r = _poly_divmod(x, y)
            a, b = b, a ^ self.multiply(q, b)
            x, y = y, r
        if x != 1:
            raise ValueError(f"modulus {self.modulus:#x} is not irreducible")
        return a

    def __eq__(self, other) -> bool:
        return isinstance(other, BinaryField) and other.modulus == self.modulus

    def __hash__(self) -> int:
        return hash((BinaryField, self.modulus))

    def __repr__(self):
        return f"BinaryField({self.modulus:#x})"


def _poly_divmod(x: int, y: int) -> tuple[int, int]:
    """Quotient and remainder of polynomial division over GF(2)."""
    quotient = 0
    top_y = y.bit_length() - 1
    for i in range(x.bit_length() - y.bit_length(), -1, -1):
        if x & (1 << (top_y + i)):
            x ^= y << i
            quotient |= 1 << i
    return quotient, x


gf2 = GF2()
