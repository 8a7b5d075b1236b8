"""Short Weierstrass curves over prime fields, in affine coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from snarkkit.arithmetic import BN254_FQ, BN254_FR, FieldElement, PrimeField


@dataclass(frozen=True)
class Curve:
    """The curve ``y^2 = x^3 + a*x + b`` with a prime-order group."""

    base_field: PrimeField
    scalar_field: PrimeField
    a: int
    b: int
    generator_xy: tuple[int, int]
    name: str = ""

    def identity(self) -> "Point":
        return Point(self, None, None)

    def is_on_curve(self, x, y) -> bool:
        x = self.base_field(x)
        y = self.base_field(y)
        return y.square() == x * x.square() + x * self.a + self.b

    def point(self, x, y) -> "Point":
        """Point with the given coordinates, which must lie on the curve."""
        if not self.is_on_curve(x, y):
            raise ValueError("point is not on the curve")
        return Point(self, self.base_field(x), self.base_field(y))

    @property
    def generator(self) -> "Point":
        return self.point(*self.generator_xy)


@dataclass(frozen=True)
class Point:
    """Affine point; the identity has no coordinates."""

    curve: Curve
    x: Optional[FieldElement]
    y: Optional[FieldElement]

    def is_identity(self) -> bool:
        return self.x is None

    def coordinates(self) -> Optional[tuple[FieldElement, FieldElement]]:
        """``(x, y)``, or ``None`` for the identity."""
        if self.is_identity():
            return None
        return self.x, self.y

    def __neg__(self) -> "Point":
        if self.is_identity():
            return self
        return Point(self.curve, self.x, -self.y)

    def double(self) -> "Point":
        if self.is_identity() or not self.y:
            return self.curve.identity()
        slope = (self.x.square() * 3 + self.curve.a) / (self.y * 2)
        x3 = slope.square() - self.x * 2
        y3 = slope * (self.x - x3) - self.y
        return Point(self.curve, x3, y3)

    def __add__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        if other.curve != self.curve:
            raise ValueError("points on different curves")
        if self.is_identity():
            return other
        if other.is_identity():
            return self
        if self.x == other.x:
            if self.y == other.y:
                return self.double()
            return self.curve.identity()
        slope = (other.y - self.y) / (other.x - self.x)
        x3 = slope.square() - self.x - other.x
        y3 = slope * (self.x - x3) - self.y
        return Point(self.curve, x3, y3)

    def __sub__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar: Union[int, FieldElement]) -> "Point":
        if isinstance(scalar, FieldElement):
            scalar = scalar.value
        elif not isinstance(scalar, int):
            return NotImplemented
        if scalar < 0:
            return (-self) * (-scalar)
        result = self.curve.identity()
        for bit in bin(scalar)[2:]:
            result = result.double()
            if bit == "1":
                result = result + self
        return result

    __rmul__ = __mul__


BN254_G1 = Curve(
    base_field=BN254_FQ,
    scalar_field=BN254_FR,
    a=0,
    b=3,
    generator_xy=(1, 2),
    name="bn254 G1",
)