"""Deferred multi-scalar multiplication and a bucket-method evaluator."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from snarkkit.arithmetic import FieldElement
from snarkkit.curve import Point


@dataclass
class Msm:
    """An unevaluated sum ``constant * gen + sum(scalar_i * base_i)``."""

    constant_term: Optional[FieldElement] = None
    scalars: list[FieldElement] = field(default_factory=list)
    bases: list[Point] = field(default_factory=list)

    @classmethod
    def constant(cls, constant: FieldElement) -> "Msm":
        """Msm holding only a constant, to be multiplied with a generator."""
        return cls(constant_term=constant)

    @classmethod
    def base(cls, base: Point, one: Optional[FieldElement] = None) -> "Msm":
        """Msm holding a single base with scalar one."""
        if one is None:
            one = base.curve.scalar_field.one
        return cls(scalars=[one], bases=[base])

    def size(self) -> int:
        """Number of distinct bases."""
        return len(self.bases)

    def split(self) -> tuple["Msm", Optional[FieldElement]]:
        """Separate the constant from the bases."""
        return Msm(None, list(self.scalars), list(self.bases)), self.constant_term

    def try_into_constant(self) -> Optional[FieldElement]:
        """The constant if there are no bases, else ``None``."""
        if self.bases:
            return None
        if self.constant_term is None:
            raise ValueError("msm has neither bases nor a constant")
        return self.constant_term

    def evaluate(self, gen: Optional[Point] = None) -> Point:
        """Compute the point, using ``gen`` as the base of the constant."""
        scalars = list(self.scalars)
        bases = list(self.bases)
        if self.constant_term is not None:
            if gen is None:
                raise ValueError("a generator is needed to evaluate the constant")
            scalars.insert(0, self.constant_term)
            bases.insert(0, gen)
        return multi_scalar_multiplication(scalars, bases)

    def _copy(self) -> "Msm":
        return Msm(self.constant_term, list(self.scalars), list(self.bases))

    def _push(self, scalar: FieldElement, base: Point) -> None:
        for pos, existing in enumerate(self.bases):
            if existing == base:
                self.scalars[pos] = self.scalars[pos] + scalar
                return
        self.scalars.append(scalar)
        self.bases.append(base)

    def _extend(self, other: "Msm") -> None:
        if other.constant_term is not None:
            if self.constant_term is None:
                self.constant_term = other.constant_term
            else:
                self.constant_term = self.constant_term + other.constant_term
        for scalar, base in zip(other.scalars, other.bases):
            self._push(scalar, base)

    def __add__(self, other: "Msm") -> "Msm":
        if not isinstance(other, Msm):
            return NotImplemented
        result = self._copy()
        result._extend(other)
        return result

    def __radd__(self, other) -> "Msm":
        if other == 0:
            return self._copy()
        return NotImplemented

    def __sub__(self, other: "Msm") -> "Msm":
        if not isinstance(other, Msm):
            return NotImplemented
        return self + (-other)

    def __neg__(self) -> "Msm":
        constant = None if self.constant_term is None else -self.constant_term
        return Msm(constant, [-s for s in self.scalars], list(self.bases))

    def __mul__(self, factor) -> "Msm":
        if isinstance(factor, Msm):
            return NotImplemented
        constant = None if self.constant_term is None else self.constant_term * factor
        return Msm(constant, [s * factor for s in self.scalars], list(self.bases))

    __rmul__ = __mul__


def multi_scalar_multiplication(
    scalars: Sequence[FieldElement], bases: Sequence[Point]
) -> Point:
    """Sum of ``scalar * base`` over the pairs, by the bucket method."""
    if len(scalars) != len(bases):
        raise ValueError("scalars and bases differ in length")
    if not scalars:
        raise ValueError("at least one scalar and base are required")

    curve = bases[0].curve
    values = [int(s) for s in scalars]
    num_bits = 8 * scalars[0].field.num_bytes
    window_size = math.ceil(math.log(len(values))) + 2
    num_buckets = (1 << window_size) - 1
    num_windows = -(-num_bits // window_size)

    result = curve.identity()
    for idx in reversed(range(num_windows)):
        for _ in range(window_size):
            result = result.double()

        buckets = [curve.identity()] * num_buckets
        shift = idx * window_size
        for value, base in zip(values, bases):
            digit = (value >> shift) & num_buckets
            if digit:
                buckets[digit - 1] = buckets[digit - 1] + base

        running_sum = curve.identity()
        for bucket in reversed(buckets):
            running_sum = running_sum + bucket
            result = result + running_sum
    return result