"""Univariate polynomials in coefficient form."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import reduce
from typing import Union

from snarkkit.arithmetic import FieldElement, PrimeField
from snarkkit.parallel import parallelize


class Polynomial:
    """Univariate polynomial given by its coefficients, lowest degree first."""

    __slots__ = ("_coeffs",)

    def __init__(self, coeffs: Iterable[FieldElement] = ()) -> None:
        self._coeffs = list(coeffs)

    @classmethod
    def random(cls, n: int, field: PrimeField, rng=None) -> "Polynomial":
        """Polynomial of ``n`` uniformly random coefficients."""
        return cls(field.random(rng) for _ in range(n))

    def __len__(self) -> int:
        return len(self._coeffs)

    def __iter__(self) -> Iterator[FieldElement]:
        return iter(self._coeffs)

    def __getitem__(self, index):
        return self._coeffs[index]

    def __setitem__(self, index, value) -> None:
        self._coeffs[index] = value

    def __repr__(self) -> str:
        return f"Polynomial({self._coeffs!r})"

    def to_list(self) -> list[FieldElement]:
        """Copy of the coefficients."""
        return list(self._coeffs)

    def evaluate(self, x: FieldElement) -> FieldElement:
        """Value of the polynomial at ``x``."""
        return reduce(
            lambda acc, coeff: acc * x + coeff, reversed(self._coeffs), x.field.zero
        )

    def _combine(self, rhs: "Polynomial", op) -> "Polynomial":
        coeffs = list(self._coeffs)
        other = rhs._coeffs

        def apply(chunk: list, start: int) -> None:
            updated = [op(a, b) for a, b in zip(chunk, other[start:])]
            chunk[: len(updated)] = updated

        parallelize(coeffs, apply)
        return Polynomial(coeffs)

    def _shift_constant(self, value) -> "Polynomial":
        coeffs = list(self._coeffs)
        coeffs[0] = coeffs[0] + value
        return Polynomial(coeffs)

    def __add__(self, other: Union["Polynomial", FieldElement, int]) -> "Polynomial":
        if isinstance(other, Polynomial):
            return self._combine(other, lambda a, b: a + b)
        if isinstance(other, (FieldElement, int)):
            return self._shift_constant(other)
        return NotImplemented

    def __radd__(self, other: Union[FieldElement, int]) -> "Polynomial":
        if isinstance(other, (FieldElement, int)):
            return self._shift_constant(other)
        return NotImplemented

    def __sub__(self, other: Union["Polynomial", FieldElement, int]) -> "Polynomial":
        if isinstance(other, Polynomial):
            return self._combine(other, lambda a, b: a - b)
        if isinstance(other, (FieldElement, int)):
            return self._shift_constant(-other)
        return NotImplemented

    def __mul__(self, scalar: Union[FieldElement, int]) -> "Polynomial":
        if not isinstance(scalar, (FieldElement, int)):
            return NotImplemented
        if scalar == 0:
            return Polynomial(c * 0 for c in self._coeffs)
        if scalar == 1:
            return Polynomial(self._coeffs)
        coeffs = list(self._coeffs)

        def scale(chunk: list, _start: int) -> None:
            chunk[:] = [c * scalar for c in chunk]

        parallelize(coeffs, scale)
        return Polynomial(coeffs)

    __rmul__ = __mul__