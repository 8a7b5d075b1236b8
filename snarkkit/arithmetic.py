"""Prime fields, rotations, evaluation domains and field helpers."""

from __future__ import annotations

import itertools
import operator
import secrets
from dataclasses import dataclass
from dataclasses import field as dc_field
from functools import cached_property, reduce
from typing import Generic, Iterable, Iterator, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class PrimeField:
    """A prime field given by its modulus and a multiplicative generator."""

    modulus: int
    generator: int
    name: str = ""

    def __post_init__(self) -> None:
        if self.modulus < 3 or self.modulus % 2 == 0:
            raise ValueError("modulus must be an odd prime")

    @property
    def num_bits(self) -> int:
        return self.modulus.bit_length()

    @property
    def num_bytes(self) -> int:
        return (self.num_bits + 7) // 8

    @cached_property
    def two_adicity(self) -> int:
        """Largest ``s`` with ``2**s`` dividing ``modulus - 1``."""
        t = self.modulus - 1
        s = 0
        while t % 2 == 0:
            t //= 2
            s += 1
        return s

    @cached_property
    def two_adic_root(self) -> "FieldElement":
        """Root of unity generating the subgroup of order ``2**two_adicity``."""
        odd = (self.modulus - 1) >> self.two_adicity
        return self(pow(self.generator, odd, self.modulus))

    @property
    def zero(self) -> "FieldElement":
        return FieldElement(self, 0)

    @property
    def one(self) -> "FieldElement":
        return FieldElement(self, 1)

    def __call__(self, value: Union[int, "FieldElement"]) -> "FieldElement":
        if isinstance(value, FieldElement):
            if value.field != self:
                raise ValueError("element belongs to a different field")
            return value
        if isinstance(value, int):
            return FieldElement(self, value % self.modulus)
        raise TypeError(f"cannot make a field element from {type(value).__name__}")

    def from_bytes_le(self, data: bytes) -> "FieldElement":
        """Decode a canonical little-endian encoding."""
        if len(data) != self.num_bytes:
            raise ValueError(f"expected {self.num_bytes} bytes, got {len(data)}")
        value = int.from_bytes(data, "little")
        if value >= self.modulus:
            raise ValueError("encoding is not canonical")
        return FieldElement(self, value)

    def random(self, rng=None) -> "FieldElement":
        """Uniformly random element, drawn from ``rng`` if one is given."""
        if rng is None:
            return FieldElement(self, secrets.randbelow(self.modulus))
        return FieldElement(self, rng.randrange(self.modulus))


@dataclass(frozen=True, eq=False)
class FieldElement:
    """An element of a :class:`PrimeField`, kept in canonical form."""

    field: PrimeField
    value: int

    def _coerce(self, other) -> Optional[int]:
        if isinstance(other, FieldElement):
            if other.field != self.field:
                raise ValueError("elements of different fields")
            return other.value
        if isinstance(other, int):
            return other % self.field.modulus
        return None

    def _make(self, value: int) -> "FieldElement":
        return FieldElement(self.field, value % self.field.modulus)

    def __add__(self, other):
        value = self._coerce(other)
        return NotImplemented if value is None else self._make(self.value + value)

    __radd__ = __add__

    def __sub__(self, other):
        value = self._coerce(other)
        return NotImplemented if value is None else self._make(self.value - value)

    def __rsub__(self, other):
        value = self._coerce(other)
        return NotImplemented if value is None else self._make(value - self.value)

    def __mul__(self, other):
        value = self._coerce(other)
        return NotImplemented if value is None else self._make(self.value * value)

    __rmul__ = __mul__

    def __truediv__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self * FieldElement(self.field, value).invert()

    def __rtruediv__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self.invert() * value

    def __neg__(self) -> "FieldElement":
        return self._make(-self.value)

    def __pow__(self, exponent: int) -> "FieldElement":
        if exponent < 0:
            return self.invert() ** -exponent
        return FieldElement(self.field, pow(self.value, exponent, self.field.modulus))

    def __eq__(self, other) -> bool:
        if isinstance(other, FieldElement):
            return self.field == other.field and self.value == other.value
        if isinstance(other, int):
            return self.value == other % self.field.modulus
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.field.modulus, self.value))

    def __bool__(self) -> bool:
        return self.value != 0

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"FieldElement({self.value:#x})"

    def invert(self) -> "FieldElement":
        """Multiplicative inverse; zero has none."""
        if self.value == 0:
            raise ZeroDivisionError("zero has no inverse")
        return FieldElement(self.field, pow(self.value, -1, self.field.modulus))

    def square(self) -> "FieldElement":
        return self._make(self.value * self.value)

    def to_bytes_le(self) -> bytes:
        return self.value.to_bytes(self.field.num_bytes, "little")


@dataclass(frozen=True, order=True)
class Rotation:
    """Rotation on a multiplicative group."""

    value: int

    @classmethod
    def cur(cls) -> "Rotation":
        return cls(0)

    @classmethod
    def prev(cls) -> "Rotation":
        return cls(-1)

    @classmethod
    def next(cls) -> "Rotation":
        return cls(1)

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class Domain:
    """Multiplicative subgroup of size ``2**k`` with the given generator."""

    k: int
    gen: FieldElement
    n: int = dc_field(init=False)
    n_inv: FieldElement = dc_field(init=False)
    gen_inv: FieldElement = dc_field(init=False)

    def __post_init__(self) -> None:
        n = 1 << self.k
        object.__setattr__(self, "n", n)
        object.__setattr__(self, "n_inv", self.gen.field(n).invert())
        object.__setattr__(self, "gen_inv", self.gen.invert())

    def rotate_scalar(
        self, scalar: FieldElement, rotation: Union[Rotation, int]
    ) -> FieldElement:
        """Move ``scalar`` by ``rotation`` steps of the generator."""
        steps = int(rotation)
        if steps == 0:
            return scalar
        if steps > 0:
            return scalar * self.gen**steps
        return scalar * self.gen_inv ** (-steps)


class Fraction(Generic[T]):
    """Numerator and denominator kept apart until the denominator is inverted."""

    def __init__(self, numer: Optional[T], denom: T) -> None:
        self._numer = numer
        self._denom = denom
        self._eval: Optional[T] = None
        self._inverted = False

    @classmethod
    def one_over(cls, denom: T) -> "Fraction[T]":
        return cls(None, denom)

    @property
    def denom(self) -> Optional[T]:
        """The denominator, or ``None`` once it has been taken for inversion."""
        return None if self._inverted else self._denom

    def take_denom(self) -> Optional[T]:
        """Hand out the denominator for inversion, once."""
        if self._inverted:
            return None
        self._inverted = True
        return self._denom

    def set_inverted_denom(self, value: T) -> None:
        """Store the inverse of the denominator handed out by ``take_denom``."""
        if not self._inverted:
            raise RuntimeError("denominator has not been taken for inversion")
        self._denom = value

    def evaluate(self) -> T:
        """Evaluate and cache the fraction."""
        if not self._inverted:
            raise RuntimeError("denominator has not been inverted")
        if self._eval is None:
            if self._numer is None:
                self._eval = self._denom
            else:
                self._eval = self._numer * self._denom
                self._numer = None
        return self._eval

    @property
    def evaluated(self) -> T:
        if self._eval is None:
            raise RuntimeError("fraction has not been evaluated")
        return self._eval


def batch_invert_and_mul(values: list[FieldElement], coeff) -> None:
    """Replace every non-zero value by ``coeff / value`` in place."""
    nonzero = [index for index, value in enumerate(values) if value]
    if not nonzero:
        raise ValueError("no non-zero values to invert")
    products = list(itertools.accumulate((values[i] for i in nonzero), operator.mul))
    acc = products[-1].invert() * coeff
    prefixes = itertools.chain(reversed(products[:-1]), [products[0].field.one])
    for index, prefix in zip(reversed(nonzero), prefixes):
        value = values[index]
        values[index] = acc * prefix
        acc = acc * value


def batch_invert(values: list[FieldElement]) -> None:
    """Invert every non-zero value in place."""
    batch_invert_and_mul(values, 1)


def root_of_unity(field: PrimeField, k: int) -> FieldElement:
    """Generator of the subgroup of order ``2**k``."""
    if not 0 <= k <= field.two_adicity:
        raise ValueError(f"k must be between 0 and {field.two_adicity}")
    root = field.two_adic_root
    for _ in range(field.two_adicity - k):
        root = root.square()
    return root


def modulus(field: PrimeField) -> int:
    return field.modulus


def fe_from_big(field: PrimeField, big: int) -> FieldElement:
    """Field element equal to ``big``, which must already be reduced."""
    if not 0 <= big < field.modulus:
        raise ValueError("integer is out of the field's range")
    return FieldElement(field, big)


def fe_to_big(fe: FieldElement) -> int:
    return fe.value


def fe_to_fe(fe: FieldElement, field: PrimeField) -> FieldElement:
    """Move an element into another field, reducing it there."""
    return fe_from_big(field, fe_to_big(fe) % field.modulus)


def fe_from_limbs(
    limbs: Iterable[FieldElement], field: PrimeField, bits: int
) -> FieldElement:
    """Recompose limbs of ``bits`` bits each, least significant first."""
    limbs = list(limbs)
    if not limbs:
        raise ValueError("at least one limb is required")
    big = sum(fe_to_big(limb) << (bits * i) for i, limb in enumerate(limbs))
    return fe_from_big(field, big)


def fe_to_limbs(
    fe: FieldElement, field: PrimeField, num_limbs: int, bits: int
) -> list[FieldElement]:
    """Split into ``num_limbs`` limbs of ``bits`` bits, least significant first."""
    big = fe_to_big(fe)
    mask = (1 << bits) - 1
    return [fe_from_big(field, (big >> (bits * i)) & mask) for i in range(num_limbs)]


def powers(scalar: FieldElement) -> Iterator[FieldElement]:
    """Yield ``scalar**0, scalar**1, scalar**2, ...`` without end."""
    power = scalar.field.one
    while True:
        yield power
        power = power * scalar


def inner_product(lhs: Iterable[FieldElement], rhs: Iterable[FieldElement]):
    """Sum of pairwise products; 0 when both sides are empty."""
    products = [a * b for a, b in zip(lhs, rhs, strict=True)]
    if not products:
        return 0
    return reduce(operator.add, products)


BN254_FR = PrimeField(
    modulus=21888242871839275222246405745257275088548364400416034343698204186575808495617,
    generator=7,
    name="bn254 Fr",
)

BN254_FQ = PrimeField(
    modulus=21888242871839275222246405745257275088696311157297823662689037894645226208583,
    generator=3,
    name="bn254 Fq",
)