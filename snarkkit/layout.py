"""Polynomial indices and queries of a compiled PLONK constraint system.

Polynomials are numbered in this order: fixed columns, permutation fixed
columns, instance columns of every proof, advice columns phase by phase,
permuted lookup columns, permutation and lookup grand products, the random
polynomial, and finally the quotient.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from itertools import chain
from typing import Optional, Union

from snarkkit.arithmetic import Rotation

_COLUMN_KINDS = frozenset({"fixed", "instance", "advice"})


@dataclass(frozen=True)
class Query:
    """Evaluation of polynomial ``poly`` at the point rotated by ``rotation``."""

    poly: int
    rotation: Rotation = field(default_factory=Rotation.cur)

    def __post_init__(self) -> None:
        if not isinstance(self.rotation, Rotation):
            object.__setattr__(self, "rotation", Rotation(int(self.rotation)))


def _pairs(items: Iterable) -> tuple[tuple[int, int], ...]:
    return tuple((int(a), int(b)) for a, b in items)


@dataclass(frozen=True)
class ConstraintSystemShape:
    """What the layout needs to know about a constraint system.

    Column queries are ``(column_index, rotation)`` pairs; permutation columns
    are ``(kind, column_index)`` pairs with kind ``"fixed"``, ``"instance"`` or
    ``"advice"``. The phase of an advice column is read from
    ``advice_column_phase``.
    """

    degree: int
    num_fixed_columns: int
    advice_column_phase: tuple[int, ...] = ()
    challenge_phase: tuple[int, ...] = ()
    num_lookups: int = 0
    blinding_factors: int = 0
    permutation_columns: tuple[tuple[str, int], ...] = ()
    instance_queries: tuple[tuple[int, int], ...] = ()
    advice_queries: tuple[tuple[int, int], ...] = ()
    fixed_queries: tuple[tuple[int, int], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "advice_column_phase", tuple(self.advice_column_phase))
        object.__setattr__(self, "challenge_phase", tuple(self.challenge_phase))
        columns = tuple((str(kind), int(index)) for kind, index in self.permutation_columns)
        for kind, _ in columns:
            if kind not in _COLUMN_KINDS:
                raise ValueError(f"unknown column kind {kind!r}")
        object.__setattr__(self, "permutation_columns", columns)
        for name in ("instance_queries", "advice_queries", "fixed_queries"):
            object.__setattr__(self, name, _pairs(getattr(self, name)))
        if self.degree < 3:
            raise ValueError("degree must be at least 3")


def _remap(phases: tuple[int, ...], num_phase: int) -> tuple[list[int], list[int]]:
    """Count columns per phase and give each column its index within its phase."""
    counts = [0] * num_phase
    indices = []
    for phase in phases:
        if not 0 <= phase < num_phase:
            raise ValueError(f"phase {phase} is outside 0..{num_phase - 1}")
        indices.append(counts[phase])
        counts[phase] += 1
    return counts, indices


class PolynomialLayout:
    """Numbering of every polynomial and query of ``num_proof`` aggregated proofs."""

    def __init__(
        self,
        cs: ConstraintSystemShape,
        zk: bool,
        query_instance: bool,
        num_instance: Iterable[int],
        num_proof: int,
    ) -> None:
        if not zk:
            raise ValueError("only zero-knowledge layouts are supported")
        if num_proof <= 0:
            raise ValueError("num_proof must be positive")
        self.cs = cs
        self.zk = True
        self.query_instance = bool(query_instance)
        self.num_proof = num_proof
        self.degree = cs.degree
        self.permutation_chunk_size = cs.degree - 2

        num_phase = max(cs.advice_column_phase, default=0) + 1
        self._num_advice, self._advice_index = _remap(cs.advice_column_phase, num_phase)
        self._num_challenge, self._challenge_index = _remap(cs.challenge_phase, num_phase)

        self.num_fixed = cs.num_fixed_columns
        self.num_permutation_fixed = len(cs.permutation_columns)
        self._num_instance = list(num_instance)
        self.num_lookup_permuted = 2 * cs.num_lookups
        self.num_permutation_z = -(-self.num_permutation_fixed // self.permutation_chunk_size)
        self.num_lookup_z = cs.num_lookups

    # Counts

    def num_preprocessed(self) -> int:
        return self.num_fixed + self.num_permutation_fixed

    def num_instance(self) -> list[int]:
        """Instance column sizes, repeated for every proof."""
        return self._num_instance * self.num_proof

    def num_witness(self) -> list[int]:
        """Witness polynomials per phase, then permuted lookups, then grand products."""
        return [self.num_proof * num for num in self._num_advice] + [
            self.num_proof * self.num_lookup_permuted,
            self.num_proof * (self.num_permutation_z + self.num_lookup_z) + int(self.zk),
        ]

    def num_challenge(self) -> list[int]:
        """Challenges per phase (theta in the last), then beta and gamma, then alpha."""
        counts = list(self._num_challenge)
        counts[-1] += 1
        return counts + [2, 1]

    # Offsets

    def _instance_offset(self) -> int:
        return self.num_preprocessed()

    def _witness_offset(self) -> int:
        return self._instance_offset() + len(self.num_instance())

    def _cs_witness_offset(self) -> int:
        return self._witness_offset() + sum(self.num_witness()[: len(self._num_advice)])

    def _rotation_last(self) -> Rotation:
        return Rotation(-(self.cs.blinding_factors + 1))

    def _query(
        self, kind: str, column_index: int, rotation: Union[Rotation, int], t: int
    ) -> Query:
        if kind == "fixed":
            offset = 0
        elif kind == "instance":
            offset = self._instance_offset() + t * len(self._num_instance)
        elif kind == "advice":
            phase = self.cs.advice_column_phase[column_index]
            column_index = self._advice_index[column_index]
            phase_offset = self.num_proof * sum(self._num_advice[:phase])
            offset = self._witness_offset() + phase_offset + t * self._num_advice[phase]
        else:
            raise ValueError(f"unknown column kind {kind!r}")
        return Query(offset + column_index, rotation)

    def _permutation_poly(self, t: int, i: int) -> int:
        z_offset = self._cs_witness_offset() + self.num_witness()[len(self._num_advice)]
        return z_offset + t * self.num_permutation_z + i

    def _lookup_poly(self, t: int, i: int) -> tuple[int, int, int]:
        permuted_offset = self._cs_witness_offset()
        z_offset = (
            permuted_offset
            + self.num_witness()[len(self._num_advice)]
            + self.num_proof * self.num_permutation_z
        )
        z = z_offset + t * self.num_lookup_z + i
        permuted_input = permuted_offset + 2 * (t * self.num_lookup_z + i)
        return z, permuted_input, permuted_input + 1

    # Queries

    def instance_queries(self, t: int) -> list[Query]:
        if not self.query_instance:
            return []
        return [self._query("instance", index, rot, t) for index, rot in self.cs.instance_queries]

    def advice_queries(self, t: int) -> list[Query]:
        return [self._query("advice", index, rot, t) for index, rot in self.cs.advice_queries]

    def fixed_queries(self) -> list[Query]:
        return [self._query("fixed", index, rot, 0) for index, rot in self.cs.fixed_queries]

    def permutation_fixed_queries(self) -> list[Query]:
        return [Query(self.num_fixed + i, 0) for i in range(self.num_permutation_fixed)]

    def permutation_z_queries(self, t: int, evaluation: bool) -> list[Query]:
        """Grand product queries, ordered for evaluations or for opening."""
        last = self._rotation_last()
        zs = [self._permutation_poly(t, i) for i in range(self.num_permutation_z)]
        if evaluation:
            queries = []
            for i, z in enumerate(zs):
                queries += [Query(z, 0), Query(z, 1)]
                if i != len(zs) - 1:
                    queries.append(Query(z, last))
            return queries
        pairs = chain.from_iterable((Query(z, 0), Query(z, 1)) for z in zs)
        lasts = (Query(z, last) for z in reversed(zs[:-1]))
        return list(chain(pairs, lasts))

    def lookup_queries(self, t: int, evaluation: bool) -> list[Query]:
        """Lookup queries, ordered for evaluations or for opening."""
        queries = []
        for i in range(self.num_lookup_z):
            z, permuted_input, permuted_table = self._lookup_poly(t, i)
            if evaluation:
                queries += [
                    Query(z, 0),
                    Query(z, 1),
                    Query(permuted_input, 0),
                    Query(permuted_input, -1),
                    Query(permuted_table, 0),
                ]
            else:
                queries += [
                    Query(z, 0),
                    Query(permuted_input, 0),
                    Query(permuted_table, 0),
                    Query(permuted_input, -1),
                    Query(z, 1),
                ]
        return queries

    def quotient_query(self) -> Query:
        return Query(self._witness_offset() + sum(self.num_witness()), 0)

    def random_query(self) -> Optional[Query]:
        if not self.zk:
            return None
        return Query(self._witness_offset() + sum(self.num_witness()) - 1, 0)

    def _random_queries(self) -> list[Query]:
        query = self.random_query()
        return [] if query is None else [query]

    def evaluations(self) -> list[Query]:
        """Queries whose evaluations appear in the proof, in proof order."""
        proofs = range(self.num_proof)
        return list(
            chain(
                chain.from_iterable(self.instance_queries(t) for t in proofs),
                chain.from_iterable(self.advice_queries(t) for t in proofs),
                self.fixed_queries(),
                self._random_queries(),
                self.permutation_fixed_queries(),
                chain.from_iterable(self.permutation_z_queries(t, True) for t in proofs),
                chain.from_iterable(self.lookup_queries(t, True) for t in proofs),
            )
        )

    def queries(self) -> list[Query]:
        """Every query to be opened, in opening order."""
        per_proof = chain.from_iterable(
            chain(
                self.instance_queries(t),
                self.advice_queries(t),
                self.permutation_z_queries(t, False),
                self.lookup_queries(t, False),
            )
            for t in range(self.num_proof)
        )
        return list(
            chain(
                per_proof,
                self.fixed_queries(),
                self.permutation_fixed_queries(),
                [self.quotient_query()],
                self._random_queries(),
            )
        )

    def accumulator_indices(
        self, accumulator_indices: Iterable[tuple[int, int]]
    ) -> list[list[tuple[int, int]]]:
        """Shift ``(column, row)`` positions into every proof's instance columns."""
        indices = _pairs(accumulator_indices)
        width = len(self._num_instance)
        return [
            [(poly + t * width, row) for poly, row in indices]
            for t in range(self.num_proof)
        ]