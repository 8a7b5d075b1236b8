"""Settings for turning a verifying key into a PLONK protocol description."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Config:
    """How a verifying key is compiled into a protocol.

    Every ``set_*`` and ``with_*`` method returns a new configuration and
    leaves the original untouched.
    """

    zk: bool = False
    query_instance: bool = False
    num_proof: int = 0
    num_instance: tuple[int, ...] = ()
    accumulator_indices: Optional[tuple[tuple[int, int], ...]] = None

    @classmethod
    def kzg(cls) -> "Config":
        """Configuration for KZG: instances are not queried."""
        return cls(zk=True, query_instance=False, num_proof=1)

    @classmethod
    def ipa(cls) -> "Config":
        """Configuration for IPA: instances are queried."""
        return cls(zk=True, query_instance=True, num_proof=1)

    def set_zk(self, zk: bool) -> "Config":
        return replace(self, zk=bool(zk))

    def set_query_instance(self, query_instance: bool) -> "Config":
        return replace(self, query_instance=bool(query_instance))

    def with_num_proof(self, num_proof: int) -> "Config":
        """Set how many proofs are verified together; must be positive."""
        if num_proof <= 0:
            raise ValueError("num_proof must be positive")
        return replace(self, num_proof=num_proof)

    def with_num_instance(self, num_instance: Iterable[int]) -> "Config":
        """Set the number of values in each instance column."""
        return replace(self, num_instance=tuple(num_instance))

    def with_accumulator_indices(
        self, accumulator_indices: Optional[Iterable[tuple[int, int]]]
    ) -> "Config":
        """Set the ``(column, row)`` positions of accumulator limbs, or ``None``."""
        if accumulator_indices is None:
            return replace(self, accumulator_indices=None)
        indices = tuple((int(poly), int(row)) for poly, row in accumulator_indices)
        return replace(self, accumulator_indices=indices)