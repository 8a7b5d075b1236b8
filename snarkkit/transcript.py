"""Fiat-Shamir transcripts and a keccak256 transcript in the EVM encoding."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

from Crypto.Hash import keccak

from snarkkit.arithmetic import FieldElement
from snarkkit.curve import BN254_G1, Curve, Point

_WORD = 0x20


class TranscriptError(Exception):
    """Failure to read, write or absorb transcript data."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class Transcript(ABC):
    """Operations shared by prover and verifier transcripts."""

    @abstractmethod
    def squeeze_challenge(self) -> FieldElement:
        """Derive a challenge from everything absorbed so far."""

    def squeeze_n_challenges(self, n: int) -> list[FieldElement]:
        return [self.squeeze_challenge() for _ in range(n)]

    @abstractmethod
    def common_ec_point(self, ec_point: Point) -> None:
        """Absorb an elliptic curve point."""

    @abstractmethod
    def common_scalar(self, scalar: FieldElement) -> None:
        """Absorb a scalar."""


class TranscriptRead(Transcript):
    """Transcript that reads a proof."""

    @abstractmethod
    def read_scalar(self) -> FieldElement:
        """Read a scalar and absorb it."""

    def read_n_scalars(self, n: int) -> list[FieldElement]:
        return [self.read_scalar() for _ in range(n)]

    @abstractmethod
    def read_ec_point(self) -> Point:
        """Read an elliptic curve point and absorb it."""

    def read_n_ec_points(self, n: int) -> list[Point]:
        return [self.read_ec_point() for _ in range(n)]


class TranscriptWrite(Transcript):
    """Transcript that writes a proof."""

    @abstractmethod
    def write_scalar(self, scalar: FieldElement) -> None:
        """Absorb a scalar and write it out."""

    @abstractmethod
    def write_ec_point(self, ec_point: Point) -> None:
        """Absorb a point and write it out."""


def _keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


class EvmTranscript(TranscriptRead, TranscriptWrite):
    """Keccak256 transcript with big-endian 32-byte words, as checked on the EVM.

    The stream is read from when verifying and written to when proving.
    """

    def __init__(self, stream: BinaryIO, curve: Curve = BN254_G1) -> None:
        if curve.scalar_field.num_bytes != _WORD:
            raise ValueError("scalar field elements must encode into 32 bytes")
        self._stream = stream
        self._curve = curve
        self._buf = bytearray()

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def finalize(self) -> BinaryIO:
        """Return the underlying stream."""
        return self._stream

    def squeeze_challenge(self) -> FieldElement:
        data = bytes(self._buf)
        if len(data) == _WORD:
            data += b"\x01"
        digest = _keccak256(data)
        self._buf = bytearray(digest)
        return self._curve.scalar_field(int.from_bytes(digest, "big"))

    def common_ec_point(self, ec_point: Point) -> None:
        coordinates = ec_point.coordinates()
        if coordinates is None:
            raise TranscriptError("other", "Invalid elliptic curve point")
        for coordinate in coordinates:
            self._buf += coordinate.to_bytes_le()[::-1]

    def common_scalar(self, scalar: FieldElement) -> None:
        self._buf += scalar.to_bytes_le()[::-1]

    def _read_exact(self, n: int) -> bytes:
        try:
            data = self._stream.read(n)
        except OSError as err:
            raise TranscriptError("other", str(err)) from err
        if data is None or len(data) < n:
            raise TranscriptError("unexpected_eof", "failed to fill whole buffer")
        return data

    def _write_all(self, data: bytes) -> None:
        try:
            self._stream.write(data)
        except OSError as err:
            raise TranscriptError("other", str(err)) from err

    def read_scalar(self) -> FieldElement:
        field = self._curve.scalar_field
        data = self._read_exact(field.num_bytes)
        try:
            scalar = field.from_bytes_le(data[::-1])
        except ValueError as err:
            raise TranscriptError(
                "other", "Invalid scalar encoding in proof"
            ) from err
        self.common_scalar(scalar)
        return scalar

    def read_ec_point(self) -> Point:
        field = self._curve.base_field
        x_data = self._read_exact(field.num_bytes)
        y_data = self._read_exact(field.num_bytes)
        try:
            x = field.from_bytes_le(x_data[::-1])
            y = field.from_bytes_le(y_data[::-1])
            if not x and not y:
                ec_point = self._curve.identity()
            else:
                ec_point = self._curve.point(x, y)
        except ValueError as err:
            raise TranscriptError(
                "other", "Invalid elliptic curve point encoding in proof"
            ) from err
        self.common_ec_point(ec_point)
        return ec_point

    def write_scalar(self, scalar: FieldElement) -> None:
        self.common_scalar(scalar)
        self._write_all(scalar.to_bytes_le()[::-1])

    def write_ec_point(self, ec_point: Point) -> None:
        self.common_ec_point(ec_point)
        coordinates = ec_point.coordinates()
        if coordinates is None:
            raise TranscriptError(
                "other", "Cannot write points at infinity to the transcript"
            )
        x, y = coordinates
        self._write_all(x.to_bytes_le()[::-1])
        self._write_all(y.to_bytes_le()[::-1])