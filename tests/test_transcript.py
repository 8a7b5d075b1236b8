import io

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from snarkkit.arithmetic import BN254_FQ, BN254_FR
from snarkkit.curve import BN254_G1
from snarkkit.transcript import (
    EvmTranscript,
    Transcript,
    TranscriptError,
    TranscriptRead,
    TranscriptWrite,
)

G = BN254_G1.generator


def _writer():
    return EvmTranscript(io.BytesIO())


def _reader(data: bytes):
    return EvmTranscript(io.BytesIO(data))


def test_squeeze_on_empty_transcript_is_keccak_of_nothing():
    empty_hash = 0xC5D2460186F7233C927E7DB2DCC703C0E500B653CA82273B7BFAD8045D85A470
    assert _writer().squeeze_challenge() == BN254_FR(empty_hash)


def test_write_scalar_is_big_endian_word():
    transcript = _writer()
    transcript.write_scalar(BN254_FR(1))
    assert transcript.finalize().getvalue() == bytes(31) + b"\x01"


def test_write_generator_encodes_both_coordinates():
    transcript = _writer()
    transcript.write_ec_point(G)
    data = transcript.finalize().getvalue()
    assert len(data) == 64
    assert data[:32] == bytes(31) + b"\x01"
    assert data[32:] == bytes(31) + b"\x02"


def test_round_trip_and_matching_challenges():
    scalars = [BN254_FR(5), BN254_FR(-1), BN254_FR(123456789)]
    points = [G, G.double(), G * 7]

    writer = _writer()
    for scalar in scalars:
        writer.write_scalar(scalar)
    writer_c1 = writer.squeeze_challenge()
    for point in points:
        writer.write_ec_point(point)
    writer_c2 = writer.squeeze_n_challenges(2)

    reader = _reader(writer.finalize().getvalue())
    assert reader.read_n_scalars(3) == scalars
    assert reader.squeeze_challenge() == writer_c1
    assert reader.read_n_ec_points(3) == points
    assert reader.squeeze_n_challenges(2) == writer_c2


def test_consecutive_challenges_differ():
    transcript = _writer()
    challenges = transcript.squeeze_n_challenges(3)
    assert len(challenges) == 3
    assert len(set(challenges)) == 3


def test_challenge_depends_on_absorbed_data():
    a = _writer()
    a.common_scalar(BN254_FR(1))
    b = _writer()
    b.common_scalar(BN254_FR(2))
    assert a.squeeze_challenge() != b.squeeze_challenge()
    c = _writer()
    c.common_scalar(BN254_FR(1))
    d = _writer()
    d.common_scalar(BN254_FR(1))
    assert c.squeeze_challenge() == d.squeeze_challenge()


def test_common_point_matches_its_coordinates_as_scalars_in_buffer():
    a = _writer()
    a.common_ec_point(G)
    b = _writer()
    b.common_scalar(BN254_FR(1))
    b.common_scalar(BN254_FR(2))
    assert a.squeeze_challenge() == b.squeeze_challenge()


def test_short_stream_raises_eof():
    with pytest.raises(TranscriptError) as info:
        _reader(bytes(10)).read_scalar()
    assert info.value.kind == "unexpected_eof"


def test_non_canonical_scalar_is_rejected():
    data = BN254_FR.modulus.to_bytes(32, "big")
    with pytest.raises(TranscriptError, match="Invalid scalar encoding in proof"):
        _reader(data).read_scalar()


def test_off_curve_point_is_rejected():
    data = (1).to_bytes(32, "big") + (3).to_bytes(32, "big")
    with pytest.raises(
        TranscriptError, match="Invalid elliptic curve point encoding in proof"
    ):
        _reader(data).read_ec_point()


def test_non_canonical_coordinate_is_rejected():
    data = BN254_FQ.modulus.to_bytes(32, "big") + (2).to_bytes(32, "big")
    with pytest.raises(TranscriptError) as info:
        _reader(data).read_ec_point()
    assert info.value.kind == "other"


def test_point_at_infinity_cannot_be_read():
    with pytest.raises(TranscriptError, match="Invalid elliptic curve point$"):
        _reader(bytes(64)).read_ec_point()


def test_point_at_infinity_cannot_be_written():
    transcript = _writer()
    with pytest.raises(TranscriptError):
        transcript.write_ec_point(BN254_G1.identity())
    assert transcript.finalize().getvalue() == b""


def test_evm_transcript_is_a_reading_and_writing_transcript():
    transcript = _writer()
    assert isinstance(transcript, TranscriptRead)
    assert isinstance(transcript, TranscriptWrite)
    assert isinstance(transcript, Transcript)
    with pytest.raises(TypeError):
        Transcript()


@settings(max_examples=25)
@given(st.lists(st.integers(min_value=0, max_value=BN254_FR.modulus - 1), max_size=6))
def test_scalar_round_trip(values):
    writer = _writer()
    for value in values:
        writer.write_scalar(BN254_FR(value))
    data = writer.finalize().getvalue()
    assert len(data) == 32 * len(values)
    reader = _reader(data)
    assert [int(s) for s in reader.read_n_scalars(len(values))] == values
    assert reader.squeeze_challenge() == writer.squeeze_challenge()