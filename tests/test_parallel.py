import threading
from unittest import mock

import pytest

from snarkkit.parallel import parallelize, parallelize_iter


def test_parallelize_iter_visits_every_item():
    seen = []
    lock = threading.Lock()

    def record(item):
        with lock:
            seen.append(item)

    parallelize_iter(range(20), record)
    assert sorted(seen) == list(range(20))


def test_parallelize_iter_propagates_errors():
    def fail_on_three(item):
        if item == 3:
            raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        parallelize_iter(range(6), fail_on_three)


def test_parallelize_small_input_is_one_call():
    calls = []
    values = [1, 2, 3, 4, 5]

    def double(chunk, start):
        calls.append((chunk is values, start))
        for i, value in enumerate(chunk):
            chunk[i] = value * 2

    with mock.patch("os.cpu_count", return_value=4):
        parallelize(values, double)

    assert calls == [(True, 0)]
    assert values == [2, 4, 6, 8, 10]


def test_parallelize_chunks_get_their_offsets():
    starts = []
    lock = threading.Lock()
    values = [0] * 10

    def fill(chunk, start):
        with lock:
            starts.append(start)
        for i in range(len(chunk)):
            chunk[i] = start + i

    with mock.patch("os.cpu_count", return_value=2):
        parallelize(values, fill)

    assert values == list(range(10))
    assert sorted(starts) == [0, 5]


def test_parallelize_uneven_chunks_write_back_everything():
    values = list(range(11))

    def negate(chunk, start):
        for i, value in enumerate(chunk):
            chunk[i] = -value

    with mock.patch("os.cpu_count", return_value=2):
        parallelize(values, negate)

    assert values == [-v for v in range(11)]


def test_parallelize_empty_list():
    calls = []
    parallelize([], lambda chunk, start: calls.append((list(chunk), start)))
    assert calls == [([], 0)]