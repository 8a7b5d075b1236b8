"""Run work over items or slices of a list on a pool of threads."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

T = TypeVar("T")


def _num_threads() -> int:
    return os.cpu_count() or 1


def parallelize_iter(iterable: Iterable[T], f: Callable[[T], Any]) -> None:
    """Call ``f`` on every item of ``iterable`` concurrently and wait for all.

    The first exception raised by ``f`` (in item order) is re-raised.
    """
    with ThreadPoolExecutor(max_workers=_num_threads()) as pool:
        futures = [pool.submit(f, item) for item in iterable]
    for future in futures:
        future.result()


def parallelize(values: list[T], f: Callable[[list[T], int], Any]) -> None:
    """Call ``f(chunk, start)`` over chunks of ``values`` and keep its edits.

    ``f`` may change its chunk in place; the changes are written back into
    ``values``. Small inputs are handed over whole, as one chunk at offset 0.
    """
    num_threads = _num_threads()
    chunk_size = len(values) // num_threads
    if chunk_size < num_threads:
        f(values, 0)
        return

    starts = range(0, len(values), chunk_size)
    chunks = [list(values[start:start + chunk_size]) for start in starts]
    parallelize_iter(zip(chunks, starts), lambda pair: f(*pair))
    for start, chunk in zip(starts, chunks):
        values[start:start + chunk_size] = chunk