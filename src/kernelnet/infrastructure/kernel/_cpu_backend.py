"""
Host execution of compiled kernel programs.

The program is evaluated exactly once per output coordinate. Work is split
along the outermost output axis (rows for rank 2, depth slices for rank 3);
each span writes a disjoint region of a preallocated output array, so spans
may run concurrently without synchronisation.

Notes
-----
- Spans are scheduled on a `ThreadPoolExecutor` when more than one worker is
  requested, otherwise they run inline on the calling thread.
- `run` returns only after every span has finished. The first exception raised
  by any span is re-raised to the caller and no output is returned.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, Tuple

import numpy as np

from ._thread import Thread


def spans(extent: int, parts: int) -> List[Tuple[int, int]]:
    """
    Split `range(extent)` into at most `parts` contiguous, near-equal spans.
    """
    parts = max(1, min(parts, extent))
    base, extra = divmod(extent, parts)
    out: List[Tuple[int, int]] = []
    start = 0
    for i in range(parts):
        stop = start + base + (1 if i < extra else 0)
        out.append((start, stop))
        start = stop
    return out


def fill_span(
    program: Callable[..., float],
    output: Sequence[int],
    args: Sequence[object],
    out: np.ndarray,
    start: int,
    stop: int,
) -> None:
    """
    Evaluate `program` for every cell whose outermost coordinate lies in
    `[start, stop)` and write the results into `out`.
    """
    rank = len(output)
    if rank == 1:
        for x in range(start, stop):
            out[x] = program(Thread(x), *args)
    elif rank == 2:
        width = output[0]
        for y in range(start, stop):
            row = out[y]
            for x in range(width):
                row[x] = program(Thread(x, y), *args)
    else:
        width, height = output[0], output[1]
        for z in range(start, stop):
            for y in range(height):
                row = out[z, y]
                for x in range(width):
                    row[x] = program(Thread(x, y, z), *args)


def run(
    program: Callable[..., float],
    output: Sequence[int],
    args: Sequence[object],
    *,
    max_workers: int = 1,
) -> np.ndarray:
    """
    Produce the full output tensor for `program`.

    Parameters
    ----------
    program : Callable[..., float]
        Linked kernel program taking `(thread, *args)`.
    output : Sequence[int]
        Output bounds in dispatch order `[x, y(, z)]`.
    args : Sequence[object]
        Positional tensor arguments, already validated.
    max_workers : int, optional
        Number of worker threads. Defaults to 1 (inline execution).

    Returns
    -------
    np.ndarray
        float64 array of shape `reversed(output)`.
    """
    out = np.empty(tuple(reversed(output)), dtype=np.float64)
    work = spans(output[-1], max_workers)

    if len(work) == 1:
        fill_span(program, output, args, out, *work[0])
        return out

    with ThreadPoolExecutor(max_workers=len(work)) as pool:
        futures = [
            pool.submit(fill_span, program, output, args, out, start, stop)
            for start, stop in work
        ]
        for f in futures:
            f.result()
    return out
