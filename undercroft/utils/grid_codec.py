"""Run-length encoding for region-id grids sent over the wire.

Format:
  - One segment per row, rows separated by ``;``.
  - Within a row, runs separated by ``,``; a run is ``value`` or ``value*count``.
  - The whole payload is prefixed with ``R:``.

Example: rows ``[[-1, -1, 3], [3, 3, 3]]`` encode to ``R:-1*2,3;3*3``.

Wall-heavy dungeon grids typically shrink by an order of magnitude.
"""

from __future__ import annotations

from typing import List

PREFIX = "R:"


def encode_rows(rows: List[List[int]]) -> str:
    """Return the run-length encoding of row-major ``rows``.

    Args:
        rows: Row-major grid (``rows[y][x]``) of integer region ids.

    Returns:
        Encoded string starting with ``R:``.
    """
    segments = []
    for row in rows:
        runs = []
        i = 0
        while i < len(row):
            value = row[i]
            j = i + 1
            while j < len(row) and row[j] == value:
                j += 1
            count = j - i
            runs.append(f"{value}*{count}" if count > 1 else f"{value}")
            i = j
        segments.append(",".join(runs))
    return PREFIX + ";".join(segments)


def decode_rows(data: str) -> List[List[int]]:
    """Inverse of :func:`encode_rows`.

    Raises:
        ValueError: if ``data`` lacks the ``R:`` prefix or a run is malformed.
    """
    if not data.startswith(PREFIX):
        raise ValueError("not a run-length encoded grid")
    body = data[len(PREFIX):]
    rows: List[List[int]] = []
    if not body:
        return rows
    for segment in body.split(";"):
        row: List[int] = []
        if segment:
            for run in segment.split(","):
                value, _, count = run.partition("*")
                n = int(count) if count else 1
                if n < 1:
                    raise ValueError(f"bad run length in {run!r}")
                row.extend([int(value)] * n)
        rows.append(row)
    return rows


__all__ = ["encode_rows", "decode_rows"]
