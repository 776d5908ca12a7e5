"""Compact run-length encoding of tile layers.

Format:
  - Row-major walk over the layer, consecutive equal codes collapsed.
  - Runs joined with ``,``; a run of length 1 is just ``code``, longer runs
    are ``code*count``. Prefixed with ``R:`` marker.

  R:139*40,15,15*3,161

Limitations:
  - Assumes non-negative integer codes.
  - Width is not stored; the decoder needs it to rebuild rows.
"""

from __future__ import annotations

from typing import List, Optional


def compress_layer(layer: List[List[int]]) -> str:
    """Return the ``R:`` run-length string for a 2D layer.

    Args:
        layer: Row-major list of rows of integer tile codes.

    Returns:
        Encoded string; ``"R:"`` for an empty layer.
    """
    pieces = []
    prev = None
    count = 0
    for row in layer:
        for code in row:
            if code == prev:
                count += 1
                continue
            if prev is not None:
                pieces.append(f"{prev}*{count}" if count > 1 else str(prev))
            prev, count = code, 1
    if prev is not None:
        pieces.append(f"{prev}*{count}" if count > 1 else str(prev))
    return "R:" + ",".join(pieces)


def decompress_layer(data: str, width: int) -> Optional[List[List[int]]]:
    """Inverse of :func:`compress_layer`.

    Args:
        data: ``R:`` encoded string.
        width: Row length of the original layer.

    Returns:
        Rebuilt layer, or None when the input is malformed or its cell count
        is not a multiple of ``width``.
    """
    if not data or not data.startswith("R:") or width <= 0:
        return None
    body = data[2:]
    if not body:
        return []
    cells: List[int] = []
    try:
        for token in body.split(","):
            code_s, _, count_s = token.partition("*")
            code = int(code_s)
            count = int(count_s) if count_s else 1
            if code < 0 or count < 1:
                return None
            cells.extend([code] * count)
    except ValueError:
        return None
    if len(cells) % width:
        return None
    return [cells[i : i + width] for i in range(0, len(cells), width)]


__all__ = ["compress_layer", "decompress_layer"]
