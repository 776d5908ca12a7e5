"""Wall autotiling: raw solid/open walls -> edge and corner tile codes.

Passes run in a fixed order and rewrite cells in place; later passes match
against codes written by earlier ones (the inner-corner passes look for
``right``/``bottom``/``left``/``top`` neighbours, the ``lu``/``ru`` passes
upgrade ``left``/``right`` cells next to a ``top``). Each pass only touches
cells currently holding its ``source`` code.

Neighbours outside the grid read as ``None`` and match nothing, so border
cells get a one-sided version of the same checks.
"""
from __future__ import annotations

from typing import Callable, Dict, NamedTuple, Optional

from .grid import Layer
from .tiles import (
    BOTTOM,
    ILB,
    ILU,
    INTERIOR,
    IRB,
    IRU,
    LB,
    LEFT,
    LU,
    OPEN,
    RB,
    RIGHT,
    RU,
    SOLID,
    TOP,
)

Reader = Callable[[int, int], Optional[int]]


class AutotilePass(NamedTuple):
    name: str
    source: int
    predicate: Callable[[Reader, int, int], bool]
    code: int


def _enclosed(at: Reader, x: int, y: int) -> bool:
    return all(at(x + dx, y + dy) != OPEN for dy in (-1, 0, 1) for dx in (-1, 0, 1))


PASSES = (
    AutotilePass("interior", SOLID, _enclosed, INTERIOR),
    AutotilePass("top", SOLID, lambda at, x, y: at(x, y - 1) == OPEN and at(x, y + 1) == INTERIOR, TOP),
    AutotilePass("bottom", SOLID, lambda at, x, y: at(x, y - 1) == INTERIOR and at(x, y + 1) == OPEN, BOTTOM),
    AutotilePass("left", SOLID, lambda at, x, y: at(x - 1, y) == OPEN, LEFT),
    AutotilePass("right", SOLID, lambda at, x, y: at(x + 1, y) == OPEN, RIGHT),
    AutotilePass("lb", LEFT, lambda at, x, y: at(x, y + 1) == OPEN and at(x - 1, y) == OPEN, LB),
    AutotilePass("rb", RIGHT, lambda at, x, y: at(x, y + 1) == OPEN and at(x + 1, y) == OPEN, RB),
    AutotilePass(
        "ilu", SOLID, lambda at, x, y: at(x, y + 1) in (RIGHT, RB) and at(x + 1, y) in (BOTTOM, RB), ILU
    ),
    AutotilePass(
        "iru", SOLID, lambda at, x, y: at(x, y + 1) in (LEFT, LB) and at(x - 1, y) in (BOTTOM, LB), IRU
    ),
    AutotilePass("irb", SOLID, lambda at, x, y: at(x, y - 1) == RIGHT and at(x + 1, y) in (TOP, OPEN), IRB),
    AutotilePass("ilb", SOLID, lambda at, x, y: at(x, y - 1) == LEFT and at(x - 1, y) in (TOP, OPEN), ILB),
    AutotilePass("lu", LEFT, lambda at, x, y: at(x + 1, y) == TOP, LU),
    AutotilePass("ru", RIGHT, lambda at, x, y: at(x - 1, y) == TOP, RU),
)


def _reader(walls: Layer) -> Reader:
    height, width = len(walls), len(walls[0])

    def at(x: int, y: int) -> Optional[int]:
        if 0 <= x < width and 0 <= y < height:
            return walls[y][x]
        return None

    return at


def apply_pass(walls: Layer, tile_pass: AutotilePass) -> int:
    at = _reader(walls)
    changed = 0
    for y, row in enumerate(walls):
        for x in range(len(row)):
            if row[x] == tile_pass.source and tile_pass.predicate(at, x, y):
                row[x] = tile_pass.code
                changed += 1
    return changed


def autotile_walls(walls: Layer) -> Dict[str, int]:
    """Run every pass in order; returns cells rewritten per pass name."""
    return {p.name: apply_pass(walls, p) for p in PASSES}


__all__ = ["AutotilePass", "PASSES", "apply_pass", "autotile_walls"]
