import random

from .grid import Layer
from .tiles import EMPTY, FULL_FLOORS, GROUND


def fill_bottom(ground: Layer, floor: Layer, rng: random.Random) -> None:
    """Constant ground; floor variant picked independently per cell."""
    for y, row in enumerate(ground):
        for x in range(len(row)):
            ground[y][x] = GROUND
            floor[y][x] = rng.choice(FULL_FLOORS)


def fill_empty(*layers: Layer) -> None:
    for layer in layers:
        for row in layer:
            for x in range(len(row)):
                row[x] = EMPTY


__all__ = ["fill_bottom", "fill_empty"]
