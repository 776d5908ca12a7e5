"""Layer storage: six same-shaped row-major grids addressed ``layer[row][col]``."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

Layer = List[List[int]]

LAYER_NAMES = ("ground", "floor", "walls", "decals", "upper", "leaves")


def allocate_layer(width: int, height: int, fill: int = 0) -> Layer:
    return [[fill for _ in range(width)] for _ in range(height)]


@dataclass
class LayerSet:
    ground: Layer
    floor: Layer
    walls: Layer
    decals: Layer
    upper: Layer
    leaves: Layer

    @classmethod
    def allocate(cls, width: int, height: int) -> "LayerSet":
        """Zero-filled layers; every layer gets its own rows."""
        return cls(**{name: allocate_layer(width, height) for name in LAYER_NAMES})

    @property
    def width(self) -> int:
        return len(self.ground[0]) if self.ground else 0

    @property
    def height(self) -> int:
        return len(self.ground)

    def items(self) -> Iterator[Tuple[str, Layer]]:
        for name in LAYER_NAMES:
            yield name, getattr(self, name)

    def as_dict(self) -> Dict[str, Layer]:
        return {name: [list(row) for row in layer] for name, layer in self.items()}


__all__ = ["Layer", "LAYER_NAMES", "LayerSet", "allocate_layer"]
