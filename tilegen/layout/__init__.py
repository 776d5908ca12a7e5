"""Public layout package interface.

    from tilegen.layout import generate, LayoutGenerator, LayoutConfig
"""

from .config import LayoutConfig, LayoutSizeError
from .connectors import WallSegment
from .generator import LayoutGenerator, LayoutResult, generate
from .grid import LAYER_NAMES, LayerSet
from .rooms import Room
from .tiles import WALL_CODES, WALL_VOCABULARY, tileset_vocabulary  # noqa: F401

__all__ = [
    "LayoutConfig",
    "LayoutSizeError",
    "LayoutGenerator",
    "LayoutResult",
    "LayerSet",
    "LAYER_NAMES",
    "Room",
    "WallSegment",
    "generate",
    "WALL_CODES",
    "WALL_VOCABULARY",
    "tileset_vocabulary",
]
