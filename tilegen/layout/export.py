"""Serialisation helpers for finished layouts.

* ``to_ascii``  one glyph per walls cell, handy for eyeballing a seed.
* ``to_json``   payload served by the web API.
* ``to_tiled``  map document loadable by Tiled / Phaser's ``tilemapTiledJSON``.
"""
from __future__ import annotations

from typing import Any, Dict

from ..utils.tile_compress import compress_layer
from .generator import LayoutResult
from .grid import Layer, LayerSet
from .tiles import (
    BOTTOM,
    EMPTY,
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

GLYPHS = {
    OPEN: ".",
    SOLID: "#",
    INTERIOR: " ",
    TOP: "-",
    BOTTOM: "_",
    LEFT: "[",
    RIGHT: "]",
    LU: "+",
    RU: "+",
    LB: "+",
    RB: "+",
    ILU: "*",
    IRU: "*",
    ILB: "*",
    IRB: "*",
}

TILED_LAYER_NAMES = (
    ("ground", "Ground"),
    ("floor", "Floor"),
    ("walls", "Walls"),
    ("decals", "Decals"),
    ("upper", "Upper"),
    ("leaves", "Leaves"),
)
# Layers whose EMPTY cells mean "no tile" rather than atlas index 0.
SPARSE_LAYERS = {"decals", "upper", "leaves"}


def to_ascii(walls: Layer) -> str:
    return "\n".join("".join(GLYPHS.get(code, "?") for code in row) for row in walls)


def to_json(result: LayoutResult, compact: bool = False) -> Dict[str, Any]:
    if compact:
        layers: Dict[str, Any] = {name: compress_layer(layer) for name, layer in result.layers.items()}
    else:
        layers = result.layers.as_dict()
    return {
        "seed": result.seed,
        "width": result.width,
        "height": result.height,
        "compact": compact,
        "layers": layers,
        "rooms": [
            {"x": r.x, "y": r.y, "width": r.width, "height": r.height, "connected": r.connected}
            for r in result.rooms
        ],
        "metrics": result.metrics,
    }


def _gids(name: str, layer: Layer, firstgid: int):
    sparse = name in SPARSE_LAYERS
    out = []
    for row in layer:
        for code in row:
            out.append(0 if sparse and code == EMPTY else code + firstgid)
    return out


def to_tiled(
    layers: LayerSet,
    tile_size: int = 16,
    tileset_image: str = "tileset/Dungeon_Tileset.png",
    tileset_name: str = "Dungeon_Tileset",
    columns: int = 16,
    firstgid: int = 1,
) -> Dict[str, Any]:
    """Build a Tiled (orthogonal, JSON format) map from a layer set.

    Codes are atlas indices, so every cell is written as ``code + firstgid``;
    in the filler layers the empty code becomes gid 0 (no tile).
    """
    width, height = layers.width, layers.height
    max_code = max(max(max(row) for row in layer) for _, layer in layers.items())
    rows = max_code // columns + 1
    tiled_layers = []
    for idx, (name, title) in enumerate(TILED_LAYER_NAMES, start=1):
        tiled_layers.append(
            {
                "id": idx,
                "name": title,
                "type": "tilelayer",
                "x": 0,
                "y": 0,
                "width": width,
                "height": height,
                "opacity": 1,
                "visible": True,
                "data": _gids(name, getattr(layers, name), firstgid),
            }
        )
    return {
        "type": "map",
        "version": "1.10",
        "orientation": "orthogonal",
        "renderorder": "right-down",
        "infinite": False,
        "width": width,
        "height": height,
        "tilewidth": tile_size,
        "tileheight": tile_size,
        "nextlayerid": len(tiled_layers) + 1,
        "nextobjectid": 1,
        "layers": tiled_layers,
        "tilesets": [
            {
                "firstgid": firstgid,
                "name": tileset_name,
                "image": tileset_image,
                "imagewidth": columns * tile_size,
                "imageheight": rows * tile_size,
                "tilewidth": tile_size,
                "tileheight": tile_size,
                "columns": columns,
                "tilecount": columns * rows,
                "margin": 0,
                "spacing": 0,
            }
        ],
    }


__all__ = ["to_ascii", "to_json", "to_tiled", "GLYPHS"]
