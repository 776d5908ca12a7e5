"""Layout generation pipeline.

``LayoutGenerator`` owns everything one generation touches: the six layers,
the room list, the connector list and its own ``random.Random``. Nothing is
kept at module level, so separate generators can run side by side in threads.

Phases, in order:
    * allocate         six zeroed layers
    * fill_bottom      ground constant, random full-floor variant per cell
    * pack_rooms       border walls, greedy room packing, per-room wall strips
    * detect           thin wall strips separating two rooms
    * connect          DFS spanning tree over rooms, carving tree connectors
    * autotile         ordered edge/corner classification of the walls layer
    * fill_empty       upper/decals/leaves set to the empty code
"""
from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .autotile import autotile_walls
from .config import LayoutConfig
from .connectivity import connect_rooms
from .connectors import WallSegment, detect_connectors
from .grid import LayerSet
from .layers import fill_bottom, fill_empty
from .metrics import init_metrics
from .rooms import Room, pack_rooms
from .tiles import OPEN

log = get_logger("tilegen.layout")


@dataclass
class LayoutResult:
    seed: int
    layers: LayerSet
    rooms: List[Room]
    connectors: List[WallSegment]
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return self.layers.width

    @property
    def height(self) -> int:
        return self.layers.height


class LayoutGenerator:
    def __init__(
        self,
        config: LayoutConfig | None = None,
        *,
        width: int | None = None,
        height: int | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
        enable_metrics: bool | None = None,
    ):
        # Accept either a config object or keyword dimensions
        if config is None:
            config = LayoutConfig(seed=seed)
            if width is not None:
                config.width = width
            if height is not None:
                config.height = height
        elif seed is not None:
            config = replace(config, seed=seed)
        self.config = config.normalized()
        if self.config.seed is None:
            self.config.seed = random.randint(0, 2**31 - 1)
        self.seed = self.config.seed
        self._rng = rng if rng is not None else random.Random(self.seed)
        if enable_metrics is None:
            val = os.environ.get("LAYOUT_ENABLE_METRICS", "1").lower()
            enable_metrics = val not in {"0", "false", "no", ""}
        self.enable_metrics = enable_metrics
        self.layers: Optional[LayerSet] = None
        self.rooms: List[Room] = []
        self.room_ids: List[List[int]] = []
        self.connectors: List[WallSegment] = []
        self.metrics: Dict[str, Any] = {}

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def run(self) -> LayoutResult:
        """Execute the ordered phases and return the finished layout."""
        start = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            return r

        self.metrics = init_metrics() if self.enable_metrics else {}
        self.layers = _phase("allocate", LayerSet.allocate, self.width, self.height)
        layers = self.layers
        _phase("fill_bottom", fill_bottom, layers.ground, layers.floor, self._rng)
        self.rooms, self.room_ids = _phase("pack_rooms", pack_rooms, layers.walls, self._rng)
        self.connectors = _phase("detect", detect_connectors, layers.walls, self.room_ids)
        holes = _phase("connect", connect_rooms, layers.walls, self.rooms, self.connectors, self._rng)
        passes = _phase("autotile", autotile_walls, layers.walls)
        _phase("fill_empty", fill_empty, layers.upper, layers.decals, layers.leaves)

        unconnected = sum(1 for r in self.rooms if not r.connected)
        if unconnected:
            log.debug(event="rooms_unconnected", seed=self.seed, count=unconnected, rooms=len(self.rooms))
        if self.enable_metrics:
            self._collect_counts(holes, unconnected, passes)
            self.metrics["phase_ms"] = phase_times
            self.metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
        log.debug(
            event="layout_generated",
            seed=self.seed,
            width=self.width,
            height=self.height,
            rooms=len(self.rooms),
            connectors=len(self.connectors),
            holes=holes,
        )
        return LayoutResult(self.seed, layers, self.rooms, self.connectors, self.metrics)

    def _collect_counts(self, holes: int, unconnected: int, passes: Dict[str, int]) -> None:
        walls = self.layers.walls
        tiles_open = sum(row.count(OPEN) for row in walls)
        self.metrics.update(
            {
                "seed": self.seed,
                "rooms": len(self.rooms),
                "rooms_unconnected": unconnected,
                "connectors": len(self.connectors),
                "connectors_orphaned": sum(1 for c in self.connectors if None in c.rooms),
                "holes_carved": holes,
                "tiles_open": tiles_open,
                "tiles_wall": self.width * self.height - tiles_open,
                "autotile": passes,
            }
        )


def generate(width: int, height: int, seed: int | None = None, rng: random.Random | None = None) -> LayerSet:
    """Generate a layout and return just its six layers."""
    return LayoutGenerator(width=width, height=height, seed=seed, rng=rng).run().layers


__all__ = ["LayoutGenerator", "LayoutResult", "generate"]
