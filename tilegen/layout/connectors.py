from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .grid import Layer
from .rooms import find_room
from .tiles import OPEN, SOLID

MIN_RUN = 2


@dataclass
class WallSegment:
    """Thin wall strip between two rooms; a candidate doorway.

    ``rooms`` holds indices into the room list (None where the probe missed).
    """

    x: int
    y: int
    width: int
    height: int
    is_vertical: bool
    rooms: Tuple[Optional[int], Optional[int]]
    carved: bool = field(default=False)

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def other(self, room_index: int) -> Optional[int]:
        a, b = self.rooms
        if a == room_index:
            return b
        if b == room_index:
            return a
        return None


def _vertical_run(walls: Layer, x: int, y: int) -> int:
    height = len(walls)
    dy = 0
    while (
        y + dy < height
        and walls[y + dy][x - 1] == OPEN
        and walls[y + dy][x] == SOLID
        and walls[y + dy][x + 1] == SOLID
        and walls[y + dy][x + 2] == OPEN
    ):
        dy += 1
    return dy


def _horizontal_run(walls: Layer, x: int, y: int) -> int:
    width = len(walls[0])
    dx = 0
    while (
        x + dx < width
        and walls[y - 1][x + dx] == OPEN
        and walls[y][x + dx] == SOLID
        and walls[y + 1][x + dx] == SOLID
        and walls[y + 2][x + dx] == SOLID
        and walls[y + 3][x + dx] == OPEN
    ):
        dx += 1
    return dx


def _segment_at(walls: Layer, room_ids, x: int, y: int) -> Optional[WallSegment]:
    dy = _vertical_run(walls, x, y)
    if dy >= MIN_RUN:
        return WallSegment(x, y, 2, dy, True, (find_room(room_ids, x - 1, y), find_room(room_ids, x + 2, y)))
    dx = _horizontal_run(walls, x, y)
    if dx >= MIN_RUN:
        return WallSegment(x, y, dx, 3, False, (find_room(room_ids, x, y - 1), find_room(room_ids, x, y + 3)))
    return None


def detect_connectors(walls: Layer, room_ids) -> List[WallSegment]:
    """Scan the packed walls layer for 2-wide vertical and 3-tall horizontal strips.

    A strip qualifies when it is flanked by open cells on both outer sides for
    at least two consecutive rows (vertical) or columns (horizontal). Cells
    already covered by a previously found segment are skipped, so each strip
    is recorded once, anchored at its top-left cell.
    """
    height, width = len(walls), len(walls[0])
    covered = [[False] * width for _ in range(height)]
    segments: List[WallSegment] = []
    for y in range(2, height - 1):
        for x in range(1, width - 1):
            if walls[y][x] == OPEN or y + 3 >= height or x + 2 >= width:
                continue
            if covered[y][x]:
                continue
            seg = _segment_at(walls, room_ids, x, y)
            if seg is None:
                continue
            segments.append(seg)
            for iy in range(seg.y, seg.y + seg.height):
                for ix in range(seg.x, seg.x + seg.width):
                    covered[iy][ix] = True
    return segments


__all__ = ["WallSegment", "detect_connectors"]
