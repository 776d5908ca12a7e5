import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .grid import Layer
from .tiles import OPEN, SOLID

MIN_ROOM_SIZE = 3
SIDE_WALL = 2  # columns walled off left and right of a room
BOTTOM_WALL = 3  # rows walled off below a room


@dataclass
class Room:
    x: int
    y: int
    width: int
    height: int
    connected: bool = False

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def cells(self):
        for iy in range(self.y, self.y + self.height):
            for ix in range(self.x, self.x + self.width):
                yield ix, iy

    def overlaps(self, other: "Room") -> bool:
        return (
            self.x < other.x + other.width
            and other.x < self.x + self.width
            and self.y < other.y + other.height
            and other.y < self.y + self.height
        )

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.width // 2, self.y + self.height // 2)


def rand_int(rng: random.Random, lo: int, hi: float) -> int:
    """Uniform integer in ``[lo, floor(hi))``; ``lo`` when that range is empty."""
    top = math.floor(hi)
    if top <= lo:
        return lo
    return rng.randrange(lo, top)


def is_border(x: int, y: int, width: int, height: int) -> bool:
    return y < 2 or y + 1 == height or x < 1 or x + 1 == width


def _open_run(walls: Layer, x: int, y: int, dx: int, dy: int) -> int:
    height, width = len(walls), len(walls[0])
    n = 0
    while 0 <= x < width and 0 <= y < height and walls[y][x] == OPEN:
        n += 1
        x += dx
        y += dy
    return n


def _wall_off(walls: Layer, room: Room) -> None:
    height, width = len(walls), len(walls[0])
    strips = (
        (range(room.height, room.height + BOTTOM_WALL), range(-SIDE_WALL, room.width + SIDE_WALL)),
        (range(room.height), range(-SIDE_WALL, 0)),
        (range(room.height), range(room.width, room.width + SIDE_WALL)),
    )
    for rows, cols in strips:
        for dy in rows:
            for dx in cols:
                wx, wy = room.x + dx, room.y + dy
                if 0 <= wx < width and 0 <= wy < height:
                    walls[wy][wx] = SOLID


def pack_rooms(walls: Layer, rng: random.Random) -> Tuple[List[Room], List[List[int]]]:
    """Greedy top-to-bottom, left-to-right room packing.

    The walls layer is reset first: border cells solid, everything else open.
    Each open cell that is not already inside a room either anchors a new room
    (when the open run to the right and below are both at least 3 long) or is
    turned solid. A new room takes a random size below half the detected pocket
    and is immediately walled off on its bottom, left and right sides so later
    probes treat its surroundings as occupied.

    Returns ``(rooms, room_ids)`` where ``room_ids[y][x]`` is the index of the
    room covering the cell, or -1.
    """
    height, width = len(walls), len(walls[0])
    for y in range(height):
        for x in range(width):
            walls[y][x] = SOLID if is_border(x, y, width, height) else OPEN

    rooms: List[Room] = []
    room_ids = [[-1 for _ in range(width)] for _ in range(height)]
    for y in range(2, height - 1):
        for x in range(1, width - 1):
            if room_ids[y][x] >= 0:
                continue  # busy
            run_w = _open_run(walls, x, y, 1, 0)
            run_h = _open_run(walls, x, y, 0, 1)
            if run_w < MIN_ROOM_SIZE or run_h < MIN_ROOM_SIZE:
                walls[y][x] = SOLID
                continue
            room = Room(
                x,
                y,
                rand_int(rng, MIN_ROOM_SIZE, max(run_w / 2, MIN_ROOM_SIZE)),
                rand_int(rng, MIN_ROOM_SIZE, max(run_h / 2, MIN_ROOM_SIZE)),
            )
            rooms.append(room)
            for ix, iy in room.cells():
                room_ids[iy][ix] = len(rooms) - 1
            _wall_off(walls, room)
    return rooms, room_ids


def find_room(room_ids: List[List[int]], x: int, y: int) -> Optional[int]:
    if 0 <= y < len(room_ids) and 0 <= x < len(room_ids[0]) and room_ids[y][x] >= 0:
        return room_ids[y][x]
    return None


__all__ = ["Room", "pack_rooms", "find_room", "rand_int", "is_border", "MIN_ROOM_SIZE"]
