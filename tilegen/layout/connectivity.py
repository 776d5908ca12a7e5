"""Spanning-tree carving over the room/connector graph.

Rooms are visited depth first from the first placed room. A connector is
opened only when it leads to a room not yet visited, and only after that room's
own subtree has been carved, so the opened connectors form a spanning tree of
every room reachable through detected connectors. Rooms with no such path keep
``connected=False``; nothing here tries to repair them.
"""
from __future__ import annotations

import random
from typing import List

from .connectors import WallSegment
from .grid import Layer
from .rooms import Room, rand_int
from .tiles import OPEN

DOORWAY = 2  # cells opened along a long connector
LONG_CONNECTOR = 3


def carve_hole(walls: Layer, segment: WallSegment, rng: random.Random) -> None:
    """Open a connector: fully when short, otherwise a 2-cell band at one end."""
    if segment.is_vertical:
        start, stop = 0, segment.height
        if segment.height > LONG_CONNECTOR:
            start = 0 if rand_int(rng, 0, 2) else stop - DOORWAY
            stop = start + DOORWAY
        for dy in range(start, stop):
            for dx in range(segment.width):
                walls[segment.y + dy][segment.x + dx] = OPEN
    else:
        start, stop = 0, segment.width
        if segment.width > LONG_CONNECTOR:
            start = 0 if rand_int(rng, 0, 2) else stop - DOORWAY
            stop = start + DOORWAY
        for dx in range(start, stop):
            for dy in range(segment.height):
                walls[segment.y + dy][segment.x + dx] = OPEN
    segment.carved = True


def connect_rooms(walls: Layer, rooms: List[Room], segments: List[WallSegment], rng: random.Random) -> int:
    """Carve the DFS tree rooted at ``rooms[0]``; returns the number of holes.

    An explicit stack stands in for recursion. Each frame keeps its position in
    the connector list and the connector it was entered through; that
    connector is carved when the frame is popped, which is the order the
    recursive walk would carve in.
    """
    if not rooms:
        return 0
    holes = 0
    rooms[0].connected = True
    frames = [[0, 0, None]]  # room index, next connector position, entry connector
    while frames:
        frame = frames[-1]
        room_index = frame[0]
        child = None
        while frame[1] < len(segments):
            seg = segments[frame[1]]
            frame[1] += 1
            other = seg.other(room_index)
            if other is not None and not rooms[other].connected:
                child = (other, seg)
                break
        if child is not None:
            other, seg = child
            rooms[other].connected = True
            frames.append([other, 0, seg])
            continue
        frames.pop()
        if frame[2] is not None:
            carve_hole(walls, frame[2], rng)
            holes += 1
    return holes


__all__ = ["carve_hole", "connect_rooms"]
