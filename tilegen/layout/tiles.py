# Tile code vocabulary. Values are indices into the dungeon tileset atlas and
# must stay in sync with the image the renderer loads.
GROUND = 139
EMPTY = 0

FULL_FLOORS = (88, 89, 90, 91, 92, 93, 104, 105, 106, 107, 108, 109)
# Reserved for a partial-floor pass; not written by the generator yet.
PART_FLOORS = (68, 69, 70, 84, 85, 86, 100, 101, 102, 116, 117, 118)

SOLID = 161
INTERIOR = 167  # wall fully enclosed by other walls
OPEN = 15  # no wall

TOP = 1
BOTTOM = 49
LEFT = 16
RIGHT = 18
LB = 48
RB = 50
LU = 0
RU = 2
ILU = 19
IRU = 21
ILB = 37
IRB = 35

WALL_CODES = {
    "solid": SOLID,
    "interior": INTERIOR,
    "open": OPEN,
    "top": TOP,
    "bottom": BOTTOM,
    "left": LEFT,
    "right": RIGHT,
    "lb": LB,
    "rb": RB,
    "lu": LU,
    "ru": RU,
    "ilu": ILU,
    "iru": IRU,
    "ilb": ILB,
    "irb": IRB,
}

WALL_VOCABULARY = frozenset(WALL_CODES.values())


def tileset_vocabulary() -> dict:
    """Return the full code table in a JSON friendly shape."""
    return {
        "ground": GROUND,
        "empty": EMPTY,
        "floor": {"fulls": list(FULL_FLOORS), "parts": list(PART_FLOORS)},
        "walls": dict(WALL_CODES),
    }


__all__ = [
    "GROUND",
    "EMPTY",
    "FULL_FLOORS",
    "PART_FLOORS",
    "SOLID",
    "INTERIOR",
    "OPEN",
    "TOP",
    "BOTTOM",
    "LEFT",
    "RIGHT",
    "LB",
    "RB",
    "LU",
    "RU",
    "ILU",
    "IRU",
    "ILB",
    "IRB",
    "WALL_CODES",
    "WALL_VOCABULARY",
    "tileset_vocabulary",
]
