import math
from dataclasses import dataclass
from typing import Optional

MIN_WIDTH = 5
MIN_HEIGHT = 6


class LayoutSizeError(ValueError):
    """Raised for dimensions that clamping cannot repair (negative, NaN, fractional)."""

    def __init__(self, field: str, message: str, code: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.code = code


def check_dimension(field: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LayoutSizeError(field, "must be a number", "type")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise LayoutSizeError(field, "must be finite", "non_finite")
        if not value.is_integer():
            raise LayoutSizeError(field, "must be a whole number", "non_integral")
        value = int(value)
    if value < 0:
        raise LayoutSizeError(field, "must not be negative", "negative")
    return value


@dataclass
class LayoutConfig:
    width: int = 40
    height: int = 30
    seed: Optional[int] = None

    def normalized(self) -> "LayoutConfig":
        """Return a copy with validated dimensions raised to the 5x6 minimum."""
        width = max(check_dimension("width", self.width), MIN_WIDTH)
        height = max(check_dimension("height", self.height), MIN_HEIGHT)
        return LayoutConfig(width=width, height=height, seed=self.seed)


__all__ = ["LayoutConfig", "LayoutSizeError", "MIN_WIDTH", "MIN_HEIGHT", "check_dimension"]
