"""Geometry value types used by the augmentation pipeline.

Rectangles are half-open: ``min`` is inclusive and ``max`` exclusive on
both axes, so a rectangle doubles as image bounds and as a bounding box.

Example:
    >>> box = Rectangle.from_xyxy(26, 9, 110, 129)
    >>> box.width, box.height
    (84, 120)
"""

import enum
import math
import random
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Sequence, Tuple, TypeVar, Union


T = TypeVar("T")


@dataclass(frozen=True)
class Point:
    """Integer 2-vector."""

    x: int = 0
    y: int = 0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle spanning ``[min.x, max.x) x [min.y, max.y)``.

    Args:
        min: Top-left corner (inclusive).
        max: Bottom-right corner (exclusive).
    """

    min: Point = Point()
    max: Point = Point()

    @classmethod
    def from_xyxy(cls, x0: int, y0: int, x1: int, y1: int) -> "Rectangle":
        return cls(Point(x0, y0), Point(x1, y1))

    @classmethod
    def from_size(cls, width: int, height: int) -> "Rectangle":
        """Bounds of a ``width`` x ``height`` image anchored at the origin."""
        return cls(Point(0, 0), Point(width, height))

    @property
    def width(self) -> int:
        return self.max.x - self.min.x

    @property
    def height(self) -> int:
        return self.max.y - self.min.y

    @property
    def size(self) -> Point:
        return Point(self.width, self.height)

    @property
    def area(self) -> int:
        """Pixel area; degenerate rectangles have zero area."""
        if self.width <= 0 or self.height <= 0:
            return 0
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.area == 0

    def intersect(self, other: "Rectangle") -> "Rectangle":
        """Largest rectangle contained by both, or the empty rectangle."""
        r = Rectangle(
            Point(max(self.min.x, other.min.x), max(self.min.y, other.min.y)),
            Point(min(self.max.x, other.max.x), min(self.max.y, other.max.y)),
        )
        if r.is_empty():
            return Rectangle()
        return r

    def translate(self, offset: Point) -> "Rectangle":
        return Rectangle(self.min + offset, self.max + offset)

    def contains(self, other: "Rectangle") -> bool:
        """True if ``other`` lies entirely inside this rectangle."""
        return (
            self.min.x <= other.min.x
            and self.min.y <= other.min.y
            and other.max.x <= self.max.x
            and other.max.y <= self.max.y
        )

    def to_xyxy(self) -> Tuple[int, int, int, int]:
        return (self.min.x, self.min.y, self.max.x, self.max.y)

    def __repr__(self) -> str:
        return f"Rectangle({self.min.x}, {self.min.y}, {self.max.x}, {self.max.y})"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class Side(enum.IntFlag):
    """Bit mask over the four rectangle edges."""

    LEFT = 1
    TOP = 2
    RIGHT = 4
    BOTTOM = 8
    LEFT_RIGHT = LEFT | RIGHT
    TOP_BOTTOM = TOP | BOTTOM
    ALL = LEFT | TOP | RIGHT | BOTTOM

    @classmethod
    def parse(cls, value: Union["Side", str, int]) -> "Side":
        """Accept a Side, its name (case-insensitive) or its integer value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_")
            try:
                return cls[key]
            except KeyError:
                raise ValueError(f"Unknown side: {value!r}") from None
        if not 0 < int(value) <= int(cls.ALL):
            raise ValueError(f"Invalid side mask: {value!r}")
        return cls(value)

    @property
    def popcount(self) -> int:
        return bin(int(self)).count("1")


# Canonical edge order; per-side randomness is drawn in this order.
EDGES: Tuple[Side, ...] = (Side.LEFT, Side.TOP, Side.RIGHT, Side.BOTTOM)


def expand_sides(mapping: Mapping[Union[Side, str, int], T]) -> Dict[Side, T]:
    """Expand union side keys into the four atomic edges.

    Broader masks are applied first, so an atomic edge listed alongside a
    union containing it wins. Ties are broken by flag value, making the
    result independent of the mapping's iteration order.

    Example:
        >>> expand_sides({Side.ALL: 1, Side.TOP: 2})[Side.TOP]
        2
    """
    parsed = [(Side.parse(k), v) for k, v in mapping.items()]
    parsed.sort(key=lambda kv: (-kv[0].popcount, int(kv[0])))

    result: Dict[Side, T] = {}
    for side, value in parsed:
        for edge in EDGES:
            if side & edge:
                result[edge] = value
    return {edge: result[edge] for edge in EDGES if edge in result}


class IntRange:
    """Half-open integer interval ``[min, max)``.

    Raises:
        ValueError: If the interval is empty.
    """

    def __init__(self, min: int, max: int) -> None:
        if max <= min:
            raise ValueError(f"IntRange requires max > min, got [{min}, {max})")
        self.min = int(min)
        self.max = int(max)

    @classmethod
    def coerce(cls, value: Union["IntRange", Sequence[int]]) -> "IntRange":
        if isinstance(value, cls):
            return value
        lo, hi = value
        return cls(lo, hi)

    def sample(self, rng: random.Random) -> int:
        return rng.randrange(self.min, self.max)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntRange):
            return NotImplemented
        return (self.min, self.max) == (other.min, other.max)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.min}, {self.max})"


class FloatRange:
    """Half-open real interval ``[min, max)``.

    Raises:
        ValueError: If the interval is empty.
    """

    def __init__(self, min: float, max: float) -> None:
        if max <= min:
            raise ValueError(f"FloatRange requires max > min, got [{min}, {max})")
        self.min = float(min)
        self.max = float(max)

    @classmethod
    def coerce(cls, value: Union["FloatRange", Sequence[float]]) -> "FloatRange":
        if isinstance(value, cls):
            return value
        lo, hi = value
        return cls(lo, hi)

    def sample(self, rng: random.Random) -> float:
        return self.min + rng.random() * (self.max - self.min)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FloatRange):
            return NotImplemented
        return (self.min, self.max) == (other.min, other.max)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.min}, {self.max})"


def sample_sides(
    ranges: Mapping[Side, Union[IntRange, FloatRange]],
    rng: random.Random,
) -> Dict[Side, Union[int, float]]:
    """Draw one value per atomic edge in ``EDGES`` order; missing edges are 0."""
    return {
        edge: (ranges[edge].sample(rng) if edge in ranges else 0)
        for edge in EDGES
    }


def coerce_rectangle(value: Union[Rectangle, Iterable[int]]) -> Rectangle:
    """Accept a Rectangle or an ``(x0, y0, x1, y1)`` sequence."""
    if isinstance(value, Rectangle):
        return value
    x0, y0, x1, y1 = (int(v) for v in value)
    return Rectangle.from_xyxy(x0, y0, x1, y1)
