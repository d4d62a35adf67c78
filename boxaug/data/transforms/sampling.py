"""Sampling strategies that turn ``(cfg, bounds)`` into concrete geometry.

Crop, Pad and Resize are parameterized by one of the small value objects
below instead of an opaque callable, so strategies can be built from
configuration files and tested on their own.

Crop samplers return a ``Rectangle``, pad samplers a per-edge pixel mapping
and size samplers a ``Point`` of ``(width, height)``.
"""

from typing import Dict, Mapping, Optional, Sequence, Union

from ..geometry import (
    EDGES,
    FloatRange,
    IntRange,
    Point,
    Rectangle,
    Side,
    coerce_rectangle,
    expand_sides,
    round_half_away,
    sample_sides,
)
from ._base import AugmentConfig


SideKey = Union[Side, str, int]
FloatRangeLike = Union[FloatRange, Sequence[float]]
IntRangeLike = Union[IntRange, Sequence[int]]


def _fraction_ranges(
    sides: Mapping[SideKey, FloatRangeLike],
    upper: Optional[float] = None,
) -> Dict[Side, FloatRange]:
    ranges = {k: FloatRange.coerce(v) for k, v in expand_sides(sides).items()}
    for side, r in ranges.items():
        if r.min < 0:
            raise ValueError(f"{side.name} fraction range must be non-negative, got {r}")
        if upper is not None and r.max > upper:
            raise ValueError(f"{side.name} fraction range must not exceed {upper}, got {r}")
    return ranges


def _pixel_ranges(sides: Mapping[SideKey, IntRangeLike]) -> Dict[Side, IntRange]:
    ranges = {k: IntRange.coerce(v) for k, v in expand_sides(sides).items()}
    for side, r in ranges.items():
        if r.min < 0:
            raise ValueError(f"{side.name} pixel range must be non-negative, got {r}")
    return ranges


def _fraction_to_pixels(fractions: Mapping[Side, float], bounds: Rectangle) -> Dict[Side, int]:
    # Left/right scale with width, top/bottom with height; truncated.
    return {
        edge: int(fractions[edge] * (bounds.width if edge & Side.LEFT_RIGHT else bounds.height))
        for edge in EDGES
    }


def _shrink(bounds: Rectangle, amounts: Mapping[Side, int]) -> Rectangle:
    x0 = bounds.min.x + amounts[Side.LEFT]
    y0 = bounds.min.y + amounts[Side.TOP]
    x1 = max(x0, bounds.max.x - amounts[Side.RIGHT])
    y1 = max(y0, bounds.max.y - amounts[Side.BOTTOM])
    return Rectangle.from_xyxy(x0, y0, x1, y1)


def _format_sides(ranges: Mapping[Side, object]) -> str:
    return "{" + ", ".join(f"{s.name}: {r}" for s, r in ranges.items()) + "}"


# ---------------------------------------------------------------------------
# Crop samplers
# ---------------------------------------------------------------------------

class FixedCrop:
    """Always crop to the same rectangle.

    Args:
        rect: ``Rectangle`` or ``(x0, y0, x1, y1)``.
    """

    def __init__(self, rect: Union[Rectangle, Sequence[int]]) -> None:
        self.rect = coerce_rectangle(rect)

    def sample(self, cfg: AugmentConfig, bounds: Rectangle) -> Rectangle:
        return self.rect

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.rect})"


class PercentCrop:
    """Remove a random fraction of the image from each side.

    Args:
        sides: Side mask -> fraction range, e.g.
            ``{Side.TOP_BOTTOM: (0.0, 0.2)}``. Missing sides stay uncropped.
    """

    def __init__(self, sides: Mapping[SideKey, FloatRangeLike]) -> None:
        self.sides = _fraction_ranges(sides, upper=1.0)

    def sample(self, cfg: AugmentConfig, bounds: Rectangle) -> Rectangle:
        fractions = sample_sides(self.sides, cfg.rng)
        return _shrink(bounds, _fraction_to_pixels(fractions, bounds))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({_format_sides(self.sides)})"


class PixelCrop:
    """Remove a random number of pixels from each side.

    Args:
        sides: Side mask -> pixel range.
    """

    def __init__(self, sides: Mapping[SideKey, IntRangeLike]) -> None:
        self.sides = _pixel_ranges(sides)

    def sample(self, cfg: AugmentConfig, bounds: Rectangle) -> Rectangle:
        return _shrink(bounds, sample_sides(self.sides, cfg.rng))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({_format_sides(self.sides)})"


# ---------------------------------------------------------------------------
# Pad samplers
# ---------------------------------------------------------------------------

class FixedPad:
    """Pad each side by a fixed number of pixels.

    Args:
        sides: Side mask -> non-negative pixel count.
    """

    def __init__(self, sides: Mapping[SideKey, int]) -> None:
        self.sides = {k: int(v) for k, v in expand_sides(sides).items()}
        for side, v in self.sides.items():
            if v < 0:
                raise ValueError(f"{side.name} padding must be non-negative, got {v}")

    def sample(self, cfg: AugmentConfig, bounds: Rectangle) -> Dict[Side, int]:
        return {edge: self.sides.get(edge, 0) for edge in EDGES}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({_format_sides(self.sides)})"


class PercentPad:
    """Pad each side by a random fraction of the image size.

    Left/right fractions are relative to width, top/bottom to height.
    Fractions above 1 pad by more than the image size.

    Args:
        sides: Side mask -> fraction range.
    """

    def __init__(self, sides: Mapping[SideKey, FloatRangeLike]) -> None:
        self.sides = _fraction_ranges(sides)

    def sample(self, cfg: AugmentConfig, bounds: Rectangle) -> Dict[Side, int]:
        return _fraction_to_pixels(sample_sides(self.sides, cfg.rng), bounds)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({_format_sides(self.sides)})"


class PixelPad:
    """Pad each side by a random number of pixels.

    Args:
        sides: Side mask -> pixel range.
    """

    def __init__(self, sides: Mapping[SideKey, IntRangeLike]) -> None:
        self.sides = _pixel_ranges(sides)

    def sample(self, cfg: AugmentConfig, bounds: Rectangle) -> Dict[Side, int]:
        return sample_sides(self.sides, cfg.rng)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({_format_sides(self.sides)})"


# ---------------------------------------------------------------------------
# Size samplers
# ---------------------------------------------------------------------------

class FixedSize:
    """Resize to an exact size."""

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Size must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height

    def sample(self, cfg: AugmentConfig, bounds: Rectangle) -> Point:
        return Point(self.width, self.height)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(width={self.width}, height={self.height})"


class PercentSize:
    """Scale the current size by random factors.

    Args:
        width: Width multiplier range.
        height: Height multiplier range. If None, the width factor is
            reused so the aspect ratio is kept.
    """

    def __init__(
        self,
        width: FloatRangeLike,
        height: Optional[FloatRangeLike] = None,
    ) -> None:
        self.width = FloatRange.coerce(width)
        self.height = FloatRange.coerce(height) if height is not None else None
        for r in (self.width, self.height):
            if r is not None and r.min <= 0:
                raise ValueError(f"Scale factors must be positive, got {r}")

    def sample(self, cfg: AugmentConfig, bounds: Rectangle) -> Point:
        fx = self.width.sample(cfg.rng)
        fy = self.height.sample(cfg.rng) if self.height is not None else fx
        return Point(
            max(1, round_half_away(bounds.width * fx)),
            max(1, round_half_away(bounds.height * fy)),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(width={self.width}, height={self.height})"


class PixelDeltaSize:
    """Grow or shrink the current size by a random number of pixels.

    Args:
        width: Pixel delta range for the width (may be negative).
        height: Pixel delta range for the height.
    """

    def __init__(self, width: IntRangeLike, height: IntRangeLike) -> None:
        self.width = IntRange.coerce(width)
        self.height = IntRange.coerce(height)

    def sample(self, cfg: AugmentConfig, bounds: Rectangle) -> Point:
        dw = self.width.sample(cfg.rng)
        dh = self.height.sample(cfg.rng)
        return Point(max(1, bounds.width + dw), max(1, bounds.height + dh))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(width={self.width}, height={self.height})"
