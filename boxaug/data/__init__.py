"""Data types and transforms for bbox-aware augmentation.

Modules:
    geometry: Point, Rectangle, Side masks and numeric ranges
    labels: Labels, the bounding-box set travelling with an image
    transforms: the transform engine and its combinators

Example:
    >>> from boxaug.data import Labels, Rectangle
    >>> from boxaug.data.transforms import AugmentConfig, FlipHorizontal
    >>>
    >>> cfg = AugmentConfig.from_seed(0)
    >>> image, labels = FlipHorizontal()(cfg, image, Labels([(26, 9, 110, 129)]))
"""

from .geometry import (
    Point,
    Rectangle,
    Side,
    IntRange,
    FloatRange,
    expand_sides,
    round_half_away,
)
from .labels import Labels
from .transforms import AugmentConfig, Transform, build_pipeline, build_transform

__all__ = [
    # Geometry
    "Point",
    "Rectangle",
    "Side",
    "IntRange",
    "FloatRange",
    "expand_sides",
    "round_half_away",
    # Labels
    "Labels",
    # Transforms
    "AugmentConfig",
    "Transform",
    "build_transform",
    "build_pipeline",
]
