"""Transforms for detection datasets.

Every transform maps ``(cfg, image, labels)`` to a new ``(image, labels)``
pair, keeping bounding boxes consistent with the transformed image.

Structure:
    _base: AugmentConfig, Transform interface, Noop
    backend: pixel operations over PIL images and tensors
    sampling: crop/pad/resize sampling strategies
    geometric/: FlipHorizontal, FlipVertical, Crop, Pad, Resize
    combinators: Sequential, Sometimes, SomeOf, OneOf
    builder: transform trees from configuration

Example:
    >>> from boxaug.data.transforms import (
    ...     AugmentConfig, Sequential, Sometimes, FlipHorizontal, Crop, Pad,
    ...     PercentPad, Side,
    ... )
    >>> pipeline = Sequential(
    ...     Sometimes(0.5, FlipHorizontal()),
    ...     Pad(PercentPad({Side.TOP_BOTTOM: (0.0, 0.3), Side.LEFT_RIGHT: (0.0, 0.1)})),
    ...     Crop((10, 10, 140, 120)),
    ... )
    >>> cfg = AugmentConfig.from_seed(42, bbox_min_area=20, bbox_min_visibility=0.1)
    >>> image, labels = pipeline(cfg, image, [(26, 9, 110, 129)])
"""

from ..geometry import FloatRange, IntRange, Side

# Base
from ._base import AugmentConfig, Transform, Noop, ImageType

# Backend
from .backend import ResizeAlgorithm

# Sampling strategies
from .sampling import (
    FixedCrop,
    PercentCrop,
    PixelCrop,
    FixedPad,
    PercentPad,
    PixelPad,
    FixedSize,
    PercentSize,
    PixelDeltaSize,
)

# Geometric augmentations
from .geometric import (
    FlipHorizontal,
    FlipVertical,
    FlipLR,
    FlipUD,
    Crop,
    Pad,
    Resize,
)

# Combinators
from .combinators import Sequential, Sometimes, SomeOf, OneOf

# Builder
from .builder import build_transform, build_pipeline


__all__ = [
    # Geometry
    "FloatRange",
    "IntRange",
    "Side",
    # Base
    "AugmentConfig",
    "Transform",
    "Noop",
    "ImageType",
    "ResizeAlgorithm",
    # Sampling
    "FixedCrop",
    "PercentCrop",
    "PixelCrop",
    "FixedPad",
    "PercentPad",
    "PixelPad",
    "FixedSize",
    "PercentSize",
    "PixelDeltaSize",
    # Geometric
    "FlipHorizontal",
    "FlipVertical",
    "FlipLR",
    "FlipUD",
    "Crop",
    "Pad",
    "Resize",
    # Combinators
    "Sequential",
    "Sometimes",
    "SomeOf",
    "OneOf",
    # Builder
    "build_transform",
    "build_pipeline",
]
