"""Geometric augmentations for object detection.

Transforms that modify image geometry with proper bounding box tracking.
"""

from .flip import FlipHorizontal, FlipVertical, FlipLR, FlipUD
from .crop import Crop
from .pad import Pad
from .scale import Resize

__all__ = [
    "FlipHorizontal",
    "FlipVertical",
    "FlipLR",
    "FlipUD",
    "Crop",
    "Pad",
    "Resize",
]
