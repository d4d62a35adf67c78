"""Flip transforms for object detection."""

from typing import Tuple

from ...geometry import Point, Rectangle
from ...labels import Labels
from .._base import AugmentConfig, ImageType, Transform
from .. import backend


class FlipHorizontal(Transform):
    """Mirror the image left-right.

    Box x-coordinates become ``[width - max.x, width - min.x)``.
    """

    def apply(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Labels,
    ) -> Tuple[ImageType, Labels]:
        image = backend.flip_horizontal(image)
        width, _ = backend.image_size(image)

        def flip(box: Rectangle) -> Rectangle:
            return Rectangle(
                Point(width - box.max.x, box.min.y),
                Point(width - box.min.x, box.max.y),
            )

        return image, labels.map(flip)


class FlipVertical(Transform):
    """Mirror the image top-bottom.

    Box y-coordinates become ``[height - max.y, height - min.y)``.
    """

    def apply(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Labels,
    ) -> Tuple[ImageType, Labels]:
        image = backend.flip_vertical(image)
        _, height = backend.image_size(image)

        def flip(box: Rectangle) -> Rectangle:
            return Rectangle(
                Point(box.min.x, height - box.max.y),
                Point(box.max.x, height - box.min.y),
            )

        return image, labels.map(flip)


# Short aliases
FlipLR = FlipHorizontal
FlipUD = FlipVertical
