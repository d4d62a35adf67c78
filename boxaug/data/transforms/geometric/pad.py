"""Pad transform for object detection."""

from typing import Mapping, Tuple, Union

from ...geometry import Point, Rectangle, Side
from ...labels import Labels
from .._base import AugmentConfig, ImageType, Transform
from ..backend import Fill
from ..sampling import FixedPad
from .. import backend


class Pad(Transform):
    """Grow the canvas on each side and shift boxes by ``(left, top)``.

    The original image is painted over a new canvas filled with ``fill``.
    Boxes are never dropped.

    Args:
        sampler: ``FixedPad``, ``PercentPad`` or ``PixelPad``. A plain
            ``{side: pixels}`` mapping is wrapped in ``FixedPad``.
        fill: Canvas fill value.
    """

    def __init__(
        self,
        sampler: Union[object, Mapping[Union[Side, str], int]],
        fill: Fill = 0,
    ) -> None:
        if not hasattr(sampler, "sample"):
            sampler = FixedPad(sampler)
        self.sampler = sampler
        self.fill = fill

    def apply(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Labels,
    ) -> Tuple[ImageType, Labels]:
        amounts = self.sampler.sample(cfg, backend.image_bounds(image))
        left, top = amounts[Side.LEFT], amounts[Side.TOP]
        right, bottom = amounts[Side.RIGHT], amounts[Side.BOTTOM]
        if min(left, top, right, bottom) < 0:
            raise ValueError(f"Padding must be non-negative, got {amounts}")

        width, height = backend.image_size(image)
        canvas = backend.new_canvas(
            image, width + left + right, height + top + bottom, self.fill
        )
        offset = Point(left, top)
        image = backend.composite_over(
            canvas, image, Rectangle(offset, offset + Point(width, height))
        )
        return image, labels.map(lambda box: box.translate(offset))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.sampler}, fill={self.fill})"
