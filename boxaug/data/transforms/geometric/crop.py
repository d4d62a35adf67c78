"""Crop transform for object detection."""

import logging
from typing import Sequence, Tuple, Union

from ...geometry import Rectangle
from ...labels import Labels
from .._base import AugmentConfig, ImageType, Transform
from ..sampling import FixedCrop
from .. import backend


logger = logging.getLogger(__name__)


class Crop(Transform):
    """Crop to a sampled rectangle, clipping and filtering boxes.

    The sampled rectangle is clamped to the image bounds. Each box is
    intersected with it, shifted to the new origin and kept only if
    ``cfg.keep_bbox`` accepts it against the crop rectangle.

    Args:
        sampler: ``FixedCrop``, ``PercentCrop`` or ``PixelCrop``. A bare
            rectangle or ``(x0, y0, x1, y1)`` is wrapped in ``FixedCrop``.
    """

    def __init__(self, sampler: Union[object, Rectangle, Sequence[int]]) -> None:
        if not hasattr(sampler, "sample"):
            sampler = FixedCrop(sampler)
        self.sampler = sampler

    def apply(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Labels,
    ) -> Tuple[ImageType, Labels]:
        bounds = backend.image_bounds(image)
        rect = self.sampler.sample(cfg, bounds).intersect(bounds)
        image = backend.crop_to_rectangle(image, rect)

        kept = []
        for box in labels:
            clipped = box.intersect(rect).translate(-rect.min)
            if cfg.keep_bbox(rect, clipped):
                kept.append(clipped)

        dropped = len(labels) - len(kept)
        if dropped:
            logger.debug(f"Crop {rect} dropped {dropped} of {len(labels)} boxes")
        return image, Labels(kept)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.sampler})"
