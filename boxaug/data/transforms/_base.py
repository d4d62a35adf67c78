"""Core pieces shared by every transform.

This module contains:
- AugmentConfig: seeded random source plus label-retention policy
- Transform: the ``(cfg, image, labels) -> (image, labels)`` interface
- Noop: the identity transform
"""

import random
from typing import Any, Optional, Tuple, Union

from PIL import Image
from torch import Tensor

from ..geometry import Rectangle
from ..labels import Labels


ImageType = Union[Image.Image, Tensor]


class AugmentConfig:
    """Per-run augmentation settings.

    One instance is built per augmentation run and passed by reference
    through the whole transform tree. Transforms only ever draw from
    ``rng``; the thresholds are read-only.

    Not safe for concurrent pipeline invocations: give each worker its own
    instance (see ``spawn``).

    Args:
        rng: Random source. Seeded ``random.Random`` for reproducible output.
        bbox_min_area: Minimum clipped box area (pixels) kept by Crop.
        bbox_min_visibility: Minimum clipped-to-reference area ratio kept by Crop.
    """

    __slots__ = ("_rng", "_bbox_min_area", "_bbox_min_visibility")

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        bbox_min_area: int = 0,
        bbox_min_visibility: float = 0.0,
    ) -> None:
        if bbox_min_area < 0:
            raise ValueError(f"bbox_min_area must be >= 0, got {bbox_min_area}")
        if bbox_min_visibility < 0:
            raise ValueError(
                f"bbox_min_visibility must be >= 0, got {bbox_min_visibility}"
            )
        self._rng = rng if rng is not None else random.Random()
        self._bbox_min_area = bbox_min_area
        self._bbox_min_visibility = bbox_min_visibility

    @classmethod
    def from_seed(
        cls,
        seed: int,
        bbox_min_area: int = 0,
        bbox_min_visibility: float = 0.0,
    ) -> "AugmentConfig":
        return cls(random.Random(seed), bbox_min_area, bbox_min_visibility)

    @classmethod
    def from_config(cls, config: Any, seed: Optional[int] = None) -> "AugmentConfig":
        """Build from the ``augment`` section of a YAML ``Config``.

        Args:
            config: ``Config`` object.
            seed: Overrides ``augment.seed`` when given.
        """
        if seed is None:
            seed = config.get("augment.seed")
        return cls(
            random.Random(seed),
            bbox_min_area=config.get("augment.bbox_min_area", 0),
            bbox_min_visibility=config.get("augment.bbox_min_visibility", 0.0),
        )

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def bbox_min_area(self) -> int:
        return self._bbox_min_area

    @property
    def bbox_min_visibility(self) -> float:
        return self._bbox_min_visibility

    def spawn(self, seed: int) -> "AugmentConfig":
        """Same thresholds, independent random source."""
        return AugmentConfig(
            random.Random(seed), self._bbox_min_area, self._bbox_min_visibility
        )

    def keep_bbox(self, reference: Rectangle, clipped: Rectangle) -> bool:
        """Decide whether a clipped box survives.

        A box is kept iff its clipped area is positive, at least
        ``bbox_min_area``, and ``clipped.area / reference.area`` is at least
        ``bbox_min_visibility``.
        """
        ref_area = reference.area
        clipped_area = clipped.area
        if clipped_area == 0 or ref_area == 0:
            return False
        if clipped_area < self._bbox_min_area:
            return False
        return clipped_area / ref_area >= self._bbox_min_visibility

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(bbox_min_area={self._bbox_min_area}, "
            f"bbox_min_visibility={self._bbox_min_visibility})"
        )


class Transform:
    """Base class of every transform.

    Subclasses implement ``apply``. Callers use ``transform`` (or call the
    instance), which normalizes the label argument to ``Labels``.
    """

    def apply(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Labels,
    ) -> Tuple[ImageType, Labels]:
        raise NotImplementedError

    def transform(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Any = None,
    ) -> Tuple[ImageType, Labels]:
        """Apply the transform and return a new ``(image, labels)`` pair."""
        return self.apply(cfg, image, Labels.coerce(labels))

    def __call__(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Any = None,
    ) -> Tuple[ImageType, Labels]:
        return self.transform(cfg, image, labels)

    def __repr__(self) -> str:
        return self.__class__.__name__ + "()"


class Noop(Transform):
    """Identity transform."""

    def apply(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Labels,
    ) -> Tuple[ImageType, Labels]:
        return image, labels
