"""Resize transform for object detection."""

from typing import Iterable, Optional, Tuple, Union

from ...geometry import Point, Rectangle, round_half_away
from ...labels import Labels
from .._base import AugmentConfig, ImageType, Transform
from ..backend import ResizeAlgorithm
from ..sampling import FixedSize
from .. import backend


class Resize(Transform):
    """Resize to a sampled size and rescale boxes per axis.

    Box coordinates are multiplied by ``new_width / old_width`` and
    ``new_height / old_height`` and rounded half away from zero.

    Args:
        sampler: ``FixedSize``, ``PercentSize`` or ``PixelDeltaSize``. A
            ``(width, height)`` pair is wrapped in ``FixedSize``.
        algorithms: Candidate resampling filters. When more than one is
            given, one is drawn uniformly per call.
    """

    def __init__(
        self,
        sampler: Union[object, Tuple[int, int]],
        algorithms: Optional[Iterable[Union[ResizeAlgorithm, str]]] = None,
    ) -> None:
        if not hasattr(sampler, "sample"):
            sampler = FixedSize(*sampler)
        if algorithms is None:
            algorithms = [ResizeAlgorithm.NEAREST]
        self.algorithms = [ResizeAlgorithm.parse(a) for a in algorithms]
        if not self.algorithms:
            raise ValueError("Resize needs at least one algorithm")
        self.sampler = sampler

    def _choose_algorithm(self, cfg: AugmentConfig) -> ResizeAlgorithm:
        if len(self.algorithms) == 1:
            return self.algorithms[0]
        return self.algorithms[cfg.rng.randrange(len(self.algorithms))]

    def apply(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Labels,
    ) -> Tuple[ImageType, Labels]:
        old_w, old_h = backend.image_size(image)
        if old_w == 0 or old_h == 0:
            raise ValueError(f"Cannot resize an empty {old_w}x{old_h} image")
        size = self.sampler.sample(cfg, Rectangle.from_size(old_w, old_h))
        algorithm = self._choose_algorithm(cfg)

        image = backend.resize(image, size.x, size.y, algorithm)
        new_w, new_h = backend.image_size(image)
        x_ratio = new_w / old_w
        y_ratio = new_h / old_h

        def scale(pt: Point) -> Point:
            return Point(round_half_away(pt.x * x_ratio), round_half_away(pt.y * y_ratio))

        return image, labels.map(lambda box: Rectangle(scale(box.min), scale(box.max)))

    def __repr__(self) -> str:
        algs = ", ".join(a.name for a in self.algorithms)
        return f"{self.__class__.__name__}({self.sampler}, algorithms=[{algs}])"
