"""Transform combinators.

Combinators build a transform tree out of other transforms. All of them
draw from ``cfg.rng`` in a fixed order, so a given seed and tree always
produce the same output:

- Sometimes: one ``rng.random()`` per call.
- SomeOf / OneOf: ``rng.shuffle`` over a copy of the children, then one
  draw from the count range.

Child failures propagate unchanged.
"""

import logging
from typing import List, Sequence, Tuple, Union

from ..geometry import IntRange
from ..labels import Labels
from ._base import AugmentConfig, ImageType, Noop, Transform


logger = logging.getLogger(__name__)


def _as_list(transforms: Sequence[Transform]) -> List[Transform]:
    # Accept both Sequential(a, b) and Sequential([a, b]).
    if len(transforms) == 1 and isinstance(transforms[0], (list, tuple)):
        return list(transforms[0])
    return list(transforms)


class Sequential(Transform):
    """Apply transforms one after another.

    Args:
        *transforms: Children, applied in the given order. No children
            behaves as ``Noop``.
    """

    def __init__(self, *transforms: Transform) -> None:
        self.transforms = _as_list(transforms)

    def apply(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Labels,
    ) -> Tuple[ImageType, Labels]:
        for t in self.transforms:
            image, labels = t.transform(cfg, image, labels)
        return image, labels

    def __repr__(self) -> str:
        format_string = self.__class__.__name__ + "("
        for t in self.transforms:
            format_string += f"\n    {t}"
        format_string += "\n)"
        return format_string


class Sometimes(Transform):
    """Apply a transform with probability ``p``.

    ``p`` outside ``[0, 1]`` simply means always or never.

    Args:
        p: Probability of applying ``transform``.
        transform: Child transform.
    """

    def __init__(self, p: float, transform: Transform) -> None:
        self.p = p
        self.child = transform

    def apply(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Labels,
    ) -> Tuple[ImageType, Labels]:
        u = cfg.rng.random()
        if u < self.p:
            return self.child.transform(cfg, image, labels)
        return Noop().transform(cfg, image, labels)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(p={self.p}, {self.child})"


class SomeOf(Transform):
    """Apply a random subset of transforms in random order.

    The children are shuffled, a count ``n`` is drawn from ``count`` and
    clamped into ``[0, len(transforms)]``, and the first ``n`` shuffled
    children are applied in sequence.

    Args:
        count: Range the number of applied children is drawn from.
        *transforms: Candidate children.
    """

    def __init__(self, count: Union[IntRange, Sequence[int]], *transforms: Transform) -> None:
        self.count = IntRange.coerce(count)
        self.transforms = _as_list(transforms)

    def apply(
        self,
        cfg: AugmentConfig,
        image: ImageType,
        labels: Labels,
    ) -> Tuple[ImageType, Labels]:
        shuffled = list(self.transforms)
        cfg.rng.shuffle(shuffled)
        n = self.count.sample(cfg.rng)
        n = max(0, min(n, len(shuffled)))
        logger.debug(f"{self.__class__.__name__} applying {n} of {len(shuffled)} transforms")
        return Sequential(shuffled[:n]).transform(cfg, image, labels)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(count={self.count}, "
            f"{len(self.transforms)} transforms)"
        )


class OneOf(SomeOf):
    """Apply exactly one transform chosen uniformly at random.

    Args:
        *transforms: Candidate children.
    """

    def __init__(self, *transforms: Transform) -> None:
        super().__init__(IntRange(1, 2), *transforms)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self.transforms)} transforms)"
