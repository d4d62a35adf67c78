"""Bounding-box label set carried alongside an image."""

from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Union

import torch
from torch import Tensor

from .geometry import Rectangle, coerce_rectangle, round_half_away


BoxLike = Union[Rectangle, Sequence[int]]


class Labels:
    """Ordered, immutable collection of bounding boxes.

    Transforms never mutate a label set; they build a new one. Order follows
    insertion order of the source annotations.

    Args:
        boxes: Rectangles or ``(x0, y0, x1, y1)`` sequences.

    Example:
        >>> labels = Labels([(26, 9, 110, 129)])
        >>> labels[0].width
        84
    """

    __slots__ = ("_boxes",)

    def __init__(self, boxes: Optional[Iterable[BoxLike]] = None) -> None:
        self._boxes = tuple(coerce_rectangle(b) for b in (boxes or ()))

    @classmethod
    def coerce(cls, value: Union["Labels", Iterable[BoxLike], None]) -> "Labels":
        if isinstance(value, cls):
            return value
        return cls(value)

    @classmethod
    def from_tensor(cls, boxes: Tensor) -> "Labels":
        """Build from an ``(N, 4)`` xyxy tensor, rounding to integer pixels."""
        return cls(tuple(round_half_away(v) for v in row) for row in boxes.tolist())

    @property
    def boxes(self):
        return self._boxes

    def map(self, fn: Callable[[Rectangle], Rectangle]) -> "Labels":
        return Labels(fn(b) for b in self._boxes)

    def to_list(self) -> List[List[int]]:
        return [list(b.to_xyxy()) for b in self._boxes]

    def to_tensor(self, dtype: torch.dtype = torch.float32) -> Tensor:
        """Boxes as an ``(N, 4)`` xyxy tensor."""
        if not self._boxes:
            return torch.zeros((0, 4), dtype=dtype)
        return torch.tensor(self.to_list(), dtype=dtype)

    def __len__(self) -> int:
        return len(self._boxes)

    def __iter__(self) -> Iterator[Rectangle]:
        return iter(self._boxes)

    def __getitem__(self, index: int) -> Rectangle:
        return self._boxes[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Labels):
            return self._boxes == other._boxes
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._boxes)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._boxes)})"
