"""Image backend used by the geometric transforms.

Thin wrappers over torchvision's functional API so that every transform
works on both PIL images and ``(C, H, W)`` tensors. Coordinate math never
lives here; this module only moves pixels.
"""

import enum
from typing import Tuple, Union

import torch
from torch import Tensor
from PIL import Image
import torchvision.transforms.functional as F
from torchvision.transforms import InterpolationMode

from ..geometry import Point, Rectangle
from ._base import ImageType


Fill = Union[int, float, Tuple[int, ...]]


class ResizeAlgorithm(enum.Enum):
    """Resampling filters accepted by ``resize``.

    BOX, HAMMING and LANCZOS are only available for PIL images.
    """

    NEAREST = InterpolationMode.NEAREST
    BILINEAR = InterpolationMode.BILINEAR
    BICUBIC = InterpolationMode.BICUBIC
    BOX = InterpolationMode.BOX
    HAMMING = InterpolationMode.HAMMING
    LANCZOS = InterpolationMode.LANCZOS

    @classmethod
    def parse(cls, value: Union["ResizeAlgorithm", str]) -> "ResizeAlgorithm":
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown resize algorithm: {value!r}") from None


def image_size(image: ImageType) -> Tuple[int, int]:
    """Return ``(width, height)``."""
    if isinstance(image, Tensor):
        h, w = image.shape[-2:]
        return w, h
    return image.size


def image_bounds(image: ImageType) -> Rectangle:
    w, h = image_size(image)
    return Rectangle.from_size(w, h)


def flip_horizontal(image: ImageType) -> ImageType:
    return F.hflip(image)


def flip_vertical(image: ImageType) -> ImageType:
    return F.vflip(image)


def crop_to_rectangle(image: ImageType, rect: Rectangle) -> ImageType:
    """Crop to ``rect`` after clamping it to the image bounds."""
    r = rect.intersect(image_bounds(image))
    out = F.crop(image, r.min.y, r.min.x, r.height, r.width)
    if isinstance(out, Tensor):
        # Slicing returns a view of the input.
        out = out.clone()
    return out


def resize(
    image: ImageType,
    width: int,
    height: int,
    algorithm: ResizeAlgorithm = ResizeAlgorithm.NEAREST,
) -> ImageType:
    """Resize to exactly ``width`` x ``height`` pixels."""
    if width < 1 or height < 1:
        raise ValueError(f"Resize target must be at least 1x1, got {width}x{height}")
    return F.resize(image, [height, width], interpolation=algorithm.value)


def new_canvas(like: ImageType, width: int, height: int, fill: Fill = 0) -> ImageType:
    """Allocate an image of the same kind as ``like`` filled with ``fill``."""
    if isinstance(like, Tensor):
        shape = (*like.shape[:-2], height, width)
        if isinstance(fill, (tuple, list)):
            canvas = torch.empty(shape, dtype=like.dtype, device=like.device)
            canvas[...] = torch.as_tensor(fill, dtype=like.dtype, device=like.device).view(-1, 1, 1)
            return canvas
        return torch.full(shape, fill, dtype=like.dtype, device=like.device)
    return Image.new(like.mode, (width, height), fill)


def composite_over(dst: ImageType, src: ImageType, rect: Rectangle) -> ImageType:
    """Paint ``src`` into ``dst`` at ``rect.min``, overwriting destination pixels.

    ``dst`` is modified in place and returned. Only the part of ``rect``
    inside ``dst`` is painted.
    """
    src_w, src_h = image_size(src)
    area = Rectangle(rect.min, Point(rect.min.x + src_w, rect.min.y + src_h))
    area = area.intersect(rect).intersect(image_bounds(dst))
    if area.is_empty():
        return dst

    sx, sy = area.min.x - rect.min.x, area.min.y - rect.min.y
    if isinstance(dst, Tensor):
        dst[..., area.min.y:area.max.y, area.min.x:area.max.x] = src[
            ..., sy:sy + area.height, sx:sx + area.width
        ]
        return dst

    dst.paste(
        src.crop((sx, sy, sx + area.width, sy + area.height)),
        (area.min.x, area.min.y),
    )
    return dst
