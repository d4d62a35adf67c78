"""Build transform trees from configuration.

Each node is a mapping with a ``type`` key naming the transform; the other
keys are its parameters. Ranges are written as ``[min, max]`` lists and side
masks by name (``left``, ``top_bottom``, ``all``...).

Example:
    >>> tree = build_transform({
    ...     "type": "Sequential",
    ...     "transforms": [
    ...         {"type": "Sometimes", "p": 0.5, "transform": {"type": "FlipHorizontal"}},
    ...         {"type": "Pad", "percent": {"top_bottom": [0.0, 0.3]}},
    ...         {"type": "Crop", "rect": [10, 10, 140, 120]},
    ...     ],
    ... })
"""

from typing import Any, Callable, Dict, List, Mapping

from ._base import Noop, Transform
from .combinators import OneOf, Sequential, SomeOf, Sometimes
from .geometric import Crop, FlipHorizontal, FlipVertical, Pad, Resize
from .sampling import (
    FixedCrop,
    FixedPad,
    FixedSize,
    PercentCrop,
    PercentPad,
    PercentSize,
    PixelCrop,
    PixelDeltaSize,
    PixelPad,
)


def _one_of_keys(spec: Mapping[str, Any], keys: List[str], kind: str) -> str:
    found = [k for k in keys if k in spec]
    if len(found) != 1:
        raise ValueError(f"{kind} needs exactly one of {keys}, got {sorted(spec)}")
    return found[0]


def _children(spec: Mapping[str, Any]) -> List[Transform]:
    return [build_transform(child) for child in spec.get("transforms", [])]


def _build_crop(spec: Mapping[str, Any]) -> Transform:
    key = _one_of_keys(spec, ["rect", "percent", "pixels"], "Crop")
    if key == "rect":
        return Crop(FixedCrop(spec["rect"]))
    if key == "percent":
        return Crop(PercentCrop(spec["percent"]))
    return Crop(PixelCrop(spec["pixels"]))


def _build_pad(spec: Mapping[str, Any]) -> Transform:
    key = _one_of_keys(spec, ["fixed", "percent", "pixels"], "Pad")
    fill = spec.get("fill", 0)
    if isinstance(fill, list):
        fill = tuple(fill)
    if key == "fixed":
        return Pad(FixedPad(spec["fixed"]), fill=fill)
    if key == "percent":
        return Pad(PercentPad(spec["percent"]), fill=fill)
    return Pad(PixelPad(spec["pixels"]), fill=fill)


def _build_resize(spec: Mapping[str, Any]) -> Transform:
    key = _one_of_keys(spec, ["size", "percent", "delta"], "Resize")
    if key == "size":
        sampler = FixedSize(*spec["size"])
    elif key == "percent":
        sampler = PercentSize(spec["percent"]["width"], spec["percent"].get("height"))
    else:
        sampler = PixelDeltaSize(spec["delta"]["width"], spec["delta"]["height"])
    return Resize(sampler, algorithms=spec.get("algorithms"))


TRANSFORM_BUILDERS: Dict[str, Callable[[Mapping[str, Any]], Transform]] = {
    "Noop": lambda spec: Noop(),
    "FlipHorizontal": lambda spec: FlipHorizontal(),
    "FlipLR": lambda spec: FlipHorizontal(),
    "FlipVertical": lambda spec: FlipVertical(),
    "FlipUD": lambda spec: FlipVertical(),
    "Crop": _build_crop,
    "Pad": _build_pad,
    "Resize": _build_resize,
    "Sequential": lambda spec: Sequential(_children(spec)),
    "Sometimes": lambda spec: Sometimes(spec["p"], build_transform(spec["transform"])),
    "SomeOf": lambda spec: SomeOf(spec["count"], _children(spec)),
    "OneOf": lambda spec: OneOf(_children(spec)),
}


def build_transform(spec: Mapping[str, Any]) -> Transform:
    """Build one transform (and its children) from a mapping.

    Raises:
        KeyError: If ``type`` is missing or not registered.
        ValueError: If the parameters are malformed.
    """
    if "type" not in spec:
        raise KeyError(f"Transform spec has no 'type': {dict(spec)}")
    name = spec["type"]
    if name not in TRANSFORM_BUILDERS:
        raise KeyError(
            f"Unknown transform type: {name!r}. "
            f"Available: {sorted(TRANSFORM_BUILDERS)}"
        )
    return TRANSFORM_BUILDERS[name](spec)


def build_pipeline(config: Any) -> Sequential:
    """Build a ``Sequential`` from the ``pipeline`` list of a ``Config``."""
    return Sequential([build_transform(node) for node in config.get("pipeline", [])])
