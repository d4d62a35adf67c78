"""
Tests for building transform trees from configuration.
"""

import tempfile
from pathlib import Path

import pytest

from boxaug.configs import Config, get_default_config, load_config
from boxaug.data import FloatRange, IntRange, Side
from boxaug.data.transforms import (
    AugmentConfig,
    Crop,
    FlipHorizontal,
    FlipVertical,
    Noop,
    OneOf,
    Pad,
    PercentPad,
    PercentSize,
    PixelCrop,
    PixelDeltaSize,
    Resize,
    ResizeAlgorithm,
    Sequential,
    SomeOf,
    Sometimes,
    build_pipeline,
    build_transform,
)


class TestBuildTransform:
    """Tests for build_transform."""

    def test_primitives(self):
        assert isinstance(build_transform({"type": "Noop"}), Noop)
        assert isinstance(build_transform({"type": "FlipLR"}), FlipHorizontal)
        assert isinstance(build_transform({"type": "FlipUD"}), FlipVertical)

    def test_crop_variants(self):
        fixed = build_transform({"type": "Crop", "rect": [25, 25, 100, 100]})
        assert isinstance(fixed, Crop)
        assert fixed.sampler.rect.to_xyxy() == (25, 25, 100, 100)

        pixels = build_transform({"type": "Crop", "pixels": {"all": [0, 10]}})
        assert isinstance(pixels.sampler, PixelCrop)
        assert pixels.sampler.sides[Side.BOTTOM] == IntRange(0, 10)

    def test_pad_percent(self):
        pad = build_transform({
            "type": "Pad",
            "percent": {"top_bottom": [0.0, 0.3], "left_right": [0.0, 0.1]},
            "fill": [0, 0, 0],
        })
        assert isinstance(pad, Pad)
        assert isinstance(pad.sampler, PercentPad)
        assert pad.sampler.sides[Side.TOP] == FloatRange(0.0, 0.3)
        assert pad.sampler.sides[Side.LEFT] == FloatRange(0.0, 0.1)
        assert pad.fill == (0, 0, 0)

    def test_pad_list_fill_on_tensor(self, cfg, tensor_image):
        pad = build_transform({"type": "Pad", "fixed": {"all": 2}, "fill": [1, 2, 3]})
        image, _ = pad(cfg, tensor_image, None)
        assert image.shape == (3, 133, 196)
        assert image[:, 0, 0].tolist() == [1.0, 2.0, 3.0]

    def test_resize_variants(self):
        fixed = build_transform({"type": "Resize", "size": [50, 40], "algorithms": ["box", "lanczos"]})
        assert fixed.algorithms == [ResizeAlgorithm.BOX, ResizeAlgorithm.LANCZOS]

        percent = build_transform({"type": "Resize", "percent": {"width": [0.5, 1.5]}})
        assert isinstance(percent.sampler, PercentSize)
        assert percent.sampler.height is None

        delta = build_transform({"type": "Resize", "delta": {"width": [-5, 5], "height": [0, 3]}})
        assert isinstance(delta.sampler, PixelDeltaSize)

    def test_combinators(self):
        tree = build_transform({
            "type": "Sequential",
            "transforms": [
                {"type": "Sometimes", "p": 0.5, "transform": {"type": "FlipHorizontal"}},
                {"type": "SomeOf", "count": [0, 2], "transforms": [{"type": "Noop"}, {"type": "FlipUD"}]},
                {"type": "OneOf", "transforms": [{"type": "Noop"}, {"type": "FlipLR"}]},
            ],
        })
        assert isinstance(tree, Sequential)
        sometimes, some_of, one_of = tree.transforms
        assert isinstance(sometimes, Sometimes)
        assert isinstance(sometimes.child, FlipHorizontal)
        assert isinstance(some_of, SomeOf)
        assert some_of.count == IntRange(0, 2)
        assert len(some_of.transforms) == 2
        assert isinstance(one_of, OneOf)

    def test_unknown_type(self):
        with pytest.raises(KeyError, match="Available"):
            build_transform({"type": "Rotate"})

    def test_missing_type(self):
        with pytest.raises(KeyError):
            build_transform({"p": 0.5})

    def test_ambiguous_sampler(self):
        with pytest.raises(ValueError):
            build_transform({"type": "Crop", "rect": [0, 0, 1, 1], "pixels": {"all": [0, 1]}})
        with pytest.raises(ValueError):
            build_transform({"type": "Pad"})

    def test_malformed_range(self):
        with pytest.raises(ValueError):
            build_transform({"type": "SomeOf", "count": [3, 1], "transforms": []})


class TestBuildPipeline:
    """Tests for build_pipeline."""

    def test_default_config(self, pil_image, labels):
        config = get_default_config()
        pipeline = build_pipeline(config)

        assert isinstance(pipeline, Sequential)
        assert len(pipeline.transforms) == 2

        image, out = pipeline(AugmentConfig.from_config(config), pil_image, labels)
        assert len(out) == 1
        assert image.size[0] >= 192 and image.size[1] >= 129

    def test_empty_pipeline(self):
        assert build_pipeline(Config({})).transforms == []

    def test_from_yaml(self, pil_image):
        yaml_content = """
augment:
  seed: 42
  bbox_min_area: 20
  bbox_min_visibility: 0.1
pipeline:
  - type: FlipLR
  - type: Pad
    fixed:
      right: 10
  - type: FlipUD
  - type: Crop
    rect: [10, 10, 140, 120]
"""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "augment.yaml"
            path.write_text(yaml_content)
            config = load_config(path)

        pipeline = build_pipeline(config)
        image, out = pipeline(AugmentConfig.from_config(config), pil_image, [(26, 9, 106, 129)])

        assert image.size == (130, 110)
        assert out.to_list() == [[76, 0, 130, 110]]

    def test_example_config(self, pil_image, multi_labels):
        """The shipped example config builds and runs."""
        path = Path(__file__).resolve().parents[2] / "configs" / "example.yaml"
        config = load_config(path)
        pipeline = build_pipeline(config)

        assert len(pipeline.transforms) == 3
        image, out = pipeline(AugmentConfig.from_config(config), pil_image, multi_labels)
        assert len(out) <= len(multi_labels)
