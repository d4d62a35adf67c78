"""
Tests for transform combinators.

Covers composition order, probability handling, subset sizes, the exact
randomness draw order and error propagation.
"""

import random

import pytest

from boxaug.data import IntRange
from boxaug.data.transforms import (
    AugmentConfig,
    Crop,
    FlipHorizontal,
    FlipVertical,
    Noop,
    OneOf,
    Pad,
    Sequential,
    SomeOf,
    Sometimes,
    Side,
    Transform,
)


class Recorder(Transform):
    """Identity transform that records its name each time it runs."""

    def __init__(self, name: str, log: list) -> None:
        self.name = name
        self.log = log

    def apply(self, cfg, image, labels):
        self.log.append(self.name)
        return image, labels


class Explode(Transform):
    """Transform that always fails."""

    def apply(self, cfg, image, labels):
        raise RuntimeError("boom")


class TestSequential:
    """Tests for Sequential."""

    def test_applies_in_order(self, cfg, pil_image):
        log = []
        seq = Sequential(Recorder("a", log), Recorder("b", log), Recorder("c", log))
        seq(cfg, pil_image, None)
        assert log == ["a", "b", "c"]

    def test_accepts_list(self, cfg, pil_image):
        log = []
        Sequential([Recorder("a", log), Recorder("b", log)])(cfg, pil_image, None)
        assert log == ["a", "b"]

    def test_empty_is_noop(self, cfg, pil_image, labels):
        image, out = Sequential()(cfg, pil_image, labels)
        assert image is pil_image
        assert out == labels

    def test_threads_outputs(self, cfg, pil_image):
        """FlipLR, pad right, FlipUD, crop: each child sees the previous output."""
        seq = Sequential(
            FlipHorizontal(),
            Pad({Side.RIGHT: 10}),
            FlipVertical(),
            Crop((10, 10, 140, 120)),
        )
        image, out = seq(cfg, pil_image, [(26, 9, 106, 129)])
        assert image.size == (130, 110)
        assert out.to_list() == [[76, 0, 130, 110]]

    def test_child_failure_propagates(self, cfg, pil_image):
        with pytest.raises(RuntimeError, match="boom"):
            Sequential(Noop(), Explode())(cfg, pil_image, None)


class TestSometimes:
    """Tests for Sometimes."""

    def test_always_with_p_1(self, pil_image):
        cfg = AugmentConfig.from_seed(0)
        log = []
        t = Sometimes(1.0, Recorder("x", log))
        for _ in range(20):
            t(cfg, pil_image, None)
        assert len(log) == 20

    def test_never_with_p_0(self, pil_image):
        cfg = AugmentConfig.from_seed(0)
        log = []
        t = Sometimes(0.0, Recorder("x", log))
        for _ in range(20):
            t(cfg, pil_image, None)
        assert log == []

    @pytest.mark.parametrize("p,expected", [(-0.5, 0), (1.5, 10)])
    def test_out_of_range_probability(self, pil_image, p, expected):
        cfg = AugmentConfig.from_seed(0)
        log = []
        t = Sometimes(p, Recorder("x", log))
        for _ in range(10):
            t(cfg, pil_image, None)
        assert len(log) == expected

    def test_matches_seeded_draws(self, pil_image):
        """Applies iff the next uniform draw is below p."""
        cfg = AugmentConfig.from_seed(123)
        ref = random.Random(123)
        log = []
        t = Sometimes(0.33, Recorder("x", log))

        expected = 0
        for _ in range(50):
            if ref.random() < 0.33:
                expected += 1
            t(cfg, pil_image, None)
        assert len(log) == expected

    def test_always_consumes_one_draw(self, pil_image):
        cfg = AugmentConfig.from_seed(8)
        ref = random.Random(8)
        Sometimes(0.0, Noop())(cfg, pil_image, None)
        ref.random()
        assert cfg.rng.random() == ref.random()


class TestSomeOf:
    """Tests for SomeOf."""

    def _run(self, seed, count, n_children, pil_image):
        log = []
        children = [Recorder(str(i), log) for i in range(n_children)]
        SomeOf(count, *children)(AugmentConfig.from_seed(seed), pil_image, None)
        return log

    def test_count_within_range(self, pil_image):
        for seed in range(40):
            log = self._run(seed, (1, 3), 4, pil_image)
            assert 1 <= len(log) <= 2
            assert len(set(log)) == len(log)

    def test_count_clamped_to_children(self, pil_image):
        for seed in range(10):
            assert len(self._run(seed, (5, 9), 3, pil_image)) == 3

    def test_negative_count_clamped_to_zero(self, pil_image):
        for seed in range(10):
            assert self._run(seed, (-5, -2), 3, pil_image) == []

    def test_can_apply_all(self, pil_image):
        """The upper bound includes every child."""
        sizes = {len(self._run(seed, (0, 4), 3, pil_image)) for seed in range(100)}
        assert sizes == {0, 1, 2, 3}

    def test_shuffle_then_count(self, pil_image):
        """Children are shuffled first, then the count is drawn."""
        log = []
        children = [Recorder(str(i), log) for i in range(5)]
        SomeOf(IntRange(1, 6), children)(AugmentConfig.from_seed(77), pil_image, None)

        ref = random.Random(77)
        order = [str(i) for i in range(5)]
        ref.shuffle(order)
        n = ref.randrange(1, 6)
        assert log == order[:n]

    def test_does_not_reorder_children(self, pil_image):
        log = []
        children = [Recorder(str(i), log) for i in range(5)]
        some = SomeOf((5, 6), children)
        some(AugmentConfig.from_seed(1), pil_image, None)
        assert [c.name for c in some.transforms] == ["0", "1", "2", "3", "4"]

    def test_empty_children(self, cfg, pil_image, labels):
        image, out = SomeOf((0, 3))(cfg, pil_image, labels)
        assert image is pil_image
        assert out == labels

    def test_empty_count_range_rejected(self):
        with pytest.raises(ValueError):
            SomeOf((2, 2), Noop())


class TestOneOf:
    """Tests for OneOf."""

    def test_applies_exactly_one(self, pil_image):
        seen = set()
        for seed in range(50):
            log = []
            OneOf(Recorder("a", log), Recorder("b", log), Recorder("c", log))(
                AugmentConfig.from_seed(seed), pil_image, None
            )
            assert len(log) == 1
            seen.add(log[0])
        assert seen == {"a", "b", "c"}

    def test_single_child(self, cfg, pil_image):
        log = []
        OneOf([Recorder("only", log)])(cfg, pil_image, None)
        assert log == ["only"]


class TestNesting:
    """Tests for nested composition trees."""

    def test_nested_tree_is_reproducible(self, pil_image, multi_labels):
        tree = Sequential(
            Sometimes(0.5, FlipHorizontal()),
            SomeOf((0, 3), Pad({Side.LEFT: 5}), Pad({Side.TOP: 7}), OneOf(FlipHorizontal(), Noop())),
        )
        a = tree(AugmentConfig.from_seed(5), pil_image, multi_labels)
        b = tree(AugmentConfig.from_seed(5), pil_image, multi_labels)
        assert a[0].tobytes() == b[0].tobytes()
        assert a[1] == b[1]

    def test_repr(self):
        tree = Sequential(Sometimes(0.5, FlipHorizontal()), OneOf(Noop(), Noop()))
        text = repr(tree)
        assert "Sometimes(p=0.5, FlipHorizontal())" in text
        assert "OneOf(2 transforms)" in text
