"""
Pytest fixtures and configuration for the boxaug test suite.

Shared images, label sets and seeded configurations used across tests.
"""

import pytest
import torch
from torch import Tensor
from PIL import Image, ImageDraw

from boxaug.data import Labels, Rectangle
from boxaug.data.transforms import AugmentConfig


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def seed() -> int:
    return 42


@pytest.fixture
def cfg(seed: int) -> AugmentConfig:
    """Seeded config with the default retention thresholds (20 px, 10%)."""
    return AugmentConfig.from_seed(seed, bbox_min_area=20, bbox_min_visibility=0.1)


@pytest.fixture
def permissive_cfg(seed: int) -> AugmentConfig:
    """Seeded config that keeps every non-empty box."""
    return AugmentConfig.from_seed(seed)


# ============================================================================
# Image Fixtures
# ============================================================================

@pytest.fixture
def pil_image() -> Image.Image:
    """
    192x129 RGB image with a red block in the top-left quadrant.

    Matches the size of the reference fixture the scenarios are written for.
    """
    image = Image.new("RGB", (192, 129), (0, 0, 255))
    draw = ImageDraw.Draw(image)
    draw.rectangle([0, 0, 95, 63], fill=(255, 0, 0))
    return image


@pytest.fixture
def tensor_image() -> Tensor:
    """
    Tensor of shape (3, 129, 192) whose pixel values encode their position.
    """
    h, w = 129, 192
    ys = torch.arange(h, dtype=torch.float32).view(h, 1).expand(h, w)
    xs = torch.arange(w, dtype=torch.float32).view(1, w).expand(h, w)
    return torch.stack([xs, ys, xs + ys], dim=0)


# ============================================================================
# Label Fixtures
# ============================================================================

@pytest.fixture
def labels() -> Labels:
    return Labels([Rectangle.from_xyxy(26, 9, 110, 129)])


@pytest.fixture
def multi_labels() -> Labels:
    return Labels([
        (26, 9, 106, 129),   # tall box on the left
        (120, 20, 180, 60),  # box in the top right
        (0, 100, 30, 129),   # small box in the bottom-left corner
    ])

