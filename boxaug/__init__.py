"""boxaug: geometric image augmentation with consistent bounding boxes.

Flip, crop, pad and resize an image while keeping its box annotations
aligned, composed into reproducible, seeded pipelines.
"""

__version__ = "0.1.0"
__author__ = "boxaug Team"
