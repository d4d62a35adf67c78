#!/usr/bin/env python3
"""Augment one image and its bounding boxes from the command line.

Usage:
    Default pipeline:
        python tools/augment.py --image in.jpg --labels in.json --output out/

    Custom pipeline with overrides:
        python tools/augment.py --config augment.yaml --image in.jpg \\
            --labels in.json --output out/ --opts augment.seed=7

    Several variants plus box visualizations:
        python tools/augment.py --config augment.yaml --image in.jpg \\
            --labels in.json --output out/ --repeat 8 --visualize

Labels are a JSON list of ``[x0, y0, x1, y1]`` pixel boxes.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from PIL import Image, ImageDraw

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from boxaug.configs import get_default_config, load_config, parse_overrides
from boxaug.data import Labels
from boxaug.data.transforms import AugmentConfig, build_pipeline

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("augment")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Augment an image with its bounding boxes")
    parser.add_argument("--config", type=str, default=None, help="YAML config (default: built-in)")
    parser.add_argument("--image", type=str, required=True, help="Input image path")
    parser.add_argument("--labels", type=str, default=None, help="JSON list of xyxy boxes")
    parser.add_argument("--output", type=str, default="outputs", help="Output directory")
    parser.add_argument("--seed", type=int, default=None, help="Override augment.seed")
    parser.add_argument("--repeat", type=int, default=1, help="Number of variants to write")
    parser.add_argument("--visualize", action="store_true", help="Also write images with boxes drawn")
    parser.add_argument(
        "--opts",
        nargs="*",
        default=[],
        help="Override config options (format: key=value, e.g., augment.bbox_min_area=50)",
    )
    parser.add_argument("--debug", action="store_true", help="Log combinator decisions")
    return parser.parse_args()


def draw_labels(image: Image.Image, labels: Labels, color=(255, 0, 0), line_width: int = 2) -> Image.Image:
    """Return a copy of ``image`` with every box outlined."""
    canvas = image.convert("RGB")
    draw = ImageDraw.Draw(canvas)
    for box in labels:
        draw.rectangle(
            [box.min.x, box.min.y, box.max.x - 1, box.max.y - 1],
            outline=color,
            width=line_width,
        )
    return canvas


def read_labels(path: str) -> Labels:
    with open(path, "r", encoding="utf-8") as f:
        return Labels(json.load(f))


def main() -> None:
    args = parse_args()
    if args.debug:
        logging.getLogger("boxaug").setLevel(logging.DEBUG)

    config = load_config(args.config) if args.config else get_default_config()
    if args.opts:
        config = config.merge(parse_overrides(args.opts))
        for opt in args.opts:
            logger.info(f"Override: {opt}")

    cfg = AugmentConfig.from_config(config, seed=args.seed)
    pipeline = build_pipeline(config)
    logger.info(f"Pipeline: {pipeline}")

    image = Image.open(args.image)
    image.load()
    labels = read_labels(args.labels) if args.labels else Labels()

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = Path(args.image).stem

    for i in range(args.repeat):
        out_image, out_labels = pipeline(cfg, image, labels)
        name = f"{stem}_{i:03d}"
        out_image.convert("RGB").save(output_dir / f"{name}.jpg")
        with open(output_dir / f"{name}.json", "w", encoding="utf-8") as f:
            json.dump(out_labels.to_list(), f)
        if args.visualize:
            draw_labels(out_image, out_labels).save(output_dir / f"{name}.viz.jpg")
        logger.info(
            f"{name}: {out_image.size[0]}x{out_image.size[1]}, "
            f"{len(out_labels)}/{len(labels)} boxes kept"
        )

    config.save(output_dir / "config.yaml")
    logger.info("Done!")


if __name__ == "__main__":
    main()
