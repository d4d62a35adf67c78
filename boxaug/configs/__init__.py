"""Configuration management for augmentation runs.

Example:
    >>> from boxaug.configs import Config, load_config
    >>> config = load_config("augment.yaml")
    >>> print(config.augment.seed)
"""

from .config import (
    Config,
    ConfigDict,
    get_default_config,
    load_config,
    merge_config,
    parse_overrides,
)

__all__ = [
    "Config",
    "ConfigDict",
    "load_config",
    "merge_config",
    "parse_overrides",
    "get_default_config",
]
