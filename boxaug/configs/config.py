"""YAML configuration for augmentation runs.

A configuration file has two sections:

    augment:     seed and label-retention thresholds (see ``AugmentConfig``)
    pipeline:    list of transform nodes (see ``build_transform``)

Files may inherit from others with ``_base_``; later files override
earlier ones key by key.

Example:
    >>> config = load_config("augment.yaml")
    >>> config.augment.bbox_min_area
    20
    >>> config.get("augment.seed", default=0)
    42
"""

import copy
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

import yaml


class ConfigDict(dict):
    """Dictionary with attribute-style access.

    Nested dictionaries (also inside lists) become ConfigDicts.

    Example:
        >>> cfg = ConfigDict({"augment": {"seed": 42}})
        >>> cfg.augment.seed
        42
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for key, value in self.items():
            self[key] = _wrap(value)

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"Config has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = _wrap(value)

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(f"Config has no attribute '{name}'")

    def get_nested(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-separated path, e.g. ``"augment.seed"``."""
        value = self
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set_nested(self, key: str, value: Any) -> None:
        """Set a value by dot-separated path, creating parents as needed."""
        keys = key.split(".")
        target = self
        for k in keys[:-1]:
            if k not in target or not isinstance(target[k], dict):
                target[k] = ConfigDict()
            target = target[k]
        target[keys[-1]] = _wrap(value)

    def to_dict(self) -> Dict:
        """Convert to plain nested dicts and lists."""
        return _unwrap(self)


def _wrap(value: Any) -> Any:
    if isinstance(value, dict) and not isinstance(value, ConfigDict):
        return ConfigDict(value)
    if isinstance(value, list):
        return [_wrap(v) for v in value]
    return value


def _unwrap(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _unwrap(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_unwrap(v) for v in value]
    return value


class Config:
    """Configuration manager.

    Provides loading, merging, and accessing configuration values
    from YAML files.

    Attributes:
        _cfg: Internal ConfigDict storing configuration values.

    Example:
        >>> config = Config.from_file("augment.yaml")
        >>> print(config.augment.seed)
        >>> config.save("resolved.yaml")
    """

    def __init__(self, cfg_dict: Optional[Dict] = None):
        if cfg_dict is None:
            cfg_dict = {}
        self._cfg = ConfigDict(cfg_dict)

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> "Config":
        """Load configuration from a YAML file.

        Args:
            filepath: Path to YAML configuration file.

        Returns:
            Config object with loaded values.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            yaml.YAMLError: If YAML parsing fails.
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        with open(filepath, "r", encoding="utf-8") as f:
            cfg_dict = yaml.safe_load(f)

        if cfg_dict is None:
            cfg_dict = {}

        base_path = cfg_dict.pop("_base_", None)
        config = cls(cfg_dict)

        if base_path is not None:
            if isinstance(base_path, str):
                base_path = [base_path]
            merged = cls()
            for bp in base_path:
                merged = merged.merge(cls.from_file(filepath.parent / bp))
            config = merged.merge(config)

        return config

    @classmethod
    def from_dict(cls, cfg_dict: Dict) -> "Config":
        return cls(cfg_dict)

    def merge(self, other: Union["Config", Dict]) -> "Config":
        """Merge another config into this one.

        Values from ``other`` win; nested dicts are merged recursively. Lists
        such as ``pipeline`` are replaced, not concatenated.

        Returns:
            New merged Config.
        """
        other_dict = other.to_dict() if isinstance(other, Config) else _unwrap(other)
        return Config(_deep_merge(self._cfg.to_dict(), other_dict))

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value with dot notation.

        Example:
            >>> min_area = config.get("augment.bbox_min_area", 0)
        """
        return self._cfg.get_nested(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value with dot notation."""
        self._cfg.set_nested(key, value)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return object.__getattribute__(self, name)
        try:
            return self._cfg[name]
        except KeyError:
            raise AttributeError(f"Config has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self._cfg[name] = _wrap(value)

    def __getitem__(self, key: str) -> Any:
        return self._cfg[key]

    def __len__(self) -> int:
        return len(self._cfg)

    def __iter__(self) -> Iterator[str]:
        return iter(self._cfg)

    def __contains__(self, key: str) -> bool:
        """Check if key exists (supports dot notation)."""
        return self.get(key) is not None

    def to_dict(self) -> Dict:
        return self._cfg.to_dict()

    def save(self, filepath: Union[str, Path]) -> None:
        """Save configuration to a YAML file."""
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def __repr__(self) -> str:
        return f"Config({self._cfg})"


def _deep_merge(base: Dict, update: Dict) -> Dict:
    result = copy.deepcopy(base)
    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def load_config(filepath: Union[str, Path]) -> Config:
    """Load configuration from a YAML file."""
    return Config.from_file(filepath)


def merge_config(config: Config, overrides: Union[Config, Dict]) -> Config:
    """Return ``config`` with ``overrides`` merged on top."""
    return config.merge(overrides)


def parse_overrides(opts: List[str]) -> Dict:
    """Turn ``["augment.seed=7", ...]`` into a nested override dict.

    Values are parsed as YAML scalars, so numbers and booleans keep their
    types.

    Raises:
        ValueError: If an option has no ``=``.
    """
    overrides = ConfigDict()
    for opt in opts:
        if "=" not in opt:
            raise ValueError(f"Override must look like key=value, got {opt!r}")
        key, raw = opt.split("=", 1)
        overrides.set_nested(key.strip(), yaml.safe_load(raw))
    return overrides.to_dict()


def get_default_config() -> Config:
    """Default augmentation configuration.

    Flip left-right half of the time, pad up to 30% top/bottom and 10%
    left/right, then keep boxes of at least 20 px and 10% visibility.
    """
    default_cfg = {
        "augment": {
            "seed": 42,
            "bbox_min_area": 20,
            "bbox_min_visibility": 0.1,
        },
        "pipeline": [
            {"type": "Sometimes", "p": 0.5, "transform": {"type": "FlipHorizontal"}},
            {
                "type": "Pad",
                "percent": {"top_bottom": [0.0, 0.3], "left_right": [0.0, 0.1]},
            },
        ],
    }
    return Config(default_cfg)
