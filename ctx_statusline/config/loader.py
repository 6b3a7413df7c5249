"""
Configuration management and loading.

Handles the optional YAML file that overrides the status line defaults.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ctx_statusline.core.pricing import DEFAULT_PRICES, PriceTable
from ctx_statusline.storage.reader import DEFAULT_MAX_READ_BYTES

DEFAULT_CONTEXT_LIMIT = 200_000
DEFAULT_TRANSCRIPT_ROOT = Path.home() / ".claude" / "projects"
DEFAULT_CONFIG_PATH = Path.home() / ".claude" / "statusline.yaml"

PRICE_KEYS = ("input", "output", "cache_read", "cache_write")


@dataclass(frozen=True)
class StatuslineConfig:
    """Settings passed explicitly to the calculator and renderer."""
    context_limit: int = DEFAULT_CONTEXT_LIMIT
    prices: PriceTable = DEFAULT_PRICES
    transcript_root: Path = DEFAULT_TRANSCRIPT_ROOT
    max_read_bytes: int = DEFAULT_MAX_READ_BYTES

    def __post_init__(self):
        """Validate limits are positive."""
        if self.context_limit <= 0:
            raise ValueError("context_limit must be > 0")
        if self.max_read_bytes <= 0:
            raise ValueError("max_read_bytes must be > 0")


def load_config(path: Union[str, Path]) -> StatuslineConfig:
    """Load and validate status line configuration from a YAML file.

    Every key is optional; missing keys keep their defaults. Unknown keys
    are rejected so that typos do not silently fall back to defaults.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated StatuslineConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        OSError: If config file cannot be read
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Statusline config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if raw_config is None:
        return StatuslineConfig()
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a mapping")

    allowed_top_keys = {'context_limit', 'transcript_root', 'max_read_bytes', 'pricing'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    kwargs: Dict[str, Any] = {}

    if 'context_limit' in raw_config:
        kwargs['context_limit'] = _parse_positive_int(raw_config['context_limit'], 'context_limit')

    if 'max_read_bytes' in raw_config:
        kwargs['max_read_bytes'] = _parse_positive_int(raw_config['max_read_bytes'], 'max_read_bytes')

    if 'transcript_root' in raw_config:
        root = raw_config['transcript_root']
        if not isinstance(root, str) or not root.strip():
            raise ValueError("'transcript_root' must be a non-empty string")
        kwargs['transcript_root'] = Path(root).expanduser()

    if 'pricing' in raw_config:
        kwargs['prices'] = _parse_pricing(raw_config['pricing'])

    return StatuslineConfig(**kwargs)


def load_default_config() -> StatuslineConfig:
    """Load the config at the default location, or defaults if it is absent."""
    if not DEFAULT_CONFIG_PATH.exists():
        return StatuslineConfig()
    return load_config(DEFAULT_CONFIG_PATH)


def _parse_positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"'{name}' must be a positive integer")
    return value


def _parse_pricing(data: Any) -> PriceTable:
    """Parse and validate the pricing section.

    Args:
        data: Raw pricing mapping

    Returns:
        PriceTable with overrides applied on top of the defaults

    Raises:
        ValueError: If pricing is invalid
    """
    if not isinstance(data, dict):
        raise ValueError("'pricing' must be a dictionary")

    unknown_keys = set(data.keys()) - set(PRICE_KEYS)
    if unknown_keys:
        raise ValueError(f"Unknown pricing keys: {unknown_keys}")

    prices = {}
    for key in PRICE_KEYS:
        if key not in data:
            prices[key] = getattr(DEFAULT_PRICES, key)
            continue
        value = data[key]
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"'pricing.{key}' must be a number")
        try:
            # str() keeps YAML floats like 1.5 exact
            price = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"'pricing.{key}' must be a number")
        if not price.is_finite() or price < 0:
            raise ValueError(f"'pricing.{key}' must be >= 0")
        prices[key] = price

    return PriceTable(**prices)
