"""
GA configuration for the attendee matcher.

Handles default parameters, YAML loading, and validation.
"""

from typing import Dict, Any, Optional, Union
from pathlib import Path
import copy
import yaml


DEFAULT_CONFIG_PATH = Path(__file__).parent / "match_config.yaml"

DEFAULT_MATCH_CONFIG: Dict[str, Any] = {
    'population_size': 13,
    'generations': 100,
    'mutation_rate': 0.1,
    'elite_count': 3,
    'recommendations': 5,
    'padding': {
        'max_random_draws': 100,
    },
    'random_seed': None,
}


class ConfigValidationError(Exception):
    """Raised when GA configuration is invalid."""
    pass


def default_match_config() -> Dict[str, Any]:
    """Return a fresh copy of the built-in defaults."""
    return copy.deepcopy(DEFAULT_MATCH_CONFIG)


def load_match_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load GA configuration from a YAML file, layered over the defaults.

    Args:
        config_path: Path to YAML file (None uses the packaged match_config.yaml)

    Returns:
        Validated configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        with open(config_file, 'r') as f:
            user_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if user_config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(user_config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    config = merge_config(default_match_config(), user_config)
    validate_match_config(config)
    return config


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge override values into a base configuration (nested dicts merged).

    Args:
        base: Base configuration, modified in place
        overrides: Values to apply

    Returns:
        The updated base configuration
    """
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_config(base[key], value)
        else:
            base[key] = value
    return base


def validate_match_config(config: Dict[str, Any]) -> None:
    """
    Validate GA configuration structure and values.

    Args:
        config: Configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    unknown = set(config) - set(DEFAULT_MATCH_CONFIG)
    if unknown:
        raise ConfigValidationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    for field in ['population_size', 'generations', 'elite_count', 'recommendations']:
        if field not in config:
            raise ConfigValidationError(f"Missing required field: '{field}'")
        _require_positive_int(config[field], field)

    mutation_rate = config.get('mutation_rate')
    if isinstance(mutation_rate, bool) or not isinstance(mutation_rate, (int, float)):
        raise ConfigValidationError(f"'mutation_rate' must be a number, got: {mutation_rate}")
    if not 0.0 <= mutation_rate <= 1.0:
        raise ConfigValidationError(f"'mutation_rate' must be within [0, 1], got: {mutation_rate}")

    if config['elite_count'] > config['population_size']:
        raise ConfigValidationError(
            f"'elite_count' ({config['elite_count']}) cannot exceed "
            f"'population_size' ({config['population_size']})"
        )

    padding = config.get('padding', {})
    if not isinstance(padding, dict):
        raise ConfigValidationError("'padding' must be a dictionary")
    max_draws = padding.get('max_random_draws', 0)
    if isinstance(max_draws, bool) or not isinstance(max_draws, int) or max_draws < 0:
        raise ConfigValidationError(
            f"'padding.max_random_draws' must be a non-negative integer, got: {max_draws}"
        )

    seed = config.get('random_seed')
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        raise ConfigValidationError(f"'random_seed' must be a non-negative integer or null, got: {seed}")


def _require_positive_int(value: Any, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigValidationError(f"'{field}' must be a positive integer, got: {value}")
