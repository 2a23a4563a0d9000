"""Standings configuration management."""

import logging
import os
from functools import lru_cache
from pathlib import Path

from .schemas import ColorPair, SpecialCaseText, StandingsConfig
from .utils import load_json

CONFIG_ENV_VAR = 'BOXRANK_CONFIG'

logger = logging.getLogger('boxrank.config')


@lru_cache(maxsize=1)
def get_config() -> StandingsConfig:
    """
    Load standings configuration.

    Reads the JSON file named by the BOXRANK_CONFIG environment variable when
    it is set, otherwise returns the built-in defaults. The result is cached
    after first load.

    Returns:
        StandingsConfig object with validated settings

    Raises:
        FileNotFoundError: If BOXRANK_CONFIG points to a missing file
        ValueError: If config file has invalid structure

    Example:
        from boxrank.config import get_config
        config = get_config()
        print(f"Points per set: {config.points_per_set}")
    """
    config_path = os.environ.get(CONFIG_ENV_VAR)
    if not config_path:
        logger.debug('No %s set, using default configuration', CONFIG_ENV_VAR)
        return StandingsConfig()
    return load_json(Path(config_path), schema=StandingsConfig)


def get_points_per_set() -> int:
    """Get points awarded per set won from config."""
    return get_config().points_per_set


def get_color_pair(name: str) -> ColorPair:
    """Get a named colour pair (win, loss, neutral, scheduled, unplayed, diagonal)."""
    return getattr(get_config(), name)


def get_special_text(outcome_value: str) -> SpecialCaseText:
    """Get the short text and label for a special outcome value."""
    return get_config().special_texts[outcome_value]


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file or BOXRANK_CONFIG changes during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
