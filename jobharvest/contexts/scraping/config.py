"""
Crawl configuration.

Settings live in ``$CONFIG_PATH/crawl.yaml`` (CONFIG_PATH defaults to
``config``) and are loaded with OmegaConf. Extra YAML files and CLI flags
are merged on top.
"""

import os
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from omegaconf.dictconfig import DictConfig

from jobharvest.contexts.scraping.requests import DEFAULT_USER_AGENT
from jobharvest.utils.config_helpers import merge_configs

load_dotenv()
CONFIG_PATH = Path(os.getenv("CONFIG_PATH", "config"))
DEFAULT_CONFIG_FILE = CONFIG_PATH / "crawl.yaml"

REQUIRED_KEYS = ["origin", "listing_template", "page_count", "request_delay", "output_path"]
REQUIRED_SELECTORS = ["listing_link", "title", "description", "job_type", "employer", "location"]

# Filled in when a config leaves them out (or sets them to null)
OPTIONAL_DEFAULTS = {
    "request_timeout": 30.0,
    "user_agent": DEFAULT_USER_AGENT,
    "respect_robots": True,
    "include_url": False,
}


class ConfigError(ValueError):
    pass


def validate_crawl_config(config: DictConfig) -> DictConfig:
    """
    Raise ConfigError if a required setting is missing or out of range.

    Optional settings missing from the config get their OPTIONAL_DEFAULTS value.
    """
    missing = [key for key in REQUIRED_KEYS if config.get(key) in (None, "")]
    if missing:
        raise ConfigError(f"Missing required crawl settings: {', '.join(missing)}")

    selectors = config.get("selectors") or {}
    missing_selectors = [key for key in REQUIRED_SELECTORS if not selectors.get(key)]
    if missing_selectors:
        raise ConfigError(f"Missing selectors: {', '.join(missing_selectors)}")

    for key, default in OPTIONAL_DEFAULTS.items():
        if config.get(key) is None:
            config[key] = default

    if int(config.page_count) < 1:
        raise ConfigError(f"page_count must be at least 1, got {config.page_count}")
    if float(config.request_delay) < 0:
        raise ConfigError(f"request_delay must be non-negative, got {config.request_delay}")
    if float(config.request_timeout) <= 0:
        raise ConfigError(f"request_timeout must be positive, got {config.request_timeout}")
    if "{page}" not in config.listing_template:
        raise ConfigError(f"listing_template must contain '{{page}}': {config.listing_template}")

    return config


def load_crawl_config(
    config_paths: Optional[List[Union[str, Path]]] = None,
    overrides: Optional[dict] = None,
    base_config: Union[str, Path] = DEFAULT_CONFIG_FILE,
) -> DictConfig:
    """
    Load and validate the crawl configuration.

    Args:
        config_paths: Extra YAML files merged over the base config, in order
        overrides: Values applied last (None values are ignored)
        base_config: Base YAML file (default: $CONFIG_PATH/crawl.yaml)

    Returns:
        Validated DictConfig

    Raises:
        ConfigError: If the merged config is incomplete or invalid

    Example:
        >>> config = load_crawl_config(overrides={"page_count": 2, "request_delay": 0.5})
    """
    paths = [base_config] + list(config_paths or [])
    config = merge_configs(paths, overrides=overrides)
    return validate_crawl_config(config)
