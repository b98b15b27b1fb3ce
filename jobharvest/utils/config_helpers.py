from pathlib import Path
from typing import List, Union
from omegaconf import OmegaConf
from omegaconf.dictconfig import DictConfig


def merge_configs(config_paths: List[Union[str, Path]], overrides: dict = None) -> DictConfig:
    """
    Merge multiple YAML configuration files with precedence. Later configs override earlier ones,
    and ``overrides`` (typically CLI flags) override them all.

    Args:
        config_paths: List of paths to YAML config files. Later configs take precedence.
        overrides: Optional dict of values applied last. Keys whose value is None are ignored.

    Returns:
        DictConfig: Merged configuration object

    Raises:
        ValueError: If config_paths is empty
        FileNotFoundError: If any config file doesn't exist

    Example:
        >>> config = merge_configs(["config/crawl.yaml", "config/local.yaml"], {"page_count": 2})
    """
    if not config_paths:
        raise ValueError("config_paths is empty!")

    merged = OmegaConf.load(config_paths[0])

    for config_path in config_paths[1:]:
        config = OmegaConf.load(config_path)
        merged = OmegaConf.unsafe_merge(merged, config)

    if overrides:
        set_overrides = {key: value for key, value in overrides.items() if value is not None}
        merged = OmegaConf.unsafe_merge(merged, OmegaConf.create(set_overrides))

    return merged
