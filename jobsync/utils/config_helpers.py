from pathlib import Path
from typing import Sequence, Union
from omegaconf import OmegaConf
from omegaconf.dictconfig import DictConfig


def _load_mapping(config_path: Union[str, Path]) -> DictConfig:
    config = OmegaConf.load(config_path)
    if not isinstance(config, DictConfig):
        raise TypeError(f"{config_path} must contain a mapping at the top level")
    return config


def merge_configs(config_paths: Sequence[Union[str, Path]]) -> DictConfig:
    """
    Merge multiple YAML configuration files with precedence. Later configs override earlier ones. Useful for layering a deployment override on top of a shared base.

    Args:
        config_paths: Paths to YAML config files. Later configs take precedence.

    Returns:
        DictConfig: Merged configuration object

    Raises:
        FileNotFoundError: If any config file doesn't exist
        TypeError: If a file holds something other than a mapping

    Example:
        >>> config = merge_configs(["config/sync.yaml", "config/staging.yaml"])
        >>> config.storage.jobs_collection
        'jobs_staging'
    """
    if not config_paths:
        raise ValueError("config_paths is empty!")

    # Load first config as base
    merged = _load_mapping(config_paths[0])

    # Merge remaining configs with precedence
    for config_path in config_paths[1:]:
        config = _load_mapping(config_path)
        merged = OmegaConf.unsafe_merge(merged, config)

    return merged
