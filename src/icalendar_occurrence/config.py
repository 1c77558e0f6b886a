#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import logging
from importlib import resources
from pathlib import Path

from hydra.utils import instantiate
from omegaconf import DictConfig, OmegaConf

from icalendar_occurrence.occurrence import OccurrenceExpander

DEFAULT_CONFIG_NAME = "expander"

logger = logging.getLogger(__name__)


def get_config_path() -> str:
    return str(resources.files("icalendar_occurrence.configs") / ".")


def load_config(
    name: str = DEFAULT_CONFIG_NAME, overrides: list[str] | None = None
) -> DictConfig:
    """Load a packaged config, optionally applying dotlist `overrides`
    (eg `["debug=true"]`)."""
    cfg = OmegaConf.load(Path(get_config_path()) / f"{name}.yaml")
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(overrides))
    return cfg


def build_expander(cfg: DictConfig | None = None) -> OccurrenceExpander:
    """Instantiate the expander described by `cfg`, the packaged config by default."""
    if cfg is None:
        cfg = load_config()
    if cfg.get("debug", False):
        logger.info(OmegaConf.to_yaml(cfg, resolve=True))
    return instantiate(cfg.expander)
