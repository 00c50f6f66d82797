"""Runtime configuration for pixel loading."""

from __future__ import annotations

from .configuration import Configuration, configuration_from_dict, get_default_configuration
from .io import load_config, load_configuration

__all__ = [
    "Configuration",
    "configuration_from_dict",
    "get_default_configuration",
    "load_config",
    "load_configuration",
]
