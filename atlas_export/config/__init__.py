"""Configuration module - exports Settings and load_config."""

from atlas_export.config.loader import load_config
from atlas_export.config.settings import Settings

__all__ = ["Settings", "load_config"]
