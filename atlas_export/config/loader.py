"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. Settings field defaults  - fill keys config.yaml does not mention
#   2. config/config.yaml       - static defaults checked into the repo
#                                 (export limits, batch sizes, file prefixes)
#   3. .env file / environment  - only the fields actually set there
#
# A Settings field counts as "set" when it appears in
# ``settings.model_fields_set``; untouched defaults never mask YAML.
#
# _deep_merge does recursive dict merging:
#   base = {"export": {"limit": 2000}}
#   overrides = {"export": {"directory": "tmp"}}
#   result = {"export": {"limit": 2000, "directory": "tmp"}}
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pathlib import Path

import yaml

from atlas_export.config.settings import Settings

# (section, key) in the merged config → Settings field supplying it.
_SETTINGS_KEYS: dict[tuple[str, str], str] = {
    ("app", "host"): "app_host",
    ("app", "port"): "app_port",
    ("app", "env"): "app_env",
    ("export", "directory"): "export_dir",
    ("export", "http_timeout"): "http_timeout",
    ("vectorization", "batch_size"): "vector_batch_size",
    ("vectorization", "namespace"): "pinecone_namespace",
    ("logging", "level"): "log_level",
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and layer it between Settings defaults and explicit values.

    Args:
        path: Path to the YAML configuration file.
        settings: Already-built Settings; a fresh one is read from the
            environment when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    defaults: dict = {}
    explicit: dict = {}
    for (section, key), field in _SETTINGS_KEYS.items():
        layer = explicit if field in settings.model_fields_set else defaults
        layer.setdefault(section, {})[key] = getattr(settings, field)

    config = defaults
    _deep_merge(config, yaml_config)
    _deep_merge(config, explicit)
    config.setdefault("vectorization", {})["configured"] = settings.vectorization_configured()
    return config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
