"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. Settings defaults   - Field defaults in settings.py
#   2. config/config.yaml  - Static defaults checked into the repo
#   3. .env file           - Local developer overrides (not committed)
#   4. Environment vars    - Set at deploy time
#
# A Settings field only overrides the YAML when it was actually set
# (by the environment, the .env file, or a keyword argument).  Fields left
# at their default fill in keys the YAML does not provide.
# registry.network_enabled is always derived from Settings.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from src.config.settings import Settings

# (section, key) -> Settings field name
_SECTION_FIELDS: dict[tuple[str, str], str] = {
    ("app", "env"): "app_env",
    ("registry", "supabase_url"): "supabase_url",
    ("registry", "table"): "registry_table",
    ("registry", "request_timeout"): "registry_request_timeout",
    ("registry", "fallback_path"): "fallback_registry_path",
    ("cache", "backend"): "registry_cache_backend",
    ("cache", "db_path"): "registry_cache_db_path",
    ("logging", "level"): "log_level",
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Explicitly set Settings fields override YAML values; unset fields only
    supply defaults for keys missing from the YAML.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built Settings; a fresh instance is read from the
            environment when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    defaults: dict = {}
    overrides: dict = {"registry": {"network_enabled": settings.has_network_source()}}
    for (section, key), field in _SECTION_FIELDS.items():
        target = overrides if field in settings.model_fields_set else defaults
        target.setdefault(section, {})[key] = getattr(settings, field)

    _deep_merge(defaults, yaml_config)
    _deep_merge(defaults, overrides)
    return defaults


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
