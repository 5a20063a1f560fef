from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("pokedex.config.yaml")

BASE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "upstream": {
        "base_url": "https://pokeapi.co/api/v2",
        "timeout_seconds": 10,
        "user_agent": "pokedex-service/1.0",
    },
    "cache": {
        "ttl_seconds": 3600,
        "index_limit": 1500,
    },
    "list": {
        "default_limit": 20,
        "max_concurrent_fetches": 20,
        "placeholder_image": "/placeholder.png",
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8000,
    },
    "logging": {
        "level": "INFO",
    },
}


def _merge_defaults(user_config: Dict[str, Any]) -> Dict[str, Any]:
    """Merge user sections over built-in defaults, one level deep."""
    merged = deepcopy(BASE_DEFAULTS)
    for section, values in user_config.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section] = {**merged[section], **values}
        else:
            merged[section] = values
    return merged


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load service configuration from YAML and apply defaults.

    Args:
        path: Optional path to a config file. Defaults to pokedex.config.yaml
            in the working directory; a missing default file is not an error.

    Returns:
        Configuration dict with every section populated

    Raises:
        FileNotFoundError: If an explicitly requested config file doesn't exist
        ValueError: If the YAML document is not a mapping
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return deepcopy(BASE_DEFAULTS)

    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    return _merge_defaults(config)


def get_section(config: Dict[str, Any] | None, section: str) -> Dict[str, Any]:
    """Return one config section, falling back to its defaults."""
    if config is None:
        return dict(BASE_DEFAULTS.get(section, {}))
    return {**BASE_DEFAULTS.get(section, {}), **(config.get(section) or {})}
