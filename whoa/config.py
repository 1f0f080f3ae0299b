"""Application configuration management."""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

_config: Dict[str, Any] = {}
_base_path: Optional[Path] = None

# Config entries holding paths relative to the project root
_PATH_KEYS = [
    "settings.folder",
    "logging.folder",
    "data.models_folder",
    "data.migrations_folder",
    "data.migrations_list_file",
    "data.seeds_folder",
    "data.seeds_list_file",
    "authorization.policies_folder",
    "scaffold.templates_folder",
    "scaffold.root",
]


def load_config(config_path: str = None) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    global _config, _base_path

    if config_path is None:
        # Try to find config in common locations
        possible_paths = [
            Path("config/app.yaml"),
            Path("app.yaml"),
            Path.home() / ".config" / "whoa" / "app.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break
        else:
            raise FileNotFoundError(
                "No app.yaml found. Copy config/app.example.yaml to config/app.yaml "
                "and fill in your values."
            )

    config_path = Path(config_path)
    _base_path = config_path.resolve().parent.parent  # Project root

    with open(config_path) as f:
        _config = yaml.safe_load(f) or {}

    # Resolve relative paths
    _resolve_paths()

    return _config


def _resolve_paths():
    """Resolve relative paths in config to absolute paths."""
    for key in _PATH_KEYS:
        *parents, leaf = key.split(".")
        section = _config
        for name in parents:
            section = section.get(name) if isinstance(section, dict) else None
        if not isinstance(section, dict) or not section.get(leaf):
            continue

        path = Path(section[leaf])
        if not path.is_absolute():
            section[leaf] = str(_base_path / path)


def set_config(config: Dict[str, Any], base_path: str = None) -> Dict[str, Any]:
    """Install an already built configuration (used by tests and embedding apps)."""
    global _config, _base_path

    _config = config
    if base_path is not None:
        _base_path = Path(base_path)
        _resolve_paths()

    return _config


def get_config() -> Dict[str, Any]:
    """Get the loaded configuration."""
    if not _config:
        load_config()
    return _config


def get(key: str, default: Any = None) -> Any:
    """Get a config value by dot-notation key (e.g., 'app.debug')."""
    if not _config:
        load_config()

    keys = key.split(".")
    value = _config
    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value
