"""Global player configuration (back choice, reset, prompt, command namespaces)."""

import json
from pathlib import Path
from typing import Any

from twee_story.models import PlayerSettings

from .core import data_dir


def _config_path() -> Path:
    return data_dir() / "config.json"


def get_config() -> dict[str, Any]:
    """Read config, returning defaults merged with stored values."""
    config = PlayerSettings().model_dump()
    path = _config_path()
    if path.is_file():
        stored = json.loads(path.read_text())
        for key, value in stored.items():
            if key in config:
                config[key] = value
    return config


def update_config(fields: dict[str, Any]) -> dict[str, Any]:
    """Merge fields into config and persist. Returns full config.

    Unknown keys are dropped. Raises pydantic.ValidationError if the merged
    config is not a valid PlayerSettings.
    """
    config = get_config()
    for key, value in fields.items():
        if key in config:
            config[key] = value
    config = PlayerSettings.model_validate(config).model_dump()
    _config_path().write_text(json.dumps(config, indent=2))
    return config


def get_player_settings() -> PlayerSettings:
    return PlayerSettings.model_validate(get_config())
