"""User configuration for default display options.

Defaults are read from a JSON file in the user's config directory. A missing
or broken file never stops the pager; problems are logged and the built-in
defaults are used instead.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .options import DisplayOptions

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LOGLENS_CONFIG"


class ConfigStore:
    """Loads and validates the ``config.json`` defaults file.

    Example file::

        {"show_line_number": true, "trim_space": true}
    """

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize with an explicit file, the env override, or the platform default."""
        if config_file is None:
            override = os.environ.get(CONFIG_ENV_VAR)
            if override:
                config_file = Path(override)
            else:
                config_file = Path(platformdirs.user_config_dir("loglens")) / "config.json"
        self._config_file = config_file
        self._cache: Optional[Dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._config_file

    def _load_raw(self) -> Dict[str, Any]:
        """Read the config file.

        Returns:
            The parsed mapping, or an empty dict if the file doesn't exist,
            can't be read, or isn't a JSON object.
        """
        if not self._config_file.exists():
            return {}

        try:
            with open(self._config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load config from {self._config_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning("Config file has invalid format (not a dict), ignoring")
            return {}
        return data

    def validate_setting(self, key: str, value: Any) -> bool:
        """Return True if ``value`` is acceptable for ``key``.

        Unknown keys are accepted (and ignored) for forward compatibility.
        """
        if key in DisplayOptions.field_names():
            return isinstance(value, bool)
        return True

    def load_defaults(self) -> Dict[str, bool]:
        """Return validated default values for the display options."""
        if self._cache is not None:
            return dict(self._cache)

        defaults: Dict[str, bool] = {}
        for key, value in self._load_raw().items():
            if key not in DisplayOptions.field_names():
                continue
            if not self.validate_setting(key, value):
                logger.warning(f"Ignoring config value {key}={value!r}: expected true or false")
                continue
            defaults[key] = value
        self._cache = defaults
        return dict(defaults)

    def clear_cache(self) -> None:
        """Forget the cached defaults so the next load rereads the file."""
        self._cache = None


def load_defaults() -> Dict[str, bool]:
    """Load display-option defaults from the standard config location."""
    return ConfigStore().load_defaults()
