"""Configuration with env overrides and on-disk persistence."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from rich.errors import StyleSyntaxError
from rich.style import Style

logger = logging.getLogger("tickbox.config")

# Module-level cache for singleton pattern
_config_cache: "Config | None" = None


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing or config reload."""
    global _config_cache
    _config_cache = None


STYLE_KEYS = ("header_style", "option_style", "selected_style", "error_style")


def validate_setting(key: str, value: Any) -> None:
    """Raise ValueError if value can't be used for key."""
    if key in STYLE_KEYS or key == "cursor_glyph":
        if not isinstance(value, str):
            raise ValueError(f"expected a string, got {type(value).__name__}")
    if key in STYLE_KEYS:
        try:
            Style.parse(value)
        except StyleSyntaxError as e:
            raise ValueError(str(e)) from e
    elif key == "cursor_glyph" and len(value) != 1:
        raise ValueError("cursor glyph must be a single character")


def get_default_config_dir() -> Path:
    """Get default config directory, respecting TICKBOX_CONFIG_DIR env var."""
    config_dir = os.environ.get("TICKBOX_CONFIG_DIR")
    if config_dir:
        return Path(config_dir)
    return Path.home() / ".config" / "tickbox"


class ConfigMeta:
    """Schema definition - separate from runtime state."""

    TOGGLES: dict[str, str] = {
        "vim_keys": "Navigate with j/k",
        "emacs_keys": "Navigate with Ctrl-P/Ctrl-N",
    }

    SETTINGS: dict[str, str] = {
        "cursor_glyph": "Marker shown next to the option under the cursor (one character)",
        "header_style": "Style for header and footer lines (rich style)",
        "option_style": "Style for unselected options",
        "selected_style": "Style for selected options",
        "error_style": "Style for validation messages",
    }


class Config:
    """Runtime configuration with env override support."""

    DEFAULTS: dict[str, Any] = {
        # Toggles
        "vim_keys": True,
        "emacs_keys": True,
        # Settings
        "cursor_glyph": "➜",
        "header_style": "cyan",
        "option_style": "white",
        "selected_style": "green bold",
        "error_style": "red",
    }

    def __init__(self, config_dir: Path | None = None):
        self._config_dir = config_dir or get_default_config_dir()
        self._config_file = self._config_dir / "config.json"
        self._data: dict[str, Any] = {}

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Factory method - explicit loading with caching."""
        global _config_cache

        # Return cached instance if available and no custom dir specified
        if _config_cache is not None and config_dir is None:
            return _config_cache

        config = cls(config_dir)
        config._load_from_file()
        config._apply_env_overrides()

        if config_dir is None:
            _config_cache = config

        return config

    def __getattr__(self, name: str) -> Any:
        """Access config values as attributes."""
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._data:
            return self._data[name]
        if name in self.DEFAULTS:
            return self.DEFAULTS[name]
        raise AttributeError(f"Config has no attribute '{name}'")

    def get_toggles(self) -> list[tuple[str, str, bool]]:
        """Return (attr, description, enabled) for display."""
        return [
            (name, desc, bool(getattr(self, name))) for name, desc in ConfigMeta.TOGGLES.items()
        ]

    def get_settings(self) -> list[tuple[str, str, Any]]:
        """Return (attr, description, value) for display."""
        return [(name, desc, getattr(self, name)) for name, desc in ConfigMeta.SETTINGS.items()]

    def set(self, key: str, value: Any) -> None:
        """Set value and persist."""
        if key not in self.DEFAULTS:
            raise KeyError(f"Unknown config key '{key}'")
        if isinstance(value, str):
            value = self._coerce(value, type(self.DEFAULTS[key]))
        validate_setting(key, value)
        self._data[key] = value
        self._save()

    def _load_from_file(self) -> None:
        if self._config_file.exists():
            try:
                content = self._config_file.read_text()
                if content.strip():
                    self._data = self._normalize(json.loads(content))
            except json.JSONDecodeError:
                # Corrupted config - use defaults, will be fixed on next save
                logger.warning("Ignoring corrupted config file %s", self._config_file)
                self._data = {}

    def _normalize(self, raw: Any) -> dict[str, Any]:
        """Keep known keys whose values fit the default's type."""
        if not isinstance(raw, dict):
            logger.warning("Ignoring config file %s: not a JSON object", self._config_file)
            return {}
        data: dict[str, Any] = {}
        for key, value in raw.items():
            if key not in self.DEFAULTS:
                logger.warning("Ignoring unknown config key '%s'", key)
                continue
            target_type = type(self.DEFAULTS[key])
            if isinstance(value, str) and target_type is not str:
                try:
                    value = self._coerce(value, target_type)
                except ValueError:
                    value = None
            if type(value) is not target_type:
                logger.warning("Ignoring config key '%s': expected %s", key, target_type.__name__)
                continue
            data[key] = value
        return data

    def _save(self) -> None:
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._config_file.write_text(json.dumps(self._data, indent=2))

    def _apply_env_overrides(self) -> None:
        """Apply TICKBOX_* env vars (highest priority)."""
        for key, default in self.DEFAULTS.items():
            env_key = f"TICKBOX_{key.upper()}"
            if env_key in os.environ:
                self._data[key] = self._coerce(os.environ[env_key], type(default))

    @staticmethod
    def _coerce(value: str, target_type: type) -> Any:
        """Coerce string env value to target type."""
        if target_type is bool:
            return value.lower() in ("true", "1", "yes")
        if target_type is int:
            return int(value)
        return value
