"""Colors and glyphs used when drawing the widget."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tickbox.config import Config

logger = logging.getLogger("tickbox.theme")

DEFAULT_BG = "default"


def _setting(cfg: Config, key: str) -> str:
    """Config value for key, or its default when it can't be drawn."""
    from tickbox.config import Config, validate_setting

    value = getattr(cfg, key)
    try:
        validate_setting(key, value)
    except ValueError as e:
        logger.warning("Invalid %s %r (%s), using default", key, value, e)
        return Config.DEFAULTS[key]
    return value


@dataclass(frozen=True)
class Theme:
    """Rich style strings for each element of the frame."""

    header: str = "cyan"
    option: str = "white"
    selected: str = "green bold"
    error: str = "red"
    cursor: str = "white"
    cursor_glyph: str = "➜"
    background: str = DEFAULT_BG

    @classmethod
    def from_config(cls, cfg: Config) -> Theme:
        option = _setting(cfg, "option_style")
        return cls(
            header=_setting(cfg, "header_style"),
            option=option,
            selected=_setting(cfg, "selected_style"),
            error=_setting(cfg, "error_style"),
            cursor=option,
            cursor_glyph=_setting(cfg, "cursor_glyph"),
        )
