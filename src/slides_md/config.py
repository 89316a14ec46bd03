"""
Theme Configuration

A YAML registry of named themes. Each theme carries the CSS served with
the deck plus optional branding: logo, classification banner, watermark,
slide transition and fixed opening/closing slides.

Config lookup order (see resolve_config_path):
1. an explicitly given path
2. $XDG_CONFIG_HOME/slides.md.yaml (or ~/.config/slides.md.yaml)
3. ./slides.md.yaml
4. ./themes.yaml
"""

import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILENAME = "slides.md.yaml"
FALLBACK_CONFIG_FILENAME = "themes.yaml"

TRANSITIONS = ("cut", "fade", "slide")
DEFAULT_TRANSITION = "cut"

DEFAULT_CLASSIFICATION_BG = "#5e81ac"
DEFAULT_CLASSIFICATION_FG = "#ffffff"
DEFAULT_WATERMARK_OPACITY = 0.08


class ConfigError(Exception):
    """Theme configuration could not be loaded or does not define a theme."""


class Theme(BaseModel):
    """One named theme from the registry."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = ""
    css: str = ""
    title: str = ""
    logo: str = ""
    classification_label: str = ""
    classification_bg: str = ""
    classification_fg: str = ""
    transition: str = ""
    watermark: bool = False
    watermark_text: str = ""
    watermark_opacity: float = 0.0
    watermark_append_date: bool = False
    watermark_move_seconds: int = 0
    first_slide: str = ""
    last_slide: str = ""

    @field_validator(
        "name", "css", "title", "logo", "classification_label", "classification_bg",
        "classification_fg", "transition", "watermark_text", "first_slide", "last_slide",
        mode="before",
    )
    @classmethod
    def scalar_to_str(cls, v):
        if v is None:
            return ""
        if isinstance(v, (str, dict, list)):
            return v
        return str(v)


class ThemeConfig(BaseModel):
    """The theme registry."""
    themes: Dict[str, Theme] = Field(default_factory=dict)

    @field_validator("themes", mode="before")
    @classmethod
    def null_themes_to_empty(cls, v):
        return {} if v is None else v

    def get_theme(self, name: str) -> Theme:
        """Look up a theme by name, raising ConfigError if it is missing."""
        try:
            return self.themes[name]
        except KeyError:
            raise ConfigError(f"Theme '{name}' not found in configuration") from None


# ============================================================
# LOADING
# ============================================================

def _is_file(path: Union[str, Path]) -> bool:
    return bool(str(path).strip()) and Path(path).is_file()


def resolve_config_path(
    user_specified: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[Union[str, Path]] = None,
) -> str:
    """Pick the theme config file to load.

    Falls back to "themes.yaml" even when it does not exist, so the caller
    reports a missing file by name.
    """
    if user_specified and user_specified.strip():
        return user_specified

    env = os.environ if env is None else env
    base = Path(cwd) if cwd is not None else Path()

    xdg = env.get("XDG_CONFIG_HOME", "").strip()
    if not xdg:
        home = env.get("HOME", "").strip()
        if not home:
            try:
                home = str(Path.home())
            except RuntimeError:
                home = ""
        if home:
            xdg = str(Path(home) / ".config")
    if xdg:
        candidate = Path(xdg) / CONFIG_FILENAME
        if _is_file(candidate):
            return str(candidate)

    for name in (CONFIG_FILENAME, FALLBACK_CONFIG_FILENAME):
        if _is_file(base / name):
            return str(base / name) if cwd is not None else name

    return FALLBACK_CONFIG_FILENAME


def load_config(path: Union[str, Path]) -> ThemeConfig:
    """Load a theme registry from a YAML (or JSON) file.

    Raises:
        FileNotFoundError: if the file does not exist
        ConfigError: if the file is not valid YAML or not a theme registry
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")

    try:
        config = ThemeConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid theme configuration in {path}: {exc}") from exc

    logger.debug("Loaded {} themes from {}", len(config.themes), path)
    return config


def load_theme(name: str, config_path: Optional[str] = None) -> Theme:
    """Resolve the config file, load it, and return the named theme."""
    return load_config(resolve_config_path(config_path)).get_theme(name)


# ============================================================
# RESOLUTION HELPERS
# ============================================================

def normalize_transition(value: str) -> str:
    """Lowercase and validate a transition name, defaulting to 'cut'."""
    transition = (value or "").strip().lower()
    return transition if transition in TRANSITIONS else DEFAULT_TRANSITION


def resolve_page_title(deck_title: Optional[str], theme: Theme) -> str:
    """A non-blank frontmatter title wins over the theme's default title."""
    if deck_title and deck_title.strip():
        return deck_title
    return theme.title


def watermark_opacity(theme: Theme) -> float:
    """Clamp the watermark opacity to (0, 1], using the default otherwise."""
    opacity = theme.watermark_opacity
    if opacity <= 0 or opacity > 1:
        return DEFAULT_WATERMARK_OPACITY
    return opacity
