"""
Page Shell

Wraps a parsed deck in the full HTML page: theme stylesheet, deck title,
slide counter, classification banner, logo, watermark grid and the
client-side navigation script. Rendering uses jinja2 with autoescaping;
slide fragments are trusted output of the block parser and go in verbatim.
"""

from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .assets import resolve_asset_path
from .config import (
    DEFAULT_CLASSIFICATION_BG,
    DEFAULT_CLASSIFICATION_FG,
    Theme,
    normalize_transition,
    resolve_page_title,
    watermark_opacity,
)
from .content import Deck
from .templates import PAGE_TEMPLATE, TEMPLATE_DIR

WATERMARK_TILES = 96


@dataclass(frozen=True)
class Classification:
    label: str = ""
    bg: str = DEFAULT_CLASSIFICATION_BG
    fg: str = DEFAULT_CLASSIFICATION_FG


@dataclass(frozen=True)
class Watermark:
    enabled: bool = False
    text: str = ""
    opacity: str = "0.08"
    tiles: int = 0
    move_ms: int = 0


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Shared jinja2 environment for the bundled templates."""
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
    )


def build_classification(theme: Theme) -> Classification:
    return Classification(
        label=theme.classification_label,
        bg=theme.classification_bg if theme.classification_bg.strip() else DEFAULT_CLASSIFICATION_BG,
        fg=theme.classification_fg if theme.classification_fg.strip() else DEFAULT_CLASSIFICATION_FG,
    )


def build_watermark(theme: Theme, page_title: str, today: Optional[date] = None) -> Watermark:
    """Resolve the watermark settings of a theme.

    The text defaults to the page title and can carry today's date. Opacity
    outside (0, 1] falls back to the default.
    """
    opacity = f"{watermark_opacity(theme):.2f}"
    if not theme.watermark:
        return Watermark(opacity=opacity)

    text = theme.watermark_text.strip() or page_title
    if theme.watermark_append_date:
        today = today or date.today()
        text = f"{text} — {today.isoformat()}"

    return Watermark(
        enabled=True,
        text=text,
        opacity=opacity,
        tiles=WATERMARK_TILES,
        move_ms=max(theme.watermark_move_seconds, 0) * 1000,
    )


def render_page(
    deck: Deck,
    theme: Theme,
    stylesheet_href: str = "/style.css",
    inline_css: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    """Render the complete HTML page for a deck.

    Args:
        deck: Parsed deck, usually from build_deck()
        theme: Theme providing branding and transition
        stylesheet_href: URL of the theme stylesheet when it is served separately
        inline_css: Embed this CSS instead of linking stylesheet_href
        today: Date used for the watermark suffix (defaults to today)

    Returns:
        The HTML document as a string
    """
    page_title = resolve_page_title(deck.title, theme)
    logo = resolve_asset_path(theme.logo) if theme.logo.strip() else ""

    template = get_environment().get_template(PAGE_TEMPLATE)
    return template.render(
        title=page_title,
        stylesheet_href=stylesheet_href,
        inline_css=inline_css,
        classification=build_classification(theme),
        transition=normalize_transition(theme.transition),
        watermark=build_watermark(theme, page_title, today),
        logo=logo,
        slides=deck.slides,
    )
