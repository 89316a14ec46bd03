"""
slides-md

Present a single markdown document as a deck of HTML slides: frontmatter
title, slide segmentation, a small line-oriented markdown renderer, themed
page shell and a local server.
"""

__version__ = "0.1.0"

from .assets import (
    ASSET_MOUNT,
    resolve_asset_path,
)

from .inline import (
    transform_inline,
)

from .blocks import (
    BlockParser,
    render_slide,
)

from .segment import (
    segment_slides,
)

from .frontmatter import (
    Frontmatter,
    extract_frontmatter,
)

from .content import (
    Deck,
    Slide,
    parse_deck,
    prepend_slide,
    append_slide,
    build_deck,
    load_document,
    save_deck,
    load_deck,
)

from .config import (
    ConfigError,
    Theme,
    ThemeConfig,
    load_config,
    load_theme,
    resolve_config_path,
)

from .diagnose import (
    diagnose_deck,
    DiagnosticReport,
)

__all__ = [
    # Assets
    'ASSET_MOUNT',
    'resolve_asset_path',
    # Markdown
    'transform_inline',
    'BlockParser',
    'render_slide',
    'segment_slides',
    'Frontmatter',
    'extract_frontmatter',
    # Deck
    'Deck',
    'Slide',
    'parse_deck',
    'prepend_slide',
    'append_slide',
    'build_deck',
    'load_document',
    'save_deck',
    'load_deck',
    # Config
    'ConfigError',
    'Theme',
    'ThemeConfig',
    'load_config',
    'load_theme',
    'resolve_config_path',
    # Diagnostics
    'diagnose_deck',
    'DiagnosticReport',
]
