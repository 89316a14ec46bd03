"""
Deck Models and Pipeline

Pydantic v2 models for a parsed deck, plus the pipeline that produces one:
frontmatter extraction, slide segmentation and per-slide block rendering.
Decks are frozen; splicing slides in returns a new, renumbered tuple.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional, Tuple, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .blocks import render_slide
from .frontmatter import extract_frontmatter
from .segment import segment_slides

if TYPE_CHECKING:
    from .config import Theme


class Slide(BaseModel):
    """A single slide: its raw markdown and the rendered fragment."""
    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1)
    markdown: str = ""
    html: str = ""


class DeckMetadata(BaseModel):
    """Where a deck came from."""
    model_config = ConfigDict(frozen=True)

    source_file: str = ""
    generated_at: str = ""
    generator: str = ""


class Deck(BaseModel):
    """A parsed presentation: optional title and ordered slides."""
    model_config = ConfigDict(frozen=True)

    version: str = "1.0"
    title: Optional[str] = None
    slides: Tuple[Slide, ...] = ()
    metadata: DeckMetadata = Field(default_factory=DeckMetadata)

    @model_validator(mode="after")
    def numbering_must_be_contiguous(self) -> "Deck":
        """Slides must be numbered 1..n in order."""
        for expected, slide in enumerate(self.slides, start=1):
            if slide.number != expected:
                raise ValueError(
                    f"Slide numbers must be contiguous from 1, got {slide.number} at position {expected}"
                )
        return self


# ============================================================
# PIPELINE
# ============================================================

def normalize_newlines(document: str) -> str:
    return document.replace("\r\n", "\n").replace("\r", "\n")


def _numbered(slides: Iterable[Slide]) -> Tuple[Slide, ...]:
    return tuple(
        slide if slide.number == number else slide.model_copy(update={"number": number})
        for number, slide in enumerate(slides, start=1)
    )


def make_slide(markdown: str, number: int = 1) -> Slide:
    """Render raw markdown into a Slide."""
    return Slide(number=number, markdown=markdown, html=render_slide(markdown))


def parse_deck(document: str, source_file: str = "") -> Deck:
    """Parse a whole markdown document into a Deck.

    Never raises for malformed markdown; bad frontmatter is treated as
    slide content and unterminated fences are closed at the end of a slide.
    """
    title, body = extract_frontmatter(normalize_newlines(document))
    chunks = segment_slides(body)

    slides = tuple(make_slide(chunk, number) for number, chunk in enumerate(chunks, start=1))
    logger.debug("Parsed {} slides (title={!r})", len(slides), title)

    metadata = DeckMetadata(
        source_file=source_file,
        generated_at=datetime.now(timezone.utc).isoformat(),
        generator="slides-md",
    )
    return Deck(title=title, slides=slides, metadata=metadata)


def prepend_slide(slides: Iterable[Slide], markdown: str) -> Tuple[Slide, ...]:
    """Render markdown as a new first slide and renumber."""
    return _numbered([make_slide(markdown), *slides])


def append_slide(slides: Iterable[Slide], markdown: str) -> Tuple[Slide, ...]:
    """Render markdown as a new last slide and renumber."""
    return _numbered([*slides, make_slide(markdown)])


def build_deck(document: str, theme: "Theme", source_file: str = "") -> Deck:
    """Parse a document and splice in the theme's opening and closing slides."""
    deck = parse_deck(document, source_file=source_file)
    slides = deck.slides

    if theme.first_slide.strip():
        slides = prepend_slide(slides, theme.first_slide)
    if theme.last_slide.strip():
        slides = append_slide(slides, theme.last_slide)

    return deck.model_copy(update={"slides": slides})


def load_document(path: Union[str, Path]) -> Deck:
    """Read a markdown file and parse it."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        return parse_deck(f.read(), source_file=str(path))


# ============================================================
# SERIALIZATION
# ============================================================

def save_deck(deck: Deck, path: Union[str, Path]) -> None:
    """Save a Deck to a JSON file."""
    path = Path(path)
    data = deck.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_deck(path: Union[str, Path]) -> Deck:
    """Load a Deck from a JSON file."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return Deck(**data)
