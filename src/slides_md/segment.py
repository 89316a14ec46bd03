"""
Slide Segmentation

Splits a document body into raw markdown chunks, one per slide. Explicit
``---`` separator lines win when present; otherwise every heading outside
a code fence starts a new slide.
"""

from typing import List

from loguru import logger

SEPARATOR = "\n---\n"
FENCE = "```"


def split_on_separators(body: str) -> List[str]:
    """Split on separator lines, dropping chunks that are empty once trimmed."""
    return [part.strip() for part in body.split(SEPARATOR) if part.strip()]


def split_on_headings(body: str) -> List[str]:
    """Start a new slide at every heading line that is not inside a fence."""
    slides: List[str] = []
    current: List[str] = []
    in_code = False

    for line in body.split("\n"):
        if line.startswith(FENCE):
            in_code = not in_code
            current.append(line)
            continue

        if not in_code and line.startswith("#"):
            if current:
                slides.append("\n".join(current))
            current = [line]
        else:
            current.append(line)

    if current:
        slides.append("\n".join(current))

    return [slide for slide in slides if slide.strip()]


def segment_slides(body: str) -> List[str]:
    """Split a document body into an ordered list of raw slide strings."""
    body = body.strip()

    if SEPARATOR in body:
        slides = split_on_separators(body)
        logger.debug("Split {} slides on separator lines", len(slides))
    else:
        slides = split_on_headings(body)
        logger.debug("No separators found; split {} slides on headings", len(slides))

    return slides
