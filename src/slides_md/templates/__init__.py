"""Jinja2 page templates for slides-md."""

from pathlib import Path

TEMPLATE_DIR = Path(__file__).parent

PAGE_TEMPLATE = "deck.html"
