"""
Inline Span Transformer

Converts the inline markdown of a single line (code, images, links, bold,
italic) to HTML. The line is escaped first, then runs through a fixed
sequence of regex stages. Code spans are swapped for placeholder tokens
before any markup stage runs, and so are the tags the image and link stages
emit. Everything is restored last, so stashed content is never
re-interpreted.

Stage order is significant:
    escape -> code extraction -> image -> link -> bold -> italic -> restore
"""

import html
import re
from typing import Callable, List, Tuple

from .assets import resolve_asset_path

# Lines longer than this are escaped but not scanned for markup.
MAX_INLINE_LENGTH = 5000

# NUL never survives input sanitizing, so placeholders cannot collide with text.
PLACEHOLDER_MARK = "\x00"
PLACEHOLDER_RE = re.compile(r"\x00(CODE|TAG)(\d+)\x00")
CODE_PLACEHOLDER_RE = re.compile(r"\x00CODE(\d+)\x00")

CODE_RE = re.compile(r"`([^`]+)`")
IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)\x00]+)\)")
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)\x00]+)\)")
BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
ITALIC_RE = re.compile(r"(?<!\S)\*([^*\n]+?)\*(?!\S)")


class Stash:
    """Markup held out of the line while the markup stages run.

    Code span text and rendered tags are swapped for placeholder tokens so
    later stages never see (or rewrite) their content.
    """

    def __init__(self):
        self.codes: List[str] = []
        self.tags: List[str] = []

    def code(self, text: str) -> str:
        self.codes.append(text)
        return f"{PLACEHOLDER_MARK}CODE{len(self.codes) - 1}{PLACEHOLDER_MARK}"

    def tag(self, markup: str) -> str:
        self.tags.append(markup)
        return f"{PLACEHOLDER_MARK}TAG{len(self.tags) - 1}{PLACEHOLDER_MARK}"

    def plain(self, text: str) -> str:
        """Replace code placeholders with their bare text, for attribute values."""
        return CODE_PLACEHOLDER_RE.sub(lambda m: self.codes[int(m.group(1))], text)

    def restore(self, text: str) -> str:
        def _expand(match: "re.Match[str]") -> str:
            index = int(match.group(2))
            if match.group(1) == "CODE":
                return f"<code>{self.codes[index]}</code>"
            return self.tags[index]

        return PLACEHOLDER_RE.sub(_expand, text)


def _render_images(text: str, stash: Stash) -> str:
    return IMAGE_RE.sub(
        lambda m: stash.tag(
            f'<img src="{resolve_asset_path(m.group(2))}" alt="{stash.plain(m.group(1))}"/>'
        ),
        text,
    )


def _render_links(text: str, stash: Stash) -> str:
    return LINK_RE.sub(
        lambda m: stash.tag(f'<a href="{resolve_asset_path(m.group(2))}">') + f"{m.group(1)}</a>",
        text,
    )


def _render_bold(text: str, stash: Stash) -> str:
    return BOLD_RE.sub(r"<strong>\1</strong>", text)


def _render_italic(text: str, stash: Stash) -> str:
    return ITALIC_RE.sub(r"<em>\1</em>", text)


# Images must run before links: an image match consumes its brackets and
# parens so the link pattern cannot see them.
MARKUP_STAGES: Tuple[Callable[[str, Stash], str], ...] = (
    _render_images,
    _render_links,
    _render_bold,
    _render_italic,
)


def transform_inline(text: str) -> str:
    """Convert one line of inline markdown to HTML.

    Unmatched syntax is left as escaped literal text; this never raises.

    >>> transform_inline("a **b** `<c>`")
    'a <strong>b</strong> <code>&lt;c&gt;</code>'
    """
    escaped = html.escape(text.replace(PLACEHOLDER_MARK, "\ufffd"))
    if len(escaped) > MAX_INLINE_LENGTH:
        return escaped

    stash = Stash()
    protected = CODE_RE.sub(lambda m: stash.code(m.group(1)), escaped)
    for stage in MARKUP_STAGES:
        protected = stage(protected, stash)
    return stash.restore(protected)
