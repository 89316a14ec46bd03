"""
Block Parser

Renders the raw markdown of one slide to an HTML fragment in a single pass
over its lines. Each line is classified into a LineKind; the effect of that
kind on an open list is looked up in LIST_TRANSITIONS rather than spread
across conditionals.

Headings, horizontal rules and blank lines leave an open list open;
paragraphs, fences and a switch of list type close it.
"""

import html
import re
from enum import Enum
from typing import Dict, List, NamedTuple, Optional

from .inline import transform_inline

FENCE = "```"
RULES = frozenset({"---", "***", "___"})

HEADING_RE = re.compile(r"^(#{1,6})(?:\s+(.*))?$")
ORDERED_RE = re.compile(r"^(\d+)\.\s+(.+)$")


class LineKind(str, Enum):
    """Classification of a single source line."""
    fence = "fence"
    code = "code"
    heading = "heading"
    rule = "rule"
    unordered = "unordered"
    ordered = "ordered"
    paragraph = "paragraph"
    blank = "blank"


class ListMode(str, Enum):
    """Which flat list, if any, is currently open."""
    none = "none"
    unordered = "unordered"
    ordered = "ordered"


class ListAction(str, Enum):
    keep = "keep"
    close = "close"
    unordered = "unordered"
    ordered = "ordered"


LIST_TRANSITIONS: Dict[LineKind, ListAction] = {
    LineKind.fence: ListAction.close,
    LineKind.code: ListAction.keep,
    LineKind.heading: ListAction.keep,
    LineKind.rule: ListAction.keep,
    LineKind.unordered: ListAction.unordered,
    LineKind.ordered: ListAction.ordered,
    LineKind.paragraph: ListAction.close,
    LineKind.blank: ListAction.keep,
}

LIST_TAGS = {
    ListMode.unordered: "ul",
    ListMode.ordered: "ol",
}


class Line(NamedTuple):
    kind: LineKind
    text: str = ""
    level: int = 0


def classify_line(line: str, in_code: bool) -> Line:
    """Classify a line, keeping the text its block element wraps."""
    trimmed = line.strip()

    if trimmed.startswith(FENCE):
        return Line(LineKind.fence)
    if in_code:
        return Line(LineKind.code, line)

    match = HEADING_RE.match(trimmed)
    if match:
        return Line(LineKind.heading, (match.group(2) or "").strip(), len(match.group(1)))

    if trimmed in RULES:
        return Line(LineKind.rule)

    if trimmed.startswith(("- ", "* ")):
        return Line(LineKind.unordered, trimmed[2:])

    match = ORDERED_RE.match(trimmed)
    if match:
        return Line(LineKind.ordered, match.group(2))

    if trimmed:
        return Line(LineKind.paragraph, trimmed)
    return Line(LineKind.blank)


class BlockParser:
    """Single-use renderer for one slide.

    All fence and list state lives on the instance, so every render_slide()
    call gets its own parser.
    """

    def __init__(self) -> None:
        self.in_code = False
        self.list_mode = ListMode.none
        self.parts: List[str] = []

    def _close_list(self) -> None:
        if self.list_mode is not ListMode.none:
            self.parts.append(f"</{LIST_TAGS[self.list_mode]}>\n")
            self.list_mode = ListMode.none

    def _enter_list(self, mode: ListMode) -> None:
        if self.list_mode is not mode:
            self._close_list()
            self.parts.append(f"<{LIST_TAGS[mode]}>\n")
            self.list_mode = mode

    def _apply_list_action(self, action: ListAction) -> None:
        if action is ListAction.close:
            self._close_list()
        elif action is ListAction.unordered:
            self._enter_list(ListMode.unordered)
        elif action is ListAction.ordered:
            self._enter_list(ListMode.ordered)

    def feed(self, line: str) -> None:
        kind, text, level = classify_line(line, self.in_code)
        self._apply_list_action(LIST_TRANSITIONS[kind])

        if kind is LineKind.fence:
            self.parts.append("</code></pre>" if self.in_code else "<pre><code>")
            self.in_code = not self.in_code
        elif kind is LineKind.code:
            self.parts.append(html.escape(text) + "\n")
        elif kind is LineKind.heading:
            self.parts.append(f"<h{level}>{transform_inline(text)}</h{level}>\n")
        elif kind is LineKind.rule:
            self.parts.append("<hr/>\n")
        elif kind in (LineKind.unordered, LineKind.ordered):
            self.parts.append(f"<li>{transform_inline(text)}</li>\n")
        elif kind is LineKind.paragraph:
            self.parts.append(f"<p>{transform_inline(text)}</p>\n")

    def finish(self) -> str:
        """Close whatever is still open and return the fragment."""
        if self.in_code:
            self.parts.append("</code></pre>")
            self.in_code = False
        # Only one list can be open at a time, so this covers </ul> then </ol>.
        self._close_list()
        return "".join(self.parts)


def render_slide(markdown: Optional[str]) -> str:
    """Render one slide's markdown to an HTML fragment."""
    if not markdown:
        return ""

    parser = BlockParser()
    for line in markdown.split("\n"):
        parser.feed(line)
    return parser.finish()
