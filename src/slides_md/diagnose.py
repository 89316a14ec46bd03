"""
Deck Diagnostics

Pre-flight checks that catch document and theme problems before a deck is
served. The parser itself never fails, so anything it silently recovers
from (unclosed fences, unparseable frontmatter, missing assets) is reported
here instead.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import unquote

from lxml import html as lxml_html
from lxml.etree import ParserError

from .assets import asset_relative_path, is_absolute_target
from .blocks import FENCE
from .config import TRANSITIONS, Theme
from .content import Deck, build_deck, normalize_newlines, parse_deck
from .frontmatter import DELIMITER, extract_frontmatter, split_frontmatter


class Severity(str, Enum):
    """Severity of a diagnostic issue."""
    error = "error"
    warning = "warning"
    info = "info"


@dataclass
class DiagnosticIssue:
    """A single diagnostic finding."""
    code: str
    severity: Severity
    message: str
    slide_index: Optional[int] = None
    category: str = ""
    detail: str = ""


SEVERITY_LABELS = {
    Severity.error: "ERROR",
    Severity.warning: "WARN",
    Severity.info: "INFO",
}


@dataclass
class DiagnosticReport:
    """Findings for one deck, grouped by the slide they point at.

    ``slide_assets`` maps a slide number to the /assets/ references found on
    that slide. Issues without a ``slide_index`` concern the whole deck.
    """
    issues: List[DiagnosticIssue] = field(default_factory=list)
    document: str = ""
    title: Optional[str] = None
    slide_count: int = 0
    slide_assets: Dict[int, int] = field(default_factory=dict)

    @property
    def asset_count(self) -> int:
        return sum(self.slide_assets.values())

    @property
    def errors(self) -> List[DiagnosticIssue]:
        return [i for i in self.issues if i.severity == Severity.error]

    @property
    def warnings(self) -> List[DiagnosticIssue]:
        return [i for i in self.issues if i.severity == Severity.warning]

    @property
    def has_blocking_issues(self) -> bool:
        return len(self.errors) > 0

    def deck_issues(self) -> List[DiagnosticIssue]:
        return [i for i in self.issues if i.slide_index is None]

    def slide_issues(self, number: int) -> List[DiagnosticIssue]:
        return [i for i in self.issues if i.slide_index == number]

    def print_report(self, file=None) -> None:
        """Print the report: deck-level issues, then one entry per slide."""
        out = file or sys.stdout

        def _print_issues(issues):
            for issue in issues:
                print(f"    {SEVERITY_LABELS[issue.severity]:<6} {issue.code}: {issue.message}", file=out)
                if issue.detail:
                    print(f"           {issue.detail}", file=out)

        print("=" * 60, file=out)
        print(f"DECK DIAGNOSTIC REPORT: {self.document or '(unnamed)'}", file=out)
        if self.title:
            print(f"Title: {self.title}", file=out)
        print("=" * 60, file=out)
        print(f"{self.slide_count} slides, {self.asset_count} asset references, "
              f"{len(self.errors)} errors, {len(self.warnings)} warnings", file=out)
        print("-" * 60, file=out)

        deck_issues = self.deck_issues()
        if deck_issues:
            print("  Deck", file=out)
            _print_issues(deck_issues)

        for number in range(1, self.slide_count + 1):
            issues = self.slide_issues(number)
            assets = self.slide_assets.get(number, 0)
            status = "" if issues else "  ok"
            print(f"  Slide {number:>3}  assets: {assets}{status}", file=out)
            _print_issues(issues)

        print("-" * 60, file=out)
        if self.has_blocking_issues:
            print("RESULT: Deck cannot be served.", file=out)
        elif self.warnings:
            print("RESULT: Warnings found. Some slides may not render as written.", file=out)
        else:
            print("RESULT: Deck looks good!", file=out)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "document": self.document,
            "title": self.title,
            "slide_count": self.slide_count,
            "asset_count": self.asset_count,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "has_blocking_issues": self.has_blocking_issues,
            "slides": [
                {
                    "number": number,
                    "asset_count": self.slide_assets.get(number, 0),
                    "issue_codes": [i.code for i in self.slide_issues(number)],
                }
                for number in range(1, self.slide_count + 1)
            ],
            "issues": [
                {
                    "code": i.code,
                    "severity": i.severity.value,
                    "message": i.message,
                    "slide_index": i.slide_index,
                    "category": i.category,
                    "detail": i.detail,
                }
                for i in self.issues
            ],
        }


# ============================================================
# DOCUMENT CHECKS
# ============================================================

def _check_file_exists(document_path: Path, report: DiagnosticReport) -> bool:
    """DECK-001: Check that the document exists."""
    if not document_path.is_file():
        report.issues.append(DiagnosticIssue(
            code="DECK-001",
            severity=Severity.error,
            message="Markdown document not found",
            category="file",
            detail=str(document_path),
        ))
        return False
    return True


def _check_frontmatter(document: str, report: DiagnosticReport) -> None:
    """DECK-003/004: Check a leading frontmatter block, if any."""
    if document.strip().split("\n")[0] != DELIMITER:
        return

    if split_frontmatter(document) is None:
        report.issues.append(DiagnosticIssue(
            code="DECK-003",
            severity=Severity.warning,
            message="Frontmatter block is never closed; it is rendered as slide content",
            category="frontmatter",
        ))
        return

    title, body = extract_frontmatter(document)
    if body == document:
        report.issues.append(DiagnosticIssue(
            code="DECK-003",
            severity=Severity.warning,
            message="Frontmatter block is not a YAML mapping; it is rendered as slide content",
            category="frontmatter",
        ))
    elif title is None:
        report.issues.append(DiagnosticIssue(
            code="DECK-004",
            severity=Severity.warning,
            message="Leading '---' block parsed as frontmatter without a title; its content is not shown",
            category="frontmatter",
        ))


def _check_slide_count(deck: Deck, report: DiagnosticReport) -> None:
    """DECK-002: Warn on a deck without slides."""
    if not deck.slides:
        report.issues.append(DiagnosticIssue(
            code="DECK-002",
            severity=Severity.warning,
            message="Document contains no slides",
            category="structure",
        ))


def _check_fences(deck: Deck, report: DiagnosticReport) -> None:
    """DECK-010: Check for code fences left open at the end of a slide."""
    for slide in deck.slides:
        fences = sum(1 for line in slide.markdown.split("\n") if line.strip().startswith(FENCE))
        if fences % 2:
            report.issues.append(DiagnosticIssue(
                code="DECK-010",
                severity=Severity.warning,
                message="Unterminated code fence; closed at the end of the slide",
                slide_index=slide.number,
                category="markdown",
            ))


def _parse_fragment(fragment: str):
    try:
        return lxml_html.fragment_fromstring(fragment, create_parent="div")
    except ParserError:
        return None


def _check_headings(deck: Deck, report: DiagnosticReport) -> None:
    """DECK-020: Note slides without any heading."""
    for slide in deck.slides:
        root = _parse_fragment(slide.html)
        if root is None or not root.xpath("//h1|//h2|//h3|//h4|//h5|//h6"):
            report.issues.append(DiagnosticIssue(
                code="DECK-020",
                severity=Severity.info,
                message="Slide has no heading",
                slide_index=slide.number,
                category="markdown",
            ))


def _asset_file(url: str, asset_dir: Path) -> Optional[Path]:
    """Map a mounted asset URL to the file it should be served from."""
    relative = asset_relative_path(url)
    if not relative:
        return None
    relative = relative.split("#", 1)[0].split("?", 1)[0]
    return asset_dir / unquote(relative)


def _check_missing_assets(deck: Deck, asset_dir: Path, report: DiagnosticReport) -> None:
    """DECK-040: Check that images and links under /assets/ exist on disk."""
    for slide in deck.slides:
        root = _parse_fragment(slide.html)
        if root is None:
            continue

        for element in root.xpath("//img[@src] | //a[@href]"):
            url = element.get("src") if element.tag == "img" else element.get("href")
            path = _asset_file(url, asset_dir)
            if path is None:
                continue

            report.slide_assets[slide.number] += 1
            if not path.exists():
                kind = "Image" if element.tag == "img" else "Link"
                report.issues.append(DiagnosticIssue(
                    code="DECK-040",
                    severity=Severity.warning,
                    message=f"{kind} references missing asset: {asset_relative_path(url)}",
                    slide_index=slide.number,
                    category="media",
                    detail=str(path),
                ))


# ============================================================
# THEME CHECKS
# ============================================================

def _check_theme(theme: Theme, asset_dir: Path, report: DiagnosticReport) -> None:
    """THEME-001/002/003: Check values the renderer would silently replace."""
    transition = theme.transition.strip().lower()
    if transition and transition not in TRANSITIONS:
        report.issues.append(DiagnosticIssue(
            code="THEME-001",
            severity=Severity.warning,
            message=f"Unknown transition '{theme.transition}'; falling back to 'cut'",
            category="theme",
            detail=f"Expected one of: {', '.join(TRANSITIONS)}",
        ))

    opacity = theme.watermark_opacity
    if theme.watermark and opacity != 0 and not 0 < opacity <= 1:
        report.issues.append(DiagnosticIssue(
            code="THEME-002",
            severity=Severity.warning,
            message=f"Watermark opacity {opacity} is outside (0, 1]; using the default",
            category="theme",
        ))

    logo = theme.logo.strip()
    if logo and not is_absolute_target(logo) and not (asset_dir / logo).exists():
        report.issues.append(DiagnosticIssue(
            code="THEME-003",
            severity=Severity.warning,
            message=f"Theme logo not found: {logo}",
            category="theme",
            detail=str(asset_dir / logo),
        ))


# ============================================================
# PUBLIC API
# ============================================================

def diagnose_deck(
    document_path: Union[str, Path],
    theme: Optional[Theme] = None,
) -> DiagnosticReport:
    """Run all diagnostic checks on a document and return a report.

    Args:
        document_path: Path to the markdown document
        theme: Optional Theme for theme-aware checks (first/last slides, logo)

    Returns:
        DiagnosticReport with all findings
    """
    document_path = Path(document_path)
    report = DiagnosticReport(document=str(document_path))

    if not _check_file_exists(document_path, report):
        return report

    with open(document_path, "r", encoding="utf-8") as f:
        document = normalize_newlines(f.read())
    asset_dir = document_path.resolve().parent

    _check_frontmatter(document, report)

    if theme is not None:
        deck = build_deck(document, theme, source_file=str(document_path))
    else:
        deck = parse_deck(document, source_file=str(document_path))
    report.title = deck.title
    report.slide_count = len(deck.slides)
    report.slide_assets = {slide.number: 0 for slide in deck.slides}

    _check_slide_count(deck, report)
    _check_fences(deck, report)
    _check_headings(deck, report)
    _check_missing_assets(deck, asset_dir, report)

    if theme is not None:
        _check_theme(theme, asset_dir, report)

    return report
