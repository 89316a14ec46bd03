"""
Command Line Interface for slides-md

Provides entry points for:
- slides-md serve: Serve a markdown deck over HTTP
- slides-md build: Write the deck as a standalone HTML file
- slides-md parse: Show or save the parsed slides
- slides-md diagnose: Run document and theme diagnostics
"""

import sys
import json
import argparse
from pathlib import Path

from .config import load_config, resolve_config_path
from .content import build_deck, parse_deck, save_deck
from .logging_config import configure_logging

DEFAULT_DOCUMENT = "slides.md"
DEFAULT_THEME = "dark"
DEFAULT_PORT = 8080


def _read_document(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _load_theme(args: argparse.Namespace):
    cfg_path = resolve_config_path(args.config)
    config = load_config(cfg_path)
    theme = config.get_theme(args.theme)
    return cfg_path, theme


def serve_command(args: argparse.Namespace) -> int:
    """Execute serve command."""
    from .server import serve

    try:
        cfg_path, theme = _load_theme(args)
        document = _read_document(args.file)
        deck = build_deck(document, theme, source_file=args.file)
        asset_dir = Path(args.file).resolve().parent

        print(f"Starting server on http://localhost:{args.port}")
        print(f"Config: {cfg_path}")
        print(f"Theme: {args.theme}")
        print(f"Slides: {len(deck.slides)}")
        print("Press Ctrl+C to stop")

        serve(deck, theme, asset_dir=asset_dir, host=args.host, port=args.port)
        return 0

    except Exception as e:
        print(f"\nError: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


def build_command(args: argparse.Namespace) -> int:
    """Execute build command."""
    from .page import render_page

    print("=" * 60)
    print("Deck Build")
    print("=" * 60)

    try:
        cfg_path, theme = _load_theme(args)
        print(f"Config: {cfg_path}")
        print(f"Theme: {args.theme}")

        document = _read_document(args.file)
        deck = build_deck(document, theme, source_file=args.file)
        print(f"Parsed {len(deck.slides)} slides from {args.file}")

        output = Path(args.output or Path(args.file).with_suffix(".html"))
        page = render_page(deck, theme, inline_css=theme.css)
        output.write_text(page, encoding="utf-8")
        print(f"Wrote: {output}")
        print("Relative assets resolve under /assets/; serve the page with 'slides-md serve' to load them.")
        return 0

    except Exception as e:
        print(f"\nError: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


def parse_command(args: argparse.Namespace) -> int:
    """Execute parse command."""
    try:
        deck = parse_deck(_read_document(args.file), source_file=args.file)

        if args.output:
            save_deck(deck, args.output)
            print(f"Saved {len(deck.slides)} slides to: {args.output}")
        elif args.json:
            print(json.dumps(deck.model_dump(mode="json"), indent=2, ensure_ascii=False))
        else:
            print(f"Title: {deck.title or '(none)'}")
            print(f"Slides: {len(deck.slides)}")
            for slide in deck.slides:
                first_line = slide.markdown.strip().split("\n")[0]
                print(f"  {slide.number:>3}. {first_line[:70]}")
        return 0

    except Exception as e:
        print(f"\nError: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


def diagnose_command(args: argparse.Namespace) -> int:
    """Execute diagnose command."""
    from .diagnose import diagnose_deck

    try:
        theme = None
        if args.theme:
            _, theme = _load_theme(args)

        report = diagnose_deck(args.file, theme=theme)

        if getattr(args, 'json', False):
            print(json.dumps(report.to_dict(), indent=2))
        else:
            report.print_report()

        if args.strict and report.has_blocking_issues:
            return 1

        return 0

    except Exception as e:
        print(f"\nError: {e}")
        if getattr(args, 'verbose', False):
            import traceback
            traceback.print_exc()
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='slides-md',
        description='slides-md - Present a markdown file as HTML slides',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s serve talk.md --theme dark --port 8080
  %(prog)s build talk.md -o talk.html --config themes.yaml
  %(prog)s parse talk.md --json
  %(prog)s diagnose talk.md --theme dark --strict
        """
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Show detailed output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # SUPPRESS keeps an unset subcommand flag from clearing the global one.
    def add_verbose_arg(sub):
        sub.add_argument('-v', '--verbose', action='store_true', default=argparse.SUPPRESS,
                         help='Show detailed output')

    def add_theme_args(sub, theme_default=DEFAULT_THEME):
        sub.add_argument('--theme', '-t', default=theme_default, help='Theme name to use')
        sub.add_argument('--config', '-c', help='Themes configuration file (defaults to XDG or local)')

    # Serve command
    serve_parser = subparsers.add_parser('serve', help='Serve the deck over HTTP')
    serve_parser.add_argument('file', nargs='?', default=DEFAULT_DOCUMENT, help='Markdown file (default: slides.md)')
    add_theme_args(serve_parser)
    serve_parser.add_argument('--port', '-p', type=int, default=DEFAULT_PORT, help='Port to serve on')
    serve_parser.add_argument('--host', default='0.0.0.0', help='Interface to bind')
    add_verbose_arg(serve_parser)

    # Build command
    build_parser_ = subparsers.add_parser('build', help='Write the deck as a standalone HTML page')
    build_parser_.add_argument('file', nargs='?', default=DEFAULT_DOCUMENT, help='Markdown file (default: slides.md)')
    build_parser_.add_argument('--output', '-o', help='Output HTML file (default: input.html)')
    add_theme_args(build_parser_)
    add_verbose_arg(build_parser_)

    # Parse command
    parse_parser = subparsers.add_parser('parse', help='Show the parsed slides')
    parse_parser.add_argument('file', nargs='?', default=DEFAULT_DOCUMENT, help='Markdown file (default: slides.md)')
    parse_parser.add_argument('--json', action='store_true', help='Print the deck as JSON')
    parse_parser.add_argument('--output', '-o', metavar='PATH', help='Save the deck as JSON to PATH')
    add_verbose_arg(parse_parser)

    # Diagnose command
    diagnose_parser = subparsers.add_parser('diagnose', help='Run document and theme diagnostics')
    diagnose_parser.add_argument('file', nargs='?', default=DEFAULT_DOCUMENT, help='Markdown file (default: slides.md)')
    add_theme_args(diagnose_parser, theme_default=None)
    diagnose_parser.add_argument('--strict', action='store_true', help='Exit with error if blocking issues found')
    diagnose_parser.add_argument('--json', action='store_true', help='Output results as JSON')
    add_verbose_arg(diagnose_parser)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == 'serve':
        return serve_command(args)
    elif args.command == 'build':
        return build_command(args)
    elif args.command == 'parse':
        return parse_command(args)
    elif args.command == 'diagnose':
        return diagnose_command(args)
    else:
        parser.print_help()
        return 1


def slides_serve():
    """Entry point for the slides-serve command."""
    return main(['serve'] + sys.argv[1:])


if __name__ == '__main__':
    sys.exit(main())
