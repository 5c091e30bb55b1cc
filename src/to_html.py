#!/usr/bin/env python3
"""
ANSI to HTML - Command-line converter
Reads a file of terminal output and writes a standalone HTML page
"""

import argparse
import logging
import os
import sys
import tempfile

from html_renderer import Term
from logging_setup import LOG_LEVELS, configure_logging
from palette import PALETTES, get_palette
from term_config import ConfigError, load_config, parse_color

logger = logging.getLogger(__name__)


def read_input(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def default_file_mode() -> int:
    """Mode a newly created file gets under the current umask"""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_output(path: str, document: str):
    """Write via a temporary file so a failed write leaves nothing behind"""
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".to_html-", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(document)
        # mkstemp creates the file owner-only
        os.chmod(tmp_path, default_file_mode())
        os.replace(tmp_path, path)
    except OSError:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def build_term(args, parser: argparse.ArgumentParser) -> Term:
    """Defaults, then the config file, then individual options"""
    term = Term()
    try:
        if args.config:
            term = load_config(args.config, term)
        if args.palette:
            term = term.with_palette(get_palette(args.palette))
        if args.fg:
            term = term.with_fg_color(parse_color(args.fg))
        if args.bg:
            term = term.with_bg_color(parse_color(args.bg))
    except (ConfigError, ValueError) as e:
        parser.error(str(e))

    if args.no_background:
        term = term.with_background(False)
    return term


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert text with ANSI escape sequences to a static HTML page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  to_html build.log build.html
  to_html --palette vga --no-background output.txt output.html
  to_html --serve build.log build.html
""",
    )
    parser.add_argument("input", help="Text file with ANSI escape sequences (UTF-8)")
    parser.add_argument("output", help="HTML file to write")
    parser.add_argument("--config", "-c", type=str, help="JSON file with rendering settings")
    parser.add_argument("--palette", choices=sorted(PALETTES), help="Color palette for named colors")
    parser.add_argument("--fg", type=str, help="Default foreground color (name, 0-255 or #RRGGBB)")
    parser.add_argument("--bg", type=str, help="Default background color (name, 0-255 or #RRGGBB)")
    parser.add_argument("--no-background", action="store_true", help="Do not paint the page background")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", help="Log level")
    parser.add_argument("--serve", action="store_true", help="Serve the result over HTTP after writing it")
    parser.add_argument("--port", type=int, help="Port for --serve (default: first free port from 8000)")
    return parser


def main(argv=None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    term = build_term(args, parser)

    try:
        text = read_input(args.input)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read input {args.input}: {e}")
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    document = term.render_html(text)

    try:
        write_output(args.output, document)
    except OSError as e:
        logger.error(f"Cannot write output {args.output}: {e}")
        print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
        return 1

    logger.info(f"Wrote {args.output} from {args.input}")

    if args.serve:
        from preview_server import serve_document

        serve_document(document, port=args.port)

    return 0


if __name__ == "__main__":
    sys.exit(main())
