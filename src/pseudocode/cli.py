"""Command line front end.

Usage:
    python -m pseudocode algo.tex -o algo.html --line-number
    python -m pseudocode --dump < algo.tex

Exit status: 0 on success, 1 on a pseudocode error (message on stderr),
2 on usage errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pseudocode import __version__, parse, render_to_string
from pseudocode.config import RendererOptions
from pseudocode.errors import PseudocodeError
from pseudocode.serialization import dump, to_json
from pseudocode.utils.logger import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pseudocode",
        description="Render LaTeX algorithmic pseudocode to HTML.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Input .tex file (default: read standard input)",
    )
    parser.add_argument("-o", "--output", help="Output file (default: standard output)")
    parser.add_argument("--line-number", action="store_true", help="Number code lines")
    parser.add_argument(
        "--line-number-punc", default=":", help="Text after each line number (default: ':')"
    )
    parser.add_argument("--no-end", action="store_true", help="Omit 'end ...' lines")
    parser.add_argument(
        "--indent-size", default="1.2em", help="Block indentation in em (default: 1.2em)"
    )
    parser.add_argument(
        "--comment-delimiter", default=" // ", help="Text before comments (default: ' // ')"
    )
    parser.add_argument(
        "--title-prefix", default="Algorithm", help="Caption keyword (default: Algorithm)"
    )
    parser.add_argument(
        "--caption-count",
        type=int,
        default=None,
        help="Number the first caption after this value",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--dump", action="store_true", help="Print the parse tree instead")
    output.add_argument("--json", action="store_true", help="Print the parse tree as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source_file = None if args.input == "-" else args.input
    try:
        source = _read_source(args.input)
        if args.dump or args.json:
            doc = parse(source, source_file=source_file)
            result = dump(doc) if args.dump else to_json(doc, indent=2)
        else:
            options = RendererOptions(
                indent_size=args.indent_size,
                comment_delimiter=args.comment_delimiter,
                line_number=args.line_number,
                line_number_punc=args.line_number_punc,
                no_end=args.no_end,
                caption_count=args.caption_count,
                title_prefix=args.title_prefix,
            )
            result = render_to_string(source, options)
    except (PseudocodeError, OSError) as e:
        print(f"pseudocode: {e}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(result + "\n", encoding="utf-8")
        logger.debug("Wrote %s", args.output)
    else:
        sys.stdout.write(result + "\n")
    return 0
