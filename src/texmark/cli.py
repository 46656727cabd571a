"""Command line: convert a Markdown file with TeX math to PDF or HTML.

Usage:
    texmark notes.md                       # -> notes.pdf
    texmark notes.md out.html -f html
    texmark notes.md --margin 20 --landscape --font-size large

Numeric values without a unit get a default one: margins mm, font size px,
paragraph spacing em, math spacing px.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from texmark import __version__, render
from texmark.assets import load_katex_assets, resolve_assets_dir
from texmark.document import PageOptions, StyleOptions, html_document, normalize_with_unit
from texmark.errors import TexmarkError
from texmark.export import print_pdf
from texmark.utils.logger import get_logger

logger = get_logger(__name__)

FORMATS = ("pdf", "html")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="texmark",
        description="Convert Markdown with LaTeX math to PDF or HTML",
    )
    parser.add_argument("input", type=Path, help="Markdown input file")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        help="Output file (default: input path with .pdf/.html suffix)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    parser.add_argument("-f", "--format", default="pdf", help="Output format: pdf or html")
    parser.add_argument("--margin", default="0mm", help="Page margin, e.g. 20mm")
    parser.add_argument("--landscape", action="store_true", help="Landscape pages")
    parser.add_argument("--font-size", default="medium", help="small|medium|large|xlarge or e.g. 14px")
    parser.add_argument(
        "--chinese-font",
        default="simsun",
        help="simsun|simhei|simkai|fangsong|yahei|auto",
    )
    parser.add_argument(
        "--font-weight",
        default="medium",
        help="light|normal|medium|semibold|bold|black or e.g. 400",
    )
    parser.add_argument("--line-spacing", default="normal", help="tight|normal|loose|relaxed or e.g. 1.6")
    parser.add_argument(
        "--paragraph-spacing",
        default="tight",
        help="tight|normal|loose|relaxed or e.g. 1em",
    )
    parser.add_argument("--math-spacing", default="tight", help="tight|normal|loose|relaxed or e.g. 20px")
    parser.add_argument("--chrome", type=Path, help="Chrome/Chromium executable (default: search PATH)")
    parser.add_argument("--assets", type=Path, help="Directory containing katex/ (default: ./assets)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def default_output(input_path: Path, fmt: str) -> Path:
    return input_path.with_suffix(f".{fmt}")


def convert(args: argparse.Namespace) -> Path:
    """Run one conversion described by parsed arguments.

    Returns:
        Path of the written file

    Raises:
        TexmarkError: Assets or PDF export failed
        OSError: Input could not be read or output not written
    """
    fmt = args.format.lower()
    output = (args.output or default_output(args.input, fmt)).resolve()

    style = StyleOptions(
        font_size=normalize_with_unit(args.font_size, "px"),
        chinese_font=args.chinese_font,
        font_weight=args.font_weight,
        line_spacing=args.line_spacing,
        paragraph_spacing=normalize_with_unit(args.paragraph_spacing, "em"),
        math_spacing=normalize_with_unit(args.math_spacing, "px"),
    )
    page = PageOptions(margin=normalize_with_unit(args.margin, "mm"), landscape=args.landscape)

    logger.info("Input:  %s", args.input)
    logger.info("Output: %s (%s)", output, fmt.upper())
    logger.debug("Style: %s; page: %s", style, page)

    source = args.input.read_text(encoding="utf-8")
    assets = load_katex_assets(resolve_assets_dir(args.assets))
    fragment = render(source)
    document = html_document(
        fragment,
        title=args.input.stem or "texmark",
        assets=assets,
        style=style,
        page=page,
    )

    if fmt == "html":
        output.write_text(document, encoding="utf-8")
        return output
    return print_pdf(document, output, browser=args.chrome)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.input.is_file():
        print(f"error: input file does not exist: {args.input}", file=sys.stderr)
        return 1
    if args.format.lower() not in FORMATS:
        print(f"error: unsupported format: {args.format}", file=sys.stderr)
        return 1

    started = time.perf_counter()
    try:
        written = convert(args)
    except (TexmarkError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    logger.info("Done in %.1fs: %s", time.perf_counter() - started, written)
    return 0


if __name__ == "__main__":
    sys.exit(main())
