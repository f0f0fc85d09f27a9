#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Book Publishing CLI - Lay out a manuscript as a print-ready book

Reads a manuscript JSON document (title, author, chapters, optional
bibliography and publishing settings) and writes a typeset book:
- PDF with mirrored margins, running heads and a page-numbered contents
- HTML with CSS paged media
- DOCX with Word sections, page fields and a contents page
- EPUB 3 for e-readers
- Plain text / Markdown

Usage:
    python publish_book.py manuscript.json
    python publish_book.py manuscript.json -o book.pdf
    python publish_book.py manuscript.json --format epub --genre fantasy
    python publish_book.py manuscript.json --book-type novella --settings overrides.json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from config.logging_config import set_level, setup_logger
from config.settings import settings
from core.contracts import ContractError, Manuscript
from core.layout import LayoutAgent

# Load environment variables
load_dotenv()

logger = setup_logger("press")


def get_default_output(input_path: str, output_format: str) -> str:
    """Default output: input file name with the format's extension"""
    return str(Path(input_path).with_suffix(f".{output_format}"))


def load_json(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="publish-book",
        description="Lay out a manuscript as a print-ready book",
        epilog="""
Examples:
  %(prog)s manuscript.json
  %(prog)s manuscript.json -o book.pdf
  %(prog)s manuscript.json --format epub --genre fantasy
  %(prog)s manuscript.json --book-type novella --settings overrides.json
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        'manuscript',
        help='Manuscript JSON file'
    )

    parser.add_argument(
        '-o', '--output',
        help='Output file (default: <manuscript>.<format>)'
    )

    parser.add_argument(
        '-f', '--format',
        choices=LayoutAgent.supported_formats(),
        help=f'Output format (default: output extension, else {settings.default_output_format})'
    )

    parser.add_argument(
        '--book-type',
        help='Book-type preset (novel, novella, poetry, textbook, ...)'
    )

    parser.add_argument(
        '--genre',
        help='Genre used to pick a style preset (fantasy, romance, thriller, ...)'
    )

    parser.add_argument(
        '--settings',
        help='Publishing settings JSON that replaces the manuscript\'s own'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    set_level(settings.log_level)

    try:
        manuscript = Manuscript.from_dict(load_json(args.manuscript))
        overrides = load_json(args.settings) if args.settings else None

        output_format = args.format
        if not output_format and not args.output:
            output_format = settings.default_output_format
        output = args.output or get_default_output(args.manuscript, output_format)

        agent = LayoutAgent()
        path = agent.process(
            manuscript,
            output,
            output_format=output_format,
            book_type=args.book_type,
            genre=args.genre,
            overrides=overrides,
        )
        print(f"✅ Book written: {path}")
        return 0

    except FileNotFoundError as e:
        print(f"❌ Error: file not found: {e.filename}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"❌ Error: invalid JSON: {e}", file=sys.stderr)
        return 1
    except ContractError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Publishing failed")
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
