"""
Command line entry point: renders a playbook source file to HTML, or dumps its parsed tree as JSON.

    playbook-render playbook.txt -o playbook.html
    playbook-render playbook.txt --format json
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from playbook.errors import SourceUnavailableError
from playbook.logger import DETAIL, logger
from playbook.partition.text import parse
from playbook.staging.base import document_to_json
from playbook.staging.html import render


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="playbook-render",
        description="Render a plain-text playbook as paginated HTML.",
    )
    parser.add_argument("source", help="Path to the playbook text file.", type=str)
    parser.add_argument(
        "-o",
        "--output",
        help="Path of the file to write. Defaults to stdout.",
        type=str,
        default=None,
    )
    parser.add_argument(
        "--format",
        help="Output format: the rendered HTML fragment or the parsed document as JSON.",
        choices=["html", "json"],
        default="html",
    )
    parser.add_argument(
        "--encoding",
        help="Encoding of the source file. Detected when omitted.",
        type=str,
        default=None,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        help="Log classifier decisions.",
        action="store_true",
    )
    return parser


def _main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=DETAIL if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        document = parse(args.source, encoding=args.encoding)
    except SourceUnavailableError as error:
        logger.error(error.message)
        return 1

    if args.format == "json":
        output = document_to_json(document) or ""
    else:
        output = render(document)

    if args.output is None:
        sys.stdout.write(output)
        return 0

    out_dir = os.path.dirname(args.output)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as f:
        f.write(output)
    logger.info("Playbook rendered and saved to: %s", args.output)
    return 0


def main() -> None:
    sys.exit(_main())


if __name__ == "__main__":
    main()
