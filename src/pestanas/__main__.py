"""Command-line driver: render a markdown file's tabbed sections.

Usage:
    python -m pestanas example.md
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pestanas import to_html
from pestanas.errors import PestanasError
from pestanas.utils.logger import get_logger

logger = get_logger("cli")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pestanas",
        description="Render tabbed sections of a markdown file as tags",
    )
    parser.add_argument("path", type=Path, help="markdown file to render")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(name)s: %(message)s")

    try:
        source = args.path.read_bytes().decode("utf-8")
        output = to_html(source)
    except (OSError, UnicodeDecodeError, PestanasError) as e:
        logger.error("%s: %s", args.path, e)
        return 1

    sys.stdout.write(output)
    if output and not output.endswith("\n"):
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
