"""
Command-line adapter for fileai.

Architectural role:
- Parse the single required `--file` option.
- Resolve configuration once and hand it to the dispatcher.
- Render the result to stdout and map failures to a non-zero exit code.

Request lifecycle:
1. Parse arguments and configure logging.
2. `load_config()` (reads `.env`, environment, key file, prompt file).
3. `Dispatcher(config).analyze(path)`.
4. Print the summary/description, or the `{filename, description}`
   envelope with `--json`.

Error handling strategy:
- Every `FileAIError` (including `ConfigError`) is printed as
  `Error: <message>` on stderr and exits with status 1.
- Unexpected exceptions are not caught.
"""

import argparse
import json
import logging
import os
import sys

from fileai.core.engine import Dispatcher
from fileai.core.errors import FileAIError
from fileai.llm.provider_config import load_config


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fileai",
        description=(
            "Analyze a file and print a summary for text content "
            "or a description for images."
        ),
    )
    parser.add_argument("-f", "--file", required=True, help="Path to the file to be analyzed")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a {filename, description} JSON envelope instead of plain text",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def setup_logging(verbose: bool = False):
    """Send log records to stderr so stdout carries only the result."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # urllib3 connection chatter drowns out pipeline transitions at DEBUG.
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def main(argv=None) -> int:
    """
    Run one analysis and return the process exit code.

    Exit codes:
    - 0: analysis succeeded, result printed to stdout.
    - 1: any pipeline or configuration failure.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    file_path = os.path.abspath(args.file)

    try:
        config = load_config()
        result = Dispatcher(config).analyze(file_path)
    except FileAIError as err:
        logger.debug("Analysis of %s failed: %s", file_path, err.reason.value)
        print(f"Error: {err}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_envelope(), ensure_ascii=False))
    else:
        print(result.summary_or_description)
    return 0


if __name__ == "__main__":
    sys.exit(main())
