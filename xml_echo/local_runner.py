"""Local entry point to invoke the XML echo handler without AWS Lambda."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import load_root_tag
from .exceptions import XmlRequestError
from .handler import PACKAGE_LOGGER, handle_event
from .transformer import RequestTransformer

LOGGER = logging.getLogger("xml-echo.local-runner")

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_READ_FAILED = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the XML echo handler locally")
    parser.add_argument("source", help="Path to the request body, or '-' for stdin")
    roots = parser.add_mutually_exclusive_group()
    roots.add_argument("--root-tag", help="Expected root element (defaults to XML_ECHO_ROOT_TAG or 'catalog')")
    roots.add_argument("--any-root", action="store_true", help="Accept any root element")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for the handler",
    )
    return parser.parse_args(argv)


def read_body(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def _error_payload(exc: Exception) -> str:
    return json.dumps({"errorType": type(exc).__name__, "errorMessage": str(exc)})


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    PACKAGE_LOGGER.setLevel(args.log_level)

    if args.any_root:
        root_tag = None
    else:
        root_tag = args.root_tag or load_root_tag()
    transformer = RequestTransformer(root_tag=root_tag)

    try:
        body = read_body(args.source)
    except OSError as exc:
        LOGGER.error("Unable to read request body", extra={"source": args.source})
        print(_error_payload(exc), file=sys.stderr)
        return EXIT_READ_FAILED

    try:
        response = handle_event({"body": body.decode("utf-8")}, transformer)
    except (XmlRequestError, UnicodeDecodeError) as exc:
        print(_error_payload(exc), file=sys.stderr)
        return EXIT_REJECTED

    print(json.dumps(response, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
