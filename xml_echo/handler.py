"""AWS Lambda entry point for the XML echo service.

API Gateway wraps the raw XML request in ``{"body": ...}``. The handler checks
that the body is well-formed XML with the expected root element and echoes it
back as ``text/xml``. Failures are raised to the Lambda runtime unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from .config import load_log_level, load_root_tag
from .exceptions import XmlRequestError
from .transformer import RequestTransformer

LOGGER = logging.getLogger(__name__)
PACKAGE_LOGGER = logging.getLogger("xml_echo")
_TRANSFORMER = None


def _get_transformer() -> RequestTransformer:
    """Get or create singleton RequestTransformer from environment configuration.

    """
    global _TRANSFORMER  # noqa: PLW0603
    if _TRANSFORMER is None:
        PACKAGE_LOGGER.setLevel(load_log_level())
        _TRANSFORMER = RequestTransformer(root_tag=load_root_tag())
    return _TRANSFORMER


def reset_transformer() -> None:
    """Drop the cached transformer so the next invocation re-reads configuration."""
    global _TRANSFORMER  # noqa: PLW0603
    _TRANSFORMER = None


def handle_event(event: Dict[str, Any], transformer: RequestTransformer) -> Dict[str, Any]:
    """Echo the event body through ``transformer`` and return the proxy response."""
    body = event.get("body") if isinstance(event, dict) else None
    try:
        response = transformer.transform(body)
    except XmlRequestError as exc:
        LOGGER.warning(
            "Rejected XML request",
            extra={"errorType": type(exc).__name__, "error": str(exc)},
        )
        raise
    LOGGER.info(
        "Echoed XML request",
        extra={"rootTag": transformer.root_tag, "bodyLength": len(response.body)},
    )
    return response.to_dict()


def lambda_handler(event: Dict[str, Any], _context: Any) -> Dict[str, Any]:
    """Lambda entry point invoked by API Gateway.

    """
    return handle_event(event, _get_transformer())
