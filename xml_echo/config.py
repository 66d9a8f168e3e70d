"""Environment-driven configuration for the Lambda handler."""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from .exceptions import ConfigurationError
from .transformer import DEFAULT_ROOT_TAG

ROOT_TAG_ENV = "XML_ECHO_ROOT_TAG"
LOG_LEVEL_ENV = "LOG_LEVEL"
ANY_ROOT = "*"


def load_root_tag(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the expected root tag, or None when any root is accepted."""
    environ = os.environ if environ is None else environ
    raw = environ.get(ROOT_TAG_ENV)
    if raw is None:
        return DEFAULT_ROOT_TAG
    raw = raw.strip()
    if not raw or raw == ANY_ROOT:
        return None
    return raw


def load_log_level(environ: Optional[Mapping[str, str]] = None) -> int:
    environ = os.environ if environ is None else environ
    raw = environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ConfigurationError(f"{LOG_LEVEL_ENV} must be a logging level name, got {raw!r}")
    return level
