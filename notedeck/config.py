"""Process-wide settings: server directory, default HTTP headers and logging."""

from __future__ import annotations

import logging
import os
import sys

SERVER_DIR_ENV = "NOTEDECK_SERVER_DIR"
LOG_LEVEL_ENV = "NOTEDECK_LOG"

_CSP_DIRECTIVES = (
    "base-uri 'none'",
    "object-src 'none'",
    "script-src 'self' 'unsafe-eval'",
    "style-src 'self' 'unsafe-inline'",
    "default-src 'self'",
    "img-src 'self' data:",
    "frame-ancestors 'self'",
    "form-action 'self'",
    "report-uri /csp-report",
)

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def server_directory() -> str:
    """Directory holding migrations and static files; the environment may override it."""
    return os.environ.get(SERVER_DIR_ENV, os.getcwd())


def content_security_policy() -> str:
    """The Content-Security-Policy header value sent with every response."""
    return "; ".join(_CSP_DIRECTIVES)


def default_http_headers() -> dict[str, str]:
    """Headers added to every response."""
    return {
        "X-Frame-Options": "deny",
        "Content-Security-Policy": content_security_policy(),
    }


def init_logging() -> int:
    """Configure the package logger from the environment, defaulting to INFO.

    Returns the level that was set.
    """
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().lower()
    level = _LEVELS.get(name, logging.INFO)

    logger = logging.getLogger("notedeck")
    logger.setLevel(level)
    if not any(getattr(h, "_notedeck", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handler._notedeck = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return level