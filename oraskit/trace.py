"""Debug logging of HTTP requests and responses."""

from __future__ import annotations

import contextvars
import itertools
import json
import logging
import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

_SCRUBBED = ("authorization", "set-cookie")

_current: contextvars.ContextVar[logging.Logger] = contextvars.ContextVar(
    "oraskit_logger"
)
_request_ids = itertools.count()
_request_ids_lock = threading.Lock()


def new_logger(debug: bool, verbose: bool) -> logging.Logger:
    """Create a logger writing to standard error and make it the current one.

    The level is debug, info or warning depending on the flags.
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logger = logging.Logger("oraskit", level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("time=%(asctime)s level=%(levelname)s msg=%(message)s")
    )
    logger.addHandler(handler)
    _current.set(logger)
    return logger


def current_logger() -> logging.Logger:
    """Return the logger set by :func:`new_logger`, or the root logger."""
    return _current.get(logging.getLogger())


@dataclass
class HTTPRequest:
    method: str
    url: str
    headers: dict[str, list[str]] = field(default_factory=dict)
    body: bytes = b""


@dataclass
class HTTPResponse:
    status: str
    headers: dict[str, list[str]] = field(default_factory=dict)
    body: bytes = b""


def _quote(value: Any) -> str:
    return json.dumps(str(value), ensure_ascii=False)


def format_headers(headers: Mapping[str, str | Iterable[str]]) -> str:
    """Render headers one per line, hiding credentials and cookies."""
    if not headers:
        return "   Empty header"
    lines = []
    for key, values in headers.items():
        if key.lower() in _SCRUBBED:
            text = "*****"
        elif isinstance(values, str):
            text = values
        else:
            text = ", ".join(values)
        lines.append(f"   {_quote(key)}: {_quote(text)}")
    return "\n".join(lines)


class Transport:
    """Wraps another transport and logs every request-response pair."""

    def __init__(self, base: Any) -> None:
        self.base = base

    def round_trip(self, request: HTTPRequest) -> HTTPResponse | None:
        with _request_ids_lock:
            request_id = next(_request_ids)
        logger = current_logger()
        logger.debug(
            "Request #%d\n> Request URL: %s\n> Request method: %s\n"
            "> Request headers:\n%s",
            request_id,
            _quote(request.url),
            _quote(request.method),
            format_headers(request.headers),
        )
        try:
            response = self.base.round_trip(request)
        except Exception as exc:
            logger.error("Error in getting response: %s", exc)
            raise
        if response is None:
            logger.error(
                "No response obtained for request %s %s",
                request.method,
                _quote(request.url),
            )
        else:
            logger.debug(
                "Response #%d\n< Response Status: %s\n< Response headers:\n%s",
                request_id,
                _quote(response.status),
                format_headers(response.headers),
            )
        return response