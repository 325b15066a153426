"""HTTP and message-formatting helpers.

The menu page is fetched through `get_http_session` and `retryable_request`;
Discord posts reuse the same session settings and `raise_for_status` but are
never retried.  The markdown helpers are shared by the report builder.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import requests
from requests import Response
from tenacity import (after_log, retry, retry_if_exception,
                      retry_if_exception_type, stop_after_attempt,
                      wait_exponential)


logger = logging.getLogger(__name__)


def get_http_session() -> requests.Session:
    """Session identifying the monitor to the menu site and to Discord.

    Caller closes it.
    """
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": "Mozilla/5.0 (compatible; NewCityMonitor/1.0; +https://github.com/)",
            "Accept": "text/html,application/xhtml+xml,application/json;q=0.9,*/*;q=0.8",
        }
    )
    return session


class HTTPError(Exception):
    """A request answered with an error status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def raise_for_status(resp: Response) -> None:
    try:
        resp.raise_for_status()
    except requests.RequestException as e:
        raise HTTPError(str(e), status=resp.status_code) from e


def _is_server_error(exc: BaseException) -> bool:
    return isinstance(exc, HTTPError) and (exc.status or 0) >= 500


def retryable_request(method: Callable[..., Response]) -> Callable[..., Response]:
    """Retry a `(session, url, **kwargs)` GET helper on transient failures.

    Connection errors, timeouts and 5xx answers are retried, up to 5
    attempts with exponential back-off between 1 and 10 seconds.  A 4xx
    (say the menu page moved) fails at once.
    """

    @retry(
        reraise=True,
        stop=stop_after_attempt(5),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=(
            retry_if_exception_type((requests.ConnectionError, requests.Timeout))
            | retry_if_exception(_is_server_error)
        ),
        after=after_log(logger, logging.WARNING),
    )
    def wrapper(session: requests.Session, url: str, **kwargs: Any) -> Response:
        response = method(session, url, **kwargs)
        raise_for_status(response)
        return response

    return wrapper


def warn(s: str) -> str:
    return f"⚠️: {s}"


def bold(s: str) -> str:
    return f"**{s}**"


def italic(s: str) -> str:
    return f"*{s}*"


__all__ = [
    "get_http_session",
    "retryable_request",
    "raise_for_status",
    "HTTPError",
    "warn",
    "bold",
    "italic",
]
