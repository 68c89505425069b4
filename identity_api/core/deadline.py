"""Per-request deadline shared with the IdP client.

The HTTP layer opens a deadline when a request starts; every remote call
made while serving that request bounds its socket timeout by the time left.
A context variable keeps the value private to the thread serving the
request.
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Optional

_deadline: ContextVar[Optional[float]] = ContextVar("request_deadline", default=None)


def open_deadline(seconds: float) -> Token:
    """Start a deadline ``seconds`` from now and return the reset token."""
    return _deadline.set(time.monotonic() + seconds)


def close_deadline(token: Token) -> None:
    _deadline.reset(token)


@contextmanager
def request_deadline(seconds: float) -> Iterator[None]:
    """Bind every remote call inside the block to a shared time budget."""
    token = open_deadline(seconds)
    try:
        yield
    finally:
        close_deadline(token)


def remaining() -> Optional[float]:
    """Seconds left before the current deadline, or None when none is open."""
    deadline = _deadline.get()
    if deadline is None:
        return None
    return deadline - time.monotonic()
