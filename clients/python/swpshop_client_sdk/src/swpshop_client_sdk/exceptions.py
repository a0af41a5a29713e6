from __future__ import annotations


class TransportAbortedError(Exception):
    """The caller's cancellation signal fired before the response arrived."""

    def __init__(self, message: str = "Request aborted.") -> None:
        super().__init__(message)
