"""Errors raised by the SES transport."""

from typing import Any


class SESSendError(Exception):
    """A provider failure that was reported as a plain value rather than an exception."""

    def __init__(self, original: Any):
        self.original = original
        super().__init__(f"Email failed: {original}")
