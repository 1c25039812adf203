"""
Response envelope formatting.

Every successful response body has exactly three keys:
    data       the handler's payload, passed through unchanged
    elapsedMs  integer milliseconds since the request started
    status     short status label, e.g. "OK"
"""
import time
from typing import Any, Dict


def format_response(data: Any, elapsed_ms: float, status: str = "OK") -> Dict[str, Any]:
    """
    Wrap a payload in the standard envelope.

    :param data: Any payload, including None.
    :param elapsed_ms: Processing time in milliseconds. Negative values
        (clock anomalies) are clamped to 0.
    :param status: Status label.
    :return: The envelope dict.
    """
    return {
        'data': data,
        'elapsedMs': max(0, int(elapsed_ms)),
        'status': status,
    }


def elapsed_since(start_time: float) -> int:
    """Milliseconds elapsed since a time.monotonic() timestamp."""
    return max(0, int((time.monotonic() - start_time) * 1000))


class ResponseFormatter:
    """Thin object wrapper so controllers can expose the formatter as `self.fmt`."""

    def format_response(self, data: Any, elapsed_ms: float, status: str = "OK") -> Dict[str, Any]:
        return format_response(data, elapsed_ms, status)
