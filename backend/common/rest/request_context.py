"""
Per-request context handed to middleware and handlers.
"""
import time
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated subject and its role labels."""

    subject: str
    roles: FrozenSet[str] = frozenset()

    def has_any_role(self, allowed) -> bool:
        return bool(self.roles & frozenset(allowed))


@dataclass(frozen=True)
class StoredFile:
    """Reference to a file written by an upload storage."""

    path: str
    original_name: str = ""
    mimetype: Optional[str] = None
    size: int = 0


@dataclass
class RequestContext:
    """
    Created at view entry and discarded once the response is written.

    Middleware may replace `body` (validation) and set `file` (uploads).
    `caller` comes from upstream authentication and is only read here.
    """

    params: Dict[str, Any] = field(default_factory=dict)
    body: Any = None
    caller: Optional[CallerIdentity] = None
    start_time: float = field(default_factory=time.monotonic)
    file: Optional[StoredFile] = None
