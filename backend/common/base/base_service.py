"""
Base Service Class.
Provides common utility methods for all services.
"""
from datetime import datetime, timezone

class BaseService:
    """
    Abstract base class for all services.
    """

    def now(self) -> datetime:
        """Return current server time (UTC)."""
        return datetime.now(timezone.utc)
