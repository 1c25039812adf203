from datetime import datetime, timezone, timedelta
from typing import Any, Callable, Dict, Optional
import psutil
from backend.common.base.base_service import BaseService
from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)

SERVICE_NAME = 'employee-api'
SERVICE_VERSION = '1.0.0'

class HealthService(BaseService):
    def __init__(self, employee_counter: Optional[Callable[[], int]] = None):
        self.startup_time = self.now()
        self.employee_counter = employee_counter

    def _get_server_time_payload(self) -> Dict[str, Any]:
        localized = datetime.now(timezone.utc).astimezone()
        offset = localized.utcoffset() or timedelta(0)

        tzinfo = localized.tzinfo
        tz_label = getattr(tzinfo, 'key', None) if tzinfo else None
        if not tz_label and tzinfo:
            tz_label = tzinfo.tzname(localized)

        return {
            'timestamp': localized.isoformat(),
            'timezone': tz_label or 'UTC',
            'utcOffsetMinutes': int(offset.total_seconds() // 60)
        }

    def get_health_data(self) -> Dict[str, Any]:
        uptime = self.now() - self.startup_time
        memory = psutil.virtual_memory()

        return {
            'status': 'healthy',
            'service': SERVICE_NAME,
            'version': SERVICE_VERSION,
            **self._get_server_time_payload(),
            'uptimeSeconds': round(uptime.total_seconds(), 2),
            'memoryPercent': memory.percent,
            'employees': self.employee_counter() if self.employee_counter else None,
        }
