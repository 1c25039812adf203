"""
Centralized Logging Service for the Employee API backend

This module provides a unified logging interface with:
- Structured JSON output
- Multiple log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
- File rotation (prevents disk fill)
- Console output
- Contextual logging with extra fields (employee_id, user_id, etc.)


Usage:
    from backend.services.system.logger_service import get_logger

    logger = get_logger(__name__)
    logger.info("Employee updated", extra={"employee_id": "abc123", "caller": "user456"})
    logger.error("Repository error", extra={"error": str(e)}, exc_info=True)
"""

import logging
import json
import sys
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Dict, Any, Optional
from pathlib import Path

# Attributes every LogRecord carries; anything else came in through extra={}.
_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName',
    'relativeCreated', 'thread', 'threadName', 'taskName', 'exc_info',
    'exc_text', 'stack_info', 'extra_fields',
])


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.
    Outputs logs in JSON format for easy parsing by log aggregation tools.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string"""

        def _infer_service(logger_name: str) -> str:
            parts = logger_name.split('.') if logger_name else []
            if 'features' in parts:
                idx = parts.index('features')
                if idx + 1 < len(parts):
                    return parts[idx + 1]
            if 'services' in parts:
                idx = parts.index('services')
                if idx + 1 < len(parts):
                    return parts[idx + 1]
            if parts:
                return parts[0]
            return 'unknown'

        log_data: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'component': 'backend',
            'service': _infer_service(record.name),
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_data.update(record.extra_fields)

        # Custom fields passed via extra={}
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable colored formatter for console output.
    Used during development for easy reading.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m',
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors for console"""
        level_color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        colored_level = f"{level_color}{record.levelname:8s}{self.COLORS['RESET']}"

        timestamp = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S')
        message = record.getMessage()

        extra_parts = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        ]
        if extra_parts:
            message += f" | {' '.join(extra_parts)}"

        # Format: [2024-11-16 10:30:45] INFO     [employee_controller] Employee created
        log_line = f"[{timestamp}] {colored_level} [{record.name}] {message}"

        if record.exc_info:
            log_line += '\n' + self.formatException(record.exc_info)

        return log_line


class LoggerService:
    """
    Centralized logger service singleton.
    Manages all logging configuration and provides logger instances.
    """

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(LoggerService, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._initialize_logging()
            LoggerService._initialized = True

    def _initialize_logging(self):
        """Set up logging configuration"""
        log_level_str = os.getenv('LOG_LEVEL', 'INFO').upper()
        log_level = getattr(logging, log_level_str, logging.INFO)

        environment = os.getenv('ENVIRONMENT', 'development').lower()
        log_to_file = os.getenv('LOG_TO_FILE', 'true').lower() == 'true'

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        root_logger.handlers.clear()

        log_dir = None
        if log_to_file:
            default_dir = Path(__file__).resolve().parents[3] / 'logs'
            log_dir = Path(os.getenv('LOG_DIR') or default_dir)
            log_dir.mkdir(parents=True, exist_ok=True)

            # 1. JSON File Handler (for production, log aggregation)
            json_handler = RotatingFileHandler(
                log_dir / 'employee_api.json.log',
                maxBytes=50 * 1024 * 1024,  # 50MB per file
                backupCount=10,
                encoding='utf-8'
            )
            json_handler.setLevel(log_level)
            json_handler.setFormatter(JSONFormatter())
            root_logger.addHandler(json_handler)

            # 2. Human-readable File Handler (for manual review)
            text_handler = RotatingFileHandler(
                log_dir / 'employee_api.log',
                maxBytes=50 * 1024 * 1024,
                backupCount=10,
                encoding='utf-8'
            )
            text_handler.setLevel(log_level)
            text_handler.setFormatter(logging.Formatter(
                '%(asctime)s [%(levelname)s] [%(name)s] %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            root_logger.addHandler(text_handler)

        # 3. Console Handler (for development)
        if environment == 'development':
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(log_level)
            console_handler.setFormatter(ConsoleFormatter())
            root_logger.addHandler(console_handler)

        # Suppress Flask werkzeug development server warnings
        logging.getLogger('werkzeug').setLevel(logging.ERROR)

        init_logger = logging.getLogger(__name__)
        init_logger.info(
            "Logging initialized",
            extra={
                'environment': environment,
                'log_level': log_level_str,
                'log_dir': str(log_dir) if log_dir else None,
            }
        )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured logger instance

    Example:
        logger = get_logger(__name__)
        logger.info("Processing started", extra={"employee_id": "abc123"})
    """
    LoggerService()
    return logging.getLogger(name)


def log_request(logger: logging.Logger, method: str, path: str,
                user_id: Optional[str] = None, **kwargs):
    """
    Helper to log HTTP requests with consistent format.

    Args:
        logger: Logger instance
        method: HTTP method (GET, POST, etc.)
        path: Request path
        user_id: Optional caller subject
        **kwargs: Additional context
    """
    logger.info(
        f"{method} {path}",
        extra={
            'request_method': method,
            'request_path': path,
            'user_id': user_id,
            **kwargs
        }
    )


def log_employee_operation(logger: logging.Logger, operation: str,
                           employee_id: str, actor_id: Optional[str] = None, **kwargs):
    """
    Helper to log employee operations with consistent format.

    Args:
        logger: Logger instance
        operation: Operation type (CREATE, UPDATE, DELETE, LOGIN)
        employee_id: Employee ID
        actor_id: Optional subject of the caller performing the operation
        **kwargs: Additional context
    """
    logger.info(
        f"Employee {operation}",
        extra={
            'operation': operation,
            'employee_id': employee_id,
            'actor_id': actor_id,
            'resource_type': 'employee',
            **kwargs
        }
    )


def log_error(logger: logging.Logger, error: BaseException, context: Optional[Dict[str, Any]] = None):
    """
    Helper to log errors with full context and traceback.

    Args:
        logger: Logger instance
        error: Exception object
        context: Optional context dictionary
    """
    logger.error(
        f"Error: {str(error)}",
        extra={
            'error_type': type(error).__name__,
            'error_message': str(error),
            **(context or {})
        },
        exc_info=(type(error), error, error.__traceback__)
    )
