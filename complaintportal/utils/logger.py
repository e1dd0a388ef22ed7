"""Centralized logging configuration for the portal services."""
import logging
import sys
from datetime import datetime
from typing import Optional

from complaintportal import config


class ServiceLogger:
    """Logger with console/file output and an in-memory buffer for /logs."""

    def __init__(self, service_name: str, log_dir=None, level: str = None):
        self.service_name = service_name
        self.logger = logging.getLogger(service_name)
        self.logger.setLevel(logging.DEBUG)

        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Handlers are attached once per logger name; apps may be built several times
        if not self.logger.handlers:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level or config.LOG_LEVEL)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

            log_dir = log_dir or config.LOG_DIR
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_dir / f'{service_name}.log')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        self.log_buffer = []
        self.max_buffer_size = 100

    def _add_to_buffer(self, level: str, message: str, extra: Optional[dict] = None):
        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "service": self.service_name,
            "message": message,
            "extra": extra or {}
        }
        self.log_buffer.append(entry)
        if len(self.log_buffer) > self.max_buffer_size:
            self.log_buffer.pop(0)

    def debug(self, message: str, **kwargs):
        self.logger.debug(message)
        self._add_to_buffer("DEBUG", message, kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(message)
        self._add_to_buffer("INFO", message, kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message)
        self._add_to_buffer("WARNING", message, kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(message)
        self._add_to_buffer("ERROR", message, kwargs)

    def get_recent_logs(self, limit: int = 50):
        """Get recent log entries for the /logs endpoint."""
        if limit <= 0:
            return []
        return self.log_buffer[-limit:]
