"""
Structured logging for the parcel tracker.

Provides centralized logging with console and file outputs,
log levels, and per-operation metrics for the parcel store.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json

from .env import get_log_dir, get_log_level


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks how many store operations ran and how many failed.
    """

    def __init__(
        self,
        name: str = "parceltracker",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers.clear()

        self.metrics = {
            "operations": {},
            "failures": {},
            "errors_by_type": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"parceltracker_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Internal logging method with context."""
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_operation(self, operation: str):
        """Count one store operation."""
        ops = self.metrics["operations"]
        ops[operation] = ops.get(operation, 0) + 1

    def record_failure(self, operation: str, error_type: str):
        """Record a failed store operation."""
        failures = self.metrics["failures"]
        failures[operation] = failures.get(operation, 0) + 1

        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics, with a success rate per operation."""
        metrics_copy = {key: dict(value) for key, value in self.metrics.items()}
        rates = {}
        for operation, count in metrics_copy["operations"].items():
            failed = metrics_copy["failures"].get(operation, 0)
            rates[operation] = round((count - failed) / count, 3)
        metrics_copy["success_rate"] = rates
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        total = sum(metrics["operations"].values())
        failed = sum(metrics["failures"].values())

        self.info("=== Parcel Store Metrics ===")
        self.info(f"Operations: {total - failed}/{total} succeeded")

        for operation, count in sorted(metrics["operations"].items()):
            rate = metrics["success_rate"][operation] * 100
            self.info(f"  {operation}: {count} ({rate:.1f}% success)")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "parceltracker",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (default: PARCEL_LOG_LEVEL or INFO)
        **kwargs: Additional arguments passed to StructuredLogger.
            File logging defaults to on only when PARCEL_LOG_DIR is set.

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        if "log_dir" not in kwargs and "enable_file" not in kwargs:
            log_dir = get_log_dir()
            kwargs["log_dir"] = log_dir
            kwargs["enable_file"] = log_dir is not None
        _global_logger = StructuredLogger(
            name=name, level=level or get_log_level(), **kwargs
        )

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
