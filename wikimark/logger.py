"""
Structured logging for wikimark.

Provides centralized logging with console and file outputs,
plus counters for monitoring how queries resolve.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for monitoring resolver behaviour.
    """

    def __init__(
        self,
        name: str = "wikimark",
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
        self.logger.handlers.clear()

        self.metrics = {
            "queries_attempted": 0,
            "queries_successful": 0,
            "queries_failed": 0,
            "entities_found": 0,
            "not_found": 0,
            "redirects_scheduled": 0,
            "redirects_suppressed": 0,
            "errors_by_type": {},
            "classification_success_rate": {},
        }

        if enable_console:
            # stderr keeps CLI stdout clean for query/permalink output
            console_handler = logging.StreamHandler(sys.stderr)
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

            log_file = log_dir / f"wikimark_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
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
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_query_attempt(self, classification: str):
        """Record a query sent for a classification (lookup or search)."""
        self.metrics["queries_attempted"] += 1
        rates = self.metrics["classification_success_rate"]
        if classification not in rates:
            rates[classification] = {"attempts": 0, "successes": 0}
        rates[classification]["attempts"] += 1

    def record_query_success(self, classification: str, entity_count: int):
        """Record a query that returned a usable payload."""
        self.metrics["queries_successful"] += 1
        self.metrics["entities_found"] += entity_count
        if entity_count == 0:
            self.metrics["not_found"] += 1
        rates = self.metrics["classification_success_rate"]
        if classification in rates:
            rates[classification]["successes"] += 1

    def record_query_failure(self, classification: str, error_type: str):
        """Record a query that failed terminally."""
        self.metrics["queries_failed"] += 1
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def record_redirect(self, suppressed: bool = False):
        if suppressed:
            self.metrics["redirects_suppressed"] += 1
        else:
            self.metrics["redirects_scheduled"] += 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = self.metrics.copy()
        for classification, stats in metrics_copy["classification_success_rate"].items():
            if stats["attempts"] > 0:
                stats["success_rate"] = round(
                    stats["successes"] / stats["attempts"], 3
                )

        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        total_attempts = metrics["queries_attempted"]
        total_successes = metrics["queries_successful"]
        overall_rate = 0
        if total_attempts > 0:
            overall_rate = round(total_successes / total_attempts * 100, 1)

        self.info("=== Resolver Session Metrics ===")
        self.info(f"Queries: {total_successes}/{total_attempts} ({overall_rate}% success)")
        self.info(f"Entities found: {metrics['entities_found']} (not found: {metrics['not_found']})")
        self.info(
            f"Redirects: {metrics['redirects_scheduled']} scheduled, "
            f"{metrics['redirects_suppressed']} suppressed"
        )

        if metrics["classification_success_rate"]:
            self.info("Success by classification:")
            for classification, stats in metrics["classification_success_rate"].items():
                rate = stats.get("success_rate", 0) * 100
                self.info(f"  {classification}: {stats['successes']}/{stats['attempts']} ({rate:.1f}%)")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "wikimark",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
