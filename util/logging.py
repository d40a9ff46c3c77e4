"""
Structured logging for word vector loads, buffer refills, queries and timers.
"""

import logging
from typing import Any, Dict

from w2vsearch.core.config import get_log_level


class StructuredLogger:
    """Structured logger for loader and search operations."""

    def __init__(self, name: str = "w2vsearch"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, get_log_level(), logging.INFO))

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_load_started(self, path: str, vocab_size: int, dimension: int, buffer_size: int):
        """Log the start of a word2vec load once the header is known."""
        self.log_operation("loader.load", "started", {
            "path": path,
            "vocab_size": vocab_size,
            "dimension": dimension,
            "buffer_size": buffer_size
        })

    def log_load_completed(self, report: Dict[str, Any]):
        """Log a finished load, including how many duplicates were overwritten."""
        self.log_operation("loader.load", "success", report)

    def log_load_failed(self, path: str, error: Exception):
        """Log a failed load."""
        self.log_operation("loader.load", "failed", {
            "path": path,
            "error_type": type(error).__name__,
            "error": str(error)[:200]
        }, level=logging.ERROR)

    def log_buffer_refill(self, file_offset: int, carried: int, bytes_read: int):
        """Log a buffer refill (debug level; refills can be frequent)."""
        self.log_operation("loader.refill", "success", {
            "file_offset": file_offset,
            "carried_bytes": carried,
            "bytes_read": bytes_read
        }, level=logging.DEBUG)

    def log_query(self, query_type: str, words, k: int, hits: int, status: str = "success"):
        """Log a similarity query."""
        details = {"words": list(words), "k": k, "hits": hits}
        self.log_operation(f"search.{query_type}", status, details, level=logging.DEBUG)

    def log_timer(self, label: str, elapsed_ms: float, formatted: str):
        """Log a stopped timer."""
        self.log_operation(f"timer.{label}", "stopped", {
            "elapsed_ms": round(elapsed_ms, 2),
            "message": f"Timer {label}: {formatted}"
        })

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()
