"""Audit Logger - records which spans were anonymized, never their values.

The audit log can be redirected to a different file per run (or per input
file in batch use). Module-level diagnostics (fail-open warnings and the
like) go through ``logging.getLogger(__name__)`` in each module and are
configured with :func:`configure_logging`.
"""

import logging
from pathlib import Path

AUDIT_FORMAT = "%(asctime)s %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


class AnonymizationLogger:
    """
    Audit logger for anonymization runs.

    Usage:
        logger = AnonymizationLogger()
        logger.setup_file_handler(Path("logs/audit.log"))
        logger.log("[PHONE_NUMBER] pos: 10-25")
    """

    def __init__(self, name: str = "anonymization.audit"):
        """Initialize logger with a unique name.

        Args:
            name: Logger name (default: "anonymization.audit")
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False
        # Prevent duplicate handlers if logger already exists
        if not self._logger.handlers:
            self._logger.addHandler(logging.NullHandler())

    @property
    def logger(self) -> logging.Logger:
        """Get the underlying logger instance."""
        return self._logger

    def setup_file_handler(self, log_file_path: Path) -> None:
        """
        Write the audit log to ``log_file_path``.

        Replaces any previous file handler, so the log can be switched
        between runs.

        Args:
            log_file_path: Path to the log file (parent directories are created)
        """
        for handler in self._logger.handlers[:]:
            if not isinstance(handler, logging.NullHandler):
                handler.close()
                self._logger.removeHandler(handler)

        log_file_path = Path(log_file_path)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(AUDIT_FORMAT))
        self._logger.addHandler(file_handler)

    def log(self, message: str) -> None:
        self._logger.info(message)

    def info(self, message: str) -> None:
        """Alias for log() - log an info message."""
        self.log(message)

    def close(self) -> None:
        """Close all handlers. Useful for cleanup in tests."""
        for handler in self._logger.handlers[:]:
            handler.close()
            self._logger.removeHandler(handler)


def configure_logging(level: str | int = "WARNING") -> None:
    """Send module diagnostics to stderr at ``level``."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=CONSOLE_FORMAT)
