"""Logging utilities for anonymization.

Provides the audit logger and the console logging setup.
"""

from .audit_logger import AnonymizationLogger, configure_logging

__all__ = ["AnonymizationLogger", "configure_logging"]
