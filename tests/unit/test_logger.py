"""Unit tests for the audit logger."""

import logging

from anonymization_logging import AnonymizationLogger, configure_logging


class TestAnonymizationLogger:
    """AnonymizationLogger."""

    def test_silent_without_file(self, audit_logger):
        """Without a file handler nothing propagates to the root logger."""
        assert audit_logger.logger.propagate is False
        audit_logger.log("nothing to see")

    def test_writes_to_file(self, audit_logger, tmp_path):
        """Messages land in the configured file."""
        log_path = tmp_path / "logs" / "audit.log"
        audit_logger.setup_file_handler(log_path)
        audit_logger.log("[PHONE_NUMBER] (score: 0.70, pos: 8-23)")
        audit_logger.info("Total: 1 entities anonymized")
        audit_logger.close()

        content = log_path.read_text(encoding="utf-8")
        assert "[PHONE_NUMBER] (score: 0.70, pos: 8-23)" in content
        assert "Total: 1 entities anonymized" in content

    def test_switch_files(self, audit_logger, tmp_path):
        """A new file handler replaces the previous one."""
        first = tmp_path / "first.log"
        second = tmp_path / "second.log"
        audit_logger.setup_file_handler(first)
        audit_logger.log("one")
        audit_logger.setup_file_handler(second)
        audit_logger.log("two")
        audit_logger.close()

        assert "two" not in first.read_text(encoding="utf-8")
        assert "two" in second.read_text(encoding="utf-8")

    def test_close_removes_handlers(self, tmp_path):
        """close() leaves no handlers behind."""
        logger = AnonymizationLogger("anonymization.audit.test_close")
        logger.setup_file_handler(tmp_path / "audit.log")
        logger.close()
        assert logger.logger.handlers == []


def test_configure_logging_accepts_unknown_level():
    """Unknown level names fall back to WARNING without raising."""
    configure_logging("not-a-level")
    configure_logging(logging.INFO)
