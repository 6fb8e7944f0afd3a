"""Unit tests for logging setup and the stdlib logger adapter."""

import logging

import pytest

from cleanblog.infrastructure.log_adapter import StdlibLogger
from cleanblog.utils.logger import ROOT_LOGGER_NAME, AuditRecordFilter, get_logger, setup_logging


class ListHandler(logging.Handler):
    """Collect emitted records."""
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    """Attach an in-memory handler to a dedicated stdlib logger."""
    std = logging.getLogger("cleanblog.tests.adapter")
    handler = ListHandler()
    std.addHandler(handler)
    std.setLevel(logging.DEBUG)
    yield std, handler
    std.removeHandler(handler)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    root.propagate = propagate


@pytest.mark.unit
class TestStdlibLogger:
    """Test StdlibLogger."""

    def test_renders_fields(self, captured):
        """Test fields are rendered."""
        std, handler = captured
        StdlibLogger(std).info("article created", article_id=3)

        record = handler.records[-1]
        assert record.levelno == logging.INFO
        assert record.getMessage() == "article created article_id=3"
        assert record.fields == {"article_id": 3}

    def test_bind_carries_fields_without_mutating_parent(self, captured):
        """Test bind adds fields without changing the parent."""
        std, handler = captured
        parent = StdlibLogger(std)
        child = parent.bind(component="ArticleUseCase")

        child.warning("validation failed", error="title is required")
        parent.error("plain")

        assert handler.records[0].fields == {"component": "ArticleUseCase", "error": "title is required"}
        assert handler.records[0].getMessage().startswith("validation failed component=ArticleUseCase")
        assert handler.records[1].getMessage() == "plain"
        assert parent.fields == {}

    def test_explicit_level(self, captured):
        """Test logging at an explicit level."""
        std, handler = captured
        StdlibLogger(std).log(logging.WARNING, "careful")

        assert handler.records[-1].levelno == logging.WARNING

    def test_disabled_level_is_skipped(self, captured):
        """Test disabled levels are skipped."""
        std, handler = captured
        std.setLevel(logging.ERROR)

        StdlibLogger(std).info("ignored")

        assert handler.records == []


@pytest.mark.unit
class TestSetupLogging:
    """Test setup_logging."""

    def test_file_handlers(self, tmp_path, restore_root_logger):
        """Test the file handlers."""
        log_file = tmp_path / "logs" / "app.log"
        audit_file = tmp_path / "logs" / "audit.log"

        root = setup_logging("DEBUG", log_file=str(log_file), audit_file=str(audit_file))
        log = get_logger(f"{ROOT_LOGGER_NAME}.test")
        log.info("regular record")
        log.bind(log_type="audit").info("Audit event recorded", action="user.logged_in")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert root.propagate is False
        assert "regular record" in log_file.read_text()
        audit_text = audit_file.read_text()
        assert "action=user.logged_in" in audit_text
        assert "regular record" not in audit_text

    def test_reconfigure_replaces_handlers(self, restore_root_logger):
        """Test reconfiguring replaces handlers."""
        setup_logging("INFO")
        root = setup_logging("WARNING")

        assert len(root.handlers) == 1
        assert root.level == logging.WARNING

    def test_unknown_level_defaults_to_info(self, restore_root_logger):
        """Test an unknown level."""
        assert setup_logging("chatty").level == logging.INFO

    def test_audit_filter(self):
        """Test the audit file only gets audit records."""
        audit_filter = AuditRecordFilter()
        plain = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        audit = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        audit.fields = {"log_type": "audit"}

        assert not audit_filter.filter(plain)
        assert audit_filter.filter(audit)
