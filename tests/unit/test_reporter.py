"""Tests for the pytest-backed reporter."""

import pytest
from loguru import logger

from webtester.automation.reporter import PytestReporter


class TestPytestReporter:
    """Tests for PytestReporter."""

    def test_fatal_fails_the_test(self):
        """Test fatal raises pytest's failure outcome."""
        reporter = PytestReporter("tests/test_x.py::test_y")

        with pytest.raises(pytest.fail.Exception, match="not found: Go"):
            reporter.fatal("not found: Go")

    def test_log_does_not_abort(self):
        """Test log writes a diagnostic through Loguru."""
        messages = []
        handler_id = logger.add(messages.append, format="{message}")
        try:
            PytestReporter().log("stale element reference")
        finally:
            logger.remove(handler_id)

        assert any("stale element reference" in m for m in messages)

    def test_mark_helper_leaves_caller_module_alone(self):
        """Test marking a helper does not alter the caller's module globals."""
        namespace = {"reporter": PytestReporter()}
        exec("def helper():\n    reporter.mark_helper()\n", namespace)

        namespace["helper"]()

        assert "__tracebackhide__" not in namespace
