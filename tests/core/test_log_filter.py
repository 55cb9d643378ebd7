"""Tests for sensitive data redaction in logs."""

import logging

import pytest

from app.core.log_filter import SensitiveDataFilter


class TestSensitiveDataFilter:
    """Test suite for SensitiveDataFilter."""

    @pytest.fixture
    def log_filter(self):
        """Create a SensitiveDataFilter instance."""
        return SensitiveDataFilter()

    @pytest.fixture
    def log_record(self):
        """Create a basic log record for testing."""
        return logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname="test.py",
            lineno=1,
            msg="",
            args=(),
            exc_info=None,
        )

    def test_redact_environment_variable(self, log_filter, log_record):
        """Test redaction of the service API key assignment."""
        log_record.msg = "Loading config: API_KEY=my-service-key"
        log_filter.filter(log_record)
        assert "my-service-key" not in log_record.msg
        assert "API_KEY=***REDACTED***" in log_record.msg

    def test_redact_api_key_with_colon(self, log_filter, log_record):
        """Test redaction of a long API key with colon."""
        log_record.msg = "Config: apikey: abcdef1234567890abcdef12"
        log_filter.filter(log_record)
        assert "abcdef1234567890abcdef12" not in log_record.msg
        assert "***REDACTED***" in log_record.msg

    def test_redact_x_api_key_header(self, log_filter, log_record):
        """Test redaction of X-API-Key header."""
        log_record.msg = "Headers: X-API-Key: test_secret_key_12345"
        log_filter.filter(log_record)
        assert "test_secret_key_12345" not in log_record.msg
        assert "X-API-Key: ***REDACTED***" in log_record.msg

    def test_redact_authorization_header(self, log_filter, log_record):
        """Test redaction of Authorization header."""
        log_record.msg = "Request headers: Authorization: Bearer abc123xyz789"
        log_filter.filter(log_record)
        assert "abc123xyz789" not in log_record.msg
        assert "Authorization: ***REDACTED***" in log_record.msg

    def test_redact_bearer_token(self, log_filter, log_record):
        """Test redaction of Bearer token."""
        log_record.msg = "Auth: Bearer eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
        log_filter.filter(log_record)
        assert "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9" not in log_record.msg
        assert "Bearer ***REDACTED***" in log_record.msg

    def test_redact_generic_secret(self, log_filter, log_record):
        """Test redaction of generic long secret strings."""
        log_record.msg = "Database password: abc123def456ghi789jkl012mno345pqr678"
        log_filter.filter(log_record)
        assert "abc123def456ghi789jkl012mno345pqr678" not in log_record.msg
        assert "***REDACTED***" in log_record.msg

    def test_redact_log_args_tuple(self, log_filter, log_record):
        """Test redaction of log record args (tuple)."""
        log_record.msg = "Starting with %s on port %d"
        log_record.args = ("API_KEY=my-service-key", 8000)
        log_filter.filter(log_record)
        assert log_record.args[0] == "API_KEY=***REDACTED***"
        assert log_record.args[1] == 8000

    def test_redact_log_args_dict(self, log_filter, log_record):
        """Test redaction of log record args (dict)."""
        log_record.msg = "Config: %(header)s"
        log_record.args = {"header": "X-API-Key: test_secret_key_12345"}
        log_filter.filter(log_record)
        assert "test_secret_key_12345" not in log_record.args["header"]

    def test_redact_exception_text(self, log_filter, log_record):
        """Test redaction of exception text."""
        log_record.exc_text = "ValueError: Invalid API_KEY=sk_test_abc123"
        log_filter.filter(log_record)
        assert "sk_test_abc123" not in log_record.exc_text
        assert "API_KEY=***REDACTED***" in log_record.exc_text

    def test_preserve_subtitle_logs(self, log_filter, log_record):
        """Test that ordinary processing messages are not redacted."""
        log_record.msg = "Loaded movie.srt as windows-1256: 412 entries, 7 issues"
        original_msg = log_record.msg
        log_filter.filter(log_record)
        assert log_record.msg == original_msg

    def test_filter_always_returns_true(self, log_filter, log_record):
        """Test that filter always returns True (passes record)."""
        log_record.msg = "Test message with api_key=secret123"
        assert log_filter.filter(log_record) is True

    def test_case_insensitive_patterns(self, log_filter, log_record):
        """Test that patterns are case-insensitive."""
        for test_msg in [
            "API_KEY=secret123",
            "api_key=secret123",
            "authorization: Bearer token123",
            "x-api-key: secret123",
        ]:
            log_record.msg = test_msg
            log_filter.filter(log_record)
            assert "***REDACTED***" in log_record.msg
