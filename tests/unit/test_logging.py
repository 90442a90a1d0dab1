"""Unit tests for logging_audit module."""

import logging

import pytest

from connect_xmlapi.logging_audit import (
    CredentialRedactingFormatter,
    configure_logging,
    get_logger,
    log_api_call,
    log_audit_event,
    redact_query,
)
from connect_xmlapi.utils.exceptions import TransportError


def _format(message: str, redact: bool = True) -> str:
    formatter = CredentialRedactingFormatter(fmt="%(message)s", redact_credentials=redact)
    record = logging.LogRecord("test", logging.INFO, __file__, 1, message, None, None)
    return formatter.format(record)


class TestRedactQuery:
    """Test masking of query parameters."""

    def test_password_masked(self) -> None:
        assert redact_query("login=jdoe&password=s3cret") == "login=jdoe&password=[REDACTED]"

    def test_all_sensitive_params_masked(self) -> None:
        query = "session=breezabc&user-id=5&password-old=a&password=b&password-verify=b"

        redacted = redact_query(query)

        assert "breezabc" not in redacted
        assert "=a" not in redacted
        assert "=b" not in redacted
        assert "user-id=5" in redacted

    def test_similar_names_untouched(self) -> None:
        assert redact_query("old-password-hint=x&sessions=3") == "old-password-hint=x&sessions=3"


class TestCredentialRedactingFormatter:
    """Test the redacting formatter."""

    def test_session_cookie_masked(self) -> None:
        output = _format("Cookie: BREEZESESSION=breez1234abcd; path=/")

        assert "breez1234abcd" not in output
        assert "BREEZESESSION=[REDACTED]" in output

    def test_cookie_dict_masked(self) -> None:
        output = _format("cookies={'BREEZESESSION': 'breez1234abcd'}")

        assert "breez1234abcd" not in output

    def test_query_in_url_masked(self) -> None:
        output = _format("GET /api/xml?action=login&login=jdoe&password=s3cret HTTP/1.1")

        assert "s3cret" not in output
        assert "login=jdoe" in output

    def test_redaction_can_be_disabled(self) -> None:
        assert _format("password=s3cret", redact=False) == "password=s3cret"


class TestAuditEvents:
    """Test the structured audit lines."""

    def test_success_logged_at_info(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="connect_xmlapi.audit"):
            log_audit_event("LOGIN", {"status": "success", "login": "jdoe"})

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert "AUDIT [LOGIN]" in record.getMessage()
        assert "status=success" in record.getMessage()
        assert "login=jdoe" in record.getMessage()

    def test_failure_logged_at_error(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="connect_xmlapi.audit"):
            log_audit_event("LOGOUT", {"status": "failure", "code": "no-access"})

        assert caplog.records[-1].levelno == logging.ERROR

    def test_details_not_mutated(self) -> None:
        details = {"status": "success"}

        log_audit_event("LOGIN", details)

        assert details == {"status": "success"}

    def test_api_call_redacts_query(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="connect_xmlapi.audit"):
            log_api_call("login", "login=jdoe&password=s3cret", "ok", 0.25)

        message = caplog.records[-1].getMessage()
        assert "AUDIT [API_CALL]" in message
        assert "action=login" in message
        assert "duration=0.25s" in message
        assert "s3cret" not in message

    def test_api_call_failure_includes_error(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="connect_xmlapi.audit"):
            log_api_call("sco-info", "sco-id=1", "notset", 1.0, error=TransportError("boom"))

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert "error_message=TransportError: boom" in record.getMessage()

    def test_api_call_error_message_is_redacted(self, caplog) -> None:
        """Error text quoting the request URL loses its credentials too."""
        error = TransportError("Max retries exceeded with url: /api/xml?action=login&password=s3cret")

        with caplog.at_level(logging.INFO, logger="connect_xmlapi.audit"):
            log_api_call("login", "login=jdoe&password=s3cret", "notset", 1.0, error=error)

        message = caplog.records[-1].getMessage()
        assert "s3cret" not in message
        assert "error_message=TransportError: Max retries" in message


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    """Test logging configuration."""

    def test_creates_log_file(self, tmp_path) -> None:
        # Arrange
        log_file = tmp_path / "logs" / "client.log"

        # Act
        configure_logging(level="INFO", log_file=log_file)
        get_logger(__name__).info("Test message")

        # Assert
        assert log_file.exists()
        assert "Test message" in log_file.read_text(encoding="utf-8")

    def test_file_output_is_redacted(self, tmp_path) -> None:
        log_file = tmp_path / "client.log"

        configure_logging(level="DEBUG", log_file=log_file, redact_credentials=True)
        get_logger(__name__).debug("query=login=jdoe&password=s3cret")

        content = log_file.read_text(encoding="utf-8")
        assert "s3cret" not in content
        assert "password=[REDACTED]" in content

    def test_idempotent(self, tmp_path) -> None:
        log_file = tmp_path / "client.log"

        configure_logging(level="INFO", log_file=log_file)
        configure_logging(level="INFO", log_file=log_file)
        first = len(logging.getLogger().handlers)
        configure_logging(level="WARNING", log_file=log_file)

        assert len(logging.getLogger().handlers) == first

    def test_urllib3_quieted(self, tmp_path) -> None:
        configure_logging(level="DEBUG", log_file=tmp_path / "client.log")

        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_invalid_level(self, tmp_path) -> None:
        with pytest.raises(ValueError) as exc_info:
            configure_logging(level="LOUD", log_file=tmp_path / "client.log")

        assert "Invalid log level" in str(exc_info.value)
