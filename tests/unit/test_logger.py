"""
Unit tests for logger module.
"""

from unittest.mock import MagicMock, patch

from structlog.testing import capture_logs

from pathway_advisor.utils.logger import MASK, configure_logging, get_logger, mask_credentials


class TestMaskCredentials:
    """Test cases for mask_credentials processor."""

    def test_masks_api_key_field(self):
        """Test that api_key fields are masked."""
        # Arrange
        logger = MagicMock()
        event_dict = {"event": "Client created", "api_key": "AIzaSy-test"}

        # Act
        result = mask_credentials(logger, "info", event_dict)

        # Assert
        assert result["api_key"] == "***MASKED***"

    def test_masks_prefixed_api_key_field(self):
        """Test that provider-prefixed keys are masked."""
        logger = MagicMock()
        event_dict = {"event": "Settings loaded", "gemini_api_key": "AIzaSy-test"}

        result = mask_credentials(logger, "info", event_dict)

        assert result["gemini_api_key"] == "***MASKED***"

    def test_masks_token_field(self):
        """Test that token fields are masked."""
        logger = MagicMock()
        event_dict = {"event": "Auth request", "access_token": "ya29.a0"}

        result = mask_credentials(logger, "info", event_dict)

        assert result["access_token"] == "***MASKED***"

    def test_does_not_mask_non_sensitive_fields(self):
        """Test that fields merely containing a sensitive word are kept."""
        # Arrange
        logger = MagicMock()
        event_dict = {
            "event": "Resume parsed",
            "tokenizer": "default",
            "prompt_length": 1200,
            "model": "gemini-2.5-flash",
        }

        # Act
        result = mask_credentials(logger, "info", event_dict)

        # Assert
        assert result["tokenizer"] == "default"
        assert result["prompt_length"] == 1200
        assert result["model"] == "gemini-2.5-flash"


class TestConfigureLogging:
    """Test cases for configure_logging function."""

    @patch("pathway_advisor.utils.logger.Path")
    @patch("pathway_advisor.utils.logger.logging")
    @patch("pathway_advisor.utils.logger.structlog")
    def test_creates_logs_directory(self, mock_structlog, mock_logging, mock_path):
        """Test that configure_logging creates logs directory."""
        # Arrange
        mock_log_path = MagicMock()
        mock_path.return_value = mock_log_path

        # Act
        configure_logging(log_file="logs/test.log")

        # Assert
        mock_log_path.parent.mkdir.assert_called_once_with(exist_ok=True)

    @patch("pathway_advisor.utils.logger.Path")
    @patch("pathway_advisor.utils.logger.logging")
    @patch("pathway_advisor.utils.logger.structlog")
    def test_stdout_only_when_no_log_file(self, mock_structlog, mock_logging, mock_path):
        """Test that no file handler is created without a log file."""
        # Act
        configure_logging(log_file=None)

        # Assert
        mock_path.assert_not_called()
        mock_logging.FileHandler.assert_not_called()
        handlers = mock_logging.basicConfig.call_args.kwargs["handlers"]
        assert len(handlers) == 1

    @patch("pathway_advisor.utils.logger.Path")
    @patch("pathway_advisor.utils.logger.logging")
    @patch("pathway_advisor.utils.logger.structlog")
    def test_configures_structlog_processors(
        self, mock_structlog, mock_logging, mock_path
    ):
        """Test that configure_logging installs the masking processor."""
        # Act
        configure_logging()

        # Assert
        mock_structlog.configure.assert_called_once()
        processors = mock_structlog.configure.call_args.kwargs["processors"]
        assert mask_credentials in processors


class TestGetLogger:
    """Test cases for get_logger function."""

    def test_binds_all_context_parameters(self):
        """Test that correlation_id, phase and component reach each event."""
        # Arrange
        logger = get_logger(
            correlation_id="test-id", phase="resume_ingestion", component="resume_ingestor"
        )

        # Act
        with capture_logs() as logs:
            logger.info("Resume parsed", fields_extracted=3)

        # Assert
        assert logs[0]["event"] == "Resume parsed"
        assert logs[0]["correlation_id"] == "test-id"
        assert logs[0]["phase"] == "resume_ingestion"
        assert logs[0]["component"] == "resume_ingestor"

    def test_generates_correlation_id_if_not_provided(self):
        """Test that get_logger generates a UUID correlation_id."""
        logger = get_logger(phase="profile_analysis")

        with capture_logs() as logs:
            logger.info("Requesting profile assessment")

        assert len(logs[0]["correlation_id"]) == 36
        assert "component" not in logs[0]


class TestSensitiveKeyMatching:
    """Test cases for the segment-based sensitive key match."""

    def test_masks_uppercase_environment_name(self):
        result = mask_credentials(MagicMock(), "info", {"GEMINI_API_KEY": "AIzaSy-test"})

        assert result["GEMINI_API_KEY"] == MASK

    def test_masks_hyphenated_segment(self):
        result = mask_credentials(MagicMock(), "info", {"x-auth-header": "Bearer abc"})

        assert result["x-auth-header"] == MASK

    def test_keeps_keys_that_only_contain_a_sensitive_word(self):
        event_dict = {"author": "Ana", "tokens_used": 12, "secretary": "Bo"}

        result = mask_credentials(MagicMock(), "info", dict(event_dict))

        assert result == event_dict
