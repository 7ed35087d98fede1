"""
Structured Logger Module

Configures structlog for JSON-formatted structured logging with correlation IDs.

Example Usage:
    from pathway_advisor.utils.logger import configure_logging, get_logger

    configure_logging(log_level="DEBUG")

    logger = get_logger(
        correlation_id="a1b2c3d4-e5f6-7890-abcd-ef1234567890",
        phase="profile_analysis",
        component="profile_analyzer",
    )

    logger.info("Requesting assessment", user_type="Student")
    logger.error("Gemini call failed", error="503 UNAVAILABLE")

Log Levels:
    - DEBUG: Prompt lengths, response lengths, template rendering
    - INFO: Requests issued, results mapped
    - WARNING: Empty extractions, fallbacks taken
    - ERROR: Missing credential, failed model calls, unreadable uploads
"""

import logging
import re
import sys
import uuid
from pathlib import Path
from typing import Optional

import structlog
from structlog.types import BindableLogger, EventDict, WrappedLogger

# Event keys whose values never reach the log output
SENSITIVE_FIELDS = ("api_key", "password", "token", "secret", "credential", "auth")
MASK = "***MASKED***"

_SENSITIVE_KEY = re.compile(
    r"(?:^|[_-])(?:" + "|".join(SENSITIVE_FIELDS) + r")(?:$|[_-])", re.IGNORECASE
)


def mask_credentials(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    structlog processor replacing sensitive values with MASK.

    A key is sensitive when an entry of SENSITIVE_FIELDS forms a whole
    "_" or "-" separated segment of it, case-insensitively: "api_key",
    "GEMINI_API_KEY" and "access_token" are masked, "tokenizer" is not.
    """
    return {
        key: MASK if _SENSITIVE_KEY.search(key) else value
        for key, value in event_dict.items()
    }


def configure_logging(
    log_file: Optional[str] = "logs/pathway-advisor.log", log_level: str = "INFO"
) -> None:
    """
    Configure structlog with JSON output and optional file logging.

    Args:
        log_file: Path to log file, or None to log to stdout only
        log_level: Logging level (default: "INFO")

    Log Format (JSON):
        {
            "timestamp": "2025-03-06T10:30:45Z",
            "level": "info",
            "correlation_id": "a1b2c3d4-...",
            "phase": "resume_ingestion",
            "component": "resume_ingestor",
            "event": "Resume parsed",
            "fields_extracted": 5
        }
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(exist_ok=True)
        handlers.insert(0, logging.FileHandler(log_file))

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            mask_credentials,  # Mask sensitive data
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    correlation_id: Optional[str] = None,
    phase: Optional[str] = None,
    component: Optional[str] = None,
) -> BindableLogger:
    """
    Get structured logger with bound context.

    Args:
        correlation_id: Correlation ID for request tracing (generates UUID if not provided)
        phase: Operation phase (e.g., "resume_ingestion", "profile_analysis")
        component: Component name (e.g., "resume_ingestor", "gemini_client")

    Returns:
        BoundLogger with correlation_id, phase, and component bound to context
    """
    context = {
        "correlation_id": correlation_id or str(uuid.uuid4()),
        "phase": phase,
        "component": component,
    }
    return structlog.get_logger().bind(
        **{key: value for key, value in context.items() if value}
    )
