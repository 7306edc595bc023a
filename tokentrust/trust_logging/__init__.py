"""
Structured logging for TokenTrust.

JSON logs with timestamp, event_type and token context. Use get_logger() in
all modules.
"""

from tokentrust.trust_logging.logger import bind_token, configure_structlog, get_logger

__all__ = ["bind_token", "configure_structlog", "get_logger"]
