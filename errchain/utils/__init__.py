"""
Utility modules for error chains.
"""

from errchain.utils.logging import (
    JSONFormatter,
    ContextLoggerAdapter,
    get_logger,
    setup_logging,
    log_error_chain,
)

__all__ = [
    "JSONFormatter",
    "ContextLoggerAdapter",
    "get_logger",
    "setup_logging",
    "log_error_chain",
]
