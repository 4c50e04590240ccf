"""Error chains that record where and when each layer of context was added."""

from errchain.chain import ErrorChain, cause, new, wrap
from errchain.config import Settings, settings
from errchain.models import ZERO_TIME, ErrorEntry, Header
from errchain.utils import get_logger, log_error_chain, setup_logging

__version__ = "0.1.0"

__all__ = [
    "ErrorChain",
    "ErrorEntry",
    "Header",
    "ZERO_TIME",
    "new",
    "wrap",
    "cause",
    "Settings",
    "settings",
    "get_logger",
    "setup_logging",
    "log_error_chain",
]
