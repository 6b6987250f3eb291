from ._logging import configure_lib_logger, disable_lib_logger
from .retries import AsyncRetries, NoAttemptsLeftError, lookup_retries

__all__ = [
    "configure_lib_logger",
    "disable_lib_logger",
    "AsyncRetries",
    "NoAttemptsLeftError",
    "lookup_retries",
]
