"""
Error types and error handling helpers for the BGG Expansions package.
"""

import logging
from typing import Any, Callable, Optional, Tuple, Type

logger = logging.getLogger(__name__)


class BGGExpansionsError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(BGGExpansionsError, ValueError):
    """Bad batch size or malformed configuration."""


class UpstreamUnavailable(BGGExpansionsError):
    """
    The catalog never produced a usable response.

    Raised when the retry budget is exhausted while BGG keeps reporting that the
    request is still being processed, or when the transport itself fails.
    """

    def __init__(self, path: str, attempts: int, reason: Optional[str] = None):
        self.path = path
        self.attempts = attempts
        self.reason = reason
        message = f"BGG request '{path}' failed after {attempts} attempt(s)"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MalformedResponse(BGGExpansionsError):
    """The response body does not have the expected XML structure."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{message} (request '{path}')"
        super().__init__(message)


class NotificationFailed(BGGExpansionsError):
    """A notifier could not deliver the reconciliation report."""


def safe_execute(func: Callable, *args, default_return: Any = None,
                 error_msg: Optional[str] = None,
                 catch: Tuple[Type[BaseException], ...] = (NotificationFailed,),
                 **kwargs) -> Any:
    """
    Execute a function, logging and suppressing only the given error types.

    Anything not listed in ``catch`` propagates to the caller.

    Args:
        func: Function to execute
        *args: Arguments for the function
        default_return: Value to return when a listed error is caught
        error_msg: Custom error message prefix
        catch: Exception types to log and suppress
        **kwargs: Keyword arguments for the function

    Returns:
        Function result or default_return on a caught error
    """
    try:
        return func(*args, **kwargs)
    except catch as e:
        name = getattr(func, "__qualname__", getattr(func, "__name__", repr(func)))
        if error_msg:
            logger.error(f"{error_msg}: {e}")
        else:
            logger.error(f"Error in {name}: {e}")
        return default_return
