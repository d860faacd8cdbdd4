from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from loguru import logger

P = ParamSpec("P")
R = TypeVar("R")


def log_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Log and re-raise any exception raised by the decorated call.

    Used on the I/O edge only; the pricing functions never raise.

    Usage::

        @log_errors
        def select(self, table: str, params: dict[str, str]) -> list[dict]: ...
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except Exception as exc:
            logger.error(f"[{func.__qualname__}] {type(exc).__name__}: {exc}")
            raise

    return wrapper
