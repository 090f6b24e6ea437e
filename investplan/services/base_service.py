"""
Service base class and result container.

Services own their session's transaction boundaries and commit or roll
back on the session directly.
"""

import functools
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession


@dataclass
class ServiceResult:
    """
    Outcome of a service call.

    error_code is machine-readable; data carries the payload on success
    and structured details on failure.
    """
    success: bool
    data: Any = None
    error: str | None = None
    error_code: str | None = None


class BaseService:
    """Holds the session and a logger bound to the concrete service name."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.logger = logger.bind(service=type(self).__name__)


def log_operation(
    method: Callable[..., Awaitable[Any]],
) -> Callable[..., Awaitable[Any]]:
    """
    Wrap an async service method with timing logs.

    The outcome is logged at info level with its duration and the
    ServiceResult success flag. Exceptions are logged with traceback and
    re-raised unchanged.
    """
    name = method.__name__

    @functools.wraps(method)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> Any:
        self.logger.debug(f"{name} started", extra={"operation": name})
        started = time.perf_counter()
        try:
            result = await method(self, *args, **kwargs)
        except Exception as e:
            self.logger.error(
                f"{name} raised",
                extra={
                    "operation": name,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000),
                    "error": str(e),
                },
                exc_info=True,
            )
            raise

        self.logger.info(
            f"{name} finished",
            extra={
                "operation": name,
                "elapsed_ms": round((time.perf_counter() - started) * 1000),
                "success": getattr(result, "success", True),
            },
        )
        return result

    return wrapper
