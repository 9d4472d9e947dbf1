"""Retry utilities with exponential backoff."""
import asyncio
import inspect
from collections.abc import Awaitable, Callable
from logging import Logger


async def with_retry[T](
    fn: Callable[[], T] | Callable[[], Awaitable[T]],
    *,
    name: str,
    logger: Logger,
    max_retries: int = 3,
    initial_backoff_sec: float = 2.0,
    retryable_exceptions: tuple[type[Exception], ...] = (OSError,),
    run_in_thread: bool = False,
) -> T:
    """Execute a function with retry logic and exponential backoff.

    Args:
        fn: The function to execute. Can be sync or async.
        name: Name for logging purposes.
        logger: Logger instance to use.
        max_retries: Maximum number of attempts (at least one is made).
        initial_backoff_sec: Initial backoff delay in seconds (doubles each retry).
        retryable_exceptions: Exception types that trigger a retry.
        run_in_thread: If True, run sync fn in a thread pool.

    Returns:
        The value returned by fn.

    Raises:
        The last retryable exception once all attempts are used, or any
        non-retryable exception immediately.
    """
    attempts = max(1, max_retries)

    for attempt in range(attempts):
        try:
            if run_in_thread:
                return await asyncio.to_thread(fn)  # type: ignore[arg-type]
            if inspect.iscoroutinefunction(fn):
                return await fn()
            return fn()  # type: ignore[return-value]
        except retryable_exceptions as e:
            if attempt + 1 >= attempts:
                logger.error(
                    "%s failed after %d attempts. Last error: %s",
                    name,
                    attempts,
                    e,
                )
                raise
            backoff = initial_backoff_sec * (2**attempt)
            logger.warning(
                "%s attempt %d/%d failed: %s. Retrying in %.1fs...",
                name,
                attempt + 1,
                attempts,
                e,
                backoff,
            )
            await asyncio.sleep(backoff)

    raise AssertionError("unreachable")
