"""Bounded retry with a fixed delay."""

import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class RetryExhausted(Exception):
    """Every attempt failed."""

    def __init__(self, attempts: int, last_error: BaseException):
        super().__init__(f"Gave up after {attempts} attempt(s): {last_error}")
        self.attempts = attempts
        self.last_error = last_error


@dataclass
class RetryResult(Generic[T]):
    """Value returned by the successful attempt."""

    value: T
    attempts: int


def retry(
    func: Callable[[], T],
    attempts: int = 3,
    delay: float = 2,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
    on_failure: Callable[[int, BaseException], None] | None = None,
) -> RetryResult[T]:
    """
    Call func until it succeeds or attempts run out.

    Args:
        func: Zero-argument callable to attempt
        attempts: Maximum number of calls (at least 1)
        delay: Seconds to wait between attempts, not after the last one
        retry_on: Exception types that trigger another attempt
        sleep: Sleep function (for testing)
        on_failure: Called with (attempt number, error) after each failure

    Returns:
        RetryResult with the value and the number of attempts used

    Raises:
        RetryExhausted: If every attempt raised one of retry_on
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    for attempt in range(1, attempts + 1):
        try:
            return RetryResult(value=func(), attempts=attempt)
        except retry_on as e:
            if on_failure is not None:
                on_failure(attempt, e)
            if attempt == attempts:
                raise RetryExhausted(attempts, e) from e
            sleep(delay)

    # unreachable, the loop either returns or raises
    raise AssertionError("retry loop exited without a result")
