import concurrent.futures
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from google.api_core import exceptions as core_exceptions

from .errors import ResourceCreateError
from .types import PendingOperation

logger = logging.getLogger(__name__)

DEFAULT_CREATE_TIMEOUT = 300.0


@dataclass(frozen=True)
class WaitResult:
    result: Any = None
    timed_out: bool = False

    @property
    def completed(self) -> bool:
        return not self.timed_out


def _validate_timeout(timeout) -> float:
    if timeout is None or isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ValueError(f"timeout must be a number, got {timeout!r}")
    if not math.isfinite(timeout) or timeout <= 0:
        raise ValueError(f"timeout must be positive and finite, got {timeout}")
    return float(timeout)


class OperationWaiter:
    """Waits for a long-running remote operation, for a bounded time.

    The wait relies on the operation's own polling primitive
    (`Operation.result(timeout=...)`), so the request thread simply blocks
    until the operation resolves or the bound elapses. A timed-out wait
    leaves the remote operation alone.
    """

    def __init__(self, timeout: float = DEFAULT_CREATE_TIMEOUT):
        self._timeout = _validate_timeout(timeout)

    @property
    def timeout(self) -> float:
        return self._timeout

    def wait(self, operation, pending: PendingOperation, timeout: Optional[float] = None) -> WaitResult:
        """
        Block until `operation` resolves or the timeout elapses.

        Args:
            operation: A `google.api_core.operation.Operation` (or anything
                exposing `result(timeout=...)`).
            pending: Bookkeeping for the operation, used for logging.
            timeout: Overrides the waiter's default bound for this call.

        Returns:
            WaitResult: the operation result, or `timed_out=True`.

        Raises:
            ResourceCreateError: the operation finished with a remote error.
        """
        timeout = self._timeout if timeout is None else _validate_timeout(timeout)

        logger.debug(f"Waiting up to {timeout}s for operation '{pending.operation_id}'")
        try:
            result = operation.result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            logger.warning(
                f"Operation '{pending.operation_id}' for {pending.target.name} "
                f"did not complete within {timeout}s"
            )
            return WaitResult(timed_out=True)
        except core_exceptions.GoogleAPICallError as e:
            raise ResourceCreateError(
                f"Operation '{pending.operation_id}' for {pending.target.name} failed: {e}"
            ) from e

        logger.debug(f"Operation '{pending.operation_id}' completed after {pending.elapsed():.2f}s")
        return WaitResult(result=result)
