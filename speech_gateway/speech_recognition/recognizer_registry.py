import concurrent.futures
import logging
import threading
from dataclasses import dataclass
from enum import Enum, auto, unique
from typing import Dict, List, Optional, Tuple

from google.api_core import exceptions as core_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud.speech_v2.types import cloud_speech

from .errors import ResourceCreateError, ResourceCreateTimeout, ResourceLookupError
from .operation_waiter import OperationWaiter
from .types import PendingOperation, RecognizerDescriptor, RecognizerHandle

logger = logging.getLogger(__name__)

# Errors worth reporting as "transient" from a lookup; NotFound is handled apart.
_REMOTE_ERRORS = (
    core_exceptions.GoogleAPICallError,
    core_exceptions.RetryError,
    auth_exceptions.GoogleAuthError,
)


@unique
class LookupStatus(Enum):
    FOUND = auto()
    NOT_FOUND = auto()
    TRANSIENT_ERROR = auto()


@dataclass(frozen=True)
class LookupResult:
    status: LookupStatus
    handle: Optional[RecognizerHandle] = None
    error: Optional[Exception] = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND


class _InFlightCreate:
    def __init__(self):
        self.future = concurrent.futures.Future()
        self.pending: Optional[PendingOperation] = None


def _operation_id(operation) -> str:
    raw = getattr(operation, "operation", None)
    return getattr(raw, "name", None) or "<unnamed>"


class RecognizerRegistry:
    """
    Makes sure a named recognizer exists on the remote service.

    `ensure_recognizer` always starts with a lookup. When the recognizer is
    missing it is created and the long-running create operation is awaited
    with a bounded timeout.

    Within one process, concurrent callers for the same descriptor share a
    single create operation. Across processes there is no lock: a racing
    create that the service rejects with "already exists" is resolved by
    looking the recognizer up again.
    """

    def __init__(self, client, waiter: Optional[OperationWaiter] = None):
        self._client = client
        self._waiter = waiter if waiter else OperationWaiter()

        self._lock = threading.Lock()
        self._in_flight: Dict[Tuple[str, str, str], _InFlightCreate] = {}

    @property
    def waiter(self) -> OperationWaiter:
        return self._waiter

    def pending_operations(self) -> List[PendingOperation]:
        with self._lock:
            return [entry.pending for entry in self._in_flight.values() if entry.pending is not None]

    def lookup(self, descriptor: RecognizerDescriptor) -> LookupResult:
        try:
            recognizer = self._client.get_recognizer(name=descriptor.name)
        except core_exceptions.NotFound:
            return LookupResult(LookupStatus.NOT_FOUND)
        except _REMOTE_ERRORS as e:
            logger.warning(f"Lookup of recognizer {descriptor.name} failed: {e}")
            return LookupResult(LookupStatus.TRANSIENT_ERROR, error=e)

        return LookupResult(
            LookupStatus.FOUND,
            handle=RecognizerHandle.from_recognizer(recognizer, descriptor.name),
        )

    def ensure_recognizer(self, descriptor: RecognizerDescriptor) -> RecognizerHandle:
        """
        Return a handle to the recognizer described by `descriptor`,
        creating it first if needed.

        Raises:
            ResourceLookupError: the lookup failed for a transient reason.
            ResourceCreateError: the recognizer could not be created.
            ResourceCreateTimeout: the create operation outlived the wait bound.
        """
        lookup = self.lookup(descriptor)

        if lookup.status is LookupStatus.FOUND:
            logger.info(f"Using existing recognizer: {lookup.handle.name}")
            return lookup.handle

        if lookup.status is LookupStatus.TRANSIENT_ERROR:
            raise ResourceLookupError(
                f"Could not look up recognizer {descriptor.name}: {lookup.error}"
            ) from lookup.error

        return self._create_once(descriptor)

    def _create_once(self, descriptor: RecognizerDescriptor) -> RecognizerHandle:
        with self._lock:
            entry = self._in_flight.get(descriptor.key)
            owner = entry is None
            if owner:
                entry = _InFlightCreate()
                self._in_flight[descriptor.key] = entry

        if not owner:
            logger.info(f"Recognizer {descriptor.name} is already being created, waiting for it")
            # The owner's wait is bounded, so this one is too.
            return entry.future.result()

        try:
            handle = self._create(descriptor, entry)
        except BaseException as e:
            entry.future.set_exception(e)
            raise
        else:
            entry.future.set_result(handle)
            return handle
        finally:
            with self._lock:
                self._in_flight.pop(descriptor.key, None)

    def _create(self, descriptor: RecognizerDescriptor, entry: _InFlightCreate) -> RecognizerHandle:
        request = cloud_speech.CreateRecognizerRequest(
            parent=descriptor.parent,
            recognizer_id=descriptor.recognizer_id,
            recognizer=descriptor.to_recognizer(),
        )

        logger.info(f"Creating recognizer: {descriptor.name}")
        try:
            operation = self._client.create_recognizer(request=request)
        except core_exceptions.AlreadyExists as e:
            return self._resolve_existing(descriptor, e)
        except _REMOTE_ERRORS as e:
            raise ResourceCreateError(f"Could not create recognizer {descriptor.name}: {e}") from e

        pending = PendingOperation(operation_id=_operation_id(operation), target=descriptor)
        entry.pending = pending

        try:
            waited = self._waiter.wait(operation, pending)
        except ResourceCreateError as e:
            if isinstance(e.__cause__, core_exceptions.AlreadyExists):
                return self._resolve_existing(descriptor, e.__cause__)
            raise

        if waited.timed_out:
            raise ResourceCreateTimeout(
                f"Creation of recognizer {descriptor.name} did not finish within {self._waiter.timeout}s",
                pending=pending,
                timeout=self._waiter.timeout,
            )

        logger.info(f"Recognizer created: {descriptor.name} ({pending.elapsed():.2f}s)")

        if isinstance(waited.result, cloud_speech.Recognizer):
            return RecognizerHandle.from_recognizer(waited.result, descriptor.name)
        return RecognizerHandle(name=descriptor.name)

    def _resolve_existing(self, descriptor: RecognizerDescriptor, cause: Exception) -> RecognizerHandle:
        logger.info(f"Recognizer {descriptor.name} was created concurrently, looking it up again")

        lookup = self.lookup(descriptor)
        if lookup.found:
            return lookup.handle

        raise ResourceCreateError(
            f"Recognizer {descriptor.name} reported as existing but lookup returned {lookup.status.name}"
        ) from (lookup.error or cause)
