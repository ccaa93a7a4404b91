import concurrent.futures
import threading
import time
from types import SimpleNamespace
from typing import Optional

from google.api_core import exceptions as core_exceptions
from google.cloud.speech_v2.types import cloud_speech


class FakeCreateOperation:
    """Stand-in for `google.api_core.operation.Operation`.

    `result()` sleeps for `delay` seconds, then resolves. With
    `never_completes=True` it waits out the timeout and raises like the real
    polling future does.
    """

    def __init__(self, service, recognizer, delay: float = 0.0, error=None, never_completes: bool = False):
        self._service = service
        self._recognizer = recognizer
        self._delay = delay
        self._error = error
        self._never_completes = never_completes
        self.operation = SimpleNamespace(name=f"operations/create-{recognizer.name.rsplit('/', 1)[-1]}")
        self.cancelled = False
        self.result_timeouts = []

    def result(self, timeout=None):
        self.result_timeouts.append(timeout)

        if self._never_completes:
            time.sleep(min(timeout, 0.2) if timeout else 0.2)
            raise concurrent.futures.TimeoutError("Operation did not complete within the designated timeout.")

        time.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._service.commit(self._recognizer)

    def cancel(self):
        self.cancelled = True


class FakeSpeechService:
    """Thread-safe in-memory Speech v2 recognizer store.

    A created recognizer becomes visible to `get_recognizer` as soon as the
    create call is accepted, like the real service; the returned operation
    resolves after `create_delay`. A second create for the same name raises
    AlreadyExists.

    `lookup_barrier` holds the first `barrier.parties` lookups until that
    many callers have looked up, forcing them all to miss before anybody
    creates.
    """

    def __init__(self, create_delay: float = 0.0, lookup_barrier: Optional[threading.Barrier] = None):
        self._lock = threading.Lock()
        self._create_delay = create_delay
        self._lookup_barrier = lookup_barrier

        self.recognizers = {}
        self.get_calls = 0
        self.create_calls = 0
        self.accepted_creates = 0
        self.operations = []
        self.recognize_requests = []

    def get_recognizer(self, name=None, request=None):
        with self._lock:
            self.get_calls += 1
            call_index = self.get_calls
            recognizer = self.recognizers.get(name)

        if self._lookup_barrier is not None and call_index <= self._lookup_barrier.parties:
            self._lookup_barrier.wait(timeout=5)

        if recognizer is None:
            raise core_exceptions.NotFound(f"Recognizer {name} not found")
        return recognizer

    def create_recognizer(self, request=None):
        name = f"{request.parent}/recognizers/{request.recognizer_id}"
        recognizer = cloud_speech.Recognizer(
            name=name,
            display_name=request.recognizer.display_name,
            default_recognition_config=request.recognizer.default_recognition_config,
        )

        with self._lock:
            self.create_calls += 1
            if name in self.recognizers:
                raise core_exceptions.AlreadyExists(f"Recognizer {name} already exists")
            self.recognizers[name] = recognizer
            self.accepted_creates += 1

        operation = FakeCreateOperation(self, recognizer, delay=self._create_delay)
        self.operations.append(operation)
        return operation

    def commit(self, recognizer):
        with self._lock:
            self.recognizers[recognizer.name] = recognizer
        return recognizer

    def recognize(self, request=None):
        with self._lock:
            self.recognize_requests.append(request)
        return cloud_speech.RecognizeResponse()
