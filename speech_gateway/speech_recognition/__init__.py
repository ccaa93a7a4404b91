"""Recognition core: recognizer provisioning and request dispatch.

  from speech_gateway.speech_recognition import RecognitionDispatcher, DispatchMode

The dispatcher is the only piece the HTTP layer talks to. The registry and
the operation waiter are exposed so they can be wired and tested on their
own.
"""

from .errors import (
    GatewayError,
    RemoteRecognitionError,
    ResourceCreateError,
    ResourceCreateTimeout,
    ResourceLookupError,
    ValidationError,
)
from .operation_waiter import DEFAULT_CREATE_TIMEOUT, OperationWaiter, WaitResult
from .recognition_dispatcher import RecognitionDispatcher
from .recognizer_registry import LookupResult, LookupStatus, RecognizerRegistry
from .types import (
    ANONYMOUS_RECOGNIZER_ID,
    DecodingMode,
    DispatchMode,
    OutcomeKind,
    PendingOperation,
    RecognitionOutcome,
    RecognitionRequest,
    RecognizerDescriptor,
    RecognizerHandle,
    anonymous_recognizer_path,
)

__all__ = [
    "ANONYMOUS_RECOGNIZER_ID",
    "DEFAULT_CREATE_TIMEOUT",
    "DecodingMode",
    "DispatchMode",
    "GatewayError",
    "LookupResult",
    "LookupStatus",
    "OperationWaiter",
    "OutcomeKind",
    "PendingOperation",
    "RecognitionDispatcher",
    "RecognitionOutcome",
    "RecognitionRequest",
    "RecognizerDescriptor",
    "RecognizerHandle",
    "RecognizerRegistry",
    "RemoteRecognitionError",
    "ResourceCreateError",
    "ResourceCreateTimeout",
    "ResourceLookupError",
    "ValidationError",
    "WaitResult",
    "anonymous_recognizer_path",
]
