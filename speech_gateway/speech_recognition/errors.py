from typing import Optional


class GatewayError(Exception):
    """Base class for every error raised by the recognition core."""


class ValidationError(GatewayError):
    """The uploaded payload is missing or empty."""


class ResourceLookupError(GatewayError):
    """The recognizer lookup failed for a reason other than 'not found'.

    Retrying the whole request is safe: the recognizer id is reused.
    """


class ResourceCreateError(GatewayError):
    """The recognizer could not be created."""


class ResourceCreateTimeout(GatewayError):
    """The create operation did not finish within the configured bound.

    The remote operation keeps running; the recognizer may show up on a
    later lookup.
    """

    def __init__(self, message: str, pending=None, timeout: Optional[float] = None):
        super().__init__(message)
        self.pending = pending
        self.timeout = timeout


class RemoteRecognitionError(GatewayError):
    """The synchronous recognize call failed."""
