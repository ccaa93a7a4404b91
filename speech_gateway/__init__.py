from .config import GatewayConfig
from .gateway import SpeechGateway
from .speech_recognition import (
    DispatchMode,
    RecognitionDispatcher,
    RecognitionOutcome,
    RecognizerDescriptor,
    RecognizerRegistry,
)

__all__ = [
    "GatewayConfig",
    "SpeechGateway",
    "DispatchMode",
    "RecognitionDispatcher",
    "RecognitionOutcome",
    "RecognizerDescriptor",
    "RecognizerRegistry",
]
