import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, auto, unique
from typing import Optional, Sequence, Tuple

from google.cloud.speech_v2.types import cloud_speech

ANONYMOUS_RECOGNIZER_ID = "_"


def location_path(project_id: str, location: str) -> str:
    return f"projects/{project_id}/locations/{location}"


def recognizer_path(project_id: str, location: str, recognizer_id: str) -> str:
    return f"{location_path(project_id, location)}/recognizers/{recognizer_id}"


def anonymous_recognizer_path(project_id: str, location: str) -> str:
    """Path of the wildcard recognizer used for inline recognition.

    Requests sent here carry their whole configuration and need no
    recognizer-creation permission.
    """
    return recognizer_path(project_id, location, ANONYMOUS_RECOGNIZER_ID)


@unique
class DecodingMode(Enum):
    AUTO_DETECT = auto()


@unique
class DispatchMode(Enum):
    PERMANENT = "permanent"
    INLINE = "inline"


def build_recognition_config(
    language_codes: Sequence[str],
    model: str,
    decoding_mode: DecodingMode = DecodingMode.AUTO_DETECT,
) -> cloud_speech.RecognitionConfig:
    if decoding_mode is not DecodingMode.AUTO_DETECT:
        raise ValueError(f"Unsupported decoding mode: {decoding_mode}")

    # Container and encoding detection is left entirely to the service.
    return cloud_speech.RecognitionConfig(
        auto_decoding_config=cloud_speech.AutoDetectDecodingConfig(),
        language_codes=list(language_codes),
        model=model,
    )


@dataclass(frozen=True)
class RecognizerDescriptor:
    """
    Identity and defaults of a durable remote recognizer.

    A descriptor is keyed by (project_id, location, recognizer_id). The
    recognizer_id is chosen by the caller and reused across calls, which makes
    creation idempotent from the caller's point of view.
    """

    project_id: str
    location: str
    recognizer_id: str
    display_name: str = ""
    default_language_codes: Tuple[str, ...] = ("ko-KR",)
    default_model: str = "long"

    def __post_init__(self):
        # Lists passed by callers are frozen so the descriptor stays hashable
        object.__setattr__(self, "default_language_codes", tuple(self.default_language_codes))

        if not self.project_id:
            raise ValueError("project_id must not be empty")
        if not self.location:
            raise ValueError("location must not be empty")
        if not self.recognizer_id or self.recognizer_id == ANONYMOUS_RECOGNIZER_ID:
            raise ValueError(f"Invalid recognizer_id: {self.recognizer_id!r}")
        if not self.default_language_codes:
            raise ValueError("default_language_codes must not be empty")
        if not self.default_model:
            raise ValueError("default_model must not be empty")

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.project_id, self.location, self.recognizer_id)

    @property
    def parent(self) -> str:
        return location_path(self.project_id, self.location)

    @property
    def name(self) -> str:
        return recognizer_path(self.project_id, self.location, self.recognizer_id)

    def to_recognizer(self) -> cloud_speech.Recognizer:
        return cloud_speech.Recognizer(
            display_name=self.display_name,
            default_recognition_config=build_recognition_config(
                self.default_language_codes, self.default_model
            ),
        )


@dataclass(frozen=True)
class RecognizerHandle:
    name: str
    recognizer: Optional[cloud_speech.Recognizer] = field(default=None, compare=False)

    @classmethod
    def from_recognizer(cls, recognizer: cloud_speech.Recognizer, fallback_name: str = "") -> "RecognizerHandle":
        return cls(name=recognizer.name or fallback_name, recognizer=recognizer)


@dataclass(frozen=True)
class RecognitionRequest:
    recognizer_ref: str
    language_codes: Tuple[str, ...]
    model: str
    audio: bytes
    decoding_mode: DecodingMode = DecodingMode.AUTO_DETECT

    def __post_init__(self):
        object.__setattr__(self, "language_codes", tuple(self.language_codes))
        object.__setattr__(self, "audio", bytes(self.audio))

        if not self.language_codes:
            raise ValueError("language_codes must not be empty")
        if not self.model:
            raise ValueError("model must not be empty")

    @property
    def is_anonymous(self) -> bool:
        return self.recognizer_ref.endswith(f"/recognizers/{ANONYMOUS_RECOGNIZER_ID}")

    def to_proto(self) -> cloud_speech.RecognizeRequest:
        # The per-call config wins over whatever the recognizer stores.
        return cloud_speech.RecognizeRequest(
            recognizer=self.recognizer_ref,
            config=build_recognition_config(self.language_codes, self.model, self.decoding_mode),
            content=self.audio,
        )


@dataclass
class PendingOperation:
    operation_id: str
    target: RecognizerDescriptor
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _started_monotonic: float = field(default_factory=time.monotonic, init=False, repr=False, compare=False)

    def elapsed(self) -> float:
        return time.monotonic() - self._started_monotonic


@unique
class OutcomeKind(Enum):
    RECOGNIZED = auto()
    NO_SPEECH = auto()
    INVALID_INPUT = auto()
    FAILED = auto()

    @property
    def http_status(self) -> int:
        return {
            OutcomeKind.RECOGNIZED: 200,
            OutcomeKind.NO_SPEECH: 200,
            OutcomeKind.INVALID_INPUT: 400,
            OutcomeKind.FAILED: 500,
        }[self]


@dataclass(frozen=True)
class RecognitionOutcome:
    success: bool
    message: str
    transcript: Optional[str] = None
    kind: OutcomeKind = OutcomeKind.FAILED

    def __post_init__(self):
        if self.success != (self.transcript is not None):
            raise ValueError("transcript must be set if and only if success is true")
        if self.success != (self.kind is OutcomeKind.RECOGNIZED):
            raise ValueError(f"Outcome kind {self.kind.name} does not match success={self.success}")

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "message": self.message,
            "transcript": self.transcript,
        }
