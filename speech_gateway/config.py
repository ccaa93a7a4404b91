"""
Configuration for the speech gateway.
"""

import math
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .messages import MESSAGES
from .speech_recognition.types import RecognizerDescriptor


def _split_codes(value: str) -> List[str]:
    return [code.strip() for code in value.split(",") if code.strip()]


@dataclass
class GatewayConfig:
    """
    Configuration for the SpeechGateway and its HTTP surface.

    Attributes:
        project_id: Google Cloud project that owns the recognizers.
            Required.

        location: Speech API location. 'global' selects the default
            endpoint; any other value selects the regional endpoint
            '<location>-speech.googleapis.com'.
            Default: 'global'

        language_codes: Language codes sent with every recognition request
            and stored as the permanent recognizer's defaults.
            Default: ['ko-KR']

        model: Recognition model name.
            Default: 'long'

        credentials_json: Base64-encoded service account JSON. If None,
            application default credentials are used.
            Default: None

        recognizer_id: Id of the permanent recognizer. Reused across
            requests and processes, so creation is idempotent.
            Default: 'permanent-recognizer'

        recognizer_display_name: Display name stored on the permanent
            recognizer when it is created.

        create_timeout: Seconds to wait for the recognizer create operation.
            Must be positive and finite.
            Default: 300

        message_locale: Locale of the outcome messages ('ko' or 'en').
            Default: 'ko'

        host: Address the HTTP server binds to.
            Default: '0.0.0.0'

        port: Port the HTTP server listens on.
            Default: 8080
    """

    project_id: str = ""
    location: str = "global"
    language_codes: List[str] = field(default_factory=lambda: ["ko-KR"])
    model: str = "long"
    credentials_json: Optional[str] = None
    recognizer_id: str = "permanent-recognizer"
    recognizer_display_name: str = "Permanent Recognizer for Korean STT"
    create_timeout: float = 300.0
    message_locale: str = "ko"
    host: str = "0.0.0.0"
    port: int = 8080

    def __post_init__(self):
        """Validate configuration parameters after initialization."""
        if isinstance(self.language_codes, str):
            self.language_codes = _split_codes(self.language_codes)

        if not self.project_id:
            raise ValueError("project_id is required")

        if not self.location:
            raise ValueError("location must not be empty")

        if not self.language_codes:
            raise ValueError("language_codes must contain at least one language code")

        if not self.model:
            raise ValueError("model must not be empty")

        if not self.recognizer_id:
            raise ValueError("recognizer_id must not be empty")

        if not math.isfinite(self.create_timeout) or self.create_timeout <= 0:
            raise ValueError(
                f"create_timeout must be positive and finite, got {self.create_timeout}"
            )

        if self.message_locale not in MESSAGES:
            raise ValueError(
                f"message_locale must be one of {sorted(MESSAGES)}, got {self.message_locale!r}"
            )

        if not 0 < self.port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GatewayConfig":
        """Build the configuration from environment variables."""
        env = os.environ if environ is None else environ

        # Unset and empty variables both fall back to the dataclass defaults
        kwargs = {}
        for key, name, convert in (
            ("GCP_PROJECT_ID", "project_id", str),
            ("GCP_LOCATION", "location", str),
            ("SPEECH_LANGUAGE_CODES", "language_codes", _split_codes),
            ("SPEECH_MODEL", "model", str),
            ("GOOGLE_CLOUD_CREDENTIALS_JSON", "credentials_json", str),
            ("SPEECH_RECOGNIZER_ID", "recognizer_id", str),
            ("SPEECH_RECOGNIZER_DISPLAY_NAME", "recognizer_display_name", str),
            ("RECOGNIZER_CREATE_TIMEOUT", "create_timeout", float),
            ("SPEECH_MESSAGE_LOCALE", "message_locale", str),
            ("GATEWAY_HOST", "host", str),
            ("GATEWAY_PORT", "port", int),
        ):
            value = env.get(key)
            if value:
                kwargs[name] = convert(value)

        return cls(**kwargs)

    def permanent_descriptor(self) -> RecognizerDescriptor:
        return RecognizerDescriptor(
            project_id=self.project_id,
            location=self.location,
            recognizer_id=self.recognizer_id,
            display_name=self.recognizer_display_name,
            default_language_codes=tuple(self.language_codes),
            default_model=self.model,
        )
