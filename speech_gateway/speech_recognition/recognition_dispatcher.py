import logging
from typing import Optional, Sequence

from google.api_core import exceptions as core_exceptions
from google.auth import exceptions as auth_exceptions

from ..messages import OutcomeMessages, messages_for
from .errors import GatewayError, RemoteRecognitionError, ValidationError
from .recognizer_registry import RecognizerRegistry
from .types import (
    DispatchMode,
    OutcomeKind,
    RecognitionOutcome,
    RecognitionRequest,
    RecognizerDescriptor,
    anonymous_recognizer_path,
)

logger = logging.getLogger(__name__)

_REMOTE_ERRORS = (
    core_exceptions.GoogleAPICallError,
    core_exceptions.RetryError,
    auth_exceptions.GoogleAuthError,
)


class RecognitionDispatcher:
    """
    Turns uploaded audio into a RecognitionOutcome.

    PERMANENT requests go through the configured named recognizer, which is
    provisioned on demand by the RecognizerRegistry. INLINE requests use the
    anonymous recognizer path and need no provisioning permission.

    Every failure below this layer is logged and reported as a generic
    server error; internal detail never reaches the outcome.
    """

    def __init__(
        self,
        client,
        config,
        registry: Optional[RecognizerRegistry] = None,
        messages: Optional[OutcomeMessages] = None,
    ):
        self._client = client
        self._config = config
        self._registry = registry if registry else RecognizerRegistry(client)
        self._messages = messages if messages else messages_for(config.message_locale)

    @property
    def registry(self) -> RecognizerRegistry:
        return self._registry

    @property
    def messages(self) -> OutcomeMessages:
        return self._messages

    def permanent_descriptor(self) -> RecognizerDescriptor:
        return self._config.permanent_descriptor()

    def dispatch(
        self,
        audio: Optional[bytes],
        language_codes: Optional[Sequence[str]] = None,
        model: Optional[str] = None,
        mode: DispatchMode = DispatchMode.INLINE,
    ) -> RecognitionOutcome:
        """
        Transcribe `audio` and normalize the response.

        Args:
            audio: Raw bytes of the uploaded file, in any container the
                service can auto-detect.
            language_codes: Overrides the configured language codes.
            model: Overrides the configured model.
            mode: PERMANENT to use the named recognizer, INLINE for the
                anonymous path.

        Returns:
            RecognitionOutcome: never raises for remote failures.
        """
        mode = DispatchMode(mode)
        language_codes = tuple(language_codes or self._config.language_codes)
        model = model or self._config.model
        if not language_codes or not model:
            raise ValueError("language_codes and model are required")

        try:
            self._validate(audio)
        except ValidationError as e:
            logger.warning(f"Rejected upload: {e}")
            return RecognitionOutcome(False, self._messages.no_file, None, OutcomeKind.INVALID_INPUT)

        try:
            request = RecognitionRequest(
                recognizer_ref=self._resolve_recognizer(mode),
                language_codes=language_codes,
                model=model,
                audio=audio,
            )
            response = self._recognize(request)
        except GatewayError as e:
            logger.exception(f"Speech recognition failed ({mode.name}): {e}")
            return RecognitionOutcome(False, self._messages.server_error, None, OutcomeKind.FAILED)
        except Exception as e:
            logger.exception(f"Unexpected error during speech recognition ({mode.name}): {e}")
            return RecognitionOutcome(False, self._messages.server_error, None, OutcomeKind.FAILED)

        return self._normalize(response)

    @staticmethod
    def _validate(audio: Optional[bytes]):
        if not audio:
            raise ValidationError("no audio content uploaded")

    def _resolve_recognizer(self, mode: DispatchMode) -> str:
        if mode is DispatchMode.PERMANENT:
            return self._registry.ensure_recognizer(self.permanent_descriptor()).name

        return anonymous_recognizer_path(self._config.project_id, self._config.location)

    def _recognize(self, request: RecognitionRequest):
        kind = "inline" if request.is_anonymous else "named recognizer"
        logger.info(
            f"Calling Speech-to-Text v2 recognize ({kind}) on {request.recognizer_ref} "
            f"({len(request.audio)} bytes, {','.join(request.language_codes)}, model={request.model})"
        )
        try:
            return self._client.recognize(request=request.to_proto())
        except _REMOTE_ERRORS as e:
            raise RemoteRecognitionError(f"Recognize call failed: {e}") from e

    def _normalize(self, response) -> RecognitionOutcome:
        if not response.results or not response.results[0].alternatives:
            logger.warning("No speech recognized")
            return RecognitionOutcome(False, self._messages.no_speech, None, OutcomeKind.NO_SPEECH)

        # The first alternative is the most likely one.
        transcript = response.results[0].alternatives[0].transcript

        logger.info(f"Final transcript: {transcript}")
        return RecognitionOutcome(True, self._messages.ok, transcript, OutcomeKind.RECOGNIZED)
