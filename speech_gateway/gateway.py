import logging
from typing import Optional

from .cloud_client import create_speech_client
from .config import GatewayConfig
from .speech_recognition import OperationWaiter, RecognitionDispatcher, RecognizerRegistry

logger = logging.getLogger(__name__)


class SpeechGateway:
    """
    Owns the long-lived pieces of the service: the shared Speech client and
    the recognition core built on top of it.

    Build it once at process start, hand it to the HTTP layer, and close it on
    shutdown (or use it as a context manager).
    """

    def __init__(self, config: GatewayConfig, client):
        self._config = config
        self._client = client
        self._closed = False

        self._waiter = OperationWaiter(timeout=config.create_timeout)
        self._registry = RecognizerRegistry(client, waiter=self._waiter)
        self._dispatcher = RecognitionDispatcher(client, config, registry=self._registry)

    @classmethod
    def from_config(cls, config: GatewayConfig, client=None) -> "SpeechGateway":
        if client is None:
            client = create_speech_client(config)
        return cls(config, client)

    @property
    def config(self) -> GatewayConfig:
        return self._config

    @property
    def client(self):
        return self._client

    @property
    def registry(self) -> RecognizerRegistry:
        return self._registry

    @property
    def dispatcher(self) -> RecognitionDispatcher:
        return self._dispatcher

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self):
        if self._closed:
            return

        self._closed = True
        transport = getattr(self._client, "transport", None)
        if transport is not None:
            transport.close()
        logger.info("Speech gateway closed")

    def __enter__(self) -> "SpeechGateway":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
