import base64
import binascii
import json
import logging
from typing import Optional

from google.api_core.client_options import ClientOptions
from google.cloud.speech_v2 import SpeechClient
from google.oauth2 import service_account

logger = logging.getLogger(__name__)

GLOBAL_LOCATION = "global"
DEFAULT_ENDPOINT = "speech.googleapis.com"


def endpoint_for_location(location: str) -> str:
    """
    Speech v2 endpoint for `location`.

    Recognizers live in a location and can only be reached through that
    location's endpoint, e.g. 'us-central1-speech.googleapis.com'.
    """
    if location == GLOBAL_LOCATION:
        return DEFAULT_ENDPOINT
    return f"{location}-{DEFAULT_ENDPOINT}"


def decode_credentials(blob: str) -> dict:
    """Decode a base64-encoded service account JSON document."""
    try:
        info = json.loads(base64.b64decode(blob, validate=True).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid base64-encoded credentials: {e}") from e

    if not isinstance(info, dict):
        raise ValueError("Decoded credentials are not a JSON object")
    return info


def create_speech_client(config, credentials: Optional[service_account.Credentials] = None) -> SpeechClient:
    """
    Build the shared Speech v2 client.

    The client is thread-safe; build it once at process start and reuse it
    for every request.
    """
    endpoint = endpoint_for_location(config.location)
    logger.info(f"Creating Speech v2 client for location '{config.location}' ({endpoint})")

    if credentials is None and config.credentials_json:
        credentials = service_account.Credentials.from_service_account_info(
            decode_credentials(config.credentials_json)
        )

    if credentials is None:
        logger.info("No credentials configured, using application default credentials")

    return SpeechClient(
        credentials=credentials,
        client_options=ClientOptions(api_endpoint=endpoint),
    )
