"""
Flask front end of the speech gateway.

Routes:
- POST /api/speech/upload      inline recognition (no recognizer needed)
- POST /api/recognizer/upload  recognition through the permanent recognizer
- GET  /                       inline upload page
- GET  /recognizer             permanent-recognizer upload page

Both upload routes take the multipart field 'audio' and answer with
{success, message, transcript}.
"""

import logging

from flask import Flask, jsonify, render_template, request

from ..speech_recognition import DispatchMode, OutcomeKind, RecognitionOutcome

logger = logging.getLogger(__name__)

AUDIO_FIELD = "audio"


def create_app(gateway) -> Flask:
    app = Flask(__name__)
    dispatcher = gateway.dispatcher

    def handle_upload(mode: DispatchMode):
        audio_file = request.files.get(AUDIO_FIELD)
        audio = audio_file.read() if audio_file is not None else b""
        filename = audio_file.filename if audio_file is not None else None

        logger.info(f"Audio file received ({mode.value}): {filename}, size: {len(audio)} bytes")

        outcome = dispatcher.dispatch(audio, mode=mode)
        return jsonify(outcome.to_dict()), outcome.http_status

    @app.post("/api/speech/upload")
    def speech_upload():
        return handle_upload(DispatchMode.INLINE)

    @app.post("/api/recognizer/upload")
    def recognizer_upload():
        return handle_upload(DispatchMode.PERMANENT)

    @app.get("/")
    def index():
        return render_template("recorder.html")

    @app.get("/recognizer")
    def recognizer():
        return render_template("recognizer.html")

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled error while serving {request.path}: {error}")
        outcome = RecognitionOutcome(False, dispatcher.messages.server_error, None, OutcomeKind.FAILED)
        return jsonify(outcome.to_dict()), outcome.http_status

    return app
