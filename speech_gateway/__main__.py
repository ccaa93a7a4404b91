import argparse
import logging
import sys
from pathlib import Path

import dotenv
from colorama import Fore

from .config import GatewayConfig
from .gateway import SpeechGateway
from .speech_recognition import DispatchMode
from .web import create_app

logger = logging.getLogger(__name__)


def setup_logging(log_level: str):
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def serve(args, config: GatewayConfig) -> int:
    host = args.host or config.host
    port = args.port or config.port

    with SpeechGateway.from_config(config) as gateway:
        app = create_app(gateway)
        logger.info(f"Speech gateway listening on http://{host}:{port}")
        # One thread per upload; every request may block on the remote service.
        app.run(host=host, port=port, threaded=True)

    return 0


def transcribe(args, config: GatewayConfig) -> int:
    audio = Path(args.file).read_bytes()
    mode = DispatchMode(args.mode)

    with SpeechGateway.from_config(config) as gateway:
        outcome = gateway.dispatcher.dispatch(
            audio,
            language_codes=args.language or None,
            model=args.model,
            mode=mode,
        )

    if outcome.success:
        print(f"{Fore.GREEN}{outcome.message}{Fore.RESET}")
        print(outcome.transcript)
        return 0

    print(f"{Fore.RED}{outcome.message}{Fore.RESET}")
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="speech_gateway",
        description="Google Cloud Speech-to-Text v2 upload gateway",
    )
    parser.add_argument("--env-file", default=None, help="Path of a .env file to load (default: ./.env)")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP upload gateway")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)
    serve_parser.set_defaults(handler=serve)

    transcribe_parser = subparsers.add_parser("transcribe", help="Transcribe a local audio file")
    transcribe_parser.add_argument("file")
    transcribe_parser.add_argument(
        "--mode",
        default=DispatchMode.INLINE.value,
        choices=[mode.value for mode in DispatchMode],
    )
    transcribe_parser.add_argument("--language", action="append", help="Language code, may be repeated")
    transcribe_parser.add_argument("--model", default=None)
    transcribe_parser.set_defaults(handler=transcribe)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.env_file:
        dotenv.load_dotenv(args.env_file)
    else:
        dotenv.load_dotenv()

    config = GatewayConfig.from_env()
    return args.handler(args, config)


if __name__ == "__main__":
    sys.exit(main())
