"""
Development server launcher.

Starts ``streamlit run`` on the bundled app with the configured bind
address and port (``PORT`` from the environment wins over the default).
"""

import argparse
import logging
import sys
from pathlib import Path

from say2text.core.config import configure_logging, get_settings

logger = logging.getLogger(__name__)

APP_PATH = Path(__file__).resolve().parent / "ui" / "app.py"


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="say2text",
        description="Run the Voice-to-Text Studio development server.",
    )
    parser.add_argument(
        "--host",
        default=settings.app_host,
        help=f"Address to bind (default: {settings.app_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.app_port,
        help=f"Port to listen on (default: {settings.app_port}, env PORT)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Do not open a browser window",
    )
    return parser


def streamlit_argv(host: str, port: int, headless: bool = False) -> list[str]:
    """Command line handed to Streamlit's own CLI."""
    argv = [
        "streamlit",
        "run",
        str(APP_PATH),
        "--server.address",
        host,
        "--server.port",
        str(port),
    ]
    if headless:
        argv += ["--server.headless", "true"]
    return argv


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    from streamlit.web import cli as stcli

    logger.info("Serving on http://%s:%d", args.host, args.port)
    sys.argv = streamlit_argv(args.host, args.port, args.headless)
    return stcli.main()


if __name__ == "__main__":
    sys.exit(main())
