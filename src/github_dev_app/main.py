"""CLI entrypoint for github-dev-app.

Registers a GitHub App from a manifest and saves its secrets to `.env`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from github_dev_app import __version__
from github_dev_app.config import DevAppSettings
from github_dev_app.errors import RegistrationError
from github_dev_app.logging import configure_logging
from github_dev_app.manifest import Manifest
from github_dev_app.register.orchestrator import RegistrationMode, RegistrationOrchestrator

logger = logging.getLogger(__name__)


def _port(value: str) -> int:
    port = int(value)
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(f"invalid port: {value}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-dev-app",
        description="Create and manage a GitHub App for local development",
    )
    parser.add_argument("--version", action="version", version=f"github-dev-app {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    register = subparsers.add_parser(
        "register",
        help="Register a new GitHub App from a manifest and save its secrets to .env",
    )
    register.add_argument("manifest", type=Path, help="Path to the manifest JSON file")
    register.add_argument(
        "--port",
        type=_port,
        default=None,
        help="Port for the local callback server (defaults to a random free port)",
    )
    register.add_argument(
        "--api-url",
        default=None,
        help="GitHub API URL used to exchange the code (defaults to GITHUB_API_URL)",
    )
    register.add_argument(
        "--org",
        "--organization",
        dest="organization",
        default=None,
        help="Register the app under this organization instead of the current user",
    )
    register.add_argument(
        "--env-file",
        type=Path,
        default=Path(".env"),
        help="Environment file that receives the app's secrets",
    )
    register.add_argument(
        "--no-exchange",
        action="store_true",
        help=(
            "Only start the callback server and wait for a callback (up to "
            "GITHUB_DEV_APP_IDLE_TIMEOUT seconds); do not exchange or save credentials"
        ),
    )
    register.add_argument(
        "--print-manifest",
        action="store_true",
        help="Print the manifest as it would be sent to GitHub and exit",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = DevAppSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment and .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command == "register":
            if args.print_manifest:
                print(Manifest.from_file(args.manifest).serialize())
                return 0

            orchestrator = RegistrationOrchestrator(
                settings=settings,
                interactive=settings.interactive,
            )
            orchestrator.register(
                args.manifest,
                api_url=args.api_url,
                port=args.port,
                mode=RegistrationMode.HEADLESS if args.no_exchange else RegistrationMode.EXCHANGE,
                env_file=args.env_file,
                organization=args.organization,
            )
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except RegistrationError as e:
        logger.error(e.message, extra={"stage": e.stage})
        print(str(e), file=sys.stderr)
        return 1

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
