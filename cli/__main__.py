"""Entry point for arvo CLI client."""

import argparse
import os
import re
import sys

from cli.api_client import ArvoAPIClient
from cli.console import ConsoleUI
from core.config import USER_ID_PATTERN


def default_server_url() -> str:
    """ARVO_SERVER if set, otherwise the local server on ARVO_PORT (as run_server.py binds it)."""
    port = os.environ.get('ARVO_PORT', '8000')
    return os.environ.get('ARVO_SERVER', f'http://localhost:{port}')


def learner_id(value: str) -> str:
    if not re.fullmatch(USER_ID_PATTERN, value):
        raise argparse.ArgumentTypeError(
            f"invalid user id {value!r}: use up to 64 letters, digits, '_' or '-'"
        )
    return value


def build_parser() -> argparse.ArgumentParser:
    server_url = default_server_url()
    parser = argparse.ArgumentParser(
        prog='arvo',
        description='Aussie slang review drills and pronunciation practice against an arvo server'
    )
    parser.add_argument(
        '--server',
        default=server_url,
        help=f'Server URL (default: {server_url}; set ARVO_SERVER or ARVO_PORT to change)'
    )
    parser.add_argument(
        '--user',
        type=learner_id,
        default=os.environ.get('ARVO_USER', 'default'),
        help='Learner whose progress to review (default: $ARVO_USER or "default")'
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    client = ArvoAPIClient(base_url=args.server, user_id=args.user)
    ui = ConsoleUI(client)

    try:
        ui.run()
    except KeyboardInterrupt:
        print('\nHooroo!')
        sys.exit(0)


if __name__ == '__main__':
    main()
