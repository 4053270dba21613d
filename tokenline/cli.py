# cli.py

import argparse
import sys

from .config import load_config
from .errors import ConfigurationError
from .interface import Interface

EXIT_CONFIG_ERROR = 2


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='tokenline',
        description='Stream chat completions from an Azure OpenAI deployment')
    parser.add_argument('-c', '--config',
        help='Path to a JSON settings file (default: ./appsettings.json)')
    parser.add_argument('--enable-logging',
        action='store_true',
        help='Enable debug logging')
    parser.add_argument('--log-file',
        help='Log file path (use "-" for stdout); implies --enable-logging')
    parser.add_argument('--skip-validation',
        action='store_true',
        help='Skip the API key check before starting the chat')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config).validate()
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        return EXIT_CONFIG_ERROR

    chat = Interface(
        config,
        logging_enabled=args.enable_logging,
        log_file=args.log_file,
    )
    return chat.start(preflight=not args.skip_validation)


if __name__ == "__main__":
    sys.exit(main())
