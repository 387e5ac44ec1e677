"""
Secrets Sync CLI - Redacted views of env files and the remote secret store.

The first import below installs the redaction pipeline on stdout, stderr,
logging and sys.excepthook. It must stay first: anything imported after it
(boto3, python-dotenv, ...) can only write through the interceptor.

Commands:
    - scrub: Copy a file (or stdin) to stdout with secrets redacted
    - show: Print the variables of an env file with sensitive values redacted
    - remote: List, set or delete secrets in the remote store

Safety Constraints:
    - Secret values are never logged; names are
    - `remote set` reads the value from stdin (or a no-echo prompt)
    - Every error message passes through scrub_text before display
"""

import scrubbing.bootstrap  # noqa: F401  (must be the first import)

import argparse
import getpass
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, find_dotenv, load_dotenv

from scrubbing import scrub_structure, scrub_text
from scrubbing.blocks import iter_scrub_blocks
from scrubbing.logging_utils import configure_logging
from scrubbing.messages import build_error_message
from stores import InMemorySecretStore, SecretStore, SsmSecretStore, StoreCredentialsError, StoreError
from stores.memory import MOCK_FIXTURE

__version__ = "0.3.0"

logger = logging.getLogger("secrets_sync")

EXIT_OK = 0
EXIT_ERROR = 1


def report_error(code: str, **context) -> int:
    print(build_error_message(code, **context), file=sys.stderr)
    return EXIT_ERROR


def read_text(path: Path) -> Optional[str]:
    """Read a UTF-8 file, reporting missing or unreadable files."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        report_error("ERR_FILE_NOT_FOUND", path=path)
    except PermissionError:
        report_error("ERR_PERMISSION_READ", path=path)
    return None


def cmd_scrub(args: argparse.Namespace) -> int:
    if args.file:
        text = read_text(Path(args.file))
        if text is None:
            return EXIT_ERROR
    else:
        text = sys.stdin.read()

    for block in iter_scrub_blocks(text):
        sys.stdout.write(scrub_text(block))
    sys.stdout.flush()
    return EXIT_OK


def cmd_show(args: argparse.Namespace) -> int:
    path = Path(args.env_file)
    if read_text(path) is None:
        return EXIT_ERROR

    variables = scrub_structure(dict(dotenv_values(path)))
    logger.debug(f"Parsed {len(variables)} variables from {path}")

    if args.json:
        print(json.dumps(variables, indent=2))
        return EXIT_OK

    for key, value in variables.items():
        print(key if value is None else f"{key}={value}")
    return EXIT_OK


def store_kind(args: argparse.Namespace) -> str:
    if os.getenv("SECRETS_SYNC_MOCK") == "1":
        return "memory"
    return args.store


def build_store(args: argparse.Namespace) -> SecretStore:
    if store_kind(args) == "memory":
        return InMemorySecretStore.from_file(Path.cwd() / MOCK_FIXTURE)
    return SsmSecretStore(args.prefix)


def read_secret_value(name: str) -> str:
    if sys.stdin.isatty():
        return getpass.getpass(f"Value for {name}: ")
    return sys.stdin.read().rstrip("\r\n")


def cmd_remote(args: argparse.Namespace) -> int:
    try:
        store = build_store(args)

        if args.action == "list":
            secrets = store.list_secrets()
            for secret in secrets:
                updated = secret.updated_at.isoformat() if secret.updated_at else "-"
                print(f"{secret.name}\t{updated}")
            logger.info(f"Found {len(secrets)} secrets in the {store.name} store")

        elif args.action == "set":
            value = read_secret_value(args.name)
            if not value:
                return report_error("ERR_EMPTY_VALUE", name=args.name)
            store.set_secret(args.name, value)
            logger.info(f"Stored {args.name} in the {store.name} store")

        elif args.action == "delete":
            if store.delete_secret(args.name):
                logger.info(f"Deleted {args.name} from the {store.name} store")
            else:
                logger.warning(f"{args.name} does not exist in the {store.name} store")

    except StoreCredentialsError as e:
        return report_error("ERR_STORE_CREDENTIALS", store=store_kind(args), detail=e)
    except StoreError as e:
        return report_error("ERR_STORE_REQUEST", store=store_kind(args), detail=e)

    return EXIT_OK


def create_parser() -> argparse.ArgumentParser:
    """
    Create the command-line argument parser for secrets-sync.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="secrets-sync",
        description="Inspect env files and remote secrets without leaking values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Redact a log file before sharing it
  secrets-sync scrub build.log > build.redacted.log

  # Show an env file with secret values hidden
  secrets-sync show config/env/.env

  # List secrets under an SSM prefix
  secrets-sync remote list --prefix /myapp/production

  # Store a secret without it touching shell history
  printf %s "$API_KEY" | secrets-sync remote set API_KEY --prefix /myapp/production

Configuration (env-config.yml):
  scrubbing:
    scrubPatterns: [CUSTOM_*]      Extra names whose values are always redacted
    whitelistPatterns: [PUBLIC_*]  Names that are never redacted
    detectPii: true                Also redact e-mail addresses
""",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    parser.add_argument("--version", action="version", version=f"secrets-sync {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    scrub_parser = subparsers.add_parser("scrub", help="Redact secrets from a file or stdin")
    scrub_parser.add_argument("file", nargs="?", help="File to scrub (default: stdin)")
    scrub_parser.set_defaults(handler=cmd_scrub)

    show_parser = subparsers.add_parser("show", help="Print an env file with secrets redacted")
    show_parser.add_argument("env_file", help="Path to a dotenv file")
    show_parser.add_argument("--json", action="store_true", help="Print as a JSON object")
    show_parser.set_defaults(handler=cmd_show)

    remote_parser = subparsers.add_parser("remote", help="Manage secrets in the remote store")
    remote_parser.add_argument("action", choices=["list", "set", "delete"])
    remote_parser.add_argument("name", nargs="?", help="Secret name (set/delete)")
    remote_parser.add_argument("--prefix", default="/", help="Parameter path prefix (default: /)")
    remote_parser.add_argument(
        "--store", choices=["ssm", "memory"], default="ssm",
        help="Backend (default: ssm; SECRETS_SYNC_MOCK=1 forces memory)",
    )
    remote_parser.set_defaults(handler=cmd_remote)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Entry point for the secrets-sync command.

    Returns:
        Process exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "remote" and args.action in ("set", "delete") and not args.name:
        parser.error(f"remote {args.action} requires a secret name")

    load_dotenv(find_dotenv(usecwd=True))
    configure_logging(verbose=args.verbose)

    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
