# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""``slack-provider`` command — drive the resource handlers by hand.

Plays the host's role for a single ``slack_user`` instance: builds the
provider configuration, runs one operation, and prints the resulting state
as JSON.

Subcommands:

* ``init``    — create a stub provider config file
* ``check``   — verify the config and the token (``auth.test``)
* ``create``  — invite a user
* ``read``    — refresh a user by id
* ``update``  — same as read
* ``delete``  — deactivate a user by id
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from slack_provider.config import (
    ConfigError,
    ProviderConfig,
    get_config_path,
    load_provider_block,
)
from slack_provider.directory import describe_error
from slack_provider.logging import configure_logging
from slack_provider.provider import Provider
from slack_provider.resource import ResourceData, ResourceError
from slack_provider.schema import SchemaError
from slack_provider.user import RESOURCE_TYPE


logger = logging.getLogger(__name__)

#: Stub configuration written by ``slack-provider init``.
_STUB_CONFIG = """\
# Slack provider configuration
#
# The token needs the legacy 'client' scope for users.admin.* methods.
# Without a token here, the SLACK_TOKEN environment variable is used.

token: !env SLACK_TOKEN
"""


def _configure(provider: Provider, config_path: Path | None) -> ProviderConfig:
    return provider.configure(load_provider_block(config_path))


def _print_state(data: ResourceData) -> None:
    print(json.dumps(data.to_dict(), indent=2, sort_keys=True))


def cmd_init(args: argparse.Namespace) -> int:
    """Create a stub provider config file if none exists.

    Returns:
        Exit code (always 0).
    """
    config_path: Path = args.config or get_config_path()

    if config_path.exists():
        print(f"Config already exists: {config_path}")
        return 0

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(_STUB_CONFIG)
    print(f"Created stub config: {config_path}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Load the configuration and verify the token with ``auth.test``.

    Returns:
        0 if the token is accepted, 1 otherwise.
    """
    config = _configure(Provider(), args.config)

    try:
        response = WebClient(token=config.token).auth_test()
    except SlackApiError as e:
        print(f"Token rejected: {describe_error(e)}", file=sys.stderr)
        return 1

    print(f"Team: {response.get('team', '')} ({response.get('team_id', '')})")
    print(f"User: {response.get('user', '')} ({response.get('user_id', '')})")
    return 0


def cmd_create(args: argparse.Namespace) -> int:
    """Invite a user and print the resulting state."""
    provider = Provider()
    config = _configure(provider, args.config)
    resource = provider.resource(RESOURCE_TYPE)

    attributes = {"email": args.email, "full_name": args.full_name}
    resource.schema.validate(attributes)

    data = ResourceData(attributes=dict(attributes))
    resource.create(data, config)
    if not data.exists:
        logger.warning("User was not created; state left empty")
    _print_state(data)
    return 0


def cmd_read(args: argparse.Namespace) -> int:
    """Refresh a user by id and print the resulting state."""
    provider = Provider()
    config = _configure(provider, args.config)
    resource = provider.resource(RESOURCE_TYPE)

    data = ResourceData(id=args.id)
    if args.command == "update":
        resource.update(data, config)
    else:
        resource.read(data, config)
    _print_state(data)
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    """Deactivate a user by id."""
    provider = Provider()
    config = _configure(provider, args.config)
    resource = provider.resource(RESOURCE_TYPE)

    resource.delete(ResourceData(id=args.id), config)
    print(f"Deactivated {args.id}")
    return 0


_COMMANDS = {
    "init": cmd_init,
    "check": cmd_check,
    "create": cmd_create,
    "read": cmd_read,
    "update": cmd_read,
    "delete": cmd_delete,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slack-provider",
        description="Manage Slack workspace users as slack_user resources",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help=(
            "Path to provider.yaml"
            " (default: ~/.config/slack-provider/provider.yaml)"
        ),
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Create a stub provider config file")
    subparsers.add_parser("check", help="Verify config and token")

    create_parser = subparsers.add_parser("create", help="Invite a user")
    create_parser.add_argument("--email", required=True, help="User email")
    create_parser.add_argument(
        "--full-name", required=True, help="User's real name"
    )

    for name, help_text in (
        ("read", "Refresh a user by id"),
        ("update", "Refresh a user by id (no remote changes)"),
        ("delete", "Deactivate a user by id"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("id", help="Slack user ID (e.g. U012AB3CD)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one command.

    Args:
        argv: Command-line arguments.  If None, uses ``sys.argv[1:]``.

    Returns:
        Exit code (0=success, 1=config or operation error, 2=usage).
    """
    args = _build_parser().parse_args(argv)

    configure_logging(level=logging.DEBUG if args.debug else logging.INFO)

    try:
        return _COMMANDS[args.command](args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except SchemaError as e:
        print(f"Invalid arguments: {e}", file=sys.stderr)
        return 1
    except ResourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error("Slack API request failed: %s", e)
        return 1


def cli() -> None:
    """Entry point for the ``slack-provider`` console script."""
    sys.exit(main())
