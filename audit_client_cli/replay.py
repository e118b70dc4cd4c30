"""
Audit replay command‑line interface.

Drives the audit replay service through :class:`ReplayClient`.  The service
location and transport settings come from the ``AUDIT_CLIENT_*`` environment
variables (see :class:`AuditClientSettings`); the caller identity comes from
the command line or from ``AUDIT_REPLAY_PRINCIPAL`` / ``AUDIT_REPLAY_TOKEN`` /
``AUDIT_REPLAY_AUTHS``.

---

# Quick ways to run the script

1. Create a replay and start it right away

>>> audit-replay --principal "cn=user" create-and-start hdfs://audit/2024/ --send-rate 100

2. Check progress of one replay, or of all of them

>>> audit-replay status 5a1c...
>>> audit-replay status --all

3. Slow every replay down

>>> audit-replay update --all --send-rate 10
"""

import argparse
import json
import os
import sys
from typing import List, Optional, TextIO

from audit_client_lib.config import ClientFactory
from audit_client_lib.data_models.identity import CallerIdentity
from audit_client_lib.data_models.replay import ReplayRequest, ReplayStatus
from audit_client_lib.exceptions import AuditClientError
from audit_client_lib.replay_client import ReplayClient

# Commands taking a replay id or ``--all``
TARGETED_COMMANDS = ["start", "status", "stop", "resume", "delete", "update"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="audit-replay",
        description="Create and control audit replays.",
    )
    parser.add_argument(
        "--principal",
        default=os.getenv("AUDIT_REPLAY_PRINCIPAL"),
        help="DN of the user the request is made for.",
    )
    parser.add_argument(
        "--token",
        default=os.getenv("AUDIT_REPLAY_TOKEN"),
        help="Credential presented to the audit service.",
    )
    parser.add_argument(
        "--auths",
        default=os.getenv("AUDIT_REPLAY_AUTHS", ""),
        help="Comma separated authorizations of the user.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    for name in ("create", "create-and-start"):
        create = commands.add_parser(name, help=f"{name} a replay")
        create.add_argument("path_uri", help="Location of the audit files.")
        create.add_argument(
            "--send-rate", type=int, help="Messages to send per second."
        )
        create.add_argument(
            "--replay-unfinished-files",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Include files of an unfinished replay.",
        )

    for name in TARGETED_COMMANDS:
        cmd = commands.add_parser(name, help=f"{name} one replay or all replays")
        target = cmd.add_mutually_exclusive_group(required=True)
        target.add_argument("id", nargs="?", help="Replay id.")
        target.add_argument(
            "--all", action="store_true", help="Apply to all replays."
        )
        if name == "update":
            cmd.add_argument(
                "--send-rate",
                type=int,
                required=True,
                help="Messages to send per second.",
            )
    return parser


def build_request(args: argparse.Namespace) -> ReplayRequest:
    identity = None
    if args.principal:
        identity = CallerIdentity(
            principal=args.principal,
            token=args.token,
            authorizations=tuple(a for a in args.auths.split(",") if a),
        )

    builder = ReplayRequest.Builder().with_caller_identity(identity)
    if getattr(args, "id", None):
        builder.with_id(args.id)
    if getattr(args, "path_uri", None):
        builder.with_path_uri(args.path_uri)
    if getattr(args, "send_rate", None) is not None:
        builder.with_send_rate(args.send_rate)
    if getattr(args, "replay_unfinished_files", None) is not None:
        builder.with_replay_unfinished_files(args.replay_unfinished_files)
    return builder.build()


def run(args: argparse.Namespace, client: ReplayClient, out: TextIO) -> None:
    request = build_request(args)

    method_name = args.command.replace("-", "_")
    if getattr(args, "all", False):
        method_name += "_all"
    result = getattr(client, method_name)(request)

    if isinstance(result, ReplayStatus):
        out.write(result.model_dump_json(by_alias=True, indent=2) + "\n")
    elif isinstance(result, list):
        statuses = [s.model_dump(mode="json", by_alias=True) for s in result]
        out.write(json.dumps(statuses, indent=2) + "\n")
    else:
        out.write(f"{result}\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        client = ClientFactory().replay_client()
        run(args, client, sys.stdout)
    except AuditClientError as exc:
        print(f"audit-replay: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
