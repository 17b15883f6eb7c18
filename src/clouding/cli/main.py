from __future__ import annotations

import argparse
import asyncio
from typing import Callable, Sequence

from clouding.cli import ux
from clouding.clients.client import CloudingClient
from clouding.config.settings import get_settings
from clouding.core.errors import ExitCode, main_with_error_handling
from clouding.domain.models import Action, CloudingModel, Server
from clouding.logging import bind_context, configure_logging

ClientFactory = Callable[[], CloudingClient]

# resource -> (client attribute, getter method)
GETTERS: dict[str, tuple[str, str]] = {
    "action": ("actions", "get_action"),
    "firewall": ("firewalls", "get_firewall"),
    "image": ("images", "get_image"),
    "backup": ("backups", "get_backup"),
    "snapshot": ("snapshots", "get_snapshot"),
    "sshkey": ("ssh_keys", "get_ssh_key"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="clouding", description="Clouding.io API client")
    parser.add_argument("--log-level", default=None, help="Log level (default from CLOUDING_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="resource")

    for resource in GETTERS:
        resource_parser = subparsers.add_parser(resource, help=f"Inspect {resource}s")
        commands = resource_parser.add_subparsers(dest="command")
        get_parser = commands.add_parser("get", help=f"Show a {resource} by id")
        get_parser.add_argument("id")

        if resource == "action":
            wait_parser = commands.add_parser("wait", help="Poll an action until it finishes")
            wait_parser.add_argument("id")
            wait_parser.add_argument("--interval", type=float, default=None, help="Seconds between polls")
            wait_parser.add_argument("--timeout", type=float, default=None, help="Give up after N seconds")

    server_parser = subparsers.add_parser("server", help="Inspect or delete servers")
    server_commands = server_parser.add_subparsers(dest="command")
    server_get = server_commands.add_parser("get", help="Show a server by id")
    server_get.add_argument("id")
    server_delete = server_commands.add_parser("delete", help="Delete a server")
    server_delete.add_argument("id")
    server_delete.add_argument("--wait", action="store_true", help="Wait for the delete action to finish")

    return parser


def _dump(record: CloudingModel) -> dict:
    return record.model_dump(by_alias=True, exclude_none=True, mode="json")


async def _run(args: argparse.Namespace, client: CloudingClient) -> int:
    async with client:
        if args.resource == "action" and args.command == "wait":
            action = Action(id=args.id)
            await client.wait_for_action(action, args.interval, timeout=args.timeout)
            ux.success(f"Action {action.id} {action.status}")
            ux.print_record(_dump(action))
            return ExitCode.SUCCESS

        if args.resource == "server":
            if args.command == "get":
                server = await client.servers.get_server(Server(id=args.id))
                ux.print_record(_dump(server))
                return ExitCode.SUCCESS
            action = await client.servers.delete_server(args.id)
            if not args.wait:
                ux.info(f"Server {args.id} deletion started, action {action.id}")
                ux.print_record(_dump(action))
                return ExitCode.SUCCESS
            await client.wait_for_action(action)
            ux.success(f"Server {args.id} deletion {action.status}")
            ux.print_record(_dump(action))
            return ExitCode.SUCCESS

        attribute, method = GETTERS[args.resource]
        record = await getattr(getattr(client, attribute), method)(args.id)
        ux.print_record(_dump(record))
        return ExitCode.SUCCESS


@main_with_error_handling()
def main(
    argv: Sequence[str] | None = None,
    *,
    client_factory: ClientFactory | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.resource or not getattr(args, "command", None):
        parser.print_help()
        return 1

    configure_logging(args.log_level or get_settings().log_level, json=False)
    bind_context(command=f"{args.resource} {args.command}").debug("command_started")

    client = (client_factory or CloudingClient.from_settings)()
    return asyncio.run(_run(args, client))


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    raise SystemExit(main())
