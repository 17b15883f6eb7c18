from __future__ import annotations

import structlog

from clouding.clients.base import ResourceClient
from clouding.domain.models import Action, Server
from clouding.reconcile import backfill_created_server, reconcile_server

logger = structlog.get_logger()

SERVER_PATH = "servers"


def _create_payload(server: Server) -> dict:
    payload = server.to_payload()
    access = payload.get("accessConfiguration")
    if access is not None and "sshKeyId" in access:
        access.setdefault("ssh_key", access["sshKeyId"])
    return payload


class ServersClient(ResourceClient):
    async def get_server(self, server: Server) -> Server:
        """Fetch ``server.id`` and reconcile the response into ``server``.

        Attributes the provider never returns (password, user data, rename
        input) keep the values already held by the caller.
        """
        operation = "getting server"
        response = await self._exchange(
            "GET",
            f"{SERVER_PATH}/{server.id}",
            operation=operation,
            expected=(200,),
        )
        fetched = self._decode(response, Server, operation)
        return reconcile_server(server, fetched)

    async def create_server(self, server: Server) -> Server:
        """Create a server; the spawned action is left on ``server.action``."""
        operation = "creating server"
        response = await self._exchange(
            "POST",
            SERVER_PATH,
            operation=operation,
            expected=(202,),
            body=_create_payload(server),
        )
        created = self._decode(response, Server, operation)
        backfill_created_server(server, created)
        logger.info(
            "server_create_accepted",
            server_id=server.id,
            action_id=server.action.id if server.action else None,
        )
        return server

    async def delete_server(self, server_id: str) -> Action:
        operation = "deleting server"
        response = await self._exchange(
            "DELETE",
            f"{SERVER_PATH}/{server_id}",
            operation=operation,
            expected=(202,),
        )
        return self._decode(response, Action, operation)

    async def update_server_name(self, server_id: str, name: str) -> None:
        await self._exchange(
            "PATCH",
            f"{SERVER_PATH}/{server_id}/rename",
            operation="updating server name",
            expected=(204, 200),
            body=Server(new_server_name=name).to_payload(),
        )
