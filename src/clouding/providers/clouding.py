from __future__ import annotations

from typing import Any

import structlog

from clouding.clients.client import CloudingClient
from clouding.core.errors import ResponseDecodeError
from clouding.domain.models import Firewall, FirewallRuleBinding, Server, SshKey
from clouding.providers.base import ProviderResource, ProviderResourceSchema
from clouding.reconcile import merge_fetched

logger = structlog.get_logger()

# Server actions are given 20 minutes unless the caller or settings say otherwise.
DEFAULT_ACTION_TIMEOUT = 20 * 60.0


class CloudingProvider:
    """Clouding.io provider exposing per-kind resource lifecycles."""

    name = "clouding"

    def __init__(self, client: CloudingClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, **kwargs: Any) -> "CloudingProvider":
        return cls(CloudingClient.from_settings(**kwargs))

    @property
    def client(self) -> CloudingClient:
        return self._client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def resources(self) -> list[ProviderResourceSchema]:
        return [
            ServerResource.schema(),
            FirewallResource.schema(),
            FirewallRuleResource.schema(),
            SshKeyResource.schema(),
        ]

    def server(
        self,
        *,
        create_timeout: float | None = None,
        delete_timeout: float | None = None,
    ) -> "ServerResource":
        return ServerResource(self._client, create_timeout=create_timeout, delete_timeout=delete_timeout)

    def firewall(self) -> "FirewallResource":
        return FirewallResource(self._client)

    def firewall_rule(self) -> "FirewallRuleResource":
        return FirewallRuleResource(self._client)

    def ssh_key(self) -> "SshKeyResource":
        return SshKeyResource(self._client)


class ServerResource(ProviderResource[Server]):
    RESOURCE = "clouding_server"

    def __init__(
        self,
        client: CloudingClient,
        *,
        create_timeout: float | None = None,
        delete_timeout: float | None = None,
    ) -> None:
        self._c = client
        default = client.poll_timeout or DEFAULT_ACTION_TIMEOUT
        self._create_timeout = create_timeout or default
        self._delete_timeout = delete_timeout or default

    @staticmethod
    def schema() -> ProviderResourceSchema:
        return ProviderResourceSchema(
            name=ServerResource.RESOURCE,
            description="Clouding server, created and deleted through actions",
            attributes={
                "id": "Server identifier",
                "name": "Display name",
                "hostname": "Server hostname",
                "flavor_id": "Flavor size identifier",
                "firewall_id": "Initially attached firewall",
                "access_configuration": "SSH key id, password and save_password",
                "volume": "Volume source, source id and size",
                "backup_preference": "Backup slots and frequency",
            },
        )

    async def create(self, desired: Server) -> Server:
        server = await self._c.servers.create_server(desired)
        if server.action is None or not server.action.id:
            raise ResponseDecodeError("creating server", "action missing from response", status_code=202)
        await self._c.wait_for_action(server.action, timeout=self._create_timeout)
        logger.info("server_created", server_id=server.id)
        return server

    async def read(self, state: Server) -> Server:
        return await self._c.servers.get_server(state)

    async def update(self, state: Server, desired: Server) -> Server:
        """Only the name can change in place."""
        if desired.name and desired.name != state.name:
            await self._c.servers.update_server_name(state.id, desired.name)
            state.name = desired.name
        return state

    async def delete(self, state: Server) -> None:
        action = await self._c.servers.delete_server(state.id)
        await self._c.wait_for_action(action, timeout=self._delete_timeout)
        logger.info("server_deleted", server_id=state.id)


class FirewallResource(ProviderResource[Firewall]):
    RESOURCE = "clouding_firewall"

    def __init__(self, client: CloudingClient) -> None:
        self._c = client

    @staticmethod
    def schema() -> ProviderResourceSchema:
        return ProviderResourceSchema(
            name=FirewallResource.RESOURCE,
            description="Clouding firewall",
            attributes={"id": "Firewall identifier", "name": "Name", "description": "Description"},
        )

    async def create(self, desired: Firewall) -> Firewall:
        return await self._c.firewalls.create_firewall(desired)

    async def read(self, state: Firewall) -> Firewall:
        return merge_fetched(state, await self._c.firewalls.get_firewall(state.id))

    async def update(self, state: Firewall, desired: Firewall) -> Firewall:
        changes = Firewall(new_name=desired.name, new_description=desired.description)
        await self._c.firewalls.update_firewall(state.id, changes)
        return await self.read(state)

    async def delete(self, state: Firewall) -> None:
        await self._c.firewalls.delete_firewall(state.id)


class FirewallRuleResource(ProviderResource[FirewallRuleBinding]):
    RESOURCE = "clouding_firewall_rule"

    def __init__(self, client: CloudingClient) -> None:
        self._c = client

    @staticmethod
    def schema() -> ProviderResourceSchema:
        return ProviderResourceSchema(
            name=FirewallRuleResource.RESOURCE,
            description="Rule of a Clouding firewall",
            attributes={
                "firewall_id": "Owning firewall",
                "source_ip": "Source address or CIDR",
                "protocol": "tcp, udp, icmp, ...",
                "description": "Description",
                "port_range_min": "First port",
                "port_range_max": "Last port",
            },
        )

    async def create(self, desired: FirewallRuleBinding) -> FirewallRuleBinding:
        return await self._c.firewalls.create_firewall_rule(desired)

    async def read(self, state: FirewallRuleBinding) -> FirewallRuleBinding:
        fetched = await self._c.firewalls.get_firewall_rule(state.firewall_rule.id)
        return merge_fetched(state, fetched)

    async def delete(self, state: FirewallRuleBinding) -> None:
        await self._c.firewalls.delete_firewall_rule(state.firewall_rule.id)


class SshKeyResource(ProviderResource[SshKey]):
    RESOURCE = "clouding_sshkey"

    def __init__(self, client: CloudingClient) -> None:
        self._c = client

    @staticmethod
    def schema() -> ProviderResourceSchema:
        return ProviderResourceSchema(
            name=SshKeyResource.RESOURCE,
            description="Clouding SSH key pair",
            attributes={
                "id": "Key pair identifier",
                "name": "Name",
                "public_key": "Public key",
                "private_key": "Private key, returned on create when generated",
            },
        )

    async def create(self, desired: SshKey) -> SshKey:
        return await self._c.ssh_keys.create_ssh_key(desired)

    async def read(self, state: SshKey) -> SshKey:
        return merge_fetched(state, await self._c.ssh_keys.get_ssh_key(state.id))

    async def delete(self, state: SshKey) -> None:
        await self._c.ssh_keys.delete_ssh_key(state.id)


__all__ = [
    "CloudingProvider",
    "FirewallResource",
    "FirewallRuleResource",
    "ServerResource",
    "SshKeyResource",
]
