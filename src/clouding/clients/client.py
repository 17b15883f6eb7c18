from __future__ import annotations

import asyncio
from typing import Any

from clouding.clients.actions import ActionPoller, ActionsClient
from clouding.clients.backups import BackupsClient
from clouding.clients.base import HTTPTransport, Transport
from clouding.clients.firewalls import FirewallsClient
from clouding.clients.images import ImagesClient
from clouding.clients.servers import ServersClient
from clouding.clients.snapshots import SnapshotsClient
from clouding.clients.sshkeys import SshKeysClient
from clouding.config.settings import Settings, get_settings
from clouding.core.errors import ConfigurationError
from clouding.domain.models import Action


class CloudingClient:
    """Single entry point sharing one transport across every resource client."""

    actions: ActionsClient
    servers: ServersClient
    firewalls: FirewallsClient
    backups: BackupsClient
    snapshots: SnapshotsClient
    images: ImagesClient
    ssh_keys: SshKeysClient
    poller: ActionPoller

    def __init__(
        self,
        transport: Transport,
        *,
        poll_interval: float = 5.0,
        max_poll_attempts: int | None = None,
        poll_timeout: float | None = None,
        **poller_kwargs: Any,
    ) -> None:
        self._transport = transport
        self._poll_timeout = poll_timeout

        self.actions = ActionsClient(transport)
        self.servers = ServersClient(transport)
        self.firewalls = FirewallsClient(transport)
        self.backups = BackupsClient(transport)
        self.snapshots = SnapshotsClient(transport)
        self.images = ImagesClient(transport)
        self.ssh_keys = SshKeysClient(transport)
        self.poller = ActionPoller(
            self.actions,
            interval=poll_interval,
            max_attempts=max_poll_attempts,
            **poller_kwargs,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> "CloudingClient":
        settings = settings or get_settings()
        if not settings.token:
            raise ConfigurationError(
                "Clouding API token is missing; set CLOUDING_TOKEN",
                details={"setting": "token"},
            )
        transport = HTTPTransport(
            settings.token,
            endpoint=settings.endpoint,
            api_version=settings.api_version,
            timeout=settings.http_timeout,
            user_agent=settings.user_agent,
        )
        kwargs.setdefault("poll_interval", settings.action_poll_interval)
        kwargs.setdefault("max_poll_attempts", settings.action_max_attempts)
        kwargs.setdefault("poll_timeout", settings.action_timeout)
        return cls(transport, **kwargs)

    @property
    def poll_timeout(self) -> float | None:
        return self._poll_timeout

    async def wait_for_action(
        self,
        action: Action,
        interval: float | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
        timeout: float | None = None,
    ) -> Action:
        return await self.poller.wait(
            action,
            interval,
            cancel_event=cancel_event,
            timeout=self._poll_timeout if timeout is None else timeout,
        )

    async def aclose(self) -> None:
        close = getattr(self._transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "CloudingClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()
