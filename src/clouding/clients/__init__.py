from clouding.clients.actions import ActionPoller, ActionsClient
from clouding.clients.backups import BackupsClient
from clouding.clients.base import HTTPTransport, ResourceClient, Transport, TransportResponse
from clouding.clients.client import CloudingClient
from clouding.clients.firewalls import FirewallsClient
from clouding.clients.images import ImagesClient
from clouding.clients.servers import ServersClient
from clouding.clients.snapshots import SnapshotsClient
from clouding.clients.sshkeys import SshKeysClient

__all__ = [
    "ActionPoller",
    "ActionsClient",
    "BackupsClient",
    "CloudingClient",
    "FirewallsClient",
    "HTTPTransport",
    "ImagesClient",
    "ResourceClient",
    "ServersClient",
    "SnapshotsClient",
    "SshKeysClient",
    "Transport",
    "TransportResponse",
]
