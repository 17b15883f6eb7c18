"""Resource lifecycle layer over the Clouding API clients."""

from clouding.providers.base import ProviderResource, ProviderResourceSchema
from clouding.providers.clouding import (
    CloudingProvider,
    FirewallResource,
    FirewallRuleResource,
    ServerResource,
    SshKeyResource,
)

__all__ = [
    "CloudingProvider",
    "FirewallResource",
    "FirewallRuleResource",
    "ProviderResource",
    "ProviderResourceSchema",
    "ServerResource",
    "SshKeyResource",
]
