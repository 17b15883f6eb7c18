from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ActionStatus(StrEnum):
    """States of a provider-side asynchronous action."""

    pending = "pending"
    in_progress = "inProgress"
    completed = "completed"
    errored = "errored"

    @property
    def is_terminal(self) -> bool:
        return self in (ActionStatus.completed, ActionStatus.errored)


class CloudingModel(BaseModel):
    """Base for wire records: camelCase keys, every attribute optional.

    ``WRITE_ONLY`` names attributes the provider accepts on requests but never
    returns on reads; the reconciler never overwrites them.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    WRITE_ONLY: ClassVar[frozenset[str]] = frozenset()

    def to_payload(self) -> dict[str, Any]:
        """Request body with empty attributes omitted."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Action(CloudingModel):
    id: str | None = None
    status: ActionStatus | None = None
    kind: str | None = Field(default=None, alias="type")
    started_at: str | None = None
    completed_at: str | None = None
    resource_id: str | None = None
    resource_type: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status is not None and self.status.is_terminal


class ErrorEnvelope(CloudingModel):
    """Structured failure body returned on non-success statuses."""

    type: str | None = None
    title: str | None = None
    status: int | None = None
    detail: str | None = None
    instance: str | None = None
    trace_id: str | None = None
    errors: list[str] = Field(default_factory=list)

    @field_validator("errors", mode="before")
    @classmethod
    def _null_errors(cls, value: Any) -> Any:
        return [] if value is None else value


class Cost(CloudingModel):
    price_per_hour: float | None = None
    price_per_month_approx: float | None = None


class ImageAccessMethods(CloudingModel):
    ssh_key: str | None = None
    password: str | None = None


class Image(CloudingModel):
    id: str | None = None
    name: str | None = None
    minimum_size_gb: int | None = None
    access_methods: ImageAccessMethods | None = None
    price_per_hour: float | None = None
    price_per_month_approx: float | None = None
    billing_unit: str | None = None


class AccessConfiguration(CloudingModel):
    WRITE_ONLY = frozenset({"password", "ssh_key"})

    # Reads report the key as ``sshKeyId``; server create takes it as ``ssh_key``.
    ssh_key_id: str | None = None
    ssh_key: str | None = Field(default=None, alias="ssh_key")
    password: str | None = None
    has_password: bool | None = None
    save_password: bool | None = None


class Volume(CloudingModel):
    # ``id`` is the identifier of the volume's source (image, backup, ...).
    id: str | None = None
    source: str | None = None
    ssd_gb: int | None = None
    shut_down_source: bool | None = None


class BackupPreference(CloudingModel):
    slots: int | None = None
    frequency: str | None = None


class FirewallRule(CloudingModel):
    id: str | None = None
    source_ip: str | None = None
    protocol: str | None = None
    description: str | None = None
    port_range_min: int | None = None
    port_range_max: int | None = None
    enabled: bool | None = None


class FirewallRuleBinding(CloudingModel):
    """A rule together with the firewall that owns it."""

    firewall_id: str | None = None
    firewall_rule: FirewallRule = Field(default_factory=FirewallRule)


class FirewallAttachment(CloudingModel):
    server_id: str | None = None
    server_name: str | None = None


class Firewall(CloudingModel):
    WRITE_ONLY = frozenset({"new_name", "new_description"})

    id: str | None = None
    name: str | None = None
    description: str | None = None
    new_name: str | None = None
    new_description: str | None = None
    rules: list[FirewallRule] | None = None
    attachments: list[FirewallAttachment] | None = None


class Backup(CloudingModel):
    id: str | None = None
    created_at: str | None = None
    server_id: str | None = None
    server_name: str | None = None
    volume_size_gb: int | None = None
    image: Image | None = None
    status: str | None = None


class Snapshot(CloudingModel):
    id: str | None = None
    name: str | None = None
    size_gb: int | None = None
    description: str | None = None
    created_at: str | None = None
    source_server_name: str | None = None
    shut_down_server: bool | None = None
    image: Image | None = None
    cost: Cost | None = None


class SshKey(CloudingModel):
    id: str | None = None
    name: str | None = None
    fingerprint: str | None = None
    public_key: str | None = None
    private_key: str | None = None
    has_private_key: bool | None = None


class Server(CloudingModel):
    WRITE_ONLY = frozenset({"new_server_name", "user_data"})

    id: str | None = None
    name: str | None = None
    new_server_name: str | None = None
    hostname: str | None = None
    v_cores: float | None = None
    ram_gb: int | None = None
    # Identifier used on create; reads only echo the display form in ``flavor``.
    flavor_id: str | None = None
    flavor: str | None = None
    # Primary attached firewall, surfaced from ``firewalls`` on reads.
    firewall_id: str | None = None
    access_configuration: AccessConfiguration | None = None
    requested_access_configuration: AccessConfiguration | None = None
    volume_size_gb: int | None = None
    volume: Volume | None = None
    enable_private_network: bool | None = None
    enable_strict_anti_ddos_filtering: bool | None = Field(
        default=None, alias="enableStrictAntiDDoSFiltering"
    )
    user_data: str | None = None
    backup_preference: BackupPreference | None = Field(default=None, alias="backupPreferences")
    image: Image | None = None
    status: str | None = None
    power_state: str | None = None
    features: list[str] | None = None
    pending_features: list[str] | None = None
    pending_firewalls: list[str] | None = None
    created_at: str | None = None
    dns_address: str | None = None
    public_ip: str | None = None
    private_ip: str | None = None
    ssh_key_id: str | None = None
    firewalls: list[Firewall] | None = None
    snapshots: list[Snapshot] | None = None
    backups: list[Backup] | None = None
    cost: Cost | None = None
    action: Action | None = None


__all__ = [
    "AccessConfiguration",
    "Action",
    "ActionStatus",
    "Backup",
    "BackupPreference",
    "CloudingModel",
    "Cost",
    "ErrorEnvelope",
    "Firewall",
    "FirewallAttachment",
    "FirewallRule",
    "FirewallRuleBinding",
    "Image",
    "ImageAccessMethods",
    "Server",
    "Snapshot",
    "SshKey",
    "Volume",
]
