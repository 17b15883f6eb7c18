"""
Merge freshly fetched records into caller-held state.

Reads overwrite server-authoritative attributes, never touch write-only ones
(passwords, rename inputs), and leave sub-records the server omitted alone.
The server-specific steps below paper over provider quirks and are kept
separate so each can change on its own when the provider does.
"""

from __future__ import annotations

from typing import TypeVar

import structlog

from clouding.domain.models import AccessConfiguration, CloudingModel, Server

logger = structlog.get_logger()

M = TypeVar("M", bound=CloudingModel)


def merge_fetched(held: M, fetched: CloudingModel) -> M:
    """Copy every attribute present in ``fetched`` onto ``held``.

    Only attributes the response actually carried are considered. ``null``
    sub-records count as omitted. Sub-records present on both sides are merged
    recursively so write-only attributes nested in them survive.
    """
    for name in fetched.model_fields_set:
        if name in held.WRITE_ONLY:
            continue
        value = getattr(fetched, name)
        current = getattr(held, name, None)
        if isinstance(value, CloudingModel):
            if isinstance(current, CloudingModel):
                merge_fetched(current, value)
                continue
            setattr(held, name, value)
        elif value is None and isinstance(current, CloudingModel):
            continue
        else:
            setattr(held, name, value)
    return held


def derive_flavor_id(server: Server) -> Server:
    """Reads only return the display ``flavor``; mirror it into ``flavor_id``."""
    server.flavor_id = server.flavor
    return server


def derive_current_firewall(server: Server) -> Server:
    """Surface the primary attached firewall as ``firewall_id``."""
    if server.firewalls:
        server.firewall_id = server.firewalls[0].id
    return server


def normalize_volume_size(server: Server) -> Server:
    """The nested volume size is unreliable; the top-level size wins."""
    if server.volume is not None:
        server.volume.ssd_gb = server.volume_size_gb
    return server


def substitute_volume_source(server: Server) -> Server:
    """Replace the volume source id with the image id.

    FIXME: provider defect workaround. The volume source identifier returned on
    reads does not match the one supplied at creation, so the image id is used
    instead. Applied whatever the volume source kind (image, backup, snapshot);
    whether that is right for non-image sources is unconfirmed.
    """
    if server.volume is not None:
        server.volume.id = server.image.id if server.image is not None else None
    return server


SERVER_READ_STEPS = (
    derive_flavor_id,
    derive_current_firewall,
    normalize_volume_size,
    substitute_volume_source,
)


def reconcile_server(held: Server, fetched: Server) -> Server:
    merge_fetched(held, fetched)
    for step in SERVER_READ_STEPS:
        step(held)
    logger.debug("server_reconciled", server_id=held.id, firewall_id=held.firewall_id)
    return held


def backfill_created_server(held: Server, created: Server) -> Server:
    """Copy what a create response assigns back onto the caller's input.

    The access details come from ``requested_access_configuration``; the
    top-level access configuration is not populated on create.
    """
    held.id = created.id
    requested = created.requested_access_configuration
    if requested is not None:
        if held.access_configuration is None:
            held.access_configuration = AccessConfiguration()
        held.access_configuration.ssh_key_id = requested.ssh_key_id
        held.access_configuration.save_password = requested.save_password
    held.status = created.status
    held.action = created.action
    return held


__all__ = [
    "SERVER_READ_STEPS",
    "backfill_created_server",
    "derive_current_firewall",
    "derive_flavor_id",
    "merge_fetched",
    "normalize_volume_size",
    "reconcile_server",
    "substitute_volume_source",
]
