from __future__ import annotations

from clouding.clients.base import ResourceClient
from clouding.domain.models import Snapshot

SNAPSHOT_PATH = "snapshots"


class SnapshotsClient(ResourceClient):
    async def get_snapshot(self, snapshot_id: str) -> Snapshot:
        operation = "getting snapshot"
        response = await self._exchange(
            "GET",
            f"{SNAPSHOT_PATH}/{snapshot_id}",
            operation=operation,
            expected=(200,),
        )
        return self._decode(response, Snapshot, operation)
