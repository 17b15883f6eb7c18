from __future__ import annotations

from clouding.clients.base import ResourceClient
from clouding.domain.models import Backup

BACKUP_PATH = "backups"


class BackupsClient(ResourceClient):
    async def get_backup(self, backup_id: str) -> Backup:
        operation = "getting backup"
        response = await self._exchange(
            "GET",
            f"{BACKUP_PATH}/{backup_id}",
            operation=operation,
            expected=(200,),
        )
        return self._decode(response, Backup, operation)
