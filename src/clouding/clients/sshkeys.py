from __future__ import annotations

from clouding.clients.base import ResourceClient
from clouding.domain.models import SshKey
from clouding.reconcile import merge_fetched

SSHKEY_PATH = "keypairs"


class SshKeysClient(ResourceClient):
    async def get_ssh_key(self, key_id: str) -> SshKey:
        operation = "getting ssh key"
        response = await self._exchange(
            "GET",
            f"{SSHKEY_PATH}/{key_id}",
            operation=operation,
            expected=(200,),
        )
        return self._decode(response, SshKey, operation)

    async def create_ssh_key(self, key: SshKey) -> SshKey:
        """Create a key pair; a generated private key is only returned here."""
        operation = "creating ssh key"
        response = await self._exchange(
            "POST",
            SSHKEY_PATH,
            operation=operation,
            expected=(201,),
            body=key.to_payload(),
        )
        return merge_fetched(key, self._decode(response, SshKey, operation))

    async def delete_ssh_key(self, key_id: str) -> None:
        await self._exchange(
            "DELETE",
            f"{SSHKEY_PATH}/{key_id}",
            operation="deleting ssh key",
            expected=(204,),
        )
