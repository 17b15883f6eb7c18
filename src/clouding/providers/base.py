from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar

from clouding.domain.models import CloudingModel

M = TypeVar("M", bound=CloudingModel)


@dataclass(frozen=True)
class ProviderResourceSchema:
    """Schema metadata describing a provider-managed resource."""

    name: str
    description: str
    attributes: dict[str, str]


class ProviderResource(Protocol[M]):
    """Lifecycle contract for a provider-managed resource.

    ``read`` reconciles the provider's view into the held state rather than
    replacing it, so attributes the provider never returns survive.
    """

    @staticmethod
    def schema() -> ProviderResourceSchema:
        ...

    async def create(self, desired: M) -> M:
        ...

    async def read(self, state: M) -> M:
        ...

    async def delete(self, state: M) -> None:
        ...
