from __future__ import annotations

from clouding.clients.base import ResourceClient
from clouding.domain.models import Image

IMAGE_PATH = "images"


class ImagesClient(ResourceClient):
    async def get_image(self, image_id: str) -> Image:
        operation = "getting image"
        response = await self._exchange(
            "GET",
            f"{IMAGE_PATH}/{image_id}",
            operation=operation,
            expected=(200,),
        )
        return self._decode(response, Image, operation)
