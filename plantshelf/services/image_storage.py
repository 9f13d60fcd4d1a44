"""
Plant image storage.

Two backends, selected by IMAGE_STORAGE_BACKEND:

- ``database``: the image is kept base64-encoded on the plant row and served
  back as raw bytes.
- ``s3``: the image goes to an S3-compatible bucket under
  ``Plant_Images/{plant_id}/{uuid}{ext}``; reads hand out signed GET URLs.

Uploads write the blob first and the plant pointer second. If the pointer
update fails the blob is left behind; nothing reconciles it.
"""
import base64
import logging
import uuid
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional, Protocol, Union

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from plantshelf.core.config import settings
from plantshelf.models.plant import Plant
from plantshelf.services.plant_store import PlantStore

logger = logging.getLogger(__name__)

_EXTENSIONS: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
}


class ImageStorageError(Exception):
    """The blob store rejected or failed an operation."""


@dataclass(frozen=True)
class ImagePayload:
    content: bytes
    content_type: str


class ImageStore(Protocol):
    async def put(self, plant_id: int, content: bytes, content_type: str) -> dict[str, Any]:
        """Store the image and return the plant column updates pointing at it."""
        ...

    async def signed_url(self, key: str) -> str: ...

    async def delete(self, key: str) -> None: ...


def image_extension(content_type: str) -> str:
    return _EXTENSIONS.get(content_type.lower(), ".jpg")


def image_key(plant_id: int, content_type: str) -> str:
    return f"Plant_Images/{plant_id}/{uuid.uuid4()}{image_extension(content_type)}"


class DatabaseImageStore:
    async def put(self, plant_id: int, content: bytes, content_type: str) -> dict[str, Any]:
        return {
            "image_data": base64.b64encode(content).decode("ascii"),
            "image_mime_type": content_type,
            "image_storage_path": None,
            "image_url": f"/api/plants/{plant_id}/image",
        }

    async def signed_url(self, key: str) -> str:
        raise ImageStorageError("Object storage is not configured")

    async def delete(self, key: str) -> None:
        # Inline images go away with the plant row.
        return None


@lru_cache(maxsize=1)
def get_s3_client():
    return boto3.client(
        "s3",
        endpoint_url=settings.S3_ENDPOINT or None,
        region_name=settings.S3_REGION,
        aws_access_key_id=settings.S3_ACCESS_KEY_ID or None,
        aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY or None,
    )


class S3ImageStore:
    def __init__(self, client=None, bucket: Optional[str] = None, url_ttl: Optional[int] = None):
        self._client = client
        self.bucket = bucket or settings.S3_BUCKET
        self.url_ttl = url_ttl or settings.S3_SIGNED_URL_TTL_SECONDS

    @property
    def client(self):
        if self._client is None:
            self._client = get_s3_client()
        return self._client

    async def put(self, plant_id: int, content: bytes, content_type: str) -> dict[str, Any]:
        key = image_key(plant_id, content_type)
        try:
            await run_in_threadpool(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
                Metadata={"plantId": str(plant_id)},
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("image upload failed for plant %d: %s", plant_id, exc)
            raise ImageStorageError("Failed to upload image") from exc
        logger.info("stored image for plant %d at %s", plant_id, key)
        return {
            "image_storage_path": key,
            "image_mime_type": content_type,
            "image_url": await self.signed_url(key),
            "image_data": None,
        }

    async def signed_url(self, key: str) -> str:
        try:
            return await run_in_threadpool(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self.url_ttl,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("signing %s failed: %s", key, exc)
            raise ImageStorageError("Failed to generate image URL") from exc

    async def delete(self, key: str) -> None:
        try:
            await run_in_threadpool(self.client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            logger.error("deleting %s failed: %s", key, exc)
            raise ImageStorageError("Failed to delete image") from exc


def get_image_store() -> ImageStore:
    if settings.IMAGE_STORAGE_BACKEND == "s3":
        return S3ImageStore()
    return DatabaseImageStore()


async def attach_plant_image(
    store: PlantStore,
    image_store: ImageStore,
    plant_id: int,
    content: bytes,
    content_type: str,
) -> Optional[Plant]:
    """Store an image for an existing plant and point the plant at it. None if the plant is missing."""
    if await store.get_plant(plant_id) is None:
        return None
    values = await image_store.put(plant_id, content, content_type)
    plant = await store.update_plant(plant_id, values)
    if plant is None:
        logger.warning(
            "plant %d disappeared during image upload; stored image %s is orphaned",
            plant_id, values.get("image_storage_path"),
        )
    return plant


async def resolve_plant_image(
    plant: Plant, image_store: ImageStore
) -> Union[ImagePayload, str, None]:
    """
    Work out how to serve a plant's image.

    Inline data → ImagePayload; object storage key → signed URL;
    a bare image_url → that URL; nothing → None.
    """
    if plant.image_data:
        return ImagePayload(
            content=base64.b64decode(plant.image_data),
            content_type=plant.image_mime_type or "application/octet-stream",
        )
    if plant.image_storage_path:
        return await image_store.signed_url(plant.image_storage_path)
    return plant.image_url
