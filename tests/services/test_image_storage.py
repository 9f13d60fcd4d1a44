import base64

import boto3
import pytest
from botocore.stub import ANY, Stubber

from plantshelf.services.image_storage import (
    DatabaseImageStore,
    ImagePayload,
    ImageStorageError,
    S3ImageStore,
    attach_plant_image,
    image_extension,
    image_key,
    resolve_plant_image,
)
from plantshelf.services.memory_store import InMemoryPlantStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n fake image body"


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def _values(name: str = "Catmint") -> dict:
    return {
        "name": name,
        "scientific_name": "Nepeta faassenii",
        "description": "Soft grey mounds with lavender spikes.",
        "light_level": "bright",
        "water_needs": "low",
        "bloom_time": "Late spring to fall",
        "height": "12-18 inches",
        "width": "18 inches",
    }


def test_image_extension():
    assert image_extension("image/png") == ".png"
    assert image_extension("IMAGE/JPEG") == ".jpg"
    assert image_extension("image/x-unknown") == ".jpg"


def test_image_key_layout():
    key = image_key(42, "image/webp")
    assert key.startswith("Plant_Images/42/")
    assert key.endswith(".webp")
    assert image_key(42, "image/webp") != key


async def test_database_store_inlines_base64():
    values = await DatabaseImageStore().put(5, PNG_BYTES, "image/png")
    assert base64.b64decode(values["image_data"]) == PNG_BYTES
    assert values["image_mime_type"] == "image/png"
    assert values["image_storage_path"] is None
    assert values["image_url"] == "/api/plants/5/image"


async def test_s3_put_uploads_and_signs(s3_client):
    stubber = Stubber(s3_client)
    stubber.add_response(
        "put_object",
        {},
        {
            "Bucket": "plant-bucket",
            "Key": ANY,
            "Body": PNG_BYTES,
            "ContentType": "image/png",
            "Metadata": {"plantId": "7"},
        },
    )
    with stubber:
        values = await S3ImageStore(client=s3_client, bucket="plant-bucket").put(
            7, PNG_BYTES, "image/png"
        )
        stubber.assert_no_pending_responses()

    assert values["image_storage_path"].startswith("Plant_Images/7/")
    assert values["image_storage_path"].endswith(".png")
    assert values["image_storage_path"] in values["image_url"]
    assert values["image_data"] is None


async def test_s3_put_failure_raises_storage_error(s3_client):
    stubber = Stubber(s3_client)
    stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
    with stubber:
        with pytest.raises(ImageStorageError):
            await S3ImageStore(client=s3_client, bucket="plant-bucket").put(
                7, PNG_BYTES, "image/png"
            )


async def test_s3_delete(s3_client):
    stubber = Stubber(s3_client)
    stubber.add_response(
        "delete_object", {}, {"Bucket": "plant-bucket", "Key": "Plant_Images/1/a.png"}
    )
    with stubber:
        await S3ImageStore(client=s3_client, bucket="plant-bucket").delete("Plant_Images/1/a.png")
        stubber.assert_no_pending_responses()


async def test_attach_plant_image_updates_plant(memory_store: InMemoryPlantStore):
    plant = await memory_store.create_plant(_values())

    updated = await attach_plant_image(
        memory_store, DatabaseImageStore(), plant.id, PNG_BYTES, "image/png"
    )

    assert updated.image_mime_type == "image/png"
    assert updated.image_url == f"/api/plants/{plant.id}/image"


async def test_attach_plant_image_missing_plant(memory_store: InMemoryPlantStore):
    assert await attach_plant_image(
        memory_store, DatabaseImageStore(), 99, PNG_BYTES, "image/png"
    ) is None


async def test_resolve_inline_image(memory_store: InMemoryPlantStore):
    plant = await memory_store.create_plant(_values())
    await attach_plant_image(memory_store, DatabaseImageStore(), plant.id, PNG_BYTES, "image/png")

    resolved = await resolve_plant_image(plant, DatabaseImageStore())
    assert resolved == ImagePayload(content=PNG_BYTES, content_type="image/png")


async def test_resolve_stored_image_signs_url(memory_store: InMemoryPlantStore, s3_client):
    plant = await memory_store.create_plant(
        {**_values(), "image_storage_path": "Plant_Images/1/leaf.jpg"}
    )

    resolved = await resolve_plant_image(plant, S3ImageStore(client=s3_client, bucket="plant-bucket"))
    assert "Plant_Images/1/leaf.jpg" in resolved


async def test_resolve_external_url_and_missing(memory_store: InMemoryPlantStore):
    linked = await memory_store.create_plant({**_values(), "image_url": "https://example.com/c.jpg"})
    bare = await memory_store.create_plant(_values("Sage"))

    assert await resolve_plant_image(linked, DatabaseImageStore()) == "https://example.com/c.jpg"
    assert await resolve_plant_image(bare, DatabaseImageStore()) is None


async def test_database_store_cannot_sign_and_deletes_nothing():
    store = DatabaseImageStore()
    assert await store.delete("Plant_Images/1/leaf.png") is None
    with pytest.raises(ImageStorageError):
        await store.signed_url("Plant_Images/1/leaf.png")
