from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Dict, List, cast

import pytest
from bson import ObjectId
from pymongo import MongoClient

from src.domain.entities.errors import ArtifactStoreError
from src.infrastructure.repositories.artifact_bundle_document import (
    bundle_to_document,
)
from src.infrastructure.repositories.gridfs_artifact_store import (
    ARTIFACT_TYPE,
    GridFSArtifactStore,
)


class _GridOut:
    def __init__(
        self,
        _id: ObjectId,
        content: bytes,
        metadata: dict,
        filename: str,
        upload_date: datetime,
    ):
        self._id = _id
        self._content = content
        self.metadata = metadata
        self.filename = filename
        self.uploadDate = upload_date

    def read(self) -> bytes:
        return self._content


class _GridFS:
    def __init__(self) -> None:
        self.files: Dict[ObjectId, _GridOut] = {}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def put(self, content: bytes, filename: str, metadata: dict) -> ObjectId:
        object_id = ObjectId()
        self._clock += timedelta(seconds=1)
        self.files[object_id] = _GridOut(
            object_id, content, metadata, filename, self._clock
        )
        return object_id

    def find(self, query: dict):
        results = [f for f in self.files.values() if self._matches(f, query)]
        return _Cursor(results)

    def delete(self, object_id: ObjectId) -> None:
        self.files.pop(object_id, None)

    @staticmethod
    def _matches(file: _GridOut, query: dict) -> bool:
        for key, value in query.items():
            current = file.metadata
            for part in key.split("."):
                if part == "metadata":
                    continue
                current = current.get(part)
                if current is None:
                    break
            if current != value:
                return False
        return True


class _Cursor:
    def __init__(self, items: List[_GridOut]):
        self.items = list(items)

    def sort(self, key: str, direction: int):
        self.items.sort(key=lambda item: getattr(item, key), reverse=direction < 0)
        return self

    def limit(self, amount: int):
        self.items = self.items[:amount]
        return self

    def __iter__(self):
        return iter(list(self.items))


class _MongoClient:
    def __init__(self):
        self.db: Dict[str, Dict[str, _GridFS]] = {}

    def __getitem__(self, name: str):
        return self.db.setdefault(name, {})


@pytest.fixture(autouse=True)
def patch_gridfs(monkeypatch):
    fs = _GridFS()
    monkeypatch.setattr(
        "src.infrastructure.repositories.gridfs_artifact_store.gridfs.GridFS",
        lambda db, collection: fs,
    )
    return fs


@pytest.fixture()
def store(patch_gridfs):
    client = cast(MongoClient, _MongoClient())
    return GridFSArtifactStore(mongo_client=client, database_name="crowdcast")


@pytest.mark.asyncio
async def test_load_without_bundle_returns_none(store) -> None:
    assert await store.load() is None


@pytest.mark.asyncio
async def test_save_and_load_bundle(store, patch_gridfs, sample_bundle) -> None:
    file_id = await store.save(sample_bundle)

    stored = patch_gridfs.files[ObjectId(file_id)]
    assert stored.metadata["artifact_type"] == ARTIFACT_TYPE
    assert stored.metadata["n"] == 9
    assert json.loads(stored.read()) == bundle_to_document(sample_bundle)
    assert await store.load() == sample_bundle


@pytest.mark.asyncio
async def test_save_replaces_previous_bundles(
    store, patch_gridfs, sample_bundle
) -> None:
    await store.save(sample_bundle)
    latest_id = await store.save(sample_bundle)

    assert list(patch_gridfs.files) == [ObjectId(latest_id)]


@pytest.mark.asyncio
async def test_load_picks_newest_upload(store, patch_gridfs, sample_bundle) -> None:
    older = bundle_to_document(sample_bundle)
    older["metadata"]["n"] = 1
    patch_gridfs.put(
        json.dumps(older).encode("utf-8"),
        filename="forecast_bundle.json",
        metadata={"artifact_type": ARTIFACT_TYPE},
    )
    patch_gridfs.put(
        json.dumps(bundle_to_document(sample_bundle)).encode("utf-8"),
        filename="forecast_bundle.json",
        metadata={"artifact_type": ARTIFACT_TYPE},
    )

    bundle = await store.load()

    assert bundle is not None
    assert bundle.metadata.n == 9


@pytest.mark.asyncio
async def test_load_corrupted_bundle_raises(store, patch_gridfs) -> None:
    patch_gridfs.put(
        b"\x00garbage",
        filename="forecast_bundle.json",
        metadata={"artifact_type": ARTIFACT_TYPE},
    )

    with pytest.raises(ArtifactStoreError):
        await store.load()


@pytest.mark.asyncio
async def test_save_failure_is_wrapped(store, patch_gridfs, sample_bundle) -> None:
    def _fail(*args, **kwargs):
        raise ConnectionError("mongo down")

    patch_gridfs.put = _fail

    with pytest.raises(ArtifactStoreError) as exc_info:
        await store.save(sample_bundle)

    assert isinstance(exc_info.value.__cause__, ConnectionError)


@pytest.mark.asyncio
async def test_cleanup_failure_keeps_new_bundle(
    store, patch_gridfs, sample_bundle
) -> None:
    previous_id = await store.save(sample_bundle)

    def _fail_delete(object_id: ObjectId) -> None:
        raise ConnectionError("mongo down")

    patch_gridfs.delete = _fail_delete

    latest_id = await store.save(sample_bundle)

    assert latest_id != previous_id
    assert set(patch_gridfs.files) == {ObjectId(previous_id), ObjectId(latest_id)}
    bundle = await store.load()
    assert bundle == sample_bundle
