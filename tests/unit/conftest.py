"""
Shared fixtures for the mirror tests.

Engines are built against a real uploads directory in tmp_path and the
recording fake store from fakes.py.
"""

import pytest

from uploads_mirror.core.mirror import BucketTarget, MirrorEngine, UploadRoot

from .fakes import RecordingStore


@pytest.fixture
def uploads_dir(tmp_path):
    """An uploads root on disk with one primary image and three sizes."""
    root = tmp_path / "uploads"
    month = root / "2024" / "05"
    month.mkdir(parents=True)
    for name in ("photo.jpg", "photo-150x150.jpg", "photo-300x200.jpg", "photo-1024x683.jpg"):
        (month / name).write_bytes(name.encode())
    return root


@pytest.fixture
def upload_root(uploads_dir) -> UploadRoot:
    return UploadRoot(base_dir=str(uploads_dir), base_url="https://site.test/wp-content/uploads")


@pytest.fixture
def bucket_target() -> BucketTarget:
    return BucketTarget(bucket="media", key_prefix="site/uploads")


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def engine(upload_root, bucket_target, store) -> MirrorEngine:
    return MirrorEngine(upload_root=upload_root, bucket_target=bucket_target, store=store)


@pytest.fixture
def photo_metadata() -> dict:
    """Host metadata for a photo with three generated sizes."""
    return {
        "file": "2024/05/photo.jpg",
        "width": 2048,
        "height": 1365,
        "sizes": {
            "thumbnail": {"file": "photo-150x150.jpg", "width": 150, "height": 150},
            "medium": {"file": "photo-300x200.jpg", "width": 300, "height": 200},
            "large": {"file": "photo-1024x683.jpg", "width": 1024, "height": 683},
        },
    }
