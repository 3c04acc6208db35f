"""
Unit tests for local path enumeration and delete-target resolution.
"""

import pytest

from uploads_mirror.core.mirror import (
    AssetMetadata,
    BucketTarget,
    InvalidAssetPathError,
    InvalidVariantPathError,
    SizeVariant,
    UploadRoot,
    enumerate_files,
    resolve_delete_target,
)


@pytest.fixture
def root() -> UploadRoot:
    return UploadRoot(base_dir="/var/www/uploads/", base_url="https://site.test/uploads")


@pytest.fixture
def target() -> BucketTarget:
    return BucketTarget(bucket="media", key_prefix="site")


class TestAssetMetadataFromHost:
    """Tests for translating host metadata."""

    def test_keeps_size_order(self, photo_metadata):
        asset = AssetMetadata.from_host(photo_metadata)

        assert asset.primary_relative_path == "2024/05/photo.jpg"
        assert [v.name for v in asset.variants] == ["thumbnail", "medium", "large"]

    def test_missing_file_means_no_primary(self):
        """Non-file attachments come without a file entry."""
        asset = AssetMetadata.from_host({"sizes": {}})

        assert asset.primary_relative_path is None
        assert asset.variants == ()

    def test_sizes_without_file_are_skipped(self):
        asset = AssetMetadata.from_host({"file": "a.jpg", "sizes": {"broken": {"width": 1}}})

        assert asset.variants == ()

    def test_non_string_file_means_no_primary(self):
        asset = AssetMetadata.from_host({"file": 123, "sizes": {"thumbnail": {"file": "a.jpg"}}})

        assert asset.primary_relative_path is None

    def test_sizes_that_are_not_a_mapping_are_ignored(self):
        asset = AssetMetadata.from_host({"file": "a.jpg", "sizes": ["thumbnail"]})

        assert asset.primary_relative_path == "a.jpg"
        assert asset.variants == ()


class TestEnumerateFiles:
    """Tests for listing files to mirror."""

    def test_primary_then_variants_in_order(self, root, target):
        """Four files come back: the primary first, then sizes as supplied."""
        asset = AssetMetadata(
            primary_relative_path="2024/05/photo.jpg",
            variants=(
                SizeVariant("thumbnail", "photo-150x150.jpg"),
                SizeVariant("medium", "photo-300x200.jpg"),
                SizeVariant("large", "photo-1024x683.jpg"),
            ),
        )

        files = enumerate_files(root, target, asset)

        assert [f.local_path for f in files] == [
            "/var/www/uploads/2024/05/photo.jpg",
            "/var/www/uploads/2024/05/photo-150x150.jpg",
            "/var/www/uploads/2024/05/photo-300x200.jpg",
            "/var/www/uploads/2024/05/photo-1024x683.jpg",
        ]
        assert [f.remote_key for f in files] == [
            "site/2024/05/photo.jpg",
            "site/2024/05/photo-150x150.jpg",
            "site/2024/05/photo-300x200.jpg",
            "site/2024/05/photo-1024x683.jpg",
        ]

    def test_variants_share_primary_directory(self, root, target, photo_metadata):
        files = enumerate_files(root, target, AssetMetadata.from_host(photo_metadata))

        directories = {f.remote_key.rsplit("/", 1)[0] for f in files}
        assert directories == {"site/2024/05"}

    def test_root_level_asset(self, root, target):
        asset = AssetMetadata(
            primary_relative_path="/logo.png",
            variants=(SizeVariant("thumbnail", "logo-150x150.png"),),
        )

        files = enumerate_files(root, target, asset)

        assert files[0].local_path == "/var/www/uploads/logo.png"
        assert [f.remote_key for f in files] == ["site/logo.png", "site/logo-150x150.png"]

    def test_no_primary_yields_nothing(self, root, target):
        assert enumerate_files(root, target, AssetMetadata()) == []

    @pytest.mark.parametrize("bad_name", ["../escape.jpg", "nested/photo.jpg", "..", "a\\b.jpg"])
    def test_variant_with_path_is_rejected(self, root, target, bad_name):
        """Variants must be siblings of the primary, never elsewhere."""
        asset = AssetMetadata(
            primary_relative_path="2024/05/photo.jpg",
            variants=(SizeVariant("evil", bad_name),),
        )

        with pytest.raises(InvalidVariantPathError):
            enumerate_files(root, target, asset)

    @pytest.mark.parametrize("primary", ["../secret.txt", "2024/../../x.jpg", "/../x.jpg"])
    def test_primary_leaving_root_is_rejected(self, root, target, primary):
        with pytest.raises(InvalidAssetPathError):
            enumerate_files(root, target, AssetMetadata(primary_relative_path=primary))

    def test_duplicate_variant_files_are_listed_once(self, root, target):
        asset = AssetMetadata(
            primary_relative_path="2024/05/photo.jpg",
            variants=(
                SizeVariant("medium", "photo-300x200.jpg"),
                SizeVariant("thumbnail", "photo-150x150.jpg"),
                SizeVariant("post-thumbnail", "photo-300x200.jpg"),
            ),
        )

        files = enumerate_files(root, target, asset)

        assert [f.remote_key for f in files] == [
            "site/2024/05/photo.jpg",
            "site/2024/05/photo-300x200.jpg",
            "site/2024/05/photo-150x150.jpg",
        ]


class TestResolveDeleteTarget:
    """Tests for mapping deleted local files to keys."""

    def test_path_under_root_maps_to_key(self, root, target):
        file = resolve_delete_target(root, target, "/var/www/uploads/2024/05/photo.jpg")

        assert file is not None
        assert file.remote_key == "site/2024/05/photo.jpg"
        assert file.local_path == "/var/www/uploads/2024/05/photo.jpg"

    def test_path_outside_root_is_none(self, root, target):
        assert resolve_delete_target(root, target, "/tmp/photo.jpg") is None

    def test_sibling_directory_sharing_prefix_is_none(self, root, target):
        """/var/www/uploads2 is not inside /var/www/uploads."""
        assert resolve_delete_target(root, target, "/var/www/uploads2/photo.jpg") is None

    def test_root_itself_is_none(self, root, target):
        assert resolve_delete_target(root, target, "/var/www/uploads") is None
        assert resolve_delete_target(root, target, "/var/www/uploads/") is None

    def test_empty_prefix(self, root):
        file = resolve_delete_target(root, BucketTarget("media"), "/var/www/uploads/a.jpg")

        assert file.remote_key == "a.jpg"

    def test_dot_dot_climbing_out_of_root_is_none(self, root, target):
        assert resolve_delete_target(root, target, "/var/www/uploads/../x.jpg") is None
        assert resolve_delete_target(root, target, "/var/www/uploads/2024/../../x.jpg") is None

    def test_redundant_segments_are_normalized(self, root, target):
        file = resolve_delete_target(root, target, "/var/www/uploads/2024/./05/a.jpg")

        assert file.remote_key == "site/2024/05/a.jpg"
