"""
Unit tests for bucket path parsing and key mapping.

Both functions are pure, so these are plain input/output checks.
"""

import pytest

from uploads_mirror.core.mirror import BucketTarget, map_to_key, resolve_bucket_target


class TestResolveBucketTarget:
    """Tests for splitting the configured bucket path."""

    @pytest.mark.parametrize(
        "config_path, bucket, prefix",
        [
            ("b", "b", ""),
            ("b/p1", "b", "p1"),
            ("b/p1/p2", "b", "p1/p2"),
        ],
    )
    def test_first_segment_is_bucket_rest_is_prefix(self, config_path, bucket, prefix):
        """The bucket is the first segment; everything after is the prefix."""
        target = resolve_bucket_target(config_path)

        assert target == BucketTarget(bucket=bucket, key_prefix=prefix)

    def test_parsing_is_idempotent(self):
        """Parsing the same path twice yields equal targets."""
        assert resolve_bucket_target("b/p1/p2") == resolve_bucket_target("b/p1/p2")

    def test_empty_path_gives_empty_bucket(self):
        """An empty bucket is passed through; the store is the one to reject it."""
        assert resolve_bucket_target("") == BucketTarget(bucket="", key_prefix="")

    def test_target_is_immutable(self):
        target = resolve_bucket_target("b/p1")

        with pytest.raises(AttributeError):
            target.bucket = "other"


class TestMapToKey:
    """Tests for key normalization."""

    def test_joins_segments(self):
        assert map_to_key("site/uploads", "2024/05", "photo.jpg") == "site/uploads/2024/05/photo.jpg"

    @pytest.mark.parametrize(
        "prefix, relative_dir, filename",
        [
            ("/site/", "/2024/05/", "/photo.jpg"),
            ("site//uploads", "2024//05", "photo.jpg"),
            ("site/uploads/", "2024/05//", "photo.jpg"),
            ("//site", "./2024/05", "photo.jpg"),
        ],
    )
    def test_messy_separators_are_normalized(self, prefix, relative_dir, filename):
        """No leading slash, no doubled separators, whatever the input looks like."""
        key = map_to_key(prefix, relative_dir, filename)

        assert not key.startswith("/")
        assert not key.endswith("/")
        assert "//" not in key

    def test_root_level_asset(self):
        """An empty relative dir puts the file straight under the prefix."""
        assert map_to_key("site", "", "photo.jpg") == "site/photo.jpg"

    def test_empty_prefix(self):
        assert map_to_key("", "2024/05", "photo.jpg") == "2024/05/photo.jpg"

    def test_filename_may_be_omitted(self):
        """A full subpath can be passed as the directory alone."""
        assert map_to_key("site", "/2024/05/photo.jpg") == "site/2024/05/photo.jpg"
