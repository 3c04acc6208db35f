"""
Remote key derivation.

Two pure functions: one parses the configured bucket path once at
startup, the other turns path pieces into a normalized object key.
"""

from .models import BucketTarget


def resolve_bucket_target(config_path: str) -> BucketTarget:
    """
    Split a configured `bucket[/key/prefix]` string.

    The first segment is the bucket, the rest is the prefix. An empty
    bucket is passed through as-is; the object store rejects it.
    """
    bucket, _, prefix = (config_path or "").partition("/")
    return BucketTarget(bucket=bucket, key_prefix=prefix)


def map_to_key(prefix: str, relative_dir: str, filename: str = "") -> str:
    """
    Join key pieces into a normalized object key.

    Leading, trailing and doubled separators are dropped, as are "."
    segments, so "" for relative_dir behaves like a root-level asset.
    """
    segments = []
    for part in (prefix, relative_dir, filename):
        segments.extend(
            segment for segment in (part or "").split("/")
            if segment and segment != "."
        )
    return "/".join(segments)
