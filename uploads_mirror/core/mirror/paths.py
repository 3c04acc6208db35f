"""
Local path enumeration for mirror operations.

Given what the host tells us about an asset, work out every file on disk
that belongs to it and the key each one goes under. Variants are always
siblings of the primary file; a variant name that tries to point
elsewhere is rejected instead of followed.
"""

import posixpath
from typing import Optional

from .keys import map_to_key
from .models import AssetMetadata, BucketTarget, MirrorFile, UploadRoot


class InvalidAssetPathError(ValueError):
    """Raised when an asset path would leave the uploads root."""
    pass


class InvalidVariantPathError(InvalidAssetPathError):
    """Raised when a size variant's filename is not a plain filename."""
    pass


def _join_local(base_dir: str, relative_path: str) -> str:
    return posixpath.join(base_dir, relative_path.lstrip("/"))


def _check_relative_path(relative_path: str) -> None:
    if ".." in relative_path.split("/"):
        raise InvalidAssetPathError(
            f"Asset path must stay inside the uploads root, got {relative_path!r}"
        )


def _check_variant_filename(filename: str) -> None:
    if not filename or "/" in filename or "\\" in filename or filename in (".", ".."):
        raise InvalidVariantPathError(
            f"Variant filename must be a plain filename, got {filename!r}"
        )


def enumerate_files(
    upload_root: UploadRoot,
    bucket_target: BucketTarget,
    asset: AssetMetadata,
) -> list[MirrorFile]:
    """
    List the files to mirror for one asset, primary first.

    Variants follow in the order the host supplied them. Returns an
    empty list when the asset has no primary file (nothing on disk).
    """
    if not asset.primary_relative_path:
        return []

    primary = asset.primary_relative_path.lstrip("/")
    _check_relative_path(primary)
    relative_dir = posixpath.dirname(primary)
    local_dir = _join_local(upload_root.base_dir, relative_dir)

    files = [
        MirrorFile(
            local_path=_join_local(upload_root.base_dir, primary),
            remote_key=map_to_key(
                bucket_target.key_prefix, relative_dir, posixpath.basename(primary)
            ),
        )
    ]

    for variant in asset.variants:
        filename = variant.relative_path.lstrip("/")
        _check_variant_filename(filename)
        files.append(
            MirrorFile(
                local_path=_join_local(local_dir, filename),
                remote_key=map_to_key(bucket_target.key_prefix, relative_dir, filename),
            )
        )

    # two size names can point at the same generated file
    return list(dict.fromkeys(files))


def resolve_delete_target(
    upload_root: UploadRoot,
    bucket_target: BucketTarget,
    local_path: str,
) -> Optional[MirrorFile]:
    """
    Map an absolute local path to the object it was mirrored to.

    Returns None for paths outside the uploads root; those were never
    mirrored. The subpath below the root becomes the key suffix as-is.
    """
    base_dir = posixpath.normpath(upload_root.base_dir)
    # ".." segments are resolved before the containment check
    normalized = posixpath.normpath(local_path) if local_path else ""
    if base_dir == "/":
        if not normalized.startswith("/"):
            return None
        subpath = normalized
    elif normalized.startswith(base_dir + "/"):
        subpath = normalized[len(base_dir):]
    else:
        return None

    remote_key = map_to_key(bucket_target.key_prefix, "", subpath)
    # the root itself is not a file
    if not remote_key or remote_key == map_to_key(bucket_target.key_prefix, ""):
        return None

    return MirrorFile(local_path=local_path, remote_key=remote_key)
