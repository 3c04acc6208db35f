"""
Domain models for the uploads mirror.

These are plain values describing what gets mirrored and where. Nothing
here knows about boto3, HTTP, or the host content system's dispatch;
the host's payloads are translated into these at the edges.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class UploadRoot:
    """
    Where the host keeps uploads on disk and how it serves them.

    Built once at startup and handed to the engine. base_dir never
    carries a trailing separator so prefix checks stay simple.
    """
    base_dir: str
    base_url: str
    override_base_url: Optional[str] = None

    def __post_init__(self) -> None:
        stripped = self.base_dir.rstrip("/") or "/"
        object.__setattr__(self, "base_dir", stripped)


@dataclass(frozen=True)
class BucketTarget:
    """Remote destination: bucket name plus the key prefix for every object."""
    bucket: str
    key_prefix: str = ""


@dataclass(frozen=True)
class SizeVariant:
    """A derived size of an asset, stored next to the primary file."""
    name: str
    relative_path: str


@dataclass(frozen=True)
class AssetMetadata:
    """
    One logical asset as reported by the host.

    primary_relative_path is relative to the uploads root. Variant paths
    are bare filenames living in the primary file's directory.
    """
    primary_relative_path: Optional[str] = None
    variants: tuple[SizeVariant, ...] = ()

    @classmethod
    def from_host(cls, payload: Mapping[str, Any]) -> "AssetMetadata":
        """
        Build from the host's attachment metadata.

        Expected shape: {"file": "2024/05/a.jpg", "sizes": {"thumb": {"file": "a-150x150.jpg"}}}.
        Size order is preserved; entries without a file are skipped. A file
        that is not a string, or sizes that are not a mapping, count as absent.
        """
        sizes = payload.get("sizes")
        if not isinstance(sizes, Mapping):
            sizes = {}
        variants = tuple(
            SizeVariant(name=str(name), relative_path=meta["file"])
            for name, meta in sizes.items()
            if isinstance(meta, Mapping) and isinstance(meta.get("file"), str) and meta["file"]
        )
        primary = payload.get("file")
        if not isinstance(primary, str) or not primary:
            primary = None
        return cls(primary_relative_path=primary, variants=variants)


@dataclass(frozen=True)
class MirrorFile:
    """A single file to sync: local bytes and the key they belong under."""
    local_path: str
    remote_key: str


@dataclass(frozen=True)
class MirrorFailure:
    """A file that could not be transferred, with the reason."""
    file: MirrorFile
    error: str


@dataclass
class MirrorResult:
    """
    Outcome of one mirror operation.

    Always returned, never raised. Callers use it for logging and
    metrics; it never changes what the host sees.
    """
    succeeded: set[MirrorFile] = field(default_factory=set)
    failed: list[MirrorFailure] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "MirrorResult":
        return cls()

    @property
    def attempted(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass(frozen=True)
class UploadDirs:
    """
    The host's upload-location tuple used when it builds public URLs.

    Only url and baseurl are ever rewritten; path and basedir point at
    the local filesystem and stay as the host reported them.
    """
    path: Optional[str] = None
    basedir: Optional[str] = None
    baseurl: Optional[str] = None
    url: Optional[str] = None
