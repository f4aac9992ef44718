"""Data models for the cloudinary_uploader library."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ResourceType(Enum):
    """Remote asset category, valued by its URL path segment."""

    IMAGE = "image"
    RAW = "raw"
    VIDEO = "video"
    PDF = "pdf"

    @property
    def segment(self) -> str:
        return self.value


class ResourceAction(Enum):
    """Delivery type of an uploaded resource."""

    UPLOAD = "upload"
    PRIVATE = "private"
    DOWNLOAD = "download"

    @classmethod
    def parse(cls, name: str) -> ResourceAction:
        """Return the action named ``name``.

        Raises:
            ValueError: If ``name`` is not a known action
        """
        for action in cls:
            if action.value == name:
                return action
        raise ValueError(f"Invalid resource action: {name}")

    def __str__(self) -> str:
        return self.value


class UploadDecision(Enum):
    """What the change tracker decided for a local file."""

    SKIP = "skip"
    NEW = "upload-new"
    CHANGED = "upload-changed"


@dataclass(frozen=True)
class UploadOptions:
    """Per-call upload options."""

    action: ResourceAction = ResourceAction.UPLOAD
    public_id: str | None = None


@dataclass(frozen=True)
class UploadRecord:
    """Change tracker entry for one public id."""

    public_id: str
    checksum: str
    version: int | str | None = None
    format: str | None = None
    resource_type: str | None = None
    size: int = 0

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> UploadRecord:
        return cls(
            public_id=doc["_id"],
            checksum=doc.get("checksum", ""),
            version=doc.get("version"),
            format=doc.get("format"),
            resource_type=doc.get("resource_type"),
            size=doc.get("bytes", 0),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "_id": self.public_id,
            "public_id": self.public_id,
            "version": self.version,
            "format": self.format,
            "resource_type": self.resource_type,
            "bytes": self.size,
            "checksum": self.checksum,
        }


@dataclass(frozen=True)
class UploadResult:
    """Result of uploading a single file."""

    file_path: Path
    status: str
    decision: UploadDecision = UploadDecision.NEW
    public_id: str | None = None
    version: int | str | None = None
    format: str | None = None
    size: int = 0

    @property
    def uploaded(self) -> bool:
        """True when the file was actually sent to the service."""
        return self.status in ("uploaded", "updated")


@dataclass(frozen=True)
class Resource:
    """An image or raw file stored on Cloudinary."""

    public_id: str
    version: int
    resource_type: str
    size: int
    url: str
    secure_url: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Resource:
        return cls(
            public_id=data["public_id"],
            version=data.get("version", 0),
            resource_type=data.get("resource_type", ""),
            size=data.get("bytes", 0),
            url=data.get("url", ""),
            secure_url=data.get("secure_url", ""),
        )


@dataclass(frozen=True)
class DerivedResource:
    """A transformation derived from an uploaded resource."""

    transformation: str
    format: str
    size: int
    id: str
    url: str
    secure_url: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> DerivedResource:
        return cls(
            transformation=data.get("transformation", ""),
            format=data.get("format", ""),
            size=data.get("bytes", 0),
            id=data.get("id", ""),
            url=data.get("url", ""),
            secure_url=data.get("secure_url", ""),
        )


@dataclass(frozen=True)
class ResourceDetails(Resource):
    """Full description of a single resource."""

    format: str = ""
    width: int = 0
    height: int = 0
    derived: list[DerivedResource] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ResourceDetails:
        return cls(
            public_id=data["public_id"],
            version=data.get("version", 0),
            resource_type=data.get("resource_type", ""),
            size=data.get("bytes", 0),
            url=data.get("url", ""),
            secure_url=data.get("secure_url", ""),
            format=data.get("format", ""),
            width=data.get("width", 0),
            height=data.get("height", 0),
            derived=[DerivedResource.from_json(d) for d in data.get("derived") or []],
        )
