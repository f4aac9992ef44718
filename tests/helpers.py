"""Shared test helpers for cloudinary_uploader tests."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any


def upload_response(public_id: str, **overrides: Any) -> dict[str, Any]:
    """Build an upload endpoint JSON answer."""
    data = {
        "public_id": public_id,
        "version": 1369431906,
        "format": "png",
        "resource_type": "image",
        "bytes": 17,
    }
    data.update(overrides)
    return data


def resource_json(public_id: str, resource_type: str = "image") -> dict[str, Any]:
    """Build one entry of a listing response."""
    return {
        "public_id": public_id,
        "version": 1,
        "resource_type": resource_type,
        "bytes": 2048,
        "url": f"http://res.cloudinary.com/democloud/{resource_type}/upload/{public_id}",
        "secure_url": f"https://res.cloudinary.com/democloud/{resource_type}/upload/{public_id}",
    }


def sha1_of(path: Path) -> str:
    return hashlib.sha1(path.read_bytes()).hexdigest()
