"""Public id derivation from local file paths."""

from __future__ import annotations

import os
from urllib.parse import urlsplit


def ensure_trailing_slash(dirname: str) -> str:
    """Add a missing trailing / at the end of a directory name."""
    if not dirname.endswith("/"):
        dirname += "/"
    return dirname


def is_remote(path: str | os.PathLike[str]) -> bool:
    """Check if path is an http(s) location the service can fetch itself."""
    return str(path).startswith(("http://", "https://"))


def public_id_from_url(url: str) -> str:
    """Return the last path segment of a remote URL, without query string."""
    return os.path.basename(urlsplit(url).path)


def derive_public_id(
    path: str | os.PathLike[str],
    base_path: str | os.PathLike[str] | None = None,
    prepend_path: str = "",
) -> str:
    """Compute the remote public id of a local file.

    With a base path, the id is the file path relative to it. Without one
    (None), the id is the parent directory name plus the file name. The
    extension is always dropped and separators become slashes.

    Example:
        derive_public_id("/tmp/css/default.css", "/tmp/", "new")
        -> "new/css/default"

    Args:
        path: Local file path
        base_path: Directory the id is relative to; "" resolves to the
            current working directory like any relative path
        prepend_path: Optional remote prefix

    Returns:
        The slash-separated public id
    """
    path = os.path.abspath(str(path).strip())
    prepend_path = prepend_path.strip()

    if base_path is None:
        head, tail = os.path.split(path)
        name = os.path.join(os.path.basename(head), tail)
    else:
        base = os.path.abspath(str(base_path).strip())
        if path == base or path.startswith(base.rstrip(os.sep) + os.sep):
            name = path[len(base):]
        else:
            name = path
        name = name.lstrip(os.sep)

    if prepend_path:
        prepend_path = ensure_trailing_slash(prepend_path.lstrip(os.sep))

    stem, _ = os.path.splitext(name)
    return (prepend_path + stem).replace(os.sep, "/")
