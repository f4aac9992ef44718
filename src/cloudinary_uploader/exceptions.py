"""Exception hierarchy for the cloudinary_uploader library."""

from __future__ import annotations


class CloudinaryError(Exception):
    """Base exception for all cloudinary_uploader errors."""

    pass


class ConfigurationError(CloudinaryError):
    """Raised on a bad connection URI, missing credential or bad config file."""

    pass


class FileSystemError(CloudinaryError):
    """Raised when a local file or directory cannot be read."""

    pass


class NetworkError(CloudinaryError):
    """Raised when the HTTP transport fails."""

    pass


class RemoteRejectionError(CloudinaryError):
    """Raised when the service answers with a non-success status.

    The status_code and body attributes carry the raw response.
    """

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class UploadError(RemoteRejectionError):
    """Raised when the upload endpoint rejects a file."""

    pass


class DecodeError(CloudinaryError):
    """Raised when a response body is not the expected JSON."""

    pass


class StorageError(CloudinaryError):
    """Raised when the change tracker cannot be reached or written."""

    pass


class TrackerCleanupError(StorageError):
    """Raised when a remote delete succeeded but the tracker entry was not removed.

    The remote resource is gone; the stale record is left in the tracker.
    """

    def __init__(self, message: str, public_id: str) -> None:
        super().__init__(message)
        self.public_id = public_id
