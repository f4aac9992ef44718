"""MongoDB-backed change tracker for uploaded files."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from cloudinary_uploader.exceptions import (
    ConfigurationError,
    FileSystemError,
    StorageError,
    TrackerCleanupError,
)
from cloudinary_uploader.models import UploadDecision, UploadRecord

logger = logging.getLogger(__name__)

COLLECTION_NAME = "sync"


def file_checksum(path: str | Path) -> str:
    """Return the hex SHA-1 digest of a file's bytes.

    Raises:
        FileSystemError: If the file cannot be read
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise FileSystemError(f"Cannot read {path}: {e}") from e
    return hashlib.sha1(data).hexdigest()


class ChangeTracker:
    """Stores the checksum of every uploaded file, keyed by public id.

    Example:
        tracker = ChangeTracker.connect("mongodb://localhost/cloudinary")
        record = tracker.lookup("css/default", "css/default.css")
        if tracker.decide("/tmp/css/default.css", record) is UploadDecision.SKIP:
            ...
    """

    def __init__(self, collection: Collection, client: MongoClient | None = None) -> None:
        self._col = collection
        self._client = client

    @classmethod
    def connect(cls, uri: str) -> ChangeTracker:
        """Connect to the database named in a mongodb:// URI.

        Raises:
            ConfigurationError: On a wrong scheme or a URI without database
            StorageError: If the server cannot be reached
        """
        parts = urlsplit(uri)
        if parts.scheme != "mongodb":
            raise ConfigurationError("Missing mongodb:// scheme in URI")
        db_name = parts.path.lstrip("/")
        if not db_name:
            raise ConfigurationError("No database name in mongodb URI")

        logger.debug(f"Connecting to database {parts.hostname}/{db_name}")
        try:
            client: MongoClient = MongoClient(uri)
            client.admin.command("ping")
        except PyMongoError as e:
            raise StorageError(f"Cannot connect to MongoDB: {e}") from e
        logger.debug("Connected")
        return cls(client[db_name][COLLECTION_NAME], client=client)

    def checksum(self, path: str | Path) -> str:
        return file_checksum(path)

    def lookup(self, public_id: str, alternate_public_id: str | None = None) -> UploadRecord | None:
        """Find the record stored under either form of a public id."""
        ids = [public_id]
        if alternate_public_id and alternate_public_id != public_id:
            ids.append(alternate_public_id)
        try:
            doc = self._col.find_one({"$or": [{"_id": i} for i in ids]})
        except PyMongoError as e:
            raise StorageError(f"Tracker lookup failed for {public_id}: {e}") from e
        return UploadRecord.from_document(doc) if doc else None

    def decide(self, path: str | Path, record: UploadRecord | None) -> UploadDecision:
        if record is None:
            return UploadDecision.NEW
        if self.checksum(path) == record.checksum:
            return UploadDecision.SKIP
        return UploadDecision.CHANGED

    def commit(
        self,
        public_id: str,
        metadata: dict[str, Any],
        was_change: bool,
        record_id: str | None = None,
    ) -> UploadRecord:
        """Store upload metadata for a public id.

        Args:
            public_id: Document key of a new record
            metadata: Upload response fields plus the checksum
            was_change: Update the existing record instead of inserting one
            record_id: Key the existing record was found under, when it
                differs from public_id

        Raises:
            StorageError: If the write fails or the record to update is gone
        """
        key = record_id if was_change and record_id else public_id
        record = UploadRecord(
            public_id=key,
            checksum=metadata["checksum"],
            version=metadata.get("version"),
            format=metadata.get("format"),
            resource_type=metadata.get("resource_type"),
            size=metadata.get("bytes", 0),
        )
        doc = record.to_document()
        try:
            if was_change:
                fields = {k: v for k, v in doc.items() if k != "_id"}
                result = self._col.update_one({"_id": key}, {"$set": fields})
            else:
                self._col.insert_one(doc)
        except PyMongoError as e:
            raise StorageError(f"Tracker write failed for {public_id}: {e}") from e
        if was_change and result.matched_count == 0:
            raise StorageError(f"Tracker write failed for {public_id}: no record under {key}")
        return record

    def remove(self, public_id: str) -> None:
        try:
            self._col.delete_one({"_id": public_id})
        except PyMongoError as e:
            logger.warning(f"{public_id}: deleted remotely but tracker entry remains: {e}")
            raise TrackerCleanupError(
                f"Can't remove entry from DB: {e}", public_id=public_id
            ) from e

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
