"""
File Storage - GridFS buckets used as object storage.

Files are addressed by (bucket, path), where path is the GridFS filename
(e.g. "logos/12_1700000000000.png"). Public URLs point back at
GET /api/files/{bucket}/{path}, which streams the stored file.
"""

import logging
from typing import Iterable, Optional

from gridfs import GridOut
from gridfs.errors import NoFile

from utopia_hire.core.config import get_settings
from utopia_hire.db.mongodb import BUCKETS, get_bucket

logger = logging.getLogger(__name__)

settings = get_settings()


class FileStorage:

    def upload(self, bucket: str, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        """Store data under path (replacing any previous file) and return its public URL."""
        self.remove(bucket, [path])
        get_bucket(BUCKETS[bucket]).upload_from_stream(
            path, data, metadata={"content_type": content_type}
        )
        logger.info("Stored %s/%s (%d bytes)", bucket, path, len(data))
        return self.public_url(bucket, path)

    def remove(self, bucket: str, paths: Iterable[str]) -> int:
        """Delete every stored revision of each path. Returns the number of files removed."""
        fs = get_bucket(BUCKETS[bucket])
        removed = 0
        for path in paths:
            for grid_file in fs.find({"filename": path}):
                fs.delete(grid_file._id)
                removed += 1
        return removed

    def open(self, bucket: str, path: str) -> Optional[GridOut]:
        if bucket not in BUCKETS:
            return None
        try:
            return get_bucket(BUCKETS[bucket]).open_download_stream_by_name(path)
        except NoFile:
            return None

    def public_url(self, bucket: str, path: str) -> str:
        return f"{settings.public_base_url.rstrip('/')}/api/files/{bucket}/{path}"

    def path_from_url(self, bucket: str, url: Optional[str]) -> Optional[str]:
        """Inverse of public_url; None for URLs that are not ours."""
        prefix = self.public_url(bucket, "")
        if url and url.startswith(prefix):
            return url[len(prefix):]
        return None


# Singleton instance
_file_storage: FileStorage = None


def get_file_storage() -> FileStorage:
    """Get or create the file storage (singleton pattern)"""
    global _file_storage
    if _file_storage is None:
        _file_storage = FileStorage()
    return _file_storage
