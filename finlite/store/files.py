"""File storage inside the database (upload and download by integer id)."""

import logging
from dataclasses import dataclass
from pathlib import Path

from finlite.domain.errors import RecordNotFoundError
from finlite.store.connection import connect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """Metadata of a stored file (contents excluded)."""

    id: int
    filename: str
    size: int
    uploaded_at: str


class FileStorage:
    """Binary files kept in the ``files`` table."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path

    def upload(self, file_id: int, source: Path) -> StoredFile:
        """Store a file under ``file_id``, replacing any file with that id.

        Args:
            file_id: Id to store the file under.
            source: File to read.

        Returns:
            Metadata of the stored file.

        Raises:
            FileNotFoundError: If ``source`` does not exist.
            StorageError: If database operation fails.
        """
        data = source.read_bytes()
        with connect(self.db_path, write=True) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO files (id, filename, data, size) VALUES (?, ?, ?, ?)",
                (file_id, source.name, data, len(data)),
            )
        logger.debug("upload file id=%s name=%s size=%d", file_id, source.name, len(data))
        stored = self.find_by_id(file_id)
        assert stored is not None
        return stored

    def download(self, file_id: int, target: Path, overwrite: bool = False) -> StoredFile:
        """Write a stored file to ``target``.

        Args:
            file_id: Id of the stored file.
            target: Destination path.
            overwrite: Replace ``target`` if it already exists.

        Returns:
            Metadata of the downloaded file.

        Raises:
            RecordNotFoundError: If no file has this id.
            FileExistsError: If ``target`` exists and overwrite is False.
            StorageError: If database operation fails.
        """
        with connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT id, filename, data, size, uploaded_at FROM files WHERE id = ?", (file_id,)
            ).fetchone()
        if row is None:
            raise RecordNotFoundError(f"File {file_id} not found")
        if target.exists() and not overwrite:
            raise FileExistsError(f"{target} already exists")

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(row["data"])
        logger.debug("download file id=%s to %s", file_id, target)
        return StoredFile(id=row["id"], filename=row["filename"], size=row["size"], uploaded_at=row["uploaded_at"])

    def find_by_id(self, file_id: int) -> StoredFile | None:
        """Get metadata for a stored file, or None if it does not exist."""
        with connect(self.db_path) as conn:
            row = conn.execute("SELECT id, filename, size, uploaded_at FROM files WHERE id = ?", (file_id,)).fetchone()
        return StoredFile(**dict(row)) if row else None

    def find_all(self) -> list[StoredFile]:
        """Get metadata for every stored file."""
        with connect(self.db_path) as conn:
            rows = conn.execute("SELECT id, filename, size, uploaded_at FROM files ORDER BY id").fetchall()
        return [StoredFile(**dict(row)) for row in rows]

    def delete(self, file_id: int) -> bool:
        """Delete a stored file. Returns False if the id is unknown."""
        with connect(self.db_path, write=True) as conn:
            return conn.execute("DELETE FROM files WHERE id = ?", (file_id,)).rowcount > 0
