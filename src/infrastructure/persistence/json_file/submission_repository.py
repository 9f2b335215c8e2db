"""
JSON File Submission Repository

File-backed implementation of SubmissionRepositoryProtocol.
Each collection is a JSON array stored in its own file under DATA_DIR.

Responsibility:
    - Store customer/merchant records in <DATA_DIR>/<collection>.json
    - Serialize every read-modify-write per collection (threading.Lock)
    - Atomic writes (write to .tmp, fsync, then os.replace)
    - Enforce email uniqueness inside the critical section

Architecture Notes:
    - Infrastructure Layer (implements Domain interface)
    - Thread-per-request safe within one process; not safe across processes
    - No caching: every list_all() reads the file

Storage Layout:
    data/
    ├── customers.json   # [{"id": ..., "name": ..., "submittedAt": ...}, ...]
    └── merchants.json   # [{"id": ..., "businessName": ..., ...}, ...]

    Records are stored in insertion order; list_all() returns them reversed
    (newest first).
"""

import contextlib
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Optional

from src.domain.shared.exceptions import DuplicateSubmissionError
from src.domain.signup.entities import Submission, SubmissionKind, submission_from_dict
from src.infrastructure.exceptions import StorageError

# Configure logger for this module
logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "This email has already been registered."


class JsonFileSubmissionRepository:
    """
    File-backed repository with one JSON array per collection.

    Examples:
        >>> repo = JsonFileSubmissionRepository(data_dir="/tmp/snapshop")
        >>> repo.append(SubmissionKind.CUSTOMER, record)
        >>> repo.list_all(SubmissionKind.CUSTOMER)[0].id == record.id
        True
    """

    def __init__(self, data_dir: Optional[str] = None) -> None:
        """
        Initialize repository and create empty collections if missing.

        Args:
            data_dir: Directory for collection files (default from env: DATA_DIR)

        Raises:
            StorageError: If the data directory or initial files cannot be created
        """
        self.data_dir = Path(data_dir or os.getenv("DATA_DIR", "./data"))
        self._locks: dict[SubmissionKind, threading.Lock] = {
            kind: threading.Lock() for kind in SubmissionKind
        }

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Cannot create data directory {self.data_dir}", original_error=e
            )

        for kind in SubmissionKind:
            path = self._get_collection_path(kind)
            if not path.exists():
                self._atomic_write(path, [])
                logger.info(f"Initialized empty collection file: {path}")

    def _get_collection_path(self, kind: SubmissionKind) -> Path:
        """
        Path of the JSON file for a collection.

        Examples:
            >>> repo._get_collection_path(SubmissionKind.MERCHANT)
            PosixPath('data/merchants.json')
        """
        return self.data_dir / f"{kind.collection}.json"

    def _read_raw(self, kind: SubmissionKind) -> list[dict[str, Any]]:
        path = self._get_collection_path(kind)
        if not path.exists():
            return []

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read collection {path}: {e}", exc_info=True)
            raise StorageError(f"Cannot read collection {kind.collection}", original_error=e)

        if not isinstance(data, list):
            raise StorageError(
                f"Collection {kind.collection} is corrupt: expected a JSON array"
            )
        return data

    def _atomic_write(self, path: Path, records: list[dict[str, Any]]) -> None:
        """
        Rewrite a collection file atomically.

        The file is either fully written or left untouched: data goes to
        "{path}.tmp" first and is then renamed over the original.

        Raises:
            StorageError: If the temp file cannot be written or renamed
        """
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            logger.error(f"Failed to write collection {path}: {e}", exc_info=True)
            raise StorageError(f"Cannot write collection {path.name}", original_error=e)

        logger.debug(f"Atomic write: {len(records)} records to {path}")

    def _to_records(self, kind: SubmissionKind, raw: list[dict[str, Any]]) -> list[Submission]:
        try:
            return [submission_from_dict(kind, item) for item in raw]
        except (KeyError, TypeError) as e:
            raise StorageError(
                f"Collection {kind.collection} contains a malformed record",
                original_error=e,
            )

    def append(self, kind: SubmissionKind, record: Submission) -> None:
        """
        Append a record, re-checking email uniqueness under the collection lock.

        Raises:
            DuplicateSubmissionError: If the email already exists in the collection
            StorageError: If the file cannot be read or written
        """
        path = self._get_collection_path(kind)
        with self._locks[kind]:
            raw = self._read_raw(kind)
            if any(item.get("email") == record.email for item in raw):
                raise DuplicateSubmissionError(
                    DUPLICATE_EMAIL_MESSAGE, collection=kind.collection, email=record.email
                )
            raw.append(record.to_dict())
            self._atomic_write(path, raw)

        logger.info(f"Stored {kind.value} {record.id} ({len(raw)} in {kind.collection})")

    def list_all(self, kind: SubmissionKind) -> list[Submission]:
        """Return all records of the collection, newest first."""
        raw = self._read_raw(kind)
        return list(reversed(self._to_records(kind, raw)))

    def find_by_email(self, kind: SubmissionKind, email: str) -> Optional[Submission]:
        """Return the record with this normalized email, or None."""
        for item in self._read_raw(kind):
            if item.get("email") == email:
                return self._to_records(kind, [item])[0]
        return None

    def delete_by_id(self, kind: SubmissionKind, submission_id: str) -> bool:
        """
        Delete a record by id.

        Returns:
            True if removed, False if no record had this id (file untouched)
        """
        path = self._get_collection_path(kind)
        with self._locks[kind]:
            raw = self._read_raw(kind)
            remaining = [item for item in raw if item.get("id") != submission_id]
            if len(remaining) == len(raw):
                return False
            self._atomic_write(path, remaining)

        logger.info(f"Deleted {kind.value} {submission_id}")
        return True

    def ping(self) -> bool:
        """Data directory exists and is writable."""
        return self.data_dir.is_dir() and os.access(self.data_dir, os.W_OK)
