"""
SubmissionRepository Interface

Repository pattern interface for submission persistence.
Defines the contract for the append-only customer and merchant collections.

Responsibility:
    - Define data access contract (interface)
    - Enable Dependency Inversion (Domain defines, Infrastructure implements)
    - Support testing (easy to mock)

Architecture Notes:
    - Protocol-based interface (structural typing)
    - Implementations: JSON file store, Redis document store
    - Uniqueness of email per collection is enforced by the implementation,
      not only by the caller's pre-check
"""

from typing import Optional, Protocol

from ..entities.submission import Submission, SubmissionKind


class SubmissionRepositoryProtocol(Protocol):
    """
    Protocol defining the contract for submission persistence.

    One collection exists per SubmissionKind. Records are created once by
    append() and destroyed only by delete_by_id(); there is no update.

    Implementation Notes:
        - append() must be the authoritative duplicate guard (unique index
          or compare-and-swap write), raising DuplicateSubmissionError
        - list_all() must observe every successful append() (no caching)
        - I/O failures are raised as StorageError
    """

    def append(self, kind: SubmissionKind, record: Submission) -> None:
        """
        Persist a new record in the collection for `kind`.

        Args:
            kind: Target collection
            record: Validated record with server-assigned id

        Raises:
            DuplicateSubmissionError: If the email already exists in the collection
            StorageError: If the write fails
        """
        ...

    def list_all(self, kind: SubmissionKind) -> list[Submission]:
        """
        Return every record in the collection, newest first.

        Raises:
            StorageError: If the read fails
        """
        ...

    def find_by_email(self, kind: SubmissionKind, email: str) -> Optional[Submission]:
        """
        Look up a record by normalized email.

        Returns:
            The record if present, None otherwise
        """
        ...

    def delete_by_id(self, kind: SubmissionKind, submission_id: str) -> bool:
        """
        Remove a record by id.

        Returns:
            True if a record was removed, False if the id was absent
        """
        ...

    def ping(self) -> bool:
        """
        Report storage connectivity for health checks. Never raises.
        """
        ...
