"""
ListSubmissionsQuery - CQRS Read Query

Returns every record of one collection, newest first.
"""

from pydantic import BaseModel

from src.domain.signup.entities import Submission, SubmissionKind
from src.domain.signup.repositories import SubmissionRepositoryProtocol


class ListSubmissionsQuery(BaseModel):
    """
    Attributes:
        kind: Collection to list
    """

    kind: SubmissionKind


class ListSubmissionsQueryHandler:
    """
    Handler for ListSubmissionsQuery.

    Reads straight from the repository on every call (no cache), so a
    successful submit is always visible to the next list.
    """

    def __init__(self, repository: SubmissionRepositoryProtocol) -> None:
        self.repository = repository

    def handle(self, query: ListSubmissionsQuery) -> list[Submission]:
        """
        Raises:
            StorageError: Persistence failure
        """
        return self.repository.list_all(query.kind)
