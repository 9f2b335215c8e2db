"""
DeleteSubmissionCommand - CQRS Write Command

Administrative delete of one record by id. The only way a record is
destroyed; there is no update operation.
"""

import logging

from pydantic import BaseModel, Field

from src.domain.shared.exceptions import SubmissionNotFoundError
from src.domain.signup.entities import SubmissionKind
from src.domain.signup.repositories import SubmissionRepositoryProtocol

logger = logging.getLogger(__name__)


class DeleteSubmissionCommand(BaseModel):
    """
    Attributes:
        kind: Collection to delete from
        submission_id: Server-assigned record id
    """

    kind: SubmissionKind
    submission_id: str = Field(min_length=1)


class DeleteSubmissionCommandHandler:
    """Handler for DeleteSubmissionCommand."""

    def __init__(self, repository: SubmissionRepositoryProtocol) -> None:
        self.repository = repository

    def handle(self, command: DeleteSubmissionCommand) -> None:
        """
        Delete the record.

        Raises:
            SubmissionNotFoundError: "Customer not found" / "Merchant not found"
            StorageError: Persistence failure
        """
        removed = self.repository.delete_by_id(command.kind, command.submission_id)
        if not removed:
            raise SubmissionNotFoundError(
                f"{command.kind.label} not found",
                collection=command.kind.collection,
                submission_id=command.submission_id,
            )
        logger.info(f"Admin deleted {command.kind.value} {command.submission_id}")
