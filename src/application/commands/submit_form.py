"""
SubmitFormCommand - CQRS Write Command

Validates, de-duplicates and persists one signup.

Process Flow:
    1. Intake Validator builds the sanitized record (or raises SubmissionValidationError)
    2. Deduplication fast path: find_by_email() in the target collection
    3. Repository append(), which re-checks uniqueness authoritatively
    4. Return the stored record; the caller schedules the notification

Architecture Notes:
    - Part of Application Layer (orchestration)
    - No HTTP concerns; rate limiting and body parsing happen in the API Layer
"""

import logging
from typing import Any

from pydantic import BaseModel, Field

from src.domain.shared.exceptions import DuplicateSubmissionError
from src.domain.signup.entities import Submission, SubmissionKind
from src.domain.signup.repositories import SubmissionRepositoryProtocol
from src.domain.signup.services import IntakeValidator

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "This email has already been registered."


class SubmitFormCommand(BaseModel):
    """
    Command carrying one raw signup payload.

    Attributes:
        kind: Declared form kind (already parsed from the "type" field)
        payload: Raw request body; unknown keys are ignored by the validator
    """

    kind: SubmissionKind = Field(description="Form kind: customer or merchant")
    payload: dict[str, Any] = Field(default_factory=dict, description="Raw form fields")


class SubmitFormCommandHandler:
    """
    Handler for SubmitFormCommand.

    Usage:
        handler = SubmitFormCommandHandler(repository)
        record = handler.handle(SubmitFormCommand(kind=SubmissionKind.CUSTOMER, payload=body))
    """

    def __init__(
        self,
        repository: SubmissionRepositoryProtocol,
        validator: IntakeValidator | None = None,
    ) -> None:
        self.repository = repository
        self.validator = validator or IntakeValidator()

    def handle(self, command: SubmitFormCommand) -> Submission:
        """
        Validate and store the submission.

        Returns:
            The stored record (with server-assigned id and submittedAt)

        Raises:
            SubmissionValidationError: Payload fails intake rules (nothing written)
            DuplicateSubmissionError: Email already in the collection (nothing written)
            StorageError: Persistence failure
        """
        record = self.validator.validate(command.kind, command.payload)

        if self.repository.find_by_email(command.kind, record.email) is not None:
            logger.info(f"Duplicate {command.kind.value} signup rejected")
            raise DuplicateSubmissionError(
                DUPLICATE_EMAIL_MESSAGE,
                collection=command.kind.collection,
                email=record.email,
            )

        self.repository.append(command.kind, record)
        logger.info(f"New {command.kind.value} submission stored: {record.id}")
        return record
