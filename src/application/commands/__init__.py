"""
Application Commands (CQRS write side).
"""

from src.application.commands.delete_submission import (
    DeleteSubmissionCommand,
    DeleteSubmissionCommandHandler,
)
from src.application.commands.submit_form import (
    SubmitFormCommand,
    SubmitFormCommandHandler,
)

__all__ = [
    "SubmitFormCommand",
    "SubmitFormCommandHandler",
    "DeleteSubmissionCommand",
    "DeleteSubmissionCommandHandler",
]
