"""Write-side commands over portal records."""

from medportal.application.commands.access import require_admin, require_authenticated
from medportal.application.commands.help_request_commands import (
    DeleteHelpRequestCommand,
    SubmitHelpRequestCommand,
    UpdateHelpRequestStatusCommand,
)
from medportal.application.commands.join_queue_command import JoinQueueCommand
from medportal.application.commands.review_command import SubmitReviewCommand

__all__ = [
    "DeleteHelpRequestCommand",
    "JoinQueueCommand",
    "SubmitHelpRequestCommand",
    "SubmitReviewCommand",
    "UpdateHelpRequestStatusCommand",
    "require_admin",
    "require_authenticated",
]
