from .controller import ApprovalController
from .destructive import classify_command, is_destructive
from .schemas import Classification, PendingCommand, Phase

__all__ = ["ApprovalController", "Classification", "PendingCommand", "Phase", "classify_command", "is_destructive"]
