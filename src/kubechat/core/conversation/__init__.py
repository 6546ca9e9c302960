from .log import ConversationLog
from .schemas import Message, MessageKind, Sender

__all__ = ["ConversationLog", "Message", "MessageKind", "Sender"]
