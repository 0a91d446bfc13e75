from .base import UserStore, FriendRequestStore, MessageStore
from .user_repository import UserRepository
from .friend_request_repository import FriendRequestRepository
from .message_repository import MessageRepository

__all__ = [
    "UserStore",
    "FriendRequestStore",
    "MessageStore",
    "UserRepository",
    "FriendRequestRepository",
    "MessageRepository"
]
