from .base import Base
from .user import User, UserStatus
from .friend_request import FriendRequest, FriendStatus
from .message import Message

__all__ = [
    "Base",
    "User",
    "UserStatus",
    "FriendRequest",
    "FriendStatus",
    "Message"
]
