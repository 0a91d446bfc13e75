from .auth_service import AuthService, TokenPair
from .friend_request_service import FriendRequestService
from .messaging_service import MessagingService
from .user_service import UserService

__all__ = [
    "AuthService",
    "TokenPair",
    "FriendRequestService",
    "MessagingService",
    "UserService"
]
