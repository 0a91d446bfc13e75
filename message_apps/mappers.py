"""Conversion between ORM rows and transfer objects.

Only public fields are copied: password hashes and refresh tokens never
leave the persistence layer. Timestamps are converted from stored UTC to
the server's local timezone.
"""
from typing import List, Optional

from message_apps.models import User, FriendRequest, Message
from message_apps.schemas.user import UserDto
from message_apps.schemas.friend_request import FriendRequestDto
from message_apps.schemas.message import MessageDto
from message_apps.utils.time_utils import to_local


def to_user_dto(user: Optional[User]) -> Optional[UserDto]:
    if user is None:
        return None
    return UserDto(
        user_id=user.user_id,
        username=user.username,
        email=user.email,
        status=user.status,
        created_at=to_local(user.created_at),
    )


def to_user_dtos(users: List[User]) -> List[UserDto]:
    return [to_user_dto(user) for user in users]


def to_friend_request_dto(request: FriendRequest) -> FriendRequestDto:
    return FriendRequestDto(
        request_id=request.request_id,
        sender=to_user_dto(request.sender),
        receiver=to_user_dto(request.receiver),
        status=request.status,
        created_at=to_local(request.created_at),
    )


def to_message_dto(message: Message) -> MessageDto:
    return MessageDto(
        message_id=message.message_id,
        sender=to_user_dto(message.sender),
        receiver=to_user_dto(message.receiver),
        message_text=message.message_text,
        is_read=bool(message.is_read),
        created_at=to_local(message.created_at),
    )
