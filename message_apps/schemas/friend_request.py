from datetime import datetime
from typing import Optional

from message_apps.models.friend_request import FriendStatus
from .base import CamelModel
from .user import UserDto

class FriendRequestDto(CamelModel):
    request_id: int
    sender: UserDto
    receiver: UserDto
    status: FriendStatus
    created_at: Optional[datetime] = None
