from datetime import datetime
from typing import Optional

from .base import CamelModel
from .user import UserDto

class MessageDto(CamelModel):
    message_id: int
    sender: UserDto
    receiver: UserDto
    message_text: str
    is_read: bool = False
    created_at: Optional[datetime] = None
