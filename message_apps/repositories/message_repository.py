from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, and_, or_
from sqlalchemy.orm import joinedload

from message_apps.models.message import Message
from message_apps.utils.time_utils import utcnow
from .base import MessageStore, store_operation

class MessageRepository(MessageStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    @store_operation
    async def create(self, sender_id: int, receiver_id: int, text: str) -> Message:
        message = Message(
            sender_id=sender_id,
            receiver_id=receiver_id,
            message_text=text,
            is_read=False,
            created_at=utcnow()
        )
        self.db.add(message)
        await self.db.commit()
        await self.db.refresh(message)
        return message

    @store_operation
    async def find_chat_messages(self, from_user_id: int, to_user_id: int) -> List[Message]:
        """Messages between two users in either direction, oldest first."""
        result = await self.db.execute(
            select(Message).options(
                joinedload(Message.sender),
                joinedload(Message.receiver)
            ).where(
                or_(
                    and_(Message.sender_id == from_user_id, Message.receiver_id == to_user_id),
                    and_(Message.sender_id == to_user_id, Message.receiver_id == from_user_id)
                )
            ).order_by(Message.created_at.asc(), Message.message_id.asc())
        )
        return list(result.scalars().all())

    @store_operation
    async def delete_all(self) -> None:
        await self.db.execute(delete(Message))
        await self.db.commit()
