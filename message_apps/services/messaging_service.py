import logging
from typing import List

from message_apps.models import Message
from message_apps.repositories.base import MessageStore, UserStore

logger = logging.getLogger(__name__)

class MessagingService:
    def __init__(self, messages: MessageStore, users: UserStore):
        self.messages = messages
        self.users = users

    async def send_message(self, from_user_id: int, to_user_id: int, text: str) -> bool:
        """Store a direct message. Users do not need to be friends."""
        sender = await self.users.get_by_id(from_user_id)
        receiver = await self.users.get_by_id(to_user_id)
        if sender is None or receiver is None:
            logger.warning(f"Message {from_user_id} -> {to_user_id} dropped: unknown user")
            return False

        message = await self.messages.create(sender.user_id, receiver.user_id, text)
        logger.debug(f"Message {message.message_id} stored: {from_user_id} -> {to_user_id}")
        return True

    async def chat_history(self, user_a: int, user_b: int) -> List[Message]:
        return await self.messages.find_chat_messages(user_a, user_b)
