import functools
import logging
from abc import ABC, abstractmethod
from typing import Optional, List

from sqlalchemy.exc import SQLAlchemyError

from message_apps.exceptions import StoreError
from message_apps.models import User, FriendRequest, FriendStatus, Message

logger = logging.getLogger(__name__)


def store_operation(func):
    """Roll back and re-raise database failures as StoreError."""
    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"{type(self).__name__}.{func.__name__} failed: {e}", exc_info=True)
            await self.db.rollback()
            raise StoreError() from e
    return wrapper


class UserStore(ABC):
    @abstractmethod
    async def create(self, username: str, email: str, password_hash: str) -> User: ...

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    async def get_by_refresh_token(self, refresh_token: str) -> Optional[User]: ...

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool: ...

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool: ...

    @abstractmethod
    async def set_refresh_token(self, user: User, refresh_token: Optional[str]) -> User: ...

    @abstractmethod
    async def rotate_refresh_token(self, old_token: str, new_token: str) -> bool: ...

    @abstractmethod
    async def delete_all(self) -> None: ...


class FriendRequestStore(ABC):
    @abstractmethod
    async def create(self, sender_id: int, receiver_id: int) -> FriendRequest: ...

    @abstractmethod
    async def get_by_id(self, request_id: int) -> Optional[FriendRequest]: ...

    @abstractmethod
    async def exists_by_sender_and_receiver(self, sender_id: int, receiver_id: int) -> bool: ...

    @abstractmethod
    async def get_by_receiver(self, receiver_id: int) -> List[FriendRequest]: ...

    @abstractmethod
    async def update_status(self, request: FriendRequest, status: FriendStatus) -> FriendRequest: ...

    @abstractmethod
    async def find_accepted_friends(self, user_id: int) -> List[User]: ...

    @abstractmethod
    async def delete_all(self) -> None: ...


class MessageStore(ABC):
    @abstractmethod
    async def create(self, sender_id: int, receiver_id: int, text: str) -> Message: ...

    @abstractmethod
    async def find_chat_messages(self, from_user_id: int, to_user_id: int) -> List[Message]: ...

    @abstractmethod
    async def delete_all(self) -> None: ...
