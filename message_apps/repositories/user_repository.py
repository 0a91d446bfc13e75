from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, exists

from message_apps.models.user import User, UserStatus
from message_apps.utils.time_utils import utcnow
from .base import UserStore, store_operation

class UserRepository(UserStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    @store_operation
    async def create(self, username: str, email: str, password_hash: str) -> User:
        db_user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            status=UserStatus.OFFLINE,
            created_at=utcnow()
        )
        self.db.add(db_user)
        await self.db.commit()
        await self.db.refresh(db_user)
        return db_user

    @store_operation
    async def get_by_id(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.user_id == user_id))
        return result.scalar_one_or_none()

    @store_operation
    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    @store_operation
    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    @store_operation
    async def get_by_refresh_token(self, refresh_token: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.refresh_token == refresh_token))
        return result.scalar_one_or_none()

    @store_operation
    async def exists_by_username(self, username: str) -> bool:
        result = await self.db.execute(select(exists().where(User.username == username)))
        return bool(result.scalar())

    @store_operation
    async def exists_by_email(self, email: str) -> bool:
        result = await self.db.execute(select(exists().where(User.email == email)))
        return bool(result.scalar())

    @store_operation
    async def set_refresh_token(self, user: User, refresh_token: Optional[str]) -> User:
        # Overwrites unconditionally; concurrent logins are last-write-wins
        user.refresh_token = refresh_token
        await self.db.commit()
        await self.db.refresh(user)
        return user

    @store_operation
    async def rotate_refresh_token(self, old_token: str, new_token: str) -> bool:
        """Swap ``old_token`` for ``new_token`` only if it is still the stored one."""
        result = await self.db.execute(
            update(User)
            .where(User.refresh_token == old_token)
            .values(refresh_token=new_token)
        )
        await self.db.commit()
        return result.rowcount == 1

    @store_operation
    async def delete_all(self) -> None:
        await self.db.execute(delete(User))
        await self.db.commit()
