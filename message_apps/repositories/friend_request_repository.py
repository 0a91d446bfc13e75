from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, exists, union, and_
from sqlalchemy.orm import joinedload

from message_apps.models.friend_request import FriendRequest, FriendStatus
from message_apps.models.user import User
from message_apps.utils.time_utils import utcnow
from .base import FriendRequestStore, store_operation

class FriendRequestRepository(FriendRequestStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    @store_operation
    async def create(self, sender_id: int, receiver_id: int) -> FriendRequest:
        request = FriendRequest(
            sender_id=sender_id,
            receiver_id=receiver_id,
            status=FriendStatus.PENDING,
            created_at=utcnow()
        )
        self.db.add(request)
        await self.db.commit()
        await self.db.refresh(request)
        return request

    @store_operation
    async def get_by_id(self, request_id: int) -> Optional[FriendRequest]:
        result = await self.db.execute(
            select(FriendRequest).options(
                joinedload(FriendRequest.sender),
                joinedload(FriendRequest.receiver)
            ).where(FriendRequest.request_id == request_id)
        )
        return result.scalar_one_or_none()

    @store_operation
    async def exists_by_sender_and_receiver(self, sender_id: int, receiver_id: int) -> bool:
        result = await self.db.execute(
            select(exists().where(
                and_(
                    FriendRequest.sender_id == sender_id,
                    FriendRequest.receiver_id == receiver_id
                )
            ))
        )
        return bool(result.scalar())

    @store_operation
    async def get_by_receiver(self, receiver_id: int) -> List[FriendRequest]:
        result = await self.db.execute(
            select(FriendRequest).options(
                joinedload(FriendRequest.sender),
                joinedload(FriendRequest.receiver)
            ).where(FriendRequest.receiver_id == receiver_id)
            .order_by(FriendRequest.created_at.asc(), FriendRequest.request_id.asc())
        )
        return list(result.scalars().all())

    @store_operation
    async def update_status(self, request: FriendRequest, status: FriendStatus) -> FriendRequest:
        request.status = status
        await self.db.commit()
        await self.db.refresh(request)
        return request

    @store_operation
    async def find_accepted_friends(self, user_id: int) -> List[User]:
        """Other party of every accepted request, whichever side sent it."""
        accepted_by_them = select(FriendRequest.receiver_id.label("friend_id")).where(
            and_(
                FriendRequest.sender_id == user_id,
                FriendRequest.status == FriendStatus.ACCEPTED
            )
        )
        accepted_by_me = select(FriendRequest.sender_id.label("friend_id")).where(
            and_(
                FriendRequest.receiver_id == user_id,
                FriendRequest.status == FriendStatus.ACCEPTED
            )
        )
        friend_ids = union(accepted_by_them, accepted_by_me).subquery()

        result = await self.db.execute(
            select(User)
            .where(User.user_id.in_(select(friend_ids.c.friend_id)))
            .order_by(User.username.asc())
        )
        return list(result.scalars().all())

    @store_operation
    async def delete_all(self) -> None:
        await self.db.execute(delete(FriendRequest))
        await self.db.commit()
