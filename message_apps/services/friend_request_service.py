import logging
from typing import List

from message_apps.models import FriendRequest, FriendStatus, User
from message_apps.repositories.base import FriendRequestStore, UserStore

# Configure logging for this module
logger = logging.getLogger(__name__)

class FriendRequestService:
    def __init__(self, requests: FriendRequestStore, users: UserStore):
        self.requests = requests
        self.users = users

    async def list_for_user(self, user_id: int) -> List[FriendRequest]:
        """Requests received by the user. Outgoing requests are not included."""
        return await self.requests.get_by_receiver(user_id)

    async def send(self, from_user_id: int, to_user_id: int) -> bool:
        """
        Send a friend request.

        Returns False when a request for this exact sender/receiver pair
        already exists, whatever its status, or when either user is unknown.
        """
        if await self.requests.exists_by_sender_and_receiver(from_user_id, to_user_id):
            logger.info(f"Friend request {from_user_id} -> {to_user_id} already exists")
            return False

        if await self.users.get_by_id(from_user_id) is None or await self.users.get_by_id(to_user_id) is None:
            logger.warning(f"Friend request {from_user_id} -> {to_user_id} references an unknown user")
            return False

        request = await self.requests.create(from_user_id, to_user_id)
        logger.info(f"Friend request {request.request_id} sent: {from_user_id} -> {to_user_id}")
        return True

    async def accept(self, request_id: int) -> bool:
        return await self._set_status(request_id, FriendStatus.ACCEPTED)

    async def reject(self, request_id: int) -> bool:
        return await self._set_status(request_id, FriendStatus.REJECTED)

    async def accepted_friends_of(self, user_id: int) -> List[User]:
        return await self.requests.find_accepted_friends(user_id)

    async def _set_status(self, request_id: int, status: FriendStatus) -> bool:
        request = await self.requests.get_by_id(request_id)
        if request is None:
            logger.info(f"Friend request {request_id} not found")
            return False

        # Any transition is allowed, including out of a resolved state
        if request.status != FriendStatus.PENDING:
            logger.warning(
                f"Friend request {request_id} moved from {request.status.value} to {status.value}"
            )

        await self.requests.update_status(request, status)
        logger.info(f"Friend request {request_id} {status.value.lower()}")
        return True
