from typing import Optional

from message_apps.models import User
from message_apps.repositories.base import UserStore

class UserService:
    def __init__(self, users: UserStore):
        self.users = users

    async def find(self, query: str) -> Optional[User]:
        """Look a user up by username, falling back to email."""
        user = await self.users.get_by_username(query)
        if user is None:
            user = await self.users.get_by_email(query)
        return user
