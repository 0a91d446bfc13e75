from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from message_apps.database import get_db
from message_apps.exceptions import InvalidToken
from message_apps.models.user import User
from message_apps.repositories import (
    UserStore,
    UserRepository,
    FriendRequestRepository,
    MessageRepository,
)
from message_apps.services import (
    AuthService,
    FriendRequestService,
    MessagingService,
    UserService,
)

security = HTTPBearer(auto_error=False)

# Ids are INTEGER columns; larger values cannot be bound on every backend
MAX_ID = 2**31 - 1

def get_user_store(db: AsyncSession = Depends(get_db)) -> UserStore:
    return UserRepository(db)

def get_auth_service(users: UserStore = Depends(get_user_store)) -> AuthService:
    return AuthService(users)

def get_user_service(users: UserStore = Depends(get_user_store)) -> UserService:
    return UserService(users)

def get_friend_request_service(
    db: AsyncSession = Depends(get_db),
    users: UserStore = Depends(get_user_store)
) -> FriendRequestService:
    return FriendRequestService(FriendRequestRepository(db), users)

def get_messaging_service(
    db: AsyncSession = Depends(get_db),
    users: UserStore = Depends(get_user_store)
) -> MessagingService:
    return MessagingService(MessageRepository(db), users)

async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    if credentials is None:
        return None
    return credentials.credentials

async def get_current_username(
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> str:
    """Reject the request with 401 unless it carries a valid access token."""
    try:
        return auth_service.validate_access_token(token)
    except InvalidToken as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"}
        )

async def get_current_user(
    username: str = Depends(get_current_username),
    users: UserStore = Depends(get_user_store)
) -> Optional[User]:
    return await users.get_by_username(username)
