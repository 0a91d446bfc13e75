import logging
from typing import NamedTuple, Optional

from jose import JWTError

from message_apps.auth import (
    create_access_token,
    dummy_verify,
    extract_username,
    generate_refresh_token,
    get_password_hash,
    validate_token,
    verify_password,
)
from message_apps.exceptions import (
    AuthenticationError,
    EmailTaken,
    InvalidCredentials,
    InvalidRefreshToken,
    InvalidToken,
    UsernameTaken,
)
from message_apps.models import User
from message_apps.repositories.base import UserStore

logger = logging.getLogger(__name__)


class TokenPair(NamedTuple):
    access_token: str
    refresh_token: str


def _mask(token: str) -> str:
    return f"{token[:8]}..." if token else "<empty>"


class AuthService:
    """
    Credential checks and token issuance.

    Each user holds at most one refresh token. Logging in overwrites it and
    redeeming it replaces it, so a refresh token can be used exactly once.
    """

    def __init__(self, users: UserStore):
        self.users = users

    async def login(self, username: str, password: str) -> TokenPair:
        """
        Check credentials and start a new session.

        Raises:
            InvalidCredentials: unknown username or wrong password
            AuthenticationError: anything else going wrong during the check
        """
        try:
            user = await self.users.get_by_username(username)
            if user is None:
                dummy_verify()
                raise InvalidCredentials()
            if not verify_password(password, user.password_hash):
                raise InvalidCredentials()
        except InvalidCredentials:
            logger.warning(f"Login failed for username: {username}")
            raise
        except Exception as e:
            logger.error(f"Unexpected error authenticating {username}: {e}", exc_info=True)
            raise AuthenticationError() from e

        tokens = self._issue_tokens(user.username)
        await self.users.set_refresh_token(user, tokens.refresh_token)
        logger.info(f"User {username} logged in successfully")
        return tokens

    async def register(self, username: str, email: str, password: str) -> User:
        if await self.users.exists_by_username(username):
            logger.warning(f"Registration failed: username already exists: {username}")
            raise UsernameTaken()
        if await self.users.exists_by_email(email):
            logger.warning(f"Registration failed: email already exists: {email}")
            raise EmailTaken()

        user = await self.users.create(username, email, get_password_hash(password))
        logger.info(f"User registered successfully with ID: {user.user_id}")
        return user

    def validate_access_token(self, token: Optional[str]) -> str:
        """Return the username carried by a valid access token."""
        if not token:
            raise InvalidToken()
        try:
            username = extract_username(token)
        except JWTError as e:
            logger.info(f"Rejected access token {_mask(token)}: {e}")
            raise InvalidToken() from e
        if not username or not validate_token(token, username):
            raise InvalidToken()
        return username

    async def current_user(self, token: Optional[str]) -> Optional[User]:
        username = self.validate_access_token(token)
        return await self.users.get_by_username(username)

    async def refresh_session(self, refresh_token: Optional[str]) -> TokenPair:
        if not refresh_token:
            raise InvalidRefreshToken()

        user = await self.users.get_by_refresh_token(refresh_token)
        if user is None:
            logger.warning(f"Refresh failed: unknown refresh token {_mask(refresh_token)}")
            raise InvalidRefreshToken()

        tokens = self._issue_tokens(user.username)
        # Conditional swap: a concurrent redemption of the same token loses
        if not await self.users.rotate_refresh_token(refresh_token, tokens.refresh_token):
            logger.warning(f"Refresh failed: token {_mask(refresh_token)} already rotated")
            raise InvalidRefreshToken()

        logger.info(f"Token refreshed for user: {user.username}")
        return tokens

    @staticmethod
    def _issue_tokens(username: str) -> TokenPair:
        return TokenPair(
            access_token=create_access_token(data={"sub": username}),
            refresh_token=generate_refresh_token()
        )
