from datetime import timedelta

import pytest
from jose import jwt
from sqlalchemy import func, select

from message_apps.auth import create_access_token, verify_password
from message_apps.exceptions import (
    AuthenticationError,
    EmailTaken,
    InvalidCredentials,
    InvalidRefreshToken,
    InvalidToken,
    StoreError,
    UsernameTaken,
)
from message_apps.models import User, UserStatus
from message_apps.repositories import UserRepository
from message_apps.services import AuthService
from message_apps.utils.time_utils import utcnow


async def test_register_hashes_password_and_sets_defaults(alice):
    assert alice.user_id is not None
    assert alice.password_hash != "password123"
    assert verify_password("password123", alice.password_hash)
    assert alice.status == UserStatus.OFFLINE
    assert alice.created_at is not None
    assert alice.refresh_token is None


async def test_register_duplicate_username(auth_service, db, alice):
    with pytest.raises(UsernameTaken):
        await auth_service.register("alice", "other@example.com", "secret")

    count = await db.scalar(select(func.count()).select_from(User).where(User.username == "alice"))
    assert count == 1


async def test_register_duplicate_email(auth_service, alice):
    with pytest.raises(EmailTaken):
        await auth_service.register("alice2", "alice@example.com", "secret")


async def test_login_issues_tokens_for_user(auth_service, user_repo, alice):
    tokens = await auth_service.login("alice", "password123")

    assert auth_service.validate_access_token(tokens.access_token) == "alice"
    stored = await user_repo.get_by_username("alice")
    assert stored.refresh_token == tokens.refresh_token


async def test_login_again_replaces_refresh_token(auth_service, alice):
    first = await auth_service.login("alice", "password123")
    second = await auth_service.login("alice", "password123")

    assert first.refresh_token != second.refresh_token
    with pytest.raises(InvalidRefreshToken):
        await auth_service.refresh_session(first.refresh_token)


async def test_login_failures_share_one_error(auth_service, alice):
    with pytest.raises(InvalidCredentials) as unknown_user:
        await auth_service.login("nobody", "password123")
    with pytest.raises(InvalidCredentials) as wrong_password:
        await auth_service.login("alice", "wrong")

    assert str(unknown_user.value) == str(wrong_password.value)


class BrokenUserRepository(UserRepository):
    async def get_by_username(self, username):
        raise StoreError()


async def test_login_unexpected_failure_is_generic(db):
    service = AuthService(BrokenUserRepository(db))

    with pytest.raises(AuthenticationError) as exc_info:
        await service.login("alice", "password123")
    assert exc_info.value.message == "An error occurred during login"


async def test_refresh_token_is_single_use(auth_service, user_repo, alice):
    tokens = await auth_service.login("alice", "password123")

    refreshed = await auth_service.refresh_session(tokens.refresh_token)
    assert refreshed.refresh_token != tokens.refresh_token
    assert auth_service.validate_access_token(refreshed.access_token) == "alice"
    stored = await user_repo.get_by_username("alice")
    assert stored.refresh_token == refreshed.refresh_token

    with pytest.raises(InvalidRefreshToken):
        await auth_service.refresh_session(tokens.refresh_token)

    # the rotated token still works once
    await auth_service.refresh_session(refreshed.refresh_token)


@pytest.mark.parametrize("token", [None, "", "not-a-real-token"])
async def test_refresh_rejects_unknown_tokens(auth_service, alice, token):
    with pytest.raises(InvalidRefreshToken):
        await auth_service.refresh_session(token)


async def test_rotate_refresh_token_is_conditional(user_repo, alice):
    await user_repo.set_refresh_token(alice, "first")

    assert await user_repo.rotate_refresh_token("first", "second")
    assert not await user_repo.rotate_refresh_token("first", "third")
    assert (await user_repo.get_by_id(alice.user_id)).refresh_token == "second"


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_validate_rejects_malformed(auth_service, token):
    with pytest.raises(InvalidToken):
        auth_service.validate_access_token(token)


def test_validate_rejects_expired(auth_service):
    token = create_access_token(data={"sub": "alice"}, expires_delta=timedelta(seconds=-5))

    with pytest.raises(InvalidToken):
        auth_service.validate_access_token(token)


def test_validate_rejects_foreign_signature(auth_service):
    token = jwt.encode(
        {"sub": "alice", "exp": utcnow() + timedelta(minutes=5)},
        "some-other-secret",
        algorithm="HS256",
    )

    with pytest.raises(InvalidToken):
        auth_service.validate_access_token(token)


def test_validate_rejects_token_without_subject(auth_service):
    token = create_access_token(data={})

    with pytest.raises(InvalidToken):
        auth_service.validate_access_token(token)


async def test_current_user(auth_service, user_repo, alice):
    tokens = await auth_service.login("alice", "password123")

    user = await auth_service.current_user(tokens.access_token)
    assert user.user_id == alice.user_id

    await user_repo.delete_all()
    assert await auth_service.current_user(tokens.access_token) is None
