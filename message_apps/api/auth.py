from typing import Optional
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from message_apps.api.deps import get_auth_service, get_bearer_token, get_current_user
from message_apps.exceptions import (
    AuthenticationError,
    InvalidCredentials,
    InvalidRefreshToken,
    InvalidToken,
    RegistrationError,
)
from message_apps.mappers import to_user_dto
from message_apps.models.user import User
from message_apps.schemas.user import (
    LoginResponse,
    RefreshRequest,
    TokenResponse,
    UserCreate,
    UserDto,
    UserLogin,
)
from message_apps.services import AuthService

router = APIRouter()

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})

@router.post("/login", response_model=LoginResponse)
async def login(user_data: UserLogin, auth_service: AuthService = Depends(get_auth_service)):
    try:
        tokens = await auth_service.login(user_data.username, user_data.password)
    except InvalidCredentials as e:
        return error_response(status.HTTP_401_UNAUTHORIZED, e.message)
    except AuthenticationError as e:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message)

    return LoginResponse(
        token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        message="Login successful"
    )

@router.post("/register")
async def register(user_data: UserCreate, auth_service: AuthService = Depends(get_auth_service)):
    try:
        await auth_service.register(user_data.username, user_data.email, user_data.password)
    except RegistrationError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, e.message)

    return {"message": "Registration successful"}

@router.get("/validate", response_class=PlainTextResponse)
async def validate_token(
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
):
    try:
        auth_service.validate_access_token(token)
    except InvalidToken as e:
        return PlainTextResponse(e.message, status_code=status.HTTP_401_UNAUTHORIZED)
    return "Token is valid"

@router.get("/me", response_model=Optional[UserDto])
async def get_current_user_info(current_user: Optional[User] = Depends(get_current_user)):
    # null when the account disappeared after the token was issued
    return to_user_dto(current_user)

@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    refresh_request: Optional[RefreshRequest] = None,
    auth_service: AuthService = Depends(get_auth_service)
):
    token = refresh_request.refresh_token if refresh_request else None
    try:
        tokens = await auth_service.refresh_session(token)
    except InvalidRefreshToken as e:
        return error_response(status.HTTP_401_UNAUTHORIZED, e.message)

    return TokenResponse(access_token=tokens.access_token, refresh_token=tokens.refresh_token)
