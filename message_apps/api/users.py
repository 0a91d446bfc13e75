from typing import Optional
from fastapi import APIRouter, Depends, Query

from message_apps.api.deps import get_user_service
from message_apps.mappers import to_user_dto
from message_apps.schemas.user import UserDto
from message_apps.services import UserService

router = APIRouter()

@router.get("/find", response_model=Optional[UserDto])
async def find_user(
    query: str = Query(..., description="Username or email"),
    service: UserService = Depends(get_user_service)
):
    return to_user_dto(await service.find(query))
