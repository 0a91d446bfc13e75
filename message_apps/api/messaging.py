from typing import List
from fastapi import APIRouter, Depends, Path, Query

from message_apps.api.deps import MAX_ID, get_friend_request_service, get_messaging_service
from message_apps.mappers import to_message_dto, to_user_dtos
from message_apps.schemas.message import MessageDto
from message_apps.schemas.user import UserDto
from message_apps.services import FriendRequestService, MessagingService

router = APIRouter()

@router.get("/friends/list/{user_id}", response_model=List[UserDto])
async def get_friends(
    user_id: int = Path(..., le=MAX_ID),
    service: FriendRequestService = Depends(get_friend_request_service)
):
    """Contacts available for chat: users with an accepted request either way."""
    return to_user_dtos(await service.accepted_friends_of(user_id))

@router.get("/messages/{from_user_id}/{to_user_id}", response_model=List[MessageDto])
async def get_messages(
    from_user_id: int = Path(..., le=MAX_ID),
    to_user_id: int = Path(..., le=MAX_ID),
    service: MessagingService = Depends(get_messaging_service)
):
    messages = await service.chat_history(from_user_id, to_user_id)
    return [to_message_dto(message) for message in messages]

@router.post("/messages/send", response_model=bool)
async def send_message(
    from_user_id: int = Query(..., alias="fromUserId", le=MAX_ID),
    to_user_id: int = Query(..., alias="toUserId", le=MAX_ID),
    content: str = Query(...),
    service: MessagingService = Depends(get_messaging_service)
):
    return await service.send_message(from_user_id, to_user_id, content)
