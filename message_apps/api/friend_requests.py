from typing import List
from fastapi import APIRouter, Depends, Path, Query

from message_apps.api.deps import MAX_ID, get_friend_request_service
from message_apps.mappers import to_friend_request_dto
from message_apps.schemas.friend_request import FriendRequestDto
from message_apps.services import FriendRequestService

router = APIRouter()

@router.get("/{user_id}", response_model=List[FriendRequestDto])
async def get_friend_requests(
    user_id: int = Path(..., le=MAX_ID),
    service: FriendRequestService = Depends(get_friend_request_service)
):
    requests = await service.list_for_user(user_id)
    return [to_friend_request_dto(request) for request in requests]

@router.post("/send", response_model=bool)
async def send_friend_request(
    from_user_id: int = Query(..., alias="fromUserId", le=MAX_ID),
    to_user_id: int = Query(..., alias="toUserId", le=MAX_ID),
    service: FriendRequestService = Depends(get_friend_request_service)
):
    return await service.send(from_user_id, to_user_id)

@router.post("/accept", response_model=bool)
async def accept_friend_request(
    request_id: int = Query(..., alias="requestId", le=MAX_ID),
    service: FriendRequestService = Depends(get_friend_request_service)
):
    return await service.accept(request_id)

@router.post("/reject", response_model=bool)
async def reject_friend_request(
    request_id: int = Query(..., alias="requestId", le=MAX_ID),
    service: FriendRequestService = Depends(get_friend_request_service)
):
    return await service.reject(request_id)
