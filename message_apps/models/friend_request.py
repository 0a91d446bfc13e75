from sqlalchemy import Column, Integer, ForeignKey, Enum
from sqlalchemy.orm import relationship
from enum import Enum as PyEnum
from .base import BaseModel

class FriendStatus(str, PyEnum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"

class FriendRequest(BaseModel):
    __tablename__ = "friend_requests"

    request_id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    status = Column(Enum(FriendStatus), nullable=False, default=FriendStatus.PENDING)

    sender = relationship("User", foreign_keys=[sender_id], back_populates="sent_requests")
    receiver = relationship("User", foreign_keys=[receiver_id], back_populates="received_requests")
