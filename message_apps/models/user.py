from sqlalchemy import Column, Integer, String, Enum
from sqlalchemy.orm import relationship
from enum import Enum as PyEnum
from .base import BaseModel

class UserStatus(str, PyEnum):
    ONLINE = "Online"
    OFFLINE = "Offline"
    AWAY = "Away"

class User(BaseModel):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    status = Column(Enum(UserStatus), nullable=False, default=UserStatus.OFFLINE)
    # Single active refresh token; a new login overwrites it
    refresh_token = Column(String(255), unique=True, index=True, nullable=True)

    sent_requests = relationship("FriendRequest", foreign_keys="FriendRequest.sender_id", back_populates="sender")
    received_requests = relationship("FriendRequest", foreign_keys="FriendRequest.receiver_id", back_populates="receiver")
    sent_messages = relationship("Message", foreign_keys="Message.sender_id", back_populates="sender")
    received_messages = relationship("Message", foreign_keys="Message.receiver_id", back_populates="receiver")

    def __repr__(self):
        return f"<User {self.user_id} {self.username!r}>"
