from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base

from message_apps.utils.time_utils import utcnow

Base = declarative_base()

class BaseModel(Base):
    __abstract__ = True

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
