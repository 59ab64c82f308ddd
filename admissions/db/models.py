"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlalchemy.sql import func

from admissions.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class ApplicationRecord(Base):
    __tablename__ = "applications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    owner_id = Column(String(64), nullable=False, index=True)
    personal_info = Column(JSON, nullable=False, default=dict)
    academic_background = Column(JSON, nullable=False, default=dict)
    program_selection = Column(JSON, nullable=False, default=dict)
    accommodation = Column(JSON, nullable=False, default=dict)
    referee = Column(JSON, nullable=False, default=dict)
    status = Column(String(20), nullable=False, default="draft", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())


class SessionSlot(Base):
    __tablename__ = "session_slots"

    profile_id = Column(String(64), primary_key=True)
    slot_key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
