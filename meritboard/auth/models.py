from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from meritboard.core.ids import generate_id
from meritboard.db.session import Base


class User(Base):
    """Staff account.

    ``claims`` is the authoritative role/assignment data copied into every access
    token; it is written only by the claims endpoint. ``role`` and
    ``assigned_classes`` are profile copies shown in listings and carry no authority.
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, default=generate_id)
    display_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    role = Column(String(50), nullable=True)
    assigned_classes = Column(JSON, nullable=False, default=list)
    claims = Column(JSON, nullable=False, default=dict)
    status = Column(String(20), nullable=False, default="ACTIVE")
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    refresh_tokens = relationship(
        "RefreshToken", back_populates="user", cascade="all, delete-orphan"
    )


class RefreshToken(Base):
    """Stored refresh tokens for users; deleting one ends that session."""

    __tablename__ = "refresh_tokens"

    id = Column(String(26), primary_key=True, default=generate_id)
    user_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)
    token = Column(String(512), nullable=False, unique=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="refresh_tokens")
