from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Text

from meritboard.db.session import Base


class Rule(Base):
    """School rule (KT001 merit, VP083 demerit). Points carry the sign of the type."""

    __tablename__ = "rules"
    __table_args__ = (
        CheckConstraint("points <> 0", name="ck_rule_points_nonzero"),
    )

    code = Column(String(20), primary_key=True)
    category = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String(10), nullable=False)
    points = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
