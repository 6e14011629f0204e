"""Classes (e.g. 6/1, 8/3). Model named SchoolClass to avoid Python 'class' keyword."""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from meritboard.db.session import Base


class SchoolClass(Base):
    """Class master; id is the readable class ref ("class_8_3")."""

    __tablename__ = "classes"
    __table_args__ = (
        UniqueConstraint("class_name", name="uq_class_name"),
    )

    id = Column(String(50), primary_key=True)
    grade = Column(Integer, nullable=False, index=True)
    class_name = Column(String(50), nullable=False)
    # Running counters, only moved by record creation/reversal
    total_merit_points = Column(Integer, nullable=False, default=0)
    total_demerit_points = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
