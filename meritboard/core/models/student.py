from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from meritboard.core.ids import generate_id
from meritboard.db.session import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(String(26), primary_key=True, default=generate_id)
    school_id = Column(String(50), nullable=False, unique=True)
    full_name = Column(String(255), nullable=False)
    class_id = Column(String(50), ForeignKey("classes.id"), nullable=False, index=True)
    total_merit_points = Column(Integer, nullable=False, default=0)
    total_demerit_points = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
