from datetime import datetime

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Index, Integer, String

from meritboard.core.ids import generate_id
from meritboard.db.session import Base


class Record(Base):
    """
    Immutable merit/demerit event.

    student_id / class_id are snapshots taken at creation and carry no foreign key:
    the student may later move class or be removed without rewriting history.
    Corrections are new rows with reverses_id set, never edits.
    """

    __tablename__ = "records"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_record_quantity_positive"),
        Index("ix_record_class_date", "class_id", "record_date"),
    )

    id = Column(String(26), primary_key=True, default=generate_id)
    rule_code = Column(String(20), nullable=False, index=True)
    rule_type = Column(String(10), nullable=False)
    points_applied = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    student_id = Column(String(26), nullable=False, index=True)
    class_id = Column(String(50), nullable=False)
    record_date = Column(Date, nullable=False, index=True)
    # Academic week; null only on rows written before the column existed (see scripts.backfill_record_weeks)
    week = Column(Integer, nullable=True, index=True)
    created_by = Column(String(26), nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    reverses_id = Column(String(26), nullable=True, unique=True)
