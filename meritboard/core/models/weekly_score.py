from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text, UniqueConstraint

from meritboard.db.session import Base


class WeeklyScore(Base):
    """Manual weekly evaluation of a class (study, discipline, hygiene, comment)."""

    __tablename__ = "weekly_scores"
    __table_args__ = (
        UniqueConstraint("week_id", "class_id", name="uq_weekly_score_week_class"),
    )

    # "<week_id>_<class_id>"
    id = Column(String(80), primary_key=True)
    week_id = Column(String(10), nullable=False, index=True)
    term_year = Column(Integer, nullable=False)
    week = Column(Integer, nullable=False)
    class_id = Column(String(50), nullable=False)
    study = Column(Integer, nullable=True)
    discipline = Column(Integer, nullable=True)
    hygiene = Column(Integer, nullable=True)
    comment = Column(Text, nullable=True)
    updated_by = Column(String(26), nullable=True)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
