from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from meritboard.db.session import Base


class WeeklyRanking(Base):
    """Locked per-class standing for a finalized academic week. Written once, never updated."""

    __tablename__ = "weekly_rankings"
    __table_args__ = (
        UniqueConstraint("week_id", "class_id", name="uq_weekly_ranking_week_class"),
    )

    # "<week_id>_<grade>_<class_id>"
    id = Column(String(100), primary_key=True)
    week_id = Column(String(10), nullable=False, index=True)
    term_year = Column(Integer, nullable=False)
    week = Column(Integer, nullable=False)
    grade = Column(Integer, nullable=False)
    class_id = Column(String(50), nullable=False)
    merit = Column(Integer, nullable=False)
    demerit = Column(Integer, nullable=False)
    total = Column(Integer, nullable=False)
    rank = Column(Integer, nullable=False)
    locked_at = Column(DateTime(timezone=True), nullable=False)
