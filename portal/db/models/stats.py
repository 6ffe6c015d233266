from sqlalchemy import Column, Integer, DateTime, CheckConstraint
from .base import Base, now_utc

MAIN_PAGE_STATS_ID = 1


class MainPageStats(Base):
    """Singleton row holding the homepage counters."""
    __tablename__ = 'main_page_stats'
    id = Column(Integer, primary_key=True, default=MAIN_PAGE_STATS_ID)
    projects_count = Column(Integer, nullable=False, default=0)
    payments_count = Column(Integer, nullable=False, default=0)
    choice_count = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        CheckConstraint("id = 1", name='ck_main_page_stats_singleton'),
    )
