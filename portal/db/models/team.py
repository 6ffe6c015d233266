from sqlalchemy import Column, Integer, String, DateTime, Text, CheckConstraint, Index, text
from .base import Base, now_utc


class TeamMember(Base):
    __tablename__ = 'team_members'
    id = Column(Integer, primary_key=True, autoincrement=True)
    role = Column(String(32), nullable=False)  # CHAIRMAN|DEPUTY_CHAIRMAN|SUPERVISOR
    image_src = Column(String, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "role IN ('CHAIRMAN', 'DEPUTY_CHAIRMAN', 'SUPERVISOR')",
            name='ck_team_members_role',
        ),
        # At most one row per singleton role; SUPERVISOR rows fall outside the index
        Index(
            'uq_team_members_singleton_role',
            'role',
            unique=True,
            sqlite_where=text("role IN ('CHAIRMAN', 'DEPUTY_CHAIRMAN')"),
            postgresql_where=text("role IN ('CHAIRMAN', 'DEPUTY_CHAIRMAN')"),
        ),
        Index('idx_team_members_role_created', 'role', 'created_at'),
        {"sqlite_autoincrement": True},
    )
