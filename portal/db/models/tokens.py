from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from .base import Base, now_utc


class RevokedToken(Base):
    """Bearer token ids rejected after logout when revocation is enabled."""
    __tablename__ = 'revoked_tokens'

    jti = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        Index('idx_revoked_tokens_expires', 'expires_at'),
    )
