from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Category(Base):
    __tablename__ = 'categories'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    target = Column(String(16), nullable=False)  # EMPLOYEE|STUDENT
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    # The category exclusively owns its entries
    entries = relationship(
        "DictionaryItem",
        back_populates="category",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DictionaryItem.id",
    )

    __table_args__ = (
        CheckConstraint("target IN ('EMPLOYEE', 'STUDENT')", name='ck_categories_target'),
        {"sqlite_autoincrement": True},
    )


class DictionaryItem(Base):
    __tablename__ = 'dictionary_items'
    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey('categories.id', ondelete='CASCADE'), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    category = relationship("Category", back_populates="entries")

    __table_args__ = {"sqlite_autoincrement": True}
