from sqlalchemy import Column, Integer, String, DateTime, Text, CheckConstraint
from .base import Base, now_utc


class Document(Base):
    __tablename__ = 'documents'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    target = Column(String(16), nullable=False)
    # Normalized display name; the stored file lives at file_url
    file_name = Column(String, nullable=False)
    file_mime_type = Column(String(100), nullable=False)
    file_url = Column(String, nullable=False)
    file_size = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        CheckConstraint("target IN ('EMPLOYEE', 'STUDENT')", name='ck_documents_target'),
        {"sqlite_autoincrement": True},
    )


class News(Base):
    __tablename__ = 'news'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    date = Column(String(64), nullable=False)  # display date supplied by the editor
    image_src = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = {"sqlite_autoincrement": True}


class Project(Base):
    __tablename__ = 'projects'
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    image_src = Column(String, nullable=False)
    target = Column(String(16), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        CheckConstraint("target IN ('EMPLOYEE', 'STUDENT')", name='ck_projects_target'),
        {"sqlite_autoincrement": True},
    )
