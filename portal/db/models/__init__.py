"""
Domain-split SQLAlchemy models with a package-level aggregator.

Exposes `Base`, `now_utc`, and all ORM classes from one import path.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .users import User
from .tokens import RevokedToken
from .categories import Category, DictionaryItem
from .content import Document, News, Project
from .team import TeamMember
from .stats import MainPageStats, MAIN_PAGE_STATS_ID

__all__ = [
    # base
    "Base",
    "now_utc",
    # identity
    "User",
    "RevokedToken",
    # dictionaries
    "Category",
    "DictionaryItem",
    # content
    "Document",
    "News",
    "Project",
    # team
    "TeamMember",
    # homepage
    "MainPageStats",
    "MAIN_PAGE_STATS_ID",
]
