"""
Domain-split Pydantic schemas with a package-level aggregator.
"""

from .users import Credentials, UserBase, User
from .categories import (
    CategoryCreate,
    CategoryUpdate,
    DictionaryItemCreate,
    DictionaryItemUpdate,
    CategoryEntry,
    DictionaryItem,
    Category,
)
from .content import DocumentFile, Document, DocumentStats, News, Project
from .team import TeamMember
from .stats import MainPageStats, MainPageStatsUpdate

__all__ = [
    "Credentials",
    "UserBase",
    "User",
    "CategoryCreate",
    "CategoryUpdate",
    "DictionaryItemCreate",
    "DictionaryItemUpdate",
    "CategoryEntry",
    "DictionaryItem",
    "Category",
    "DocumentFile",
    "Document",
    "DocumentStats",
    "News",
    "Project",
    "TeamMember",
    "MainPageStats",
    "MainPageStatsUpdate",
]
