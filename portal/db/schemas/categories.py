from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class CategoryCreate(BaseModel):
    title: Optional[str] = None
    target: Optional[str] = None


class CategoryUpdate(CategoryCreate):
    pass


class DictionaryItemCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None


class DictionaryItemUpdate(DictionaryItemCreate):
    pass


class CategoryEntry(BaseModel):
    id: int
    title: str
    description: str
    model_config = ConfigDict(from_attributes=True)


class DictionaryItem(CategoryEntry):
    category_id: int
    created_at: datetime
    updated_at: datetime


class Category(BaseModel):
    id: int
    title: str
    target: str
    entries: List[CategoryEntry] = []
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
