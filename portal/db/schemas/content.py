from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class DocumentFile(BaseModel):
    name: str
    mime_type: str
    url: str
    size: int


class Document(BaseModel):
    id: int
    title: str
    target: str
    file: DocumentFile
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="before")
    @classmethod
    def _nest_file_columns(cls, data: Any) -> Any:
        # ORM rows keep the file columns flat; the API nests them under `file`
        if hasattr(data, "file_url"):
            return {
                "id": data.id,
                "title": data.title,
                "target": data.target,
                "file": {
                    "name": data.file_name,
                    "mime_type": data.file_mime_type,
                    "url": data.file_url,
                    "size": data.file_size,
                },
                "created_at": data.created_at,
                "updated_at": data.updated_at,
            }
        return data


class DocumentStats(BaseModel):
    total: int
    employee: int
    student: int


class News(BaseModel):
    id: int
    title: str
    description: str
    date: str
    image_src: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class Project(BaseModel):
    id: int
    title: str
    description: str
    image_src: str
    target: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
