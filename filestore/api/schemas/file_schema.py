# filestore/api/schemas/file_schema.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from filestore.infrastructure.storage.file_storage import StoredFileMetadata


class StoredFileSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    file_name: str = Field(alias="fileName", min_length=1)
    original_name: str = Field(alias="originalName")
    mime_type: Optional[str] = Field(default=None, alias="mimeType", max_length=100)
    size_bytes: int = Field(alias="size", ge=0)
    web_path: str = Field(alias="path")
    protected: bool = False
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)

    @classmethod
    def from_metadata(cls, meta: StoredFileMetadata) -> StoredFileSchema:
        return cls(
            file_name=meta.file_name,
            original_name=meta.original_name,
            mime_type=meta.mime_type,
            size_bytes=meta.size_bytes,
            web_path=meta.web_path,
            protected=meta.protected,
            width=meta.width,
            height=meta.height,
        )

    def to_metadata(self) -> StoredFileMetadata:
        return StoredFileMetadata(**self.model_dump())


class StoredFilesSchema(BaseModel):
    files: list[StoredFileSchema]
