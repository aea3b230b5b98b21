# filestore/infrastructure/storage/file_storage.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from filestore.core.interfaces.naming_policy import NamingPolicy
from filestore.entities.source_file import SourceFile


@dataclass(frozen=True)
class StoredFileMetadata:
    file_name: str
    original_name: str
    mime_type: str | None
    size_bytes: int
    web_path: str
    protected: bool
    width: int | None = None
    height: int | None = None

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "fileName": self.file_name,
            "originalName": self.original_name,
            "mimeType": self.mime_type,
            "size": self.size_bytes,
            "path": self.web_path,
            "protected": self.protected,
        }
        # largura/altura só existem quando a imagem foi lida
        if self.width is not None and self.height is not None:
            data["width"] = self.width
            data["height"] = self.height
        return data


class FileStorage(Protocol):
    def save_file(self, policy: NamingPolicy, file: SourceFile) -> StoredFileMetadata:
        """Coloca o arquivo no destino definido pela política e retorna os metadados."""
        raise NotImplementedError

    def remove_file(self, path: str | None) -> bool | None:
        """Remove o arquivo. None se não havia nada a remover."""
        raise NotImplementedError

    def file_exists(self, path: str) -> bool:
        raise NotImplementedError
