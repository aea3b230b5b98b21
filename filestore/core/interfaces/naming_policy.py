# filestore/core/interfaces/naming_policy.py
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from filestore.infrastructure.storage.file_storage import FileStorage


class NamingPolicy(Protocol):
    def prepare_file_name(
        self,
        original_name: str,
        storage: FileStorage,
        protected: bool = False,
    ) -> tuple[str, str | None]:
        """Retorna (file_name, web_path). web_path None = derivar do caminho absoluto."""
        ...

    def resolve_file_name(self, file_name: str, protected: bool = False) -> str:
        """Caminho absoluto no filesystem para o file_name já preparado."""
        ...
