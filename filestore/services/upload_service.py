# filestore/services/upload_service.py
from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Iterable

from werkzeug.datastructures import FileStorage as WzFileStorage

from filestore.core.exceptions import ConflictError
from filestore.core.interfaces.naming_policy import NamingPolicy
from filestore.entities.source_file import UploadedFile
from filestore.infrastructure.storage.file_storage import FileStorage, StoredFileMetadata

if TYPE_CHECKING:
    from filestore.config.settings import Settings

logger = logging.getLogger(__name__)


class UploadService:
    def __init__(
        self,
        *,
        storage: FileStorage,
        policy: NamingPolicy,
        max_file_size_mb: int = 20,
        allowed_mime_types: Iterable[str] | None = None,
        tmp_dir: str | None = None,
    ) -> None:
        self._storage = storage
        self._policy = policy
        self._max_file_size_mb = max(1, max_file_size_mb)
        self._allowed = set(allowed_mime_types or ())
        self._tmp_dir = tmp_dir

    @classmethod
    def from_settings(
        cls,
        *,
        storage: FileStorage,
        policy: NamingPolicy,
        settings: Settings,
    ) -> UploadService:
        return cls(
            storage=storage,
            policy=policy,
            max_file_size_mb=settings.max_file_size_mb,
            allowed_mime_types=settings.allowed_mime_types,
        )

    @property
    def max_bytes(self) -> int:
        return self._max_file_size_mb * 1024 * 1024

    def _validate_mime(self, mimetype: str | None) -> None:
        if not self._allowed:
            return  # whitelist desativada

        if not mimetype:
            raise ConflictError("Tipo do arquivo (MIME) ausente. Upload bloqueado pela whitelist.")

        if mimetype not in self._allowed:
            raise ConflictError(f"Tipo de arquivo não permitido: '{mimetype}'.")

    def store(self, upload: WzFileStorage, *, protected: bool = False) -> StoredFileMetadata:
        if upload.filename is None or not str(upload.filename).strip():
            raise ConflictError("Arquivo inválido: filename ausente.")

        self._validate_mime(upload.mimetype)

        uploaded = UploadedFile.from_werkzeug(upload, tmp_dir=self._tmp_dir, protected=protected)
        try:
            stored = self._storage.save_file(self._policy, uploaded)
        finally:
            # se o move falhou, o temporário ainda existe
            if os.path.exists(uploaded.path):
                os.unlink(uploaded.path)

        # ✅ Hard limit + rollback real (arquivo acabou de ser salvo)
        if stored.size_bytes > self.max_bytes:
            full_path = self._policy.resolve_file_name(stored.file_name, stored.protected)
            self._storage.remove_file(full_path)
            raise ConflictError(
                f"Arquivo '{stored.original_name}' excede o limite de {self._max_file_size_mb}MB."
            )

        return stored

    def store_many(
        self,
        uploads: Iterable[WzFileStorage | None],
        *,
        protected: bool = False,
    ) -> list[StoredFileMetadata]:
        out: list[StoredFileMetadata] = []

        try:
            for upload in uploads:
                if upload is None:
                    continue
                out.append(self.store(upload, protected=protected))
        except Exception:
            for stored in out:
                self._storage.remove_file(
                    self._policy.resolve_file_name(stored.file_name, stored.protected)
                )
            logger.warning("upload em lote abortado; %d arquivo(s) removido(s)", len(out))
            raise

        return out
