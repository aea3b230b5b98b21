# filestore/entities/source_file.py
from __future__ import annotations

import mimetypes
import os
import shutil
import tempfile
from dataclasses import dataclass
from typing import Union

from werkzeug.datastructures import FileStorage as WzFileStorage


@dataclass(frozen=True)
class LocalFile:
    """Arquivo já presente em disco (ex.: importação, fixtures, migração)."""

    path: str
    original_name: str | None = None
    mime_type: str | None = None
    protected: bool = False
    # False = mover em vez de copiar (a origem deixa de existir)
    save_source: bool = True

    @property
    def resolved_original_name(self) -> str:
        return self.original_name or os.path.basename(self.path)

    @property
    def resolved_mime_type(self) -> str | None:
        if self.mime_type:
            return self.mime_type
        guessed, _ = mimetypes.guess_type(self.path)
        return guessed


@dataclass(frozen=True)
class UploadedFile:
    """Arquivo temporário recebido via upload. Sempre é movido."""

    path: str
    client_original_name: str
    client_mime_type: str | None = None
    protected: bool = False

    @classmethod
    def from_werkzeug(
        cls,
        upload: WzFileStorage,
        *,
        tmp_dir: str | None = None,
        protected: bool = False,
    ) -> UploadedFile:
        original_name = upload.filename or ""
        _, ext = os.path.splitext(original_name)

        fd, tmp_path = tempfile.mkstemp(prefix="upload-", suffix=ext, dir=tmp_dir)
        try:
            with os.fdopen(fd, "wb") as out:
                shutil.copyfileobj(upload.stream, out, 1024 * 1024)  # 1MB
        except BaseException:
            # remove arquivo parcial antes de propagar
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        return cls(
            path=tmp_path,
            client_original_name=original_name,
            client_mime_type=upload.mimetype or None,
            protected=protected,
        )


SourceFile = Union[LocalFile, UploadedFile]
