# filestore/infrastructure/naming/directory_naming_policy.py
from __future__ import annotations

import os
import posixpath
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, Sequence
from uuid import uuid4

from werkzeug.utils import secure_filename

from filestore.core.interfaces.naming_policy import NamingPolicy

if TYPE_CHECKING:
    from filestore.config.settings import Settings
    from filestore.infrastructure.storage.file_storage import FileStorage

Namer = Callable[[str], str]


# -------------------------
# Namers
# -------------------------

def secure_namer(name: str) -> str:
    # subdiretórios são preservados, mas cada segmento é sanitizado ("..", "" somem)
    *dirs, base = name.split("/")
    safe_dirs = [s for s in (secure_filename(d) for d in dirs) if s]
    safe = secure_filename(base) or "file"
    return posixpath.join(*safe_dirs, safe)


def lowercase_extension_namer(name: str) -> str:
    stem, ext = posixpath.splitext(name)
    return stem + ext.lower()


def unique_namer(name: str) -> str:
    directory, base = posixpath.split(name)
    _, ext = posixpath.splitext(base)
    unique = uuid4().hex + ext
    return posixpath.join(directory, unique) if directory else unique


def date_directory_namer(name: str, *, now: datetime | None = None) -> str:
    # ex.: 2026/01/arquivo.pdf
    now = now or datetime.now(timezone.utc)
    return f"{now.year:04d}/{now.month:02d}/{name}"


DEFAULT_NAMERS: tuple[Namer, ...] = (secure_namer,)


class DirectoryNamingPolicy(NamingPolicy):
    def __init__(
        self,
        *,
        upload_dir: str,
        upload_path: str | None = None,
        protected_dir: str | None = None,
        namers: Sequence[Namer] = DEFAULT_NAMERS,
    ) -> None:
        raw = (upload_dir or "").strip()
        if not raw:
            raise ValueError("upload_dir não configurado.")

        self._upload_dir = os.path.abspath(os.path.expanduser(raw))
        self._protected_dir = (
            os.path.abspath(os.path.expanduser(protected_dir)) if protected_dir else None
        )
        self._upload_path = upload_path.rstrip("/") if upload_path is not None else None
        self._namers = tuple(namers)

    @classmethod
    def from_settings(cls, settings: Settings, *, namers: Sequence[Namer] = DEFAULT_NAMERS) -> DirectoryNamingPolicy:
        return cls(
            upload_dir=settings.files_base_path,
            upload_path=settings.files_upload_path,
            protected_dir=settings.files_protected_path,
            namers=namers,
        )

    @property
    def upload_dir(self) -> str:
        return self._upload_dir

    @property
    def protected_dir(self) -> str:
        return self._protected_dir or self._upload_dir

    def prepare_file_name(
        self,
        original_name: str,
        storage: FileStorage,
        protected: bool = False,
    ) -> tuple[str, str | None]:
        file_name = original_name.replace("\\", "/")
        for namer in self._namers:
            file_name = namer(file_name)

        if protected or self._upload_path is None:
            # protegido não tem caminho público; storage deriva do web_dir
            return file_name, None

        return file_name, f"{self._upload_path}/{file_name}"

    def resolve_file_name(self, file_name: str, protected: bool = False) -> str:
        base = self.protected_dir if protected else self._upload_dir
        full = os.path.abspath(os.path.join(base, *file_name.split("/")))

        # anti path traversal
        if not (full == base or full.startswith(base + os.sep)):
            raise ValueError("file_name inválido (path traversal).")

        return full
