# filestore/infrastructure/storage/filesystem_storage.py
from __future__ import annotations

import logging
import os
import shutil
from typing import TYPE_CHECKING, Callable, Iterable

from filestore.core.exceptions import CopyFileError, MoveFileError
from filestore.core.interfaces.naming_policy import NamingPolicy
from filestore.entities.source_file import LocalFile, SourceFile, UploadedFile
from filestore.infrastructure.storage.directory_guard import ensure_directory
from filestore.infrastructure.storage.file_storage import FileStorage, StoredFileMetadata
from filestore.infrastructure.storage.image_probe import probe_image_size

if TYPE_CHECKING:
    from filestore.config.settings import Settings

logger = logging.getLogger(__name__)

SameFileChecker = Callable[[SourceFile, str], bool]
ImageProbe = Callable[[str], tuple[int, int] | None]

DEFAULT_IMAGE_MIME_TYPES = frozenset({"image/png", "image/jpeg", "image/pjpeg"})
DEFAULT_IMAGE_EXTENSIONS = frozenset({"jpeg", "jpg", "png"})

FILE_MODE = 0o666


def same_real_path(file: SourceFile, full_path: str) -> bool:
    if not (os.path.exists(file.path) and os.path.exists(full_path)):
        return False
    return os.path.realpath(file.path) == os.path.realpath(full_path)


def _read_umask() -> int:
    # os não expõe leitura da umask sem alterá-la; lida uma vez no import
    mask = os.umask(0)
    os.umask(mask)
    return mask


_UMASK = _read_umask()


def _normalize_dir(path: str | None) -> str | None:
    if not path:
        return None
    return os.path.abspath(os.path.expanduser(path))


def _apply_file_mode(path: str) -> None:
    try:
        os.chmod(path, FILE_MODE & ~_UMASK)
    except OSError as e:
        logger.debug("chmod ignorado em '%s': %s", path, e)


class FileSystemStorage(FileStorage):
    def __init__(
        self,
        *,
        web_dir: str | None = None,
        same_file_checker: SameFileChecker | None = None,
        image_probe: ImageProbe | None = probe_image_size,
        image_mime_types: Iterable[str] | None = None,
        image_extensions: Iterable[str] | None = None,
    ) -> None:
        self._web_dir = _normalize_dir(web_dir)
        self._same_file_checker: SameFileChecker = same_file_checker or same_real_path
        self._image_probe = image_probe
        self._image_mime_types = frozenset(image_mime_types or DEFAULT_IMAGE_MIME_TYPES)
        self._image_extensions = frozenset(
            e.lower().lstrip(".") for e in (image_extensions or DEFAULT_IMAGE_EXTENSIONS)
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> FileSystemStorage:
        return cls(
            web_dir=settings.files_web_dir,
            image_probe=probe_image_size if settings.files_probe_images else None,
            image_mime_types=settings.image_mime_types or None,
            image_extensions=settings.image_extensions or None,
        )

    @property
    def web_dir(self) -> str | None:
        return self._web_dir

    @web_dir.setter
    def web_dir(self, value: str | None) -> None:
        self._web_dir = _normalize_dir(value)

    def set_same_file_checker(self, checker: SameFileChecker) -> None:
        self._same_file_checker = checker

    def is_same_file(self, file: SourceFile, full_path: str) -> bool:
        return bool(self._same_file_checker(file, full_path))

    # -------------------------
    # Salvamento
    # -------------------------

    def save_file(self, policy: NamingPolicy, file: SourceFile) -> StoredFileMetadata:
        if isinstance(file, UploadedFile):
            return self._save_uploaded_file(policy, file)
        if isinstance(file, LocalFile):
            return self._save_local_file(policy, file)
        raise TypeError(f"Tipo de arquivo não suportado: {type(file).__name__}")

    def _save_local_file(self, policy: NamingPolicy, file: LocalFile) -> StoredFileMetadata:
        original_name = file.resolved_original_name
        mime_type = file.resolved_mime_type
        protected = file.protected

        file_name, web_path = policy.prepare_file_name(original_name, self, protected)
        full_path = policy.resolve_file_name(file_name, protected)

        # arquivo já está no lugar: nada a transferir
        if not self.is_same_file(file, full_path):
            directory = os.path.dirname(full_path)
            ensure_directory(directory)

            if file.save_source:
                self._copy_file(file.path, full_path)
            else:
                self._move_file(file.path, full_path)
        else:
            logger.debug("arquivo já está no destino: %s", full_path)

        return self._prepare_file_data(
            file_name=file_name,
            original_name=original_name,
            mime_type=mime_type,
            full_path=full_path,
            web_path=web_path,
            protected=protected,
        )

    def _save_uploaded_file(self, policy: NamingPolicy, file: UploadedFile) -> StoredFileMetadata:
        original_name = file.client_original_name
        mime_type = file.client_mime_type
        protected = file.protected

        file_name, web_path = policy.prepare_file_name(original_name, self, protected)
        full_path = policy.resolve_file_name(file_name, protected)

        ensure_directory(os.path.dirname(full_path))
        self._move_file(file.path, full_path)

        return self._prepare_file_data(
            file_name=file_name,
            original_name=original_name,
            mime_type=mime_type,
            full_path=full_path,
            web_path=web_path,
            protected=protected,
        )

    def _copy_file(self, source: str, target: str) -> None:
        try:
            shutil.copyfile(source, target)
        except OSError as e:
            raise CopyFileError(source, target, e.strerror or str(e)) from e

        _apply_file_mode(target)
        logger.info("arquivo copiado: %s -> %s", source, target)

    def _move_file(self, source: str, target: str) -> None:
        try:
            shutil.move(source, target)
        except OSError as e:
            raise MoveFileError(source, target, e.strerror or str(e)) from e

        _apply_file_mode(target)
        logger.info("arquivo movido: %s -> %s", source, target)

    # -------------------------
    # Metadados
    # -------------------------

    def _is_image(self, mime_type: str | None, original_name: str) -> bool:
        if mime_type in self._image_mime_types:
            return True
        _, ext = os.path.splitext(original_name)
        return ext.lstrip(".").lower() in self._image_extensions

    def _strip_web_dir(self, full_path: str) -> str:
        web_dir = self._web_dir
        if web_dir and (full_path == web_dir or full_path.startswith(web_dir.rstrip(os.sep) + os.sep)):
            return full_path[len(web_dir.rstrip(os.sep)):]
        return full_path

    def _prepare_file_data(
        self,
        *,
        file_name: str,
        original_name: str,
        mime_type: str | None,
        full_path: str,
        web_path: str | None,
        protected: bool,
    ) -> StoredFileMetadata:
        size = os.path.getsize(full_path)

        if not web_path:
            web_path = self._strip_web_dir(full_path)

        width: int | None = None
        height: int | None = None
        if self._image_probe is not None and self._is_image(mime_type, original_name):
            dims = self._image_probe(full_path)
            if dims is not None:
                width, height = dims

        return StoredFileMetadata(
            file_name=file_name,
            original_name=original_name,
            mime_type=mime_type,
            size_bytes=size,
            web_path=web_path,
            protected=bool(protected),
            width=width,
            height=height,
        )

    # -------------------------
    # Remoção / consulta
    # -------------------------

    def remove_file(self, path: str | None) -> bool | None:
        if not path or not os.path.exists(path):
            return None

        try:
            os.unlink(path)
        except OSError as e:
            logger.warning("falha ao remover '%s': %s", path, e)

        removed = not os.path.exists(path)
        if removed:
            logger.info("arquivo removido: %s", path)
        return removed

    def file_exists(self, path: str) -> bool:
        return os.path.exists(path)
