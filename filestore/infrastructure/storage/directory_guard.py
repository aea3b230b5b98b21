# filestore/infrastructure/storage/directory_guard.py
from __future__ import annotations

import logging
import os

from filestore.core.exceptions import DirectoryError

logger = logging.getLogger(__name__)

DEFAULT_DIR_MODE = 0o777


def ensure_directory(directory: str, *, mode: int = DEFAULT_DIR_MODE) -> None:
    if not os.path.isdir(directory):
        if os.path.exists(directory):
            raise DirectoryError(directory, f"'{directory}' existe mas não é um diretório.")
        try:
            os.makedirs(directory, mode=mode, exist_ok=True)
        except OSError as e:
            raise DirectoryError(directory, f"Não foi possível criar o diretório '{directory}': {e}") from e
        logger.debug("diretório criado: %s", directory)
        return

    if not os.access(directory, os.W_OK):
        raise DirectoryError(directory, f"Sem permissão de escrita no diretório '{directory}'.")
