# filestore/infrastructure/storage/image_probe.py
from __future__ import annotations

import logging

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


def probe_image_size(path: str) -> tuple[int, int] | None:
    """Lê (largura, altura) do cabeçalho da imagem. None se não for possível."""
    try:
        with Image.open(path) as img:
            width, height = img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.debug("falha ao ler dimensões de '%s': %s", path, e)
        return None
    return int(width), int(height)
