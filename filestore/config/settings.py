# filestore/config/settings.py
import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_csv(raw: str | None, *, lower: bool = False) -> set[str]:
    raw = (raw or "").strip()
    if not raw:
        return set()
    parts = [p.strip() for p in raw.split(",")]
    return {p.lower() if lower else p for p in parts if p}


class Settings(BaseSettings):
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Raiz "web": removida do caminho absoluto quando a política não informa o path
    files_web_dir: str | None = os.getenv("FILES_WEB_DIR") or None
    files_base_path: str = os.getenv("FILES_BASE_PATH", "./_uploads")
    files_protected_path: str | None = os.getenv("FILES_PROTECTED_PATH") or None
    files_upload_path: str = os.getenv("FILES_UPLOAD_PATH", "/uploads")

    max_file_size_mb: int = int(os.getenv("MAX_FILE_SIZE_MB", "20"))

    # ✅ Leitura de largura/altura via Pillow
    files_probe_images: bool = True
    files_image_mime_types_raw: str = os.getenv(
        "FILES_IMAGE_MIME_TYPES",
        "image/png,image/jpeg,image/pjpeg",
    )
    files_image_extensions_raw: str = os.getenv(
        "FILES_IMAGE_EXTENSIONS",
        "jpeg,jpg,png",
    )

    # Whitelist de uploads (vazio = desativada)
    # Ex: "application/pdf,image/png,image/jpeg"
    allowed_mime_types_raw: str = os.getenv(
        "ALLOWED_MIME_TYPES",
        ",".join(
            [
                "application/pdf",
                "image/png",
                "image/jpeg",
                "image/jpg",
                "text/plain",
                "text/csv",
            ]
        ),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("files_web_dir", "files_base_path", "files_protected_path", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @field_validator("files_web_dir", "files_protected_path")
    @classmethod
    def blank_as_none(cls, v):
        return v or None

    @property
    def image_mime_types(self) -> set[str]:
        return parse_csv(self.files_image_mime_types_raw)

    @property
    def image_extensions(self) -> set[str]:
        return parse_csv(self.files_image_extensions_raw, lower=True)

    @property
    def allowed_mime_types(self) -> set[str]:
        return parse_csv(self.allowed_mime_types_raw)


settings = Settings()
