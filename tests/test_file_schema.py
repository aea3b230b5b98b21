from filestore.api.schemas.file_schema import StoredFileSchema, StoredFilesSchema
from filestore.config.settings import Settings, parse_csv
from filestore.infrastructure.naming.directory_naming_policy import DirectoryNamingPolicy
from filestore.infrastructure.storage.filesystem_storage import FileSystemStorage
from filestore.infrastructure.storage.file_storage import StoredFileMetadata


def _meta(**overrides) -> StoredFileMetadata:
    data = dict(
        file_name="photo.jpg",
        original_name="photo.JPG",
        mime_type="image/jpeg",
        size_bytes=1234,
        web_path="/uploads/photo.jpg",
        protected=False,
        width=64,
        height=48,
    )
    data.update(overrides)
    return StoredFileMetadata(**data)


def test_schema_dump_matches_legacy_record():
    meta = _meta()

    dumped = StoredFileSchema.from_metadata(meta).model_dump(by_alias=True, exclude_none=True)

    assert dumped == meta.as_dict()


def test_schema_omits_dimensions_when_absent():
    meta = _meta(width=None, height=None, mime_type="text/plain", file_name="a.txt")

    dumped = StoredFileSchema.from_metadata(meta).model_dump(by_alias=True, exclude_none=True)

    assert "width" not in dumped
    assert "height" not in dumped


def test_schema_round_trips_to_metadata():
    meta = _meta()

    assert StoredFileSchema.from_metadata(meta).to_metadata() == meta


def test_schema_accepts_legacy_keys():
    schema = StoredFilesSchema.model_validate({"files": [_meta().as_dict()]})

    assert schema.files[0].size_bytes == 1234
    assert schema.files[0].web_path == "/uploads/photo.jpg"


def test_parse_csv():
    assert parse_csv(" a, b ,,c ") == {"a", "b", "c"}
    assert parse_csv("") == set()
    assert parse_csv("PNG,Jpg", lower=True) == {"png", "jpg"}


def test_settings_build_storage_and_policy(tmp_path):
    s = Settings(
        files_base_path=str(tmp_path / "up"),
        files_protected_path="  ",
        files_web_dir=str(tmp_path),
        files_probe_images=False,
        files_image_extensions_raw="GIF, png",
    )

    storage = FileSystemStorage.from_settings(s)
    policy = DirectoryNamingPolicy.from_settings(s)

    assert s.files_protected_path is None
    assert s.image_extensions == {"gif", "png"}
    assert storage.web_dir == str(tmp_path)
    assert policy.upload_dir == str(tmp_path / "up")
    assert policy.protected_dir == str(tmp_path / "up")
