import os

import pytest
from PIL import Image

from filestore.infrastructure.naming.directory_naming_policy import DirectoryNamingPolicy
from filestore.infrastructure.storage.filesystem_storage import FileSystemStorage


@pytest.fixture
def web_dir(tmp_path):
    d = tmp_path / "web"
    d.mkdir()
    return str(d)


@pytest.fixture
def upload_dir(web_dir):
    # ainda não existe: o guard de diretório deve criá-lo
    return os.path.join(web_dir, "uploads", "files")


@pytest.fixture
def policy(upload_dir, tmp_path):
    return DirectoryNamingPolicy(
        upload_dir=upload_dir,
        upload_path="/uploads/files",
        protected_dir=str(tmp_path / "protected"),
    )


@pytest.fixture
def storage(web_dir):
    return FileSystemStorage(web_dir=web_dir)


@pytest.fixture
def source_dir(tmp_path):
    d = tmp_path / "source"
    d.mkdir()
    return d


@pytest.fixture
def text_file(source_dir):
    path = source_dir / "notes.txt"
    path.write_bytes(b"hello filestore\n")
    return str(path)


@pytest.fixture
def jpeg_file(source_dir):
    path = source_dir / "photo.JPG"
    Image.new("RGB", (64, 48), color=(200, 30, 30)).save(path, format="JPEG")
    return str(path)
