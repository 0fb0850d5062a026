"""Tests for on-disk résumé storage."""
import pytest

from jobboard.core.errors import NotFoundError, ValidationError
from jobboard.core.storage import LocalResumeStorage, resume_content_type


@pytest.fixture
def local_storage(tmp_path):
    return LocalResumeStorage(tmp_path / "uploads", max_bytes=64)


def test_save_and_read(local_storage):
    name = local_storage.save(b"%PDF-1.4", "My CV.PDF")

    assert name.startswith("resume-") and name.endswith(".pdf")
    assert local_storage.exists(name)
    assert b"".join(local_storage.iter_bytes(name)) == b"%PDF-1.4"
    assert (local_storage.root / name).read_bytes() == b"%PDF-1.4"


def test_saves_get_unique_names(local_storage):
    names = {local_storage.save(b"x", "cv.pdf") for _ in range(20)}
    assert len(names) == 20


@pytest.mark.parametrize("content,name,message", [
    (b"x", "cv.txt", "Only .pdf, .doc and .docx files are allowed"),
    (b"x", "cv", "Only .pdf, .doc and .docx files are allowed"),
    (b"", "cv.pdf", "Resume file is empty"),
    (b"x" * 65, "cv.pdf", "exceeds"),
])
def test_save_rejects(local_storage, content, name, message):
    with pytest.raises(ValidationError, match=message):
        local_storage.save(content, name)


@pytest.mark.parametrize("name", ["../x.pdf", "a/b.pdf", "a\\b.pdf", "..", ""])
def test_rejects_unsafe_names(local_storage, name):
    with pytest.raises(ValidationError):
        local_storage.exists(name)


def test_delete(local_storage):
    name = local_storage.save(b"x", "cv.doc")
    local_storage.delete(name)
    assert not local_storage.exists(name)
    # Deleting twice is harmless
    local_storage.delete(name)

    with pytest.raises(NotFoundError):
        local_storage.iter_bytes(name)


@pytest.mark.parametrize("name,expected", [
    ("a.pdf", "application/pdf"),
    ("a.DOC", "application/msword"),
    ("a.docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
    ("a.rtf", "application/octet-stream"),
    ("noext", "application/octet-stream"),
])
def test_content_type(name, expected):
    assert resume_content_type(name) == expected
