"""Résumé file storage.

Uploaded résumés live in a single flat directory. Every upload gets a fresh
generated name, so files are never rewritten in place and readers need no
locking. The directory is never mounted as a static route; files are only
served through the authorization-checked résumé endpoint.

Example:
    ```python
    from jobboard.core.storage import LocalResumeStorage

    storage = LocalResumeStorage(Path('uploads'))
    name = storage.save(b'%PDF-1.4 ...', 'cv.pdf')
    for chunk in storage.iter_bytes(name):
        ...
    ```
"""
import secrets
import time
from pathlib import Path, PurePath
from typing import Iterator

from jobboard.core.errors import NotFoundError, ValidationError
from jobboard.core.logging import setup_logging

logger = setup_logging('storage')

ALLOWED_EXTENSIONS = {'.pdf', '.doc', '.docx'}

CONTENT_TYPES = {
    '.pdf': 'application/pdf',
    '.doc': 'application/msword',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
}
DEFAULT_CONTENT_TYPE = 'application/octet-stream'

CHUNK_SIZE = 64 * 1024


def resume_content_type(filename: str) -> str:
    """Map a résumé filename to the content type it is served with."""
    return CONTENT_TYPES.get(PurePath(filename).suffix.lower(), DEFAULT_CONTENT_TYPE)


def check_stored_name(filename: str) -> str:
    """Reject names that could escape the upload directory."""
    if not filename or '/' in filename or '\\' in filename or filename in ('.', '..') or '..' in filename:
        raise ValidationError("Invalid file name")
    return filename


def generate_resume_name(original_name: str) -> str:
    """Build a unique stored name, keeping the (validated) extension."""
    extension = PurePath(original_name or '').suffix.lower()
    return f"resume-{int(time.time() * 1000)}-{secrets.token_hex(6)}{extension}"


class ResumeStorage:
    """Interface shared by the on-disk storage and test doubles."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes

    def validate_upload(self, content: bytes, original_name: str) -> None:
        """Check extension and size of an upload before it is written.

        Raises:
            ValidationError: On a disallowed extension, an empty file or one
                larger than ``max_bytes``
        """
        extension = PurePath(original_name or '').suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise ValidationError("Only .pdf, .doc and .docx files are allowed")
        if not content:
            raise ValidationError("Resume file is empty")
        if len(content) > self.max_bytes:
            raise ValidationError(f"Resume file exceeds the {self.max_bytes} byte limit")

    def save(self, content: bytes, original_name: str) -> str:
        raise NotImplementedError

    def exists(self, filename: str) -> bool:
        raise NotImplementedError

    def iter_bytes(self, filename: str) -> Iterator[bytes]:
        raise NotImplementedError

    def delete(self, filename: str) -> None:
        raise NotImplementedError


class LocalResumeStorage(ResumeStorage):
    """Stores résumés as files under ``root``.

    Attributes:
        root: Upload directory
        max_bytes: Largest accepted upload
    """

    def __init__(self, root: Path, max_bytes: int = 5 * 1024 * 1024):
        super().__init__(max_bytes)
        self.root = Path(root)

    def ensure_root(self) -> None:
        if not self.root.exists():
            self.root.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created upload directory: {self.root}")

    def _path(self, filename: str) -> Path:
        return self.root / check_stored_name(filename)

    def save(self, content: bytes, original_name: str) -> str:
        """Validate and write an upload, returning its stored name."""
        self.validate_upload(content, original_name)
        self.ensure_root()

        filename = generate_resume_name(original_name)
        path = self._path(filename)
        # 'xb' never overwrites an existing file
        with open(path, 'xb') as f:
            f.write(content)

        logger.info(f"Stored resume {filename} ({len(content)} bytes)")
        return filename

    def exists(self, filename: str) -> bool:
        return self._path(filename).is_file()

    def iter_bytes(self, filename: str) -> Iterator[bytes]:
        path = self._path(filename)
        if not path.is_file():
            raise NotFoundError("Resume file not found")

        def _chunks() -> Iterator[bytes]:
            with open(path, 'rb') as f:
                while True:
                    chunk = f.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    yield chunk

        return _chunks()

    def delete(self, filename: str) -> None:
        path = self._path(filename)
        try:
            path.unlink()
            logger.info(f"Deleted resume {filename}")
        except FileNotFoundError:
            logger.warning(f"Resume {filename} already removed")
