"""File storage operations for uploaded documents."""

import mimetypes
from pathlib import Path, PurePath
from uuid import UUID

DEFAULT_FILE_MIME = "application/octet-stream"
DEFAULT_JSON_MIME = "application/json"


def file_extension(filename: str) -> str:
    """Lower-cased extension of the client file name, or an empty string.

    Only the final suffix is kept and only when it is a short alphanumeric
    token, so a crafted file name cannot steer the stored path.
    """
    suffix = PurePath(PurePath(filename).name).suffix.lower()
    if 1 < len(suffix) <= 16 and suffix[1:].isalnum():
        return suffix
    return ""


def guess_mime(filename: str) -> str:
    """Guess MIME type from the file name extension."""
    mime, _ = mimetypes.guess_type(PurePath(filename).name)
    return mime or DEFAULT_FILE_MIME


def get_document_file_path(upload_dir: str, document_id: UUID, extension: str) -> Path:
    """Get path of the stored file for a document."""
    return Path(upload_dir) / f"{document_id}{extension}"


def write_document_file(upload_dir: str, document_id: UUID, filename: str, content: bytes) -> Path:
    """Write uploaded content to disk.

    Args:
        upload_dir: Base path for uploads
        document_id: Document the file belongs to
        filename: Original client file name, used only for its extension
        content: File content bytes

    Returns:
        Path to written file
    """
    file_path = get_document_file_path(upload_dir, document_id, file_extension(filename))
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_bytes(content)
    return file_path


def remove_document_file(file_path: str) -> bool:
    """Remove a stored file. Returns False if it was already gone."""
    path = Path(file_path)
    if not path.exists():
        return False
    path.unlink()
    return True
