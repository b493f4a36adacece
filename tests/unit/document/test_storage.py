"""Tests for document file storage helpers."""

from uuid import UUID

from docserver.core.modules.document.storage import (
    DEFAULT_FILE_MIME,
    file_extension,
    get_document_file_path,
    guess_mime,
    remove_document_file,
    write_document_file,
)

DOCUMENT_ID = UUID("01900000-0000-7000-8000-0000000000aa")


class TestFileExtension:
    def test_simple_extension(self):
        assert file_extension("report.pdf") == ".pdf"

    def test_extension_lowercased(self):
        assert file_extension("photo.JPG") == ".jpg"

    def test_only_last_suffix_kept(self):
        assert file_extension("archive.tar.gz") == ".gz"

    def test_no_extension(self):
        assert file_extension("README") == ""

    def test_path_components_ignored(self):
        assert file_extension("../../etc/passwd") == ""
        assert file_extension("../secret.txt") == ".txt"

    def test_unsafe_extension_dropped(self):
        assert file_extension("file.p$p") == ""
        assert file_extension("file." + "x" * 40) == ""


class TestGuessMime:
    def test_known_extension(self):
        assert guess_mime("report.pdf") == "application/pdf"
        assert guess_mime("data.json") == "application/json"

    def test_unknown_extension(self):
        assert guess_mime("blob.unknownext") == DEFAULT_FILE_MIME
        assert guess_mime("noext") == DEFAULT_FILE_MIME


class TestWriteAndRemove:
    def test_write_creates_directory(self, tmp_path):
        upload_dir = str(tmp_path / "nested" / "uploads")
        path = write_document_file(upload_dir, DOCUMENT_ID, "../../evil.txt", b"hello")
        assert path == get_document_file_path(upload_dir, DOCUMENT_ID, ".txt")
        assert path.parent == tmp_path / "nested" / "uploads"
        assert path.read_bytes() == b"hello"

    def test_remove(self, tmp_path):
        path = write_document_file(str(tmp_path), DOCUMENT_ID, "a.bin", b"x")
        assert remove_document_file(str(path))
        assert not path.exists()

    def test_remove_missing(self, tmp_path):
        assert not remove_document_file(str(tmp_path / "missing.bin"))
