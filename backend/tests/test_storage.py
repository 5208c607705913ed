"""Tests for the upload file store."""
import io

import pytest

from fraudcheck.exceptions import NotFoundError, ValidationError
from fraudcheck.storage import FileStore


class TestFileStore:
    """Test cases for FileStore."""

    def test_save_uses_generated_name(self, file_store):
        stored_name = file_store.save(io.BytesIO(b"content"), "My Essay.DOCX")
        assert stored_name.endswith(".docx")
        assert stored_name != "My Essay.DOCX"
        assert (file_store.upload_dir / stored_name).read_bytes() == b"content"

    def test_generate_name_drops_odd_extensions(self):
        assert "." not in FileStore.generate_name("archive.tar gz")
        assert "." not in FileStore.generate_name("no_extension")
        assert FileStore.generate_name("a.pdf") != FileStore.generate_name("a.pdf")

    def test_save_rejects_oversized_file(self, file_store):
        with pytest.raises(ValidationError):
            file_store.save(io.BytesIO(b"x" * (file_store.max_file_size + 1)), "big.txt")
        assert list(file_store.upload_dir.iterdir()) == []

    def test_resolve_existing_file(self, file_store):
        stored_name = file_store.save(io.BytesIO(b"data"), "a.txt")
        assert file_store.resolve(stored_name) == file_store.upload_dir / stored_name

    @pytest.mark.parametrize("name", ["missing.txt", "../secret.txt", "../../etc/passwd"])
    def test_resolve_rejects_missing_or_escaping_paths(self, file_store, name):
        with pytest.raises(NotFoundError):
            file_store.resolve(name)

    def test_delete_removes_file(self, file_store):
        stored_name = file_store.save(io.BytesIO(b"data"), "a.txt")
        file_store.delete(stored_name)
        assert not (file_store.upload_dir / stored_name).exists()
        # Deleting twice or deleting nothing is harmless
        file_store.delete(stored_name)
        file_store.delete(None)
