"""Tests for attachment loading."""

import base64

import pytest

from acs_mailer.attachments import AttachmentReader
from acs_mailer.errors import InputError
from acs_mailer.message import EmailMessage


class TestRead:
    """Tests for reading attachments from disk."""

    def test_read_file(self, tmp_path):
        path = tmp_path / "report.pdf"
        path.write_bytes(b"%PDF-1.4 data")

        attachment = AttachmentReader().read(path)

        assert attachment.name == "report.pdf"
        assert attachment.content_type == "application/pdf"
        assert base64.b64decode(attachment.content_base64) == b"%PDF-1.4 data"

    def test_explicit_content_type_and_name(self, tmp_path):
        path = tmp_path / "data.bin"
        path.write_bytes(b"\x00\x01")

        attachment = AttachmentReader().read(path, content_type="image/png", name="pic.png")

        assert attachment.content_type == "image/png"
        assert attachment.name == "pic.png"

    def test_unknown_extension_falls_back(self, tmp_path):
        path = tmp_path / "blob.zzzunknown"
        path.write_bytes(b"x")
        assert AttachmentReader().read(path).content_type == "application/octet-stream"

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError, match="not found"):
            AttachmentReader().read(tmp_path / "missing.txt")

    def test_directory_rejected(self, tmp_path):
        with pytest.raises(InputError, match="not a regular file"):
            AttachmentReader().read(tmp_path)

    def test_empty_path(self):
        with pytest.raises(InputError):
            AttachmentReader().read("")

    def test_relative_to_base_dir(self, tmp_path):
        (tmp_path / "docs").mkdir()
        (tmp_path / "docs" / "a.txt").write_text("hi")

        reader = AttachmentReader(base_dir=tmp_path)
        attachment = reader.read("docs/a.txt")

        assert reader.base_dir == tmp_path.resolve()
        assert attachment.name == "a.txt"
        assert attachment.content_type == "text/plain"

    def test_path_traversal_rejected(self, tmp_path):
        base = tmp_path / "base"
        base.mkdir()
        (tmp_path / "secret.txt").write_text("nope")

        with pytest.raises(InputError, match="Path traversal"):
            AttachmentReader(base_dir=base).read("../secret.txt")

    def test_message_add_attachment_file(self, tmp_path):
        path = tmp_path / "note.txt"
        path.write_text("hello")

        message = EmailMessage().add_attachment_file(path)

        assert len(message.attachments) == 1
        assert message.attachments[0].content_base64 == base64.b64encode(b"hello").decode()


class TestInlineContent:
    """Tests for in-memory attachments."""

    def test_from_bytes(self):
        attachment = AttachmentReader().from_bytes("x.csv", b"a,b\n")
        assert attachment.content_type == "text/csv"
        assert attachment.content_base64 == base64.b64encode(b"a,b\n").decode()

    def test_from_bytes_requires_name(self):
        with pytest.raises(InputError):
            AttachmentReader().from_bytes("", b"x")

    def test_from_base64_adds_padding(self):
        encoded = base64.b64encode(b"Hello World!!").decode()
        attachment = AttachmentReader().from_base64("h.txt", "  " + encoded.rstrip("=") + " ")
        assert attachment.content_base64 == encoded

    def test_from_base64_invalid(self):
        with pytest.raises(InputError, match="Invalid base64"):
            AttachmentReader().from_base64("h.txt", "not valid base64!!!")

    def test_from_base64_empty(self):
        with pytest.raises(InputError):
            AttachmentReader().from_base64("h.txt", "")

    def test_guess_mime(self):
        assert AttachmentReader.guess_mime("photo.jpg") == "image/jpeg"
        assert AttachmentReader.guess_mime("noext") == "application/octet-stream"
