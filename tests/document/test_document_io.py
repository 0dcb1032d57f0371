import os
import stat
from pathlib import Path

import pytest

from dotenvk.document import EnvDocument, read_document, save_document
from dotenvk.util.error import EnvFileReadError, EnvFileWriteError


def test_read_missing_file_is_empty_document(tmp_path: Path) -> None:
    doc = read_document(tmp_path / ".env")

    assert len(doc) == 0
    assert doc.serialize() == ""


def test_read_and_save_preserve_crlf_bytes(tmp_path: Path) -> None:
    target = tmp_path / ".env"
    original = b"# settings\r\nA=1\r\n\r\nB='two words'\r\n"
    target.write_bytes(original)

    doc = read_document(target)
    save_document(target, doc)

    assert target.read_bytes() == original
    assert doc.get("B") == "two words"


def test_save_writes_changes_and_leaves_no_temp_files(tmp_path: Path) -> None:
    target = tmp_path / "env" / ".env"
    target.parent.mkdir()
    target.write_text("A=1\n", encoding="utf-8")

    doc = read_document(target)
    doc.set("B", "ünïcødé")
    save_document(target, doc)

    assert target.read_text(encoding="utf-8") == "A=1\nB=ünïcødé\n"
    assert sorted(p.name for p in target.parent.iterdir()) == [".env"]


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_save_keeps_file_mode(tmp_path: Path) -> None:
    target = tmp_path / ".env"
    target.write_text("SECRET=1\n", encoding="utf-8")
    target.chmod(0o600)

    doc = read_document(target)
    doc.set("SECRET", "2")
    save_document(target, doc)

    assert stat.S_IMODE(target.stat().st_mode) == 0o600


@pytest.mark.skipif(os.name == "nt", reason="symlinks")
def test_save_follows_symlink(tmp_path: Path) -> None:
    real = tmp_path / "real.env"
    real.write_text("A=1\n", encoding="utf-8")
    link = tmp_path / ".env"
    link.symlink_to(real)

    doc = read_document(link)
    doc.set("A", "2")
    save_document(link, doc)

    assert link.is_symlink()
    assert real.read_text(encoding="utf-8") == "A=2\n"


def test_read_rejects_invalid_utf8(tmp_path: Path) -> None:
    target = tmp_path / ".env"
    target.write_bytes(b"A=\xff\xfe\n")

    with pytest.raises(EnvFileReadError):
        read_document(target)


def test_read_directory_is_read_error(tmp_path: Path) -> None:
    with pytest.raises(EnvFileReadError):
        read_document(tmp_path)


def test_save_into_missing_directory_is_write_error(tmp_path: Path) -> None:
    doc = EnvDocument.parse("A=1\n")

    with pytest.raises(EnvFileWriteError):
        save_document(tmp_path / "missing" / ".env", doc)


def test_read_and_save_keep_byte_order_mark(tmp_path: Path) -> None:
    target = tmp_path / ".env"
    target.write_bytes(b"\xef\xbb\xbfA=1\nB=2\n")

    doc = read_document(target)
    doc.set("A", "2")
    save_document(target, doc)

    assert target.read_bytes() == b"\xef\xbb\xbfA=2\nB=2\n"
