"""Reading and writing env files on disk."""

from __future__ import annotations

import os
import stat
import uuid
from pathlib import Path
from typing import Union

from .document import EnvDocument
from ..util.error import EnvFileReadError, EnvFileWriteError
from ..util.log import Log

log = Log.create({"service": "document.io"})

PathLike = Union[str, "os.PathLike[str]"]


def read_document(path: PathLike) -> EnvDocument:
    """Parse the file at ``path``; a missing file is an empty document.

    Bytes are decoded without newline translation so ``\\r\\n`` survives.
    """
    target = Path(path)
    try:
        data = target.read_bytes()
    except FileNotFoundError:
        log.info("env file missing, starting empty", {"path": str(target)})
        return EnvDocument()
    except OSError as e:
        raise EnvFileReadError(str(target), e.strerror or str(e)) from e

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EnvFileReadError(str(target), "not valid UTF-8") from e

    document = EnvDocument.parse(text)
    log.info("read env file", {"path": str(target), "lines": len(document.lines), "keys": len(document)})
    return document


def save_document(path: PathLike, document: EnvDocument) -> None:
    """Write ``document`` to ``path`` via a temporary sibling and ``os.replace``.

    Symlinks are followed and the existing file mode is kept.
    """
    target = Path(path)
    if target.is_symlink():
        target = target.resolve()

    try:
        mode = stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        mode = None
    except OSError as e:
        raise EnvFileWriteError(str(target), e.strerror or str(e)) from e

    body = document.serialize().encode("utf-8")
    tmp = target.parent / f".{target.name}.{os.getpid()}.{uuid.uuid4().hex}.tmp"
    try:
        with open(tmp, "wb") as file:
            file.write(body)
        if mode is not None:
            os.chmod(tmp, mode)
        os.replace(tmp, target)
    except OSError as e:
        raise EnvFileWriteError(str(target), e.strerror or str(e)) from e
    finally:
        try:
            tmp.unlink()
        except FileNotFoundError:
            pass

    log.info("wrote env file", {"path": str(target), "bytes": len(body)})
