import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, Any


@contextmanager
def atomic_write(path: str, mode: str = "wb", tmp_dir: str | None = None) -> Iterator[IO[Any]]:
    """Write to a temp file beside ``path`` and move it into place on success.

    An unlocked document replaces its source only when fully written, so a
    crash never leaves a truncated file where the original used to be.
    """

    dname = os.path.dirname(os.path.abspath(path)) or "."
    os.makedirs(dname, exist_ok=True)
    temp_root = tmp_dir or dname
    os.makedirs(temp_root, exist_ok=True)

    if os.stat(dname).st_dev != os.stat(temp_root).st_dev:
        raise OSError("Temporary directory must be on the same filesystem as the destination.")

    fd, tmp = tempfile.mkstemp(dir=temp_root, prefix=".docunlock-", suffix=".partial")
    try:
        with os.fdopen(fd, mode) as f:
            yield f
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)


def write_bytes(path: str, data: bytes, tmp_dir: str | None = None) -> None:
    with atomic_write(path, "wb", tmp_dir=tmp_dir) as fh:
        fh.write(data)
