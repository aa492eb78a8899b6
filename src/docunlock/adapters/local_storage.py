from collections.abc import Iterator
from pathlib import Path

from docunlock.adapters.atomic import write_bytes

DEFAULT_GLOB = "*.pdf"


def iter_files(root: str, glob: str | None = None, recursive: bool = False) -> Iterator[str]:
    p = Path(root)
    if p.is_file():
        yield str(p)
        return
    patterns = [g.strip() for g in (glob or DEFAULT_GLOB).split(",") if g.strip()]
    paths = p.rglob("*") if recursive else p.glob("*")
    for fp in sorted(paths):
        if not fp.is_file():
            continue
        # office lock files
        if fp.name.startswith("~$"):
            continue
        for pat in patterns:
            if fp.match(pat):
                yield str(fp)
                break


class LocalDocumentStore:
    def __init__(self, tmp_dir: str | None = None) -> None:
        self.tmp_dir = tmp_dir

    def iter_files(self, root: str, glob: str | None, recursive: bool) -> Iterator[str]:
        yield from iter_files(root, glob, recursive)

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def write_bytes(self, path: str, data: bytes) -> None:
        write_bytes(path, data, tmp_dir=self.tmp_dir)
