from collections.abc import Iterator
from typing import Protocol


class DocumentStore(Protocol):
    def iter_files(self, root: str, glob: str | None, recursive: bool) -> Iterator[str]: ...

    def read_bytes(self, path: str) -> bytes: ...

    def write_bytes(self, path: str, data: bytes) -> None: ...
