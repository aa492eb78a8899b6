from typing import Protocol


class DocumentHandle(Protocol):
    @property
    def is_encrypted(self) -> bool: ...

    def remove_protection(self) -> bytes: ...

    def close(self) -> None: ...


class DocumentOpener(Protocol):
    kind: str

    def open(self, data: bytes, password: str) -> DocumentHandle: ...
