from dataclasses import dataclass
from typing import Literal

UnlockStatus = Literal["decrypted", "passthrough"]
DocumentKind = Literal["pdf", "office"]
KindSelector = Literal["auto", "pdf", "office"]


@dataclass(frozen=True)
class UnlockResult:
    data: bytes
    status: UnlockStatus
    attempts: int
    password_index: int | None = None  # position in the candidate sequence, "" is 0
    document_kind: DocumentKind | None = None


@dataclass(frozen=True)
class UnlockPlan:
    inputs: list[str]
    passwords: list[str]
    password_map: dict[str, str] | None = None
    kind: KindSelector = "auto"
    output_path: str | None = None
    output_dir: str | None = None
    inplace: bool = False
    glob: str | None = None
    recursive: bool = False
    dry_run: bool = False
