from docunlock.adapters.office_protection import MsOffCryptoOpener
from docunlock.adapters.pdf_protection import PikePdfOpener
from docunlock.core.errors import DocUnlockError
from docunlock.ports.security import DocumentOpener

OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_MAGIC = b"PK\x03\x04"


def sniff_kind(data: bytes) -> str:
    """Guess the document family from leading bytes; unknown content counts as PDF."""

    if data.startswith(OLE_MAGIC) or data.startswith(ZIP_MAGIC):
        return "office"
    return "pdf"


def opener_for(data: bytes, kind: str = "auto") -> DocumentOpener:
    if kind == "auto":
        kind = sniff_kind(data)
    if kind == "pdf":
        return PikePdfOpener()
    if kind == "office":
        return MsOffCryptoOpener()
    raise DocUnlockError(f"Unsupported document kind: {kind}")
