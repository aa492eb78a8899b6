from io import BytesIO

import pikepdf

from docunlock.core.errors import CorruptOrUnsupportedDocument, PasswordMismatch

UNSUPPORTED_SECURITY = "unsupported encryption"


class PikePdfHandle:
    def __init__(self, pdf: pikepdf.Pdf) -> None:
        self._pdf = pdf

    @property
    def is_encrypted(self) -> bool:
        return bool(self._pdf.is_encrypted)

    def remove_protection(self) -> bytes:
        out = BytesIO()
        try:
            # encryption=False drops the security handler and every permission flag
            self._pdf.save(out, encryption=False)
        except Exception as e:
            raise CorruptOrUnsupportedDocument(f"Failed to rewrite PDF: {e}") from e
        return out.getvalue()

    def close(self) -> None:
        self._pdf.close()


class PikePdfOpener:
    kind = "pdf"

    def open(self, data: bytes, password: str) -> PikePdfHandle:
        try:
            pdf = pikepdf.open(BytesIO(data), password=password)
        except pikepdf.PasswordError as e:
            raise PasswordMismatch(str(e)) from e
        except pikepdf.PdfError as e:
            if UNSUPPORTED_SECURITY in str(e).lower():
                # qpdf cannot decrypt this handler with any password; pass the file through
                raise PasswordMismatch(f"Unsupported encryption: {e}") from e
            raise CorruptOrUnsupportedDocument(f"Failed to open PDF: {e}") from e
        except Exception as e:
            raise CorruptOrUnsupportedDocument(f"Failed to open PDF: {e}") from e
        return PikePdfHandle(pdf)
