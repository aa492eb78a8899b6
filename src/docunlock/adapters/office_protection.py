from io import BytesIO
from typing import BinaryIO

import msoffcrypto
from msoffcrypto.exceptions import DecryptionError, InvalidKeyError

from docunlock.core.errors import CorruptOrUnsupportedDocument, PasswordMismatch


def _is_unsupported_scheme(exc: Exception) -> bool:
    return isinstance(exc, DecryptionError) and "unsupported" in str(exc).lower()


class OfficeHandle:
    def __init__(self, office, stream: BinaryIO, encrypted: bool) -> None:
        self._office = office
        self._stream = stream
        self._encrypted = encrypted

    @property
    def is_encrypted(self) -> bool:
        return self._encrypted

    def remove_protection(self) -> bytes:
        bio = BytesIO()
        try:
            self._office.decrypt(bio)
        except Exception as e:
            raise CorruptOrUnsupportedDocument(f"Failed to decrypt: {e}") from e
        return bio.getvalue()

    def close(self) -> None:
        self._stream.close()


class MsOffCryptoOpener:
    kind = "office"

    def open(self, data: bytes, password: str) -> OfficeHandle:
        stream = BytesIO(data)
        try:
            office = msoffcrypto.OfficeFile(stream)
            encrypted = bool(office.is_encrypted())
            if encrypted:
                if not password:
                    # encrypted containers always carry a key derived from a non-empty password
                    raise PasswordMismatch("A password is required to open this file.")
                office.load_key(password=password, verify_password=True)
        except PasswordMismatch:
            stream.close()
            raise
        except InvalidKeyError as e:
            stream.close()
            raise PasswordMismatch(str(e)) from e
        except Exception as e:
            stream.close()
            if _is_unsupported_scheme(e):
                # no candidate can open it here; the stage passes the file through still protected
                raise PasswordMismatch(f"Unsupported encryption: {e}") from e
            raise CorruptOrUnsupportedDocument(f"Failed to open Office file: {e}") from e
        return OfficeHandle(office, stream, encrypted)
