from io import BytesIO

import pikepdf
import pytest

from docunlock.adapters.pdf_protection import PikePdfOpener
from docunlock.adapters.registry import opener_for, sniff_kind
from docunlock.core.errors import CorruptOrUnsupportedDocument, PasswordMismatch
from docunlock.core.remove_encryption import remove_encryption
from fakes import RecordingLogger


def _is_encrypted(data: bytes) -> bool:
    with pikepdf.open(BytesIO(data)) as pdf:
        return bool(pdf.is_encrypted)


@pytest.mark.parametrize("passwords", [[], ["a"], ["secret1", "secret2"]])
def test_unprotected_pdf_is_returned_byte_identical(plain_pdf, passwords):
    result = remove_encryption(plain_pdf, passwords, PikePdfOpener())

    assert result.data == plain_pdf
    assert result.status == "passthrough"
    assert result.document_kind == "pdf"


def test_third_candidate_unlocks_pdf(pdf_protected_with):
    locked = pdf_protected_with("secret2")

    result = remove_encryption(locked, ["secret1", "secret2"], PikePdfOpener())

    assert result.status == "decrypted"
    assert result.attempts == 3
    assert result.password_index == 2
    assert result.data != locked
    assert not _is_encrypted(result.data)
    with pikepdf.open(BytesIO(result.data)) as pdf:
        assert len(pdf.pages) == 2
        assert str(pdf.docinfo["/Title"]) == "Quarterly statement"


def test_absent_password_passes_protected_pdf_through(pdf_protected_with):
    locked = pdf_protected_with("hidden")
    logger = RecordingLogger()

    result = remove_encryption(locked, ["x", "y"], PikePdfOpener(), logger=logger)

    assert result.data == locked
    assert result.status == "passthrough"
    assert result.attempts == 3
    assert logger.named("no_matching_password")


def test_owner_only_restrictions_are_removed(pdf_protected_with):
    restricted = pdf_protected_with("", owner="owner-secret")

    result = remove_encryption(restricted, [], PikePdfOpener())

    assert result.status == "decrypted"
    assert result.password_index == 0
    assert not _is_encrypted(result.data)


def test_decrypted_output_is_stable_when_fed_back(pdf_protected_with):
    locked = pdf_protected_with("secret2")
    passwords = ["secret1", "secret2"]

    first = remove_encryption(locked, passwords, PikePdfOpener())
    second = remove_encryption(first.data, passwords, PikePdfOpener())

    assert second.status == "passthrough"
    assert second.data == first.data


@pytest.mark.parametrize("data", [b"", b"this is not a pdf at all", b"\x00\x01\x02" * 50])
@pytest.mark.parametrize("passwords", [[], ["a", "b"], ["b", "a"]])
def test_non_pdf_input_is_fatal(data, passwords):
    with pytest.raises(CorruptOrUnsupportedDocument):
        remove_encryption(data, passwords, opener_for(data))


def test_opener_classifies_wrong_password_as_mismatch(pdf_protected_with):
    with pytest.raises(PasswordMismatch):
        PikePdfOpener().open(pdf_protected_with("right"), "wrong")


def test_sniff_kind():
    assert sniff_kind(b"%PDF-1.4\n") == "pdf"
    assert sniff_kind(b"PK\x03\x04rest") == "office"
    assert sniff_kind(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1rest") == "office"
    assert sniff_kind(b"garbage") == "pdf"


def test_unsupported_security_handler_passes_through(pdf_protected_with):
    locked = pdf_protected_with("u")
    assert b"/Filter /Standard" in locked
    # public-key security handlers cannot be opened with a password
    pubsec = locked.replace(b"/Filter /Standard", b"/Filter /PubSec  ", 1)
    logger = RecordingLogger()

    result = remove_encryption(pubsec, ["u"], PikePdfOpener(), logger=logger)

    assert result.status == "passthrough"
    assert result.data == pubsec
    assert result.attempts == 2
    assert logger.named("no_matching_password")
